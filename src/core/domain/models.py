"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los nombres de campo del wire (`idToken`, `tenantId`, ...) viven como alias,
  así el mapeo nombre Python <-> nombre JSON queda declarado en un solo lugar.
- `exclude_none` nos da la omisión de opcionales sin escribir lógica a mano.

Nota:
- Las requests describen *qué* se envía; el cómo (bytes, headers, transporte)
  lo resuelven el codec y el dispatcher.
- Las responses son inmutables y solo se construyen con datos ya validados.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class RequestConfiguration(BaseModel):
    """Configuración ambiental inyectada en cada request (API key + app id).

    Nunca se serializa en el body: viaja como headers.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(
        ...,
        min_length=1,
        description="API key del proyecto en el backend de identidad.",
    )
    app_id: str | None = Field(
        default=None,
        description="Identificador de la aplicación cliente (opcional).",
    )


class AuthRequest(BaseModel):
    """Base de todas las requests RPC.

    Reglas de diseño:
    - Inmutable una vez construida.
    - Cada subclase declara `endpoint_path` y sus nombres de wire vía alias.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    endpoint_path: ClassVar[str]

    configuration: RequestConfiguration = Field(
        ...,
        exclude=True,
        description="Configuración ambiental (no forma parte del body).",
    )
    tenant_id: str | None = Field(
        default=None,
        alias="tenantId",
        description="Tenant del proyecto (multi-tenancy), si aplica.",
    )

    def to_wire(self) -> dict[str, Any]:
        """Mapping JSON-ready con alias y sin campos ausentes."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class StartPasskeyEnrollmentRequest(AuthRequest):
    """Inicia el enrolamiento de una passkey para el usuario del `id_token`."""

    endpoint_path: ClassVar[str] = "accounts/passkeyEnrollment:start"

    id_token: str = Field(
        ...,
        min_length=1,
        alias="idToken",
        description="Token bearer opaco que identifica al usuario que actúa.",
    )


class AuthenticatorAttestationResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    client_data_json: str = Field(..., alias="clientDataJSON")
    attestation_object: str = Field(..., alias="attestationObject")


class AuthenticatorRegistrationResponse(BaseModel):
    """Credencial WebAuthn creada por el autenticador (formato JSON estándar)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    credential_id: str = Field(..., min_length=1, alias="id")
    raw_id: str = Field(..., min_length=1, alias="rawId")
    response: AuthenticatorAttestationResponse
    type: Literal["public-key"] = "public-key"


class FinalizePasskeyEnrollmentRequest(AuthRequest):
    """Confirma el enrolamiento con la credencial producida por el autenticador."""

    endpoint_path: ClassVar[str] = "accounts/passkeyEnrollment:finalize"

    id_token: str = Field(..., min_length=1, alias="idToken")
    name: str | None = Field(
        default=None,
        description="Nombre visible de la passkey.",
    )
    authenticator_registration_response: AuthenticatorRegistrationResponse = Field(
        ...,
        alias="authenticatorRegistrationResponse",
    )

    @classmethod
    def from_credential(
        cls,
        *,
        configuration: RequestConfiguration,
        id_token: str,
        credential_id: str,
        client_data_json: str,
        attestation_object: str,
        name: str | None = None,
        tenant_id: str | None = None,
    ) -> "FinalizePasskeyEnrollmentRequest":
        """Arma la request desde los valores sueltos que entrega la plataforma."""

        registration = AuthenticatorRegistrationResponse(
            credential_id=credential_id,
            raw_id=credential_id,
            response=AuthenticatorAttestationResponse(
                client_data_json=client_data_json,
                attestation_object=attestation_object,
            ),
        )
        return cls(
            configuration=configuration,
            id_token=id_token,
            name=name,
            authenticator_registration_response=registration,
            tenant_id=tenant_id,
        )


class SignUpNewUserRequest(AuthRequest):
    """Alta de usuario (o anónimo si no hay email/password). Emite tokens."""

    endpoint_path: ClassVar[str] = "accounts:signUp"

    email: str | None = Field(default=None)
    password: str | None = Field(default=None)
    display_name: str | None = Field(default=None, alias="displayName")
    id_token: str | None = Field(default=None, alias="idToken")
    return_secure_token: bool = Field(
        default=True,
        alias="returnSecureToken",
        description="Pide al backend tokens STS en lugar de un código de intercambio.",
    )


class StartPasskeyEnrollmentResponse(BaseModel):
    """Opciones de creación de credencial devueltas por el backend."""

    model_config = ConfigDict(frozen=True)

    challenge: str = Field(..., description="Challenge a firmar por el autenticador.")
    rp_id: str = Field(..., description="Identificador del relying party.")
    user_id: str = Field(..., description="Identificador del usuario para WebAuthn.")


class FinalizePasskeyEnrollmentResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id_token: str
    refresh_token: str


class SignUpNewUserResponse(BaseModel):
    """Respuesta de emisión de tokens: todos los campos son opcionales."""

    model_config = ConfigDict(frozen=True)

    id_token: str | None = Field(
        default=None,
        description="Access token STS o código de intercambio según `returnSecureToken`.",
    )
    approximate_expiration_date: datetime | None = Field(
        default=None,
        description="Instante aproximado de expiración del access token (UTC).",
    )
    refresh_token: str | None = Field(default=None)
