"""Validadores de respuesta (uno por endpoint).

Por qué descriptores:
- Cada endpoint declara sus campos como una lista ordenada de
  (destino, ruta, tipo esperado); un único extractor genérico recorre el
  mapping. Así no se duplica la lógica de traversal por endpoint.
- El orden de la lista fija el orden de chequeo: el primer fallo gana y
  reporta la ruta exacta (p.ej. `credentialCreationOptions.rp.id`).

Variantes:
- Requeridos: cualquier ausencia aborta, nunca se construye una response a medias.
- Opcionales: ausente o mal tipado deja el campo sin valor.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Mapping, Protocol, Sequence, TypeVar

from core.domain.errors import ResponseValidationError
from core.domain.models import (
    AuthRequest,
    FinalizePasskeyEnrollmentRequest,
    FinalizePasskeyEnrollmentResponse,
    SignUpNewUserRequest,
    SignUpNewUserResponse,
    StartPasskeyEnrollmentRequest,
    StartPasskeyEnrollmentResponse,
)

R = TypeVar("R", covariant=True)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FieldSpec:
    """Un campo a extraer: `target` en la response, `path` en el JSON."""

    target: str
    path: tuple[str, ...]
    expected_type: type = str

    @property
    def dotted(self) -> str:
        return ".".join(self.path)


def _matches(value: Any, expected_type: type) -> bool:
    # bool es subclase de int: no lo aceptamos como número.
    if isinstance(value, bool) and expected_type is not bool:
        return False
    if expected_type is float:
        return isinstance(value, (int, float))
    return isinstance(value, expected_type)


def _lookup(payload: Mapping[str, Any], spec: FieldSpec) -> Any:
    current: Any = payload
    last = len(spec.path) - 1
    for depth, key in enumerate(spec.path):
        if key not in current:
            expected = spec.expected_type if depth == last else dict
            raise ResponseValidationError(".".join(spec.path[: depth + 1]), expected)
        current = current[key]
        if depth < last and not isinstance(current, Mapping):
            raise ResponseValidationError(".".join(spec.path[: depth + 1]), dict)
    if not _matches(current, spec.expected_type):
        raise ResponseValidationError(spec.dotted, spec.expected_type)
    return current


def extract_required(payload: Mapping[str, Any], fields: Sequence[FieldSpec]) -> dict[str, Any]:
    """Extrae todos los campos o falla en el primero ausente/mal tipado."""

    return {spec.target: _lookup(payload, spec) for spec in fields}


def extract_optional(payload: Mapping[str, Any], fields: Sequence[FieldSpec]) -> dict[str, Any]:
    """Extrae los campos presentes y bien tipados; el resto se omite."""

    out: dict[str, Any] = {}
    for spec in fields:
        try:
            out[spec.target] = _lookup(payload, spec)
        except ResponseValidationError:
            continue
    return out


def _seconds(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, (int, float)) and math.isfinite(value):
        return float(value)
    return None


def _expiration(now: datetime, seconds: float) -> datetime | None:
    try:
        return now + timedelta(seconds=seconds)
    except OverflowError:
        # Fuera del rango de datetime: se trata como ausente.
        return None


class ResponseValidator(Protocol[R]):
    """Contrato: mapping decodificado -> response tipada (o ResponseValidationError)."""

    def validate(self, payload: Mapping[str, Any]) -> R:
        ...


class StartPasskeyEnrollmentValidator:
    fields: tuple[FieldSpec, ...] = (
        FieldSpec("challenge", ("credentialCreationOptions", "challenge")),
        FieldSpec("rp_id", ("credentialCreationOptions", "rp", "id")),
        FieldSpec("user_id", ("credentialCreationOptions", "user", "id")),
    )

    def validate(self, payload: Mapping[str, Any]) -> StartPasskeyEnrollmentResponse:
        return StartPasskeyEnrollmentResponse(**extract_required(payload, self.fields))


class FinalizePasskeyEnrollmentValidator:
    fields: tuple[FieldSpec, ...] = (
        FieldSpec("id_token", ("idToken",)),
        FieldSpec("refresh_token", ("refreshToken",)),
    )

    def validate(self, payload: Mapping[str, Any]) -> FinalizePasskeyEnrollmentResponse:
        return FinalizePasskeyEnrollmentResponse(**extract_required(payload, self.fields))


class SignUpNewUserValidator:
    """Respuesta de emisión de tokens: todos los campos son opcionales.

    `expiresIn` llega como segundos relativos; se convierte en instante
    absoluto usando el reloj *en el momento de validar*, no el de envío,
    para no arrastrar la latencia del round trip.
    """

    fields: tuple[FieldSpec, ...] = (
        FieldSpec("id_token", ("idToken",)),
        FieldSpec("refresh_token", ("refreshToken",)),
    )
    expires_in = FieldSpec("expires_in", ("expiresIn",), object)

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock

    def validate(self, payload: Mapping[str, Any]) -> SignUpNewUserResponse:
        values = extract_optional(payload, self.fields)
        raw_expires = extract_optional(payload, (self.expires_in,)).get("expires_in")
        seconds = _seconds(raw_expires)
        expiration = _expiration(self._clock(), seconds) if seconds is not None else None
        if expiration is not None:
            values["approximate_expiration_date"] = expiration
        return SignUpNewUserResponse(**values)


DEFAULT_VALIDATORS: dict[type[AuthRequest], ResponseValidator[Any]] = {
    StartPasskeyEnrollmentRequest: StartPasskeyEnrollmentValidator(),
    FinalizePasskeyEnrollmentRequest: FinalizePasskeyEnrollmentValidator(),
    SignUpNewUserRequest: SignUpNewUserValidator(),
}
