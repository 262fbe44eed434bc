"""Backend dispatcher: una llamada RPC de punta a punta.

Secuencia de `dispatch`:
1. `encode` de la request.
2. `await transport.send(...)` (único punto de suspensión).
3. `decode` del body.
4. Chequeo del envelope de error del backend.
5. Validador del endpoint -> response tipada.

Cada fallo se normaliza en un `ClassifiedError` y se entrega dentro de un
`DispatchResult`. Siempre hay exactamente un resultado por llamada; la
cancelación (`asyncio.CancelledError`) se propaga tal cual.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, TypeVar

from core.domain.errors import DecodeError, ResponseValidationError
from core.domain.models import (
    AuthRequest,
    FinalizePasskeyEnrollmentRequest,
    FinalizePasskeyEnrollmentResponse,
    SignUpNewUserRequest,
    SignUpNewUserResponse,
    StartPasskeyEnrollmentRequest,
    StartPasskeyEnrollmentResponse,
)
from core.domain.result import DispatchResult
from core.interfaces.transport import AuthTransport, TransportError
from core.services import error_classifier, wire_codec
from core.services.validators import DEFAULT_VALIDATORS, ResponseValidator

logger = logging.getLogger(__name__)

R = TypeVar("R")

API_KEY_HEADER = "X-Goog-Api-Key"
APP_ID_HEADER = "X-Firebase-GMPID"


def build_headers(request: AuthRequest) -> dict[str, str]:
    """Headers derivados de la configuración ambiental de la request."""

    config = request.configuration
    headers = {
        "Content-Type": "application/json",
        API_KEY_HEADER: config.api_key,
    }
    if config.app_id:
        headers[APP_ID_HEADER] = config.app_id
    return headers


class AuthBackend:
    """Orquesta llamadas RPC contra el backend de identidad.

    El transporte se inyecta por constructor; no hay registro global.
    """

    def __init__(
        self,
        transport: AuthTransport,
        *,
        validators: Mapping[type[AuthRequest], ResponseValidator[Any]] | None = None,
    ) -> None:
        self._transport = transport
        self._validators = dict(DEFAULT_VALIDATORS)
        if validators:
            self._validators.update(validators)

    def validator_for(self, request: AuthRequest) -> ResponseValidator[Any]:
        for request_type in type(request).__mro__:
            validator = self._validators.get(request_type)
            if validator is not None:
                return validator
        raise LookupError(f"No response validator registered for {type(request).__name__}")

    async def dispatch(
        self,
        request: AuthRequest,
        validator: ResponseValidator[R] | None = None,
    ) -> DispatchResult[R]:
        validator = validator or self.validator_for(request)
        endpoint = request.endpoint_path
        body = wire_codec.encode(request)

        logger.debug("dispatch %s (%d bytes)", endpoint, len(body))
        try:
            raw = await self._transport.send(endpoint, build_headers(request), body)
        except TransportError as exc:
            logger.warning("dispatch %s failed at transport: %s", endpoint, exc.message)
            return DispatchResult.failure(error_classifier.classify(exc))

        try:
            payload = wire_codec.decode(raw)
        except DecodeError as exc:
            logger.warning("dispatch %s: undecodable response (%s)", endpoint, exc.reason)
            return DispatchResult.failure(error_classifier.classify(exc))

        if error_classifier.backend_error_message(payload) is not None:
            error = error_classifier.classify_backend_error(payload)
            logger.info("dispatch %s: backend error %s", endpoint, error.message)
            return DispatchResult.failure(error)

        try:
            response = validator.validate(payload)
        except ResponseValidationError as exc:
            logger.warning("dispatch %s: invalid response field %s", endpoint, exc.missing_field)
            return DispatchResult.failure(error_classifier.classify(exc, payload))

        logger.debug("dispatch %s ok", endpoint)
        return DispatchResult.success(response)

    async def start_passkey_enrollment(
        self,
        request: StartPasskeyEnrollmentRequest,
    ) -> DispatchResult[StartPasskeyEnrollmentResponse]:
        return await self.dispatch(request)

    async def finalize_passkey_enrollment(
        self,
        request: FinalizePasskeyEnrollmentRequest,
    ) -> DispatchResult[FinalizePasskeyEnrollmentResponse]:
        return await self.dispatch(request)

    async def sign_up_new_user(
        self,
        request: SignUpNewUserRequest,
    ) -> DispatchResult[SignUpNewUserResponse]:
        return await self.dispatch(request)
