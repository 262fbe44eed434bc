"""Taxonomía de errores del Core.

Por qué aquí:
- El dispatcher y los validadores comparten una única jerarquía de errores,
  sin depender de httpx ni de ningún adaptador concreto.
- Hacia afuera solo se expone `ClassifiedError`; las causas internas
  (`DecodeError`, `ResponseValidationError`) viajan en `underlying`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping


class ErrorKind(str, Enum):
    """Clasificación estable de fallos visible para el llamador."""

    NETWORK = "network"
    INTERNAL_ERROR = "internal_error"
    BACKEND_ERROR = "backend_error"

    def label(self) -> str:
        """Human readable label for CLI output and logging."""

        return self.value.replace("_", " ")


class AuthWireError(Exception):
    """Base error for every failure raised by this package."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class DecodeError(AuthWireError):
    """The response body is not a JSON object."""

    def __init__(self, reason: str, raw: bytes) -> None:
        super().__init__(f"Malformed response body: {reason}")
        self.reason = reason
        self.raw = raw


class ResponseValidationError(AuthWireError):
    """Well-formed JSON missing a required field, or with a wrong-typed one."""

    def __init__(self, missing_field: str, expected_type: type | None = None) -> None:
        detail = f"Missing or invalid field: {missing_field}"
        if expected_type is not None:
            detail = f"{detail} (expected {expected_type.__name__})"
        super().__init__(detail)
        self.missing_field = missing_field
        self.expected_type = expected_type


class ClassifiedError(AuthWireError):
    """Error de salida de una llamada RPC.

    - `kind` es la clasificación pública.
    - `underlying` conserva la causa interna (decode vs. validación).
    - `deserialized_response` adjunta el payload original (mapping decodificado
      o bytes crudos si el decode falló) para diagnosticar sin re-consultar.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        *,
        underlying: AuthWireError | None = None,
        deserialized_response: Mapping[str, Any] | bytes | None = None,
    ) -> None:
        super().__init__(message or kind.label())
        self.kind = kind
        self.underlying = underlying
        self.deserialized_response = deserialized_response

    def __repr__(self) -> str:
        return f"ClassifiedError(kind={self.kind.value!r}, message={self.message!r})"
