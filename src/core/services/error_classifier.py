"""Clasificación de fallos internos a la taxonomía pública (`ErrorKind`).

Garantía: todo error `INTERNAL_ERROR` lleva adjunto el payload original
(mapping decodificado o bytes crudos) para poder reproducir el fallo.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.domain.errors import (
    ClassifiedError,
    DecodeError,
    ErrorKind,
    ResponseValidationError,
)
from core.interfaces.transport import TransportError


def classify_transport_error(error: TransportError) -> ClassifiedError:
    return ClassifiedError(ErrorKind.NETWORK, error.message)


def classify_decode_error(error: DecodeError) -> ClassifiedError:
    return ClassifiedError(
        ErrorKind.INTERNAL_ERROR,
        "Unexpected response from the backend: body is not a JSON object.",
        underlying=error,
        deserialized_response=error.raw,
    )


def classify_validation_error(
    error: ResponseValidationError,
    payload: Mapping[str, Any],
) -> ClassifiedError:
    return ClassifiedError(
        ErrorKind.INTERNAL_ERROR,
        f"Unexpected response from the backend: {error.message}",
        underlying=error,
        deserialized_response=payload,
    )


def backend_error_message(payload: Mapping[str, Any]) -> str | None:
    """Código de error del envelope `{"error": {"message": ...}}`, si existe.

    El backend a veces agrega detalle tras `:` (p.ej. `WEAK_PASSWORD : ...`);
    el código es la parte previa.
    """

    envelope = payload.get("error")
    if not isinstance(envelope, Mapping):
        return None
    message = envelope.get("message")
    if not isinstance(message, str) or not message.strip():
        return None
    return message.split(":", 1)[0].strip()


def classify_backend_error(payload: Mapping[str, Any]) -> ClassifiedError:
    code = backend_error_message(payload) or "UNKNOWN"
    return ClassifiedError(
        ErrorKind.BACKEND_ERROR,
        code,
        deserialized_response=payload,
    )


def classify(error: Exception, payload: Mapping[str, Any] | None = None) -> ClassifiedError:
    """Punto único de clasificación para cualquier fallo de un dispatch."""

    if isinstance(error, ClassifiedError):
        return error
    if isinstance(error, TransportError):
        return classify_transport_error(error)
    if isinstance(error, DecodeError):
        return classify_decode_error(error)
    if isinstance(error, ResponseValidationError):
        return classify_validation_error(error, payload or {})
    raise TypeError(f"Cannot classify {type(error).__name__}") from error
