"""Contrato del transporte RPC.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El Core no sabe si debajo hay httpx, un proxy o un fake de tests.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

from core.domain.errors import AuthWireError


class TransportError(AuthWireError):
    """Fallo a nivel transporte (conectividad, TLS, timeout, HTTP sin body)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class AuthTransport(Protocol):
    """Intercambio de bytes con el backend de identidad.

    Reglas de diseño:
    - `send` es asíncrono: es el único punto de suspensión de un dispatch.
    - Una llamada, una respuesta. Ante fallo lanza `TransportError`.
    """

    async def send(
        self,
        endpoint_path: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> bytes:
        """Envía `body` al endpoint y devuelve el body de la respuesta."""

        ...
