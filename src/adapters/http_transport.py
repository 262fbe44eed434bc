"""Transporte HTTPS (httpx) para el backend de identidad.

- POST `<backend_base_url>/<endpoint_path>` con el body JSON ya codificado.
- Cualquier respuesta con body se devuelve como bytes: los envelopes de error
  del backend (4xx con JSON) se clasifican aguas arriba.
- Fallos de red o respuestas de error sin body -> `TransportError`.
"""

from __future__ import annotations

import logging
from typing import Mapping

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.interfaces.transport import AuthTransport, TransportError

logger = logging.getLogger(__name__)


class HttpxTransport(AuthTransport):
    """Implementa `AuthTransport` sobre `httpx.AsyncClient`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        mock_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._mock_transport = mock_transport

    def url_for(self, endpoint_path: str) -> str:
        return f"{self._settings.backend_base_url.rstrip('/')}/{endpoint_path.lstrip('/')}"

    async def send(
        self,
        endpoint_path: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> bytes:
        url = self.url_for(endpoint_path)
        try:
            async with build_async_client(self._settings, transport=self._mock_transport) as client:
                response = await client.post(url, content=body, headers=dict(headers))
        except httpx.TimeoutException as exc:
            raise TransportError(f"Timed out contacting the backend ({type(exc).__name__})") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"Network error: {exc}") from exc

        if response.is_error and not response.content:
            raise TransportError(
                f"HTTP {response.status_code} with empty body",
                status_code=response.status_code,
            )
        if response.is_error:
            logger.info("%s returned HTTP %s", endpoint_path, response.status_code)
        return response.content
