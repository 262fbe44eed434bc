"""
Tests for the httpx transport adapter.

Uses httpx.MockTransport: no network access.
"""

import json

import httpx
import pytest

from adapters.http_transport import HttpxTransport
from core.config import AppSettings
from core.domain.errors import ErrorKind
from core.domain.models import StartPasskeyEnrollmentRequest
from core.interfaces.transport import AuthTransport, TransportError
from core.services.backend import AuthBackend


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        api_key="APIKey",
        backend_base_url="https://backend.example.test/v2/",
        user_agent="authwire-tests",
    )


class TestHttpxTransport:
    """Tests for HttpxTransport.send."""

    def test_satisfies_protocol(self, settings) -> None:
        assert isinstance(HttpxTransport(settings), AuthTransport)

    @pytest.mark.asyncio
    async def test_posts_body_and_headers(self, settings) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        transport = HttpxTransport(settings, mock_transport=httpx.MockTransport(handler))
        body = await transport.send("accounts:signUp", {"X-Goog-Api-Key": "APIKey"}, b'{"a":1}')

        assert json.loads(body) == {"ok": True}
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://backend.example.test/v2/accounts:signUp"
        assert request.headers["X-Goog-Api-Key"] == "APIKey"
        assert request.headers["User-Agent"] == "authwire-tests"
        assert request.content == b'{"a":1}'

    @pytest.mark.asyncio
    async def test_error_status_with_body_is_returned(self, settings) -> None:
        """Error envelopes are passed up for classification."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": {"message": "INVALID_ID_TOKEN"}})

        transport = HttpxTransport(settings, mock_transport=httpx.MockTransport(handler))
        body = await transport.send("accounts:signUp", {}, b"{}")

        assert json.loads(body)["error"]["message"] == "INVALID_ID_TOKEN"

    @pytest.mark.asyncio
    async def test_error_status_without_body_raises(self, settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        transport = HttpxTransport(settings, mock_transport=httpx.MockTransport(handler))
        with pytest.raises(TransportError) as exc_info:
            await transport.send("accounts:signUp", {}, b"{}")
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_connection_failure_raises_transport_error(self, settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpxTransport(settings, mock_transport=httpx.MockTransport(handler))
        with pytest.raises(TransportError):
            await transport.send("accounts:signUp", {}, b"{}")


    @pytest.mark.asyncio
    async def test_invalid_url_raises_transport_error(self) -> None:
        """A malformed base URL fails at the adapter boundary, not inside httpx callers."""
        bad = AppSettings(_env_file=None, api_key="APIKey", backend_base_url="https://[not-an-ip/v2")
        transport = HttpxTransport(bad, mock_transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        with pytest.raises(TransportError):
            await transport.send("accounts:signUp", {}, b"{}")


class TestBackendOverHttpx:
    """End-to-end dispatch through the real adapter and a mocked server."""

    @pytest.mark.asyncio
    async def test_start_enrollment_round_trip(self, settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content) == {"idToken": "tok"}
            return httpx.Response(
                200,
                json={
                    "credentialCreationOptions": {
                        "challenge": "challengebytes",
                        "rp": {"id": "1234567890"},
                        "user": {"id": "user-id"},
                    }
                },
            )

        backend = AuthBackend(HttpxTransport(settings, mock_transport=httpx.MockTransport(handler)))
        request = StartPasskeyEnrollmentRequest(
            configuration=settings.request_configuration(),
            id_token="tok",
        )

        result = await backend.start_passkey_enrollment(request)

        assert result.response.rp_id == "1234567890"

    @pytest.mark.asyncio
    async def test_network_failure_is_classified(self, settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        backend = AuthBackend(HttpxTransport(settings, mock_transport=httpx.MockTransport(handler)))
        request = StartPasskeyEnrollmentRequest(
            configuration=settings.request_configuration(),
            id_token="tok",
        )

        result = await backend.dispatch(request)

        assert result.error.kind is ErrorKind.NETWORK
        assert result.response is None

    @pytest.mark.asyncio
    async def test_invalid_url_is_classified_as_network(self) -> None:
        bad = AppSettings(_env_file=None, api_key="APIKey", backend_base_url="https://[not-an-ip/v2")
        backend = AuthBackend(
            HttpxTransport(bad, mock_transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        )
        request = StartPasskeyEnrollmentRequest(configuration=bad.request_configuration(), id_token="tok")

        result = await backend.dispatch(request)

        assert result.error.kind is ErrorKind.NETWORK
        assert result.response is None
