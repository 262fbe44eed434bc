"""Shared fixtures for the authwire test suite."""

import pytest

from core.domain.models import RequestConfiguration
from core.services.backend import AuthBackend
from fakes import TEST_API_KEY, TEST_APP_ID, FakeTransport


@pytest.fixture
def request_configuration() -> RequestConfiguration:
    return RequestConfiguration(api_key=TEST_API_KEY, app_id=TEST_APP_ID)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def backend(transport: FakeTransport) -> AuthBackend:
    return AuthBackend(transport)
