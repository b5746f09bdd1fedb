"""Root conftest for all tests.

Provides settings pointing at fake Supabase and gateway hosts, a respx router
that intercepts every outbound httpx call, and a TestClient bound to an app
built from those settings.
"""

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from fitcoach.config.settings import DEFAULT_GATEWAY_URL, Settings
from fitcoach.main import create_app

SUPABASE_URL = "https://project-ref.supabase.co"
IDENTITY_URL = f"{SUPABASE_URL}/auth/v1/user"
GATEWAY_URL = DEFAULT_GATEWAY_URL
SERVICE_ROLE_KEY = "service-role-key"
GATEWAY_API_KEY = "gateway-api-key"
USER_ID = "5b1f8c1e-0d7a-4c1e-9a4e-3f3c2b1a0d9e"
VALID_TOKEN = "valid-session-token"


def completion(content: str) -> dict:
    """Chat-completion body with a single choice."""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        gateway_api_key=GATEWAY_API_KEY,
        gateway_url=GATEWAY_URL,
        supabase_url=SUPABASE_URL,
        supabase_service_role_key=SERVICE_ROLE_KEY,
        log_level="DEBUG",
    )


@pytest.fixture
def upstream():
    """Mock every outbound httpx request; unmatched requests fail the test."""
    with respx.mock(assert_all_called=False, assert_all_mocked=True) as router:
        yield router


@pytest.fixture
def identity_route(upstream):
    return upstream.get(IDENTITY_URL).mock(
        return_value=httpx.Response(200, json={"id": USER_ID, "email": "al@example.com", "aud": "authenticated"})
    )


@pytest.fixture
def gateway_route(upstream):
    return upstream.post(GATEWAY_URL).mock(return_value=httpx.Response(200, json=completion("Do 3x5 squats")))


@pytest.fixture
def client(settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
