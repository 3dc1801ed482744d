import json
from dataclasses import dataclass
from typing import Any

import pytest

from app.oauth.client import OAuth2Client
from app.oauth.providers import github_provider_config, google_provider_config
from app.oauth.registry import ProviderRegistry
from app.oauth.transport import HttpMethod, HttpResponse
from app.oauth.types import ProviderConfig
from app.services.auth_service import AuthService
from app.sessions.store import InMemorySessionStore

REDIRECT_BASE = "https://testserver/api/v1/auth"


@dataclass
class RecordedCall:
    method: HttpMethod
    url: str
    headers: dict[str, str]
    data: dict[str, str] | None


class FakeTransport:
    """Records outbound requests and replays queued responses in order."""

    def __init__(self, *responses: HttpResponse | Exception) -> None:
        self.calls: list[RecordedCall] = []
        self._responses: list[HttpResponse | Exception] = list(responses)

    def queue(self, *responses: HttpResponse | Exception) -> None:
        self._responses.extend(responses)

    async def request(
        self,
        method: HttpMethod,
        url: str,
        *,
        headers: dict[str, str],
        data: dict[str, str] | None = None,
    ) -> HttpResponse:
        self.calls.append(
            RecordedCall(method, url, dict(headers), dict(data) if data else None)
        )
        if not self._responses:
            raise AssertionError(f"Unexpected {method.value} request to {url}")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def json_response(status_code: int, body: Any) -> HttpResponse:
    return HttpResponse(
        status_code=status_code,
        text=json.dumps(body),
        headers={"Content-Type": "application/json; charset=utf-8"},
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def google_config() -> ProviderConfig:
    return google_provider_config(
        "google-client-id", "google-secret", f"{REDIRECT_BASE}/google/callback"
    )


@pytest.fixture
def github_config() -> ProviderConfig:
    return github_provider_config(
        "github-client-id", "github-secret", f"{REDIRECT_BASE}/github/callback"
    )


@pytest.fixture
def registry(google_config: ProviderConfig, github_config: ProviderConfig) -> ProviderRegistry:
    return ProviderRegistry([google_config, github_config])


@pytest.fixture
def oauth_client(transport: FakeTransport) -> OAuth2Client:
    return OAuth2Client(transport)


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def auth_service(
    registry: ProviderRegistry,
    oauth_client: OAuth2Client,
    session_store: InMemorySessionStore,
) -> AuthService:
    return AuthService(registry, oauth_client, session_store)
