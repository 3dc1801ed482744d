from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from app.constants.enums import TokenResponseFormat
from app.oauth.types import ProviderConfig, TokenSet
from app.schemas.auth import SessionUserResponse
from app.sessions.models import SessionUser


def _config(**overrides: object) -> dict[str, object]:
    values: dict[str, object] = {
        "name": "example",
        "client_id": "client",
        "client_secret": "secret",
        "redirect_uri": "https://app.example.com/callback",
        "authorization_endpoint": "https://idp.example.com/authorize",
        "token_endpoint": "https://idp.example.com/token",
        "userinfo_endpoint": "https://idp.example.com/userinfo",
        "scope": "openid",
    }
    values.update(overrides)
    return values


class TestProviderConfig:
    def test_defaults(self):
        config = ProviderConfig(**_config())
        assert config.supports_pkce is True
        assert config.token_response_format == TokenResponseFormat.JSON
        assert config.extra_token_headers == {}

    @pytest.mark.parametrize(
        "field", ["name", "client_id", "redirect_uri", "token_endpoint", "scope"]
    )
    def test_required_fields_must_not_be_blank(self, field):
        with pytest.raises(ValidationError):
            ProviderConfig(**_config(**{field: "  "}))

    def test_client_secret_may_be_absent(self):
        assert ProviderConfig(**_config(client_secret=None)).client_secret is None
        assert ProviderConfig(**_config(client_secret="")).client_secret is None

    def test_config_is_immutable(self):
        config = ProviderConfig(**_config())
        with pytest.raises(ValidationError):
            config.client_id = "other"


class TestTokenSet:
    def test_from_token_response(self):
        tokens = TokenSet.from_token_response(
            {"access_token": "abc", "expires_in": "3600", "token_type": "bearer"}
        )
        assert tokens.access_token == "abc"
        assert tokens.expires_in == 3600
        assert tokens.token_type == "bearer"
        assert tokens.refresh_token is None
        assert tokens.can_refresh is False

    def test_refresh_token_retained_when_not_rotated(self):
        tokens = TokenSet.from_token_response(
            {"access_token": "new"}, previous_refresh_token="old-refresh"
        )
        assert tokens.refresh_token == "old-refresh"

    def test_rotated_refresh_token_replaces_previous(self):
        tokens = TokenSet.from_token_response(
            {"access_token": "new", "refresh_token": "rotated"},
            previous_refresh_token="old-refresh",
        )
        assert tokens.refresh_token == "rotated"

    def test_expiry(self):
        issued_at = datetime.now(timezone.utc) - timedelta(seconds=120)
        tokens = TokenSet(access_token="abc", expires_in=60, issued_at=issued_at)
        assert tokens.expires_at == issued_at + timedelta(seconds=60)
        assert tokens.is_expired()

        fresh = TokenSet(access_token="abc", expires_in=3600)
        assert not fresh.is_expired()
        assert fresh.is_expired(leeway_seconds=3600)

    def test_non_expiring_token(self):
        tokens = TokenSet(access_token="abc")
        assert tokens.expires_at is None
        assert not tokens.is_expired(leeway_seconds=10**6)


def test_session_user_response_reports_expired_token():
    issued_at = datetime.now(timezone.utc) - timedelta(seconds=120)
    user = SessionUser(
        provider="google",
        tokens=TokenSet(access_token="abc", expires_in=60, issued_at=issued_at),
        user_info={},
    )

    tokens = SessionUserResponse.from_session_user(user).tokens

    assert tokens.expired is True
    assert tokens.access_token_preview == "abc..."
