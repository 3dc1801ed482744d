import pytest

from app.core.settings import Settings
from app.oauth.exceptions import InvalidProviderError
from app.oauth.registry import ProviderRegistry, build_provider_registry


def _settings(**values: object) -> Settings:
    return Settings(_env_file=None, base_url="http://localhost:3000", **values)


class TestProviderRegistry:
    def test_lookup(self, registry, google_config):
        assert registry.get("google") is google_config
        assert registry.require("google") is google_config
        assert "github" in registry
        assert len(registry) == 2
        assert registry.names() == ["google", "github"]

    def test_unknown_provider(self, registry):
        assert registry.get("facebook") is None
        with pytest.raises(InvalidProviderError) as exc_info:
            registry.require("facebook")
        assert exc_info.value.status_code == 404

    def test_duplicate_names_rejected(self, google_config):
        with pytest.raises(ValueError):
            ProviderRegistry([google_config, google_config])


class TestBuildProviderRegistry:
    def test_registers_configured_providers(self):
        registry = build_provider_registry(
            _settings(
                google_client_id="gid",
                google_client_secret="gsecret",
                github_client_id="hid",
                github_client_secret="hsecret",
            )
        )

        assert registry.names() == ["google", "github"]
        assert registry.require("google").redirect_uri == (
            "http://localhost:3000/api/v1/auth/google/callback"
        )
        assert registry.require("github").client_secret == "hsecret"

    def test_missing_credentials_skip_provider(self):
        registry = build_provider_registry(
            _settings(
                google_client_id="gid",
                google_client_secret=None,
                github_client_id="hid",
                github_client_secret="hsecret",
            )
        )

        assert registry.names() == ["github"]

    def test_no_credentials_is_not_fatal(self):
        registry = build_provider_registry(
            _settings(
                google_client_id=None,
                google_client_secret=None,
                github_client_id=None,
                github_client_secret=None,
            )
        )

        assert len(registry) == 0
