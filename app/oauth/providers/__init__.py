from app.oauth.providers.github import (
    GITHUB_PROVIDER_NAME,
    github_exchange_code,
    github_provider_config,
)
from app.oauth.providers.google import GOOGLE_PROVIDER_NAME, google_provider_config

EXCHANGE_OVERRIDES = {
    GITHUB_PROVIDER_NAME: github_exchange_code,
}

__all__ = [
    "EXCHANGE_OVERRIDES",
    "GITHUB_PROVIDER_NAME",
    "GOOGLE_PROVIDER_NAME",
    "github_exchange_code",
    "github_provider_config",
    "google_provider_config",
]
