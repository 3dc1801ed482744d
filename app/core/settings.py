from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "OAuth Lab Client"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    host: str = "localhost"
    port: int = 3000
    base_url: str = "http://localhost:3000"

    google_client_id: str | None = None
    google_client_secret: str | None = None
    github_client_id: str | None = None
    github_client_secret: str | None = None

    http_timeout_seconds: float = 10.0

    session_cookie_name: str = "oauth_lab_session"
    session_max_age_seconds: int = 86400

    def redirect_uri_for(self, provider_name: str) -> str:
        return f"{self.base_url.rstrip('/')}/api/v1/auth/{provider_name}/callback"


settings = Settings()
