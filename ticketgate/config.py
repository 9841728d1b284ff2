from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str
    session_secret: str = Field(
        validation_alias=AliasChoices("session_secret", "secret")
    )
    auth0_domain: str
    client_id: str
    client_secret: str
    m2m_auth0_domain: str | None = None
    m2m_client_id: str | None = None
    m2m_client_secret: str | None = None
    external_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("external_url", "render_external_url"),
    )
    host: str = "127.0.0.1"
    port: int = 3000
    max_tickets_per_vatin: int = 3
    http_timeout_seconds: float = 10.0
    log_level: str = "INFO"
    debug: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_prefix="", extra="ignore")

    @property
    def base_url(self) -> str:
        if self.external_url:
            return self.external_url.rstrip("/")
        return f"http://localhost:{self.port}"

    @property
    def m2m_configured(self) -> bool:
        return bool(
            self.m2m_auth0_domain and self.m2m_client_id and self.m2m_client_secret
        )
