from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

UPSTREAM_BASE_URL = "https://v6.exchangerate-api.com/v6"


class Settings(BaseSettings):
    """Proxy settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., PORT, HOST,
    EXCHANGERATE_API_KEY, ALLOWED_ORIGINS, HTTP_TIMEOUT_SECONDS).
    """

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Basic app metadata
    app_name: str = "fxrelay"
    debug: bool = False
    version: str = "0.1.0"

    # Listener
    host: str = "0.0.0.0"
    port: int = 3001
    public_url: Optional[str] = None  # informational, logged on startup

    # Upstream provider; the key never leaves this process
    exchangerate_api_key: Optional[str] = None
    upstream_base_url: str = UPSTREAM_BASE_URL
    http_timeout_seconds: float = 5.0

    # Comma separated CORS allow-list; empty means any origin
    allowed_origins: Optional[str] = None

    @property
    def has_api_key(self) -> bool:
        return bool(self.exchangerate_api_key)

    def cors_origins(self) -> List[str]:
        """Parsed allow-list, or ``["*"]`` when nothing usable is configured."""
        if not self.allowed_origins:
            return ["*"]
        origins = [o.strip() for o in self.allowed_origins.split(",")]
        origins = [o for o in origins if o]
        return origins or ["*"]


class ClientSettings(BaseSettings):
    """Converter-side configuration (CLIENT_API_BASE_URL, CLIENT_API_KEY, ...).

    A base URL routes all traffic through the proxy. Without one, a bundled
    key talks to the upstream provider directly. Without either, the client
    runs on built-in data only.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLIENT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    api_base_url: Optional[str] = None
    api_key: Optional[str] = None
    upstream_base_url: str = UPSTREAM_BASE_URL
    http_timeout_seconds: float = 5.0


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
