"""Application configuration and settings."""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chainfeed.constants import DEFAULT_CURRENCY


class Settings(BaseSettings):
    """Settings loaded from CHAINFEED_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CHAINFEED_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ZMQ notifications (bitcoind -zmqpubhashblock)
    subscription_url: str = "tcp://127.0.0.1:28332"
    subscription_timeout: float | None = Field(
        default=None,
        description="Seconds allowed for the TCP connect to the ZMQ endpoint",
    )
    subscription_msg_timeout: float | None = Field(
        default=None,
        description="Seconds to wait for each notification before failing the stream",
    )

    # JSON-RPC, credentials go in the URL userinfo
    rpc_url: SecretStr = Field(default=SecretStr("http://127.0.0.1:8332"))
    rpc_timeout: float = 30.0
    rpc_max_concurrent_requests: int = Field(default=16, ge=1)

    currency_symbol: str = DEFAULT_CURRENCY

    log_level: str = "INFO"

    @field_validator("subscription_timeout", "subscription_msg_timeout")
    @classmethod
    def positive_or_unset(cls, v: float | None) -> float | None:
        """Treat zero or negative timeouts as disabled."""
        if v is not None and v <= 0:
            return None
        return v

    @field_validator("currency_symbol")
    @classmethod
    def default_currency(cls, v: str) -> str:
        """Fall back to the default symbol when set to an empty string."""
        return v.strip() or DEFAULT_CURRENCY


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
