"""Application configuration via pydantic settings."""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed service configuration.

    These values are defaults for the HTTP shell. The pricing core never reads
    them; every computation receives its snapshot explicitly.
    """

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = Field("Trip Quote Pricing API", alias="APP_NAME")
    api_v1_prefix: str = Field("/api/v1", alias="API_V1_PREFIX")

    default_currency: str = Field("USD", alias="DEFAULT_CURRENCY")
    default_service_type: str = Field("all", alias="DEFAULT_SERVICE_TYPE")
    default_child_discount_percent: Decimal = Field(
        Decimal("0"), ge=Decimal("0"), le=Decimal("100"),
        alias="DEFAULT_CHILD_DISCOUNT_PERCENT",
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        alias="CORS_ALLOW_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("default_currency", mode="after")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
