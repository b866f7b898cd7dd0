"""Configuration management for the Stripe Gateway."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Mode(str, Enum):
    """Stripe account mode."""

    TEST = "Test"
    LIVE = "Live"


@dataclass(frozen=True)
class Credentials:
    """Secret key resolved for the active mode."""

    mode: Mode
    secret_key: str = field(repr=False)


class StripeSettings(BaseSettings):
    """Stripe settings, read from STRIPE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STRIPE_",
        env_ignore_empty=True,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    mode: Mode = Field(default=Mode.TEST, description="Test or Live")
    test_secret: str = Field(default="", description="Secret API key used in Test mode")
    live_secret: str = Field(default="", description="Secret API key used in Live mode")
    currency: str = Field(default="usd", description="Default charge currency")
    field_map: dict[str, str | dict[str, str]] = Field(
        default_factory=lambda: {"stripe_id": "id"},
        description="Charge result fields: local name -> Stripe field or {sub_object: field}",
    )

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return Mode.TEST
        if isinstance(value, str):
            return value.strip().capitalize()
        return value

    @field_validator("currency", mode="before")
    @classmethod
    def normalize_currency(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "usd"
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("field_map", mode="before")
    @classmethod
    def default_empty_field_map(cls, value: Any) -> Any:
        if not value:
            return {"stripe_id": "id"}
        return value

    @field_validator("field_map")
    @classmethod
    def validate_field_map(
        cls, value: dict[str, str | dict[str, str]]
    ) -> dict[str, str | dict[str, str]]:
        for local_name, stripe_field in value.items():
            if isinstance(stripe_field, dict) and len(stripe_field) != 1:
                raise ValueError(
                    f"field_map entry {local_name!r} must name exactly one "
                    f"sub-object field, got {stripe_field!r}"
                )
        return value

    @property
    def secret_key(self) -> str:
        """Secret key for the selected mode (empty when not configured)."""
        if self.mode is Mode.LIVE:
            return self.live_secret
        return self.test_secret


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Service Configuration
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="development", description="Environment name")
    service_name: str = Field(default="stripe-gateway", description="Service name")
    log_level: str = Field(default="INFO", description="Logging level")
    log_format_json: bool = Field(default=True, description="Render logs as JSON")

    # Stripe
    stripe: StripeSettings = Field(default_factory=StripeSettings)


# Global settings instance
settings = Settings()
