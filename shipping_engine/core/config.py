"""
Shipping engine configuration

Defaults are usable out of the box; every value can be overridden through
the environment or a .env file.
"""
import logging
import os
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App
    APP_NAME: str = "Shipping Engine"
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if not v:
            return "INFO"
        v = str(v).strip().upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
        return v

    # Packages
    SHIPPING_DEFAULT_PACKAGE_TYPE: str = "custom_box"
    SHIPPING_DEFAULT_PACKAGE_LABEL: str = "Custom box"

    # Labels and messages
    SHIPPING_ADJUSTMENT_LABEL: str = "Shipping"
    SHIPPING_PROMOTION_LABEL: str = "Shipping Discount"
    SHIPPING_NO_RATES_MESSAGE: str = "There are no shipping rates available for this address."
    SHIPPING_SELECTION_REQUIRED_MESSAGE: str = (
        "A valid shipping method must be selected in order to check out."
    )

    # Currency
    SHIPPING_DEFAULT_CURRENCY: str = "USD"

    @field_validator("SHIPPING_DEFAULT_CURRENCY", mode="before")
    @classmethod
    def normalize_currency(cls, v):
        v = str(v or "USD").strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("SHIPPING_DEFAULT_CURRENCY must be a 3-letter ISO 4217 code")
        return v

    # Metrics
    SHIPPING_METRICS_ENABLED: bool = True


# Try to load settings, provide helpful error on failure
try:
    settings = Settings()
except Exception as e:
    if os.getenv("ENVIRONMENT", "development") == "development":
        logger.warning(f"Settings validation failed ({e}), using defaults")
        settings = Settings.model_construct()
    else:
        raise
