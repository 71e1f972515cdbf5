"""Application configuration.

Django settings stay in ``finance.settings``; everything specific to the
finance domain (rate providers, batch import, notifications) is read from
the environment with pydantic-settings.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RatesSettings(BaseSettings):
    """External exchange rate providers."""

    model_config = SettingsConfigDict(env_prefix="FINANCE_RATES_", extra="ignore")

    central_bank_url: str = Field(
        default="https://www.cbr.ru/currency_base/daily/",
        description="HTML page with the daily central bank rate table",
    )
    open_exchange_base_url: str = Field(
        default="https://openexchangerates.org",
        description="Open Exchange Rates API host",
    )
    open_exchange_path: str = Field(default="/api/latest.json")
    open_exchange_app_id: str = Field(default="", description="Open Exchange Rates app id")
    timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")


class ImportSettings(BaseSettings):
    """Batch CSV import of transactions."""

    model_config = SettingsConfigDict(env_prefix="FINANCE_IMPORT_", extra="ignore")

    chunk_size: int = Field(default=100, ge=1)
    skip_limit: int = Field(default=10, ge=0)
    workers: int = Field(default=2, ge=1)


class NotificationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FINANCE_NOTIFICATIONS_", extra="ignore"
    )

    ttl: int = Field(default=24 * 60 * 60, description="Seconds a message is kept")
    max_messages: int = Field(default=100, ge=1)


class FinanceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    rates: RatesSettings = Field(default_factory=RatesSettings)
    imports: ImportSettings = Field(default_factory=ImportSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)


@lru_cache
def get_settings() -> FinanceSettings:
    return FinanceSettings()
