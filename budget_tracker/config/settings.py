"""
Configuration Management for Budget Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Seed values for a new budget and logging options are validated when
the settings are first loaded.
"""

import logging
from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BudgetSettings(BaseSettings):
    """Starting values for a new BudgetAggregate."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    initial_balance: Decimal = Field(
        default=Decimal(0),
        description="Base balance used when none is passed explicitly"
    )
    seed_income: Decimal = Field(
        default=Decimal(10),
        ge=0,
        description="Income accumulator value at construction"
    )
    seed_expenses: Decimal = Field(
        default=Decimal(5),
        ge=0,
        description="Expense accumulator value at construction"
    )


class LoggingSettings(BaseSettings):
    """structlog output configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum stdlib log level name"
    )
    json_output: bool = Field(
        default=True,
        description="Render JSON lines instead of the console format"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Only accept level names the logging module knows."""
        name = v.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {v}")
        return name


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def budget(self) -> BudgetSettings:
        return BudgetSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
