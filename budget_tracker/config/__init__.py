"""Configuration package."""

from budget_tracker.config.settings import (
    BudgetSettings,
    LoggingSettings,
    Settings,
    get_settings,
)

__all__ = [
    "BudgetSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
