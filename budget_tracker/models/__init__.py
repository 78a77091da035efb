"""
Data Models Package

This package contains all Pydantic models used in the Budget Tracker.
"""

from budget_tracker.models.task import (
    EffectDelta,
    Task,
    TaskVariant,
    effect,
    expense_task,
    income_task,
)
from budget_tracker.models.query import SortKey, TaskFilter
from budget_tracker.models.result import (
    BudgetSummary,
    TaskOperationResult,
    TaskOutcome,
)
from budget_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Task models
    "EffectDelta",
    "Task",
    "TaskVariant",
    "effect",
    "expense_task",
    "income_task",
    # Query models
    "SortKey",
    "TaskFilter",
    # Result models
    "BudgetSummary",
    "TaskOperationResult",
    "TaskOutcome",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
