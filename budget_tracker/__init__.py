"""
Budget Tracker - Source Package

A personal budget tracker: income and expense tasks, their completion
state, and the running balance derived from completed tasks.

DESIGN PRINCIPLES:
1. Task identity and cost never change after construction
2. Completion is the only thing that moves money
3. Refused operations are reported, not raised
4. Every change is auditable
"""

from budget_tracker.budget import BudgetAggregate
from budget_tracker.models import (
    SortKey,
    Task,
    TaskFilter,
    TaskOperationResult,
    TaskOutcome,
    TaskVariant,
    expense_task,
    income_task,
)
from budget_tracker.registry import TaskRegistry

__version__ = "1.0.0"

__all__ = [
    "BudgetAggregate",
    "SortKey",
    "Task",
    "TaskFilter",
    "TaskOperationResult",
    "TaskOutcome",
    "TaskRegistry",
    "TaskVariant",
    "expense_task",
    "income_task",
]
