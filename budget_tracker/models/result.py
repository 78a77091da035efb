"""
Result Models for Budget Tracker

DESIGN DECISION: Expected domain conditions (unknown task, wrong state)
are NOT exceptions. Operations return a TaskOperationResult and the
caller checks it.
"""

from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class TaskOutcome(str, Enum):
    """Outcome of a task operation on the budget."""
    OK = "ok"
    NOT_FOUND = "not_found"        # task id absent from the registry
    ALREADY_DONE = "already_done"  # mark_done on a completed task
    NOT_DONE = "not_done"          # mark_undone on an open task


class TaskOperationResult(BaseModel):
    """
    Result of delete / mark_done / mark_undone.

    Truthy only when the operation changed state.
    """

    task_id: UUID
    outcome: TaskOutcome
    message: str = Field(
        ...,
        description="Human-readable description of the outcome"
    )

    @property
    def ok(self) -> bool:
        return self.outcome == TaskOutcome.OK

    def __bool__(self) -> bool:
        return self.ok


class BudgetSummary(BaseModel):
    """Point-in-time snapshot of a budget."""

    base_balance: Decimal
    income: Decimal
    expenses: Decimal
    balance: Decimal = Field(
        ...,
        description="income - expenses"
    )
    calculated_balance: Decimal = Field(
        ...,
        description="base_balance + income - expenses"
    )
    task_count: int = Field(ge=0)
    completed_count: int = Field(ge=0)

    @property
    def open_count(self) -> int:
        return self.task_count - self.completed_count

    def to_log_dict(self) -> dict:
        return {
            "base_balance": str(self.base_balance),
            "income": str(self.income),
            "expenses": str(self.expenses),
            "balance": str(self.balance),
            "calculated_balance": str(self.calculated_balance),
            "task_count": self.task_count,
            "completed_count": self.completed_count,
            "open_count": self.open_count,
        }
