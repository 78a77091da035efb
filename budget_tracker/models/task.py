"""
Task Models for Budget Tracker

A task is a single income or expense entry. Its identity, description and
cost never change after construction; only the completion fields move.

DESIGN DECISION: Income and expense tasks are one model with an explicit
`variant` tag. The arithmetic difference between them lives in the pure
`effect()` function rather than in subclasses.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from budget_tracker.budget import BudgetAggregate


class TaskVariant(str, Enum):
    """Which accumulator a completed task feeds."""
    INCOME = "income"
    EXPENSE = "expense"


class EffectDelta(NamedTuple):
    """Change applied to the budget accumulators."""
    income_delta: Decimal
    expense_delta: Decimal

    def inverted(self) -> "EffectDelta":
        return EffectDelta(-self.income_delta, -self.expense_delta)


def effect(variant: TaskVariant, cost: Decimal) -> EffectDelta:
    """
    Compute the accumulator delta for completing a task.

    Income tasks raise income, expense tasks raise expenses.
    Reverting a completion applies the inverted delta.
    """
    if variant == TaskVariant.INCOME:
        return EffectDelta(cost, Decimal(0))
    return EffectDelta(Decimal(0), cost)


class Task(BaseModel):
    """
    A single budget entry.

    CRITICAL: `variant`, `description` and `cost` are required.
    A task without a variant has no meaning and is rejected at construction.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    # Identity and core data (read-only after construction)
    id: UUID = Field(
        default_factory=uuid4,
        frozen=True,
        description="Unique task ID"
    )
    description: str = Field(
        ...,
        frozen=True,
        description="Text label of the entry"
    )
    cost: Decimal = Field(
        ...,
        ge=0,
        frozen=True,
        description="Magnitude of the entry"
    )
    variant: TaskVariant = Field(
        ...,
        frozen=True,
        description="Income or expense"
    )

    # Lifecycle
    completed: bool = False
    completed_date: Optional[datetime] = Field(
        default=None,
        description="When the task was last marked done"
    )

    @property
    def is_income(self) -> bool:
        return self.variant == TaskVariant.INCOME

    @property
    def is_expense(self) -> bool:
        return self.variant == TaskVariant.EXPENSE

    def effect(self) -> EffectDelta:
        return effect(self.variant, self.cost)

    def apply_effect(self, budget: "BudgetAggregate") -> None:
        """Add this task's cost to the matching accumulator of `budget`."""
        budget.apply_delta(self.effect())

    def revert_effect(self, budget: "BudgetAggregate") -> None:
        """Subtract this task's cost from the matching accumulator of `budget`."""
        budget.apply_delta(self.effect().inverted())

    def __repr__(self) -> str:
        state = "done" if self.completed else "open"
        return (
            f"Task(id={self.id}, {self.variant.value}, "
            f"description={self.description!r}, cost={self.cost}, {state})"
        )


def income_task(description: str, cost: Union[Decimal, int, float]) -> Task:
    """Build an income task."""
    return Task(description=description, cost=cost, variant=TaskVariant.INCOME)


def expense_task(description: str, cost: Union[Decimal, int, float]) -> Task:
    """Build an expense task."""
    return Task(description=description, cost=cost, variant=TaskVariant.EXPENSE)
