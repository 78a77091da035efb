"""
Query Models for the task registry.

Sort keys and filter criteria accepted by `TaskRegistry.list_sorted_by`
and `TaskRegistry.list_filtered`.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from budget_tracker.models.task import Task


class SortKey(str, Enum):
    """
    Recognized sort orders.

    Any other key passed to the registry leaves the order untouched.
    """
    DESCRIPTION = "description"  # ascending lexicographic
    STATUS = "status"            # completed first
    COST = "cost"                # most expensive first


class TaskFilter(BaseModel):
    """
    Structured filter for task lookups.

    All criteria are optional and combined with AND.
    An omitted criterion matches every task.
    """
    model_config = ConfigDict(extra="forbid")

    description_contains: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring of the description"
    )
    is_income: Optional[bool] = Field(
        default=None,
        description="True selects income tasks, False selects expense tasks"
    )
    is_completed: Optional[bool] = Field(
        default=None,
        description="Select by completion state"
    )

    def matches(self, task: Task) -> bool:
        """Check a single task against every supplied criterion."""
        if self.description_contains:
            if self.description_contains.lower() not in task.description.lower():
                return False

        if self.is_income is not None and task.is_income != self.is_income:
            return False

        if self.is_completed is not None and task.completed != self.is_completed:
            return False

        return True
