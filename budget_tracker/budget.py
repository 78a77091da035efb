"""
Budget Aggregate for Budget Tracker

This module ties the task registry to the running income/expense totals.

DESIGN DECISION: The aggregate enforces the boundaries:
- Only registered tasks can be completed or reopened
- A task's effect is applied exactly once per completion
- Refused operations are reported and audited, never raised

Task state machine:
    NotDone --mark_done--> Done --mark_undone--> NotDone
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Mapping, Optional, Set, Union
from uuid import UUID

from budget_tracker.audit import AuditLogger
from budget_tracker.config import Settings, get_settings
from budget_tracker.models.audit import AuditEvent, AuditEventBuilder
from budget_tracker.models.query import SortKey, TaskFilter
from budget_tracker.models.result import (
    BudgetSummary,
    TaskOperationResult,
    TaskOutcome,
)
from budget_tracker.models.task import EffectDelta, Task
from budget_tracker.registry import TaskRegistry


class BudgetAggregate:
    """
    Holds the running income/expense totals and the tasks feeding them.

    Two views of the balance exist and both are kept:
    - `balance`: income - expenses
    - `calculate_balance()`: base_balance + income - expenses
    """

    def __init__(
        self,
        initial_balance: Optional[Union[Decimal, int, float]] = None,
        settings: Optional[Settings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        budget_settings = (settings or get_settings()).budget

        if initial_balance is None:
            initial_balance = budget_settings.initial_balance

        self._base_balance = Decimal(str(initial_balance))
        self._income = budget_settings.seed_income
        self._expenses = budget_settings.seed_expenses
        self._registry = TaskRegistry()
        self._audit_logger = audit_logger or AuditLogger()
        # ids whose effect this budget applied and has not reverted
        self._applied: Set[UUID] = set()

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    @property
    def base_balance(self) -> Decimal:
        return self._base_balance

    @property
    def income(self) -> Decimal:
        return self._income

    @property
    def expenses(self) -> Decimal:
        return self._expenses

    @property
    def balance(self) -> Decimal:
        """Income minus expenses. Does NOT include the base balance."""
        return self._income - self._expenses

    def calculate_balance(self) -> Decimal:
        """Base balance plus income minus expenses."""
        return self._base_balance + self._income - self._expenses

    def apply_delta(self, delta: EffectDelta) -> None:
        """Add a task effect to the accumulators."""
        self._income += delta.income_delta
        self._expenses += delta.expense_delta

    # ------------------------------------------------------------------
    # Registry access
    # ------------------------------------------------------------------

    def get_tasks(self) -> List[Task]:
        return self._registry.list()

    def list_sorted_by(self, key: Union[SortKey, str, None] = None) -> List[Task]:
        return self._registry.list_sorted_by(key)

    def list_filtered(
        self,
        criteria: Union[TaskFilter, Mapping, None] = None,
    ) -> List[Task]:
        return self._registry.list_filtered(criteria)

    def add_task(self, *tasks: Task) -> int:
        """
        Register tasks with this budget.

        Tasks whose id is already registered are skipped silently.
        Returns the number of tasks actually added.
        """
        added = 0
        for task in tasks:
            if self._registry.add(task):
                added += 1
                self._audit_logger.log(AuditEventBuilder.task_added(task))
            else:
                self._audit_logger.log(AuditEventBuilder.task_duplicate_skipped(task))
        return added

    def delete_task(self, task: Task) -> TaskOperationResult:
        """Remove a registered task. Reports NOT_FOUND for unknown tasks."""
        found = self._registry.get(task.id)
        if found is None:
            return self._not_found(task, "delete_task")

        self._registry.delete(found)
        self._audit_logger.log(AuditEventBuilder.task_deleted(found))

        return TaskOperationResult(
            task_id=found.id,
            outcome=TaskOutcome.OK,
            message=f"Task {found.id} deleted",
        )

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def mark_done(self, task: Task) -> TaskOperationResult:
        """
        Complete a registered task and apply its effect.

        Refused (no state change) when the task is unknown or already done.
        """
        found = self._registry.get(task.id)
        if found is None:
            return self._not_found(task, "mark_done")

        if found.completed or found.id in self._applied:
            return self._invalid_transition(
                found,
                "mark_done",
                TaskOutcome.ALREADY_DONE,
                "Task is already done",
            )

        found.completed = True
        found.completed_date = datetime.now(timezone.utc)
        found.apply_effect(self)
        self._applied.add(found.id)

        self._audit_logger.log(
            AuditEventBuilder.task_marked_done(found, self.summary())
        )
        return TaskOperationResult(
            task_id=found.id,
            outcome=TaskOutcome.OK,
            message=f"Task {found.id} marked done",
        )

    def mark_undone(self, task: Task) -> TaskOperationResult:
        """
        Reopen a completed task and revert its effect on this budget.

        Refused (no state change) when the task is unknown or not done.
        """
        found = self._registry.get(task.id)
        if found is None:
            return self._not_found(task, "mark_undone")

        if found.id not in self._applied:
            return self._invalid_transition(
                found,
                "mark_undone",
                TaskOutcome.NOT_DONE,
                "Task isn't done before",
            )

        found.revert_effect(self)
        self._applied.discard(found.id)
        found.completed = False
        found.completed_date = None

        self._audit_logger.log(
            AuditEventBuilder.task_marked_undone(found, self.summary())
        )
        return TaskOperationResult(
            task_id=found.id,
            outcome=TaskOutcome.OK,
            message=f"Task {found.id} marked undone",
        )

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    @property
    def audit_log(self) -> List[AuditEvent]:
        return self._audit_logger.events

    def summary(self) -> BudgetSummary:
        tasks = self._registry.list()
        return BudgetSummary(
            base_balance=self._base_balance,
            income=self._income,
            expenses=self._expenses,
            balance=self.balance,
            calculated_balance=self.calculate_balance(),
            task_count=len(tasks),
            completed_count=sum(1 for t in tasks if t.completed),
        )

    # ------------------------------------------------------------------
    # Soft failures
    # ------------------------------------------------------------------

    def _not_found(self, task: Task, operation: str) -> TaskOperationResult:
        event = self._audit_logger.log(
            AuditEventBuilder.task_not_found(task.id, operation)
        )
        return TaskOperationResult(
            task_id=task.id,
            outcome=TaskOutcome.NOT_FOUND,
            message=event.description,
        )

    def _invalid_transition(
        self,
        task: Task,
        operation: str,
        outcome: TaskOutcome,
        reason: str,
    ) -> TaskOperationResult:
        self._audit_logger.log(
            AuditEventBuilder.invalid_transition(task, operation, reason)
        )
        return TaskOperationResult(
            task_id=task.id,
            outcome=outcome,
            message=reason,
        )
