"""
Audit Models for Budget Tracker

Every change to the budget, and every refused change, is recorded as an
audit event. This provides:
1. Traceability of income/expense movements
2. A visible record of soft failures (unknown task, wrong state)
3. Debugging information without raising exceptions

DESIGN DECISION: The audit trail is append-only. Events are never edited.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from budget_tracker.models.result import BudgetSummary
from budget_tracker.models.task import Task


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Registry
    TASK_ADDED = "task_added"
    TASK_DUPLICATE_SKIPPED = "task_duplicate_skipped"
    TASK_DELETED = "task_deleted"

    # Completion
    TASK_MARKED_DONE = "task_marked_done"
    TASK_MARKED_UNDONE = "task_marked_undone"

    # Soft failures
    TASK_NOT_FOUND = "task_not_found"
    INVALID_TRANSITION = "invalid_transition"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Which task this is about
    task_id: Optional[UUID] = Field(
        default=None,
        description="ID of the task this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a caller request?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "task_id": str(self.task_id) if self.task_id else None,
            "description": self.description,
            "details": self.details,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.task_added(task)
        event = AuditEventBuilder.task_not_found(task.id, "mark_done")
    """

    @staticmethod
    def task_added(task: Task) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TASK_ADDED,
            task_id=task.id,
            description=f"Task added: {task.description}",
            details={
                "variant": task.variant.value,
                "cost": str(task.cost),
            },
            is_user_action=True,
        )

    @staticmethod
    def task_duplicate_skipped(task: Task) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TASK_DUPLICATE_SKIPPED,
            severity=AuditSeverity.DEBUG,
            task_id=task.id,
            description=f"Task {task.id} already registered, skipped",
        )

    @staticmethod
    def task_deleted(task: Task) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TASK_DELETED,
            task_id=task.id,
            description=f"Task deleted: {task.description}",
            is_user_action=True,
        )

    @staticmethod
    def task_marked_done(
        task: Task,
        summary: BudgetSummary
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TASK_MARKED_DONE,
            task_id=task.id,
            description=f"Task done: {task.description} ({task.variant.value} {task.cost})",
            details=summary.to_log_dict(),
            is_user_action=True,
        )

    @staticmethod
    def task_marked_undone(
        task: Task,
        summary: BudgetSummary
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TASK_MARKED_UNDONE,
            task_id=task.id,
            description=f"Task reopened: {task.description} ({task.variant.value} {task.cost})",
            details=summary.to_log_dict(),
            is_user_action=True,
        )

    @staticmethod
    def task_not_found(task_id: UUID, operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TASK_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            task_id=task_id,
            description=f"Task {task_id} isn't recognized",
            details={
                "operation": operation,
            },
        )

    @staticmethod
    def invalid_transition(
        task: Task,
        operation: str,
        reason: str
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVALID_TRANSITION,
            severity=AuditSeverity.WARNING,
            task_id=task.id,
            description=reason,
            details={
                "operation": operation,
                "completed": task.completed,
            },
        )
