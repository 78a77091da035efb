"""Task registry package."""

from budget_tracker.registry.task_registry import TaskRegistry

__all__ = ["TaskRegistry"]
