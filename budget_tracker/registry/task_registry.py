"""
Task Registry

In-memory, ordered collection of tasks.

GUARANTEES:
- Task ids are unique within a registry (duplicates are skipped, not raised)
- Default listing follows insertion order
- Callers never get a handle on the internal list

DESIGN DECISION: `list_sorted_by` sorts the internal list IN PLACE.
A later `list()` returns the tasks in the last sorted order.
"""

from typing import List, Mapping, Optional, Union
from uuid import UUID

import structlog

from budget_tracker.models.query import SortKey, TaskFilter
from budget_tracker.models.task import Task


logger = structlog.get_logger(__name__)


class TaskRegistry:
    """
    Ordered store of Task objects, keyed by task id.
    """

    def __init__(self):
        self._tasks: List[Task] = []

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task: Task) -> bool:
        return self.get(task.id) is not None

    def contains(self, task: Task) -> bool:
        return task in self

    def get(self, task_id: UUID) -> Optional[Task]:
        """Return the registered task with this id, or None."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def add(self, *tasks: Task) -> int:
        """
        Register tasks, skipping any whose id is already present.

        The instance registered first is kept. Returns the number inserted.
        """
        added = 0
        for task in tasks:
            if self.get(task.id) is not None:
                logger.debug("task_duplicate_skipped", task_id=str(task.id))
                continue
            self._tasks.append(task)
            added += 1
        return added

    def delete(self, task: Task) -> bool:
        """Remove the task with a matching id. No-op if absent."""
        before = len(self._tasks)
        self._tasks = [item for item in self._tasks if item.id != task.id]
        return len(self._tasks) != before

    def list(self) -> List[Task]:
        """Snapshot of the tasks in current order."""
        return list(self._tasks)

    def list_sorted_by(self, key: Union[SortKey, str, None] = None) -> List[Task]:
        """
        Sort the registry and return a snapshot.

        - description: ascending lexicographic
        - status: completed before open
        - cost: descending
        Unrecognized or missing keys return the current order untouched.
        Python's sort is stable, so ties keep their relative order.
        """
        sort_key = self._parse_sort_key(key)

        if sort_key == SortKey.DESCRIPTION:
            self._tasks.sort(key=lambda t: t.description)
        elif sort_key == SortKey.STATUS:
            self._tasks.sort(key=lambda t: not t.completed)
        elif sort_key == SortKey.COST:
            self._tasks.sort(key=lambda t: t.cost, reverse=True)

        return self.list()

    def list_filtered(
        self,
        criteria: Union[TaskFilter, Mapping, None] = None,
    ) -> List[Task]:
        """
        Return tasks matching every supplied criterion, in current order.

        Args:
            criteria: TaskFilter or a mapping with the same keys
                     (description_contains, is_income, is_completed).
                     None matches everything.
        """
        if criteria is None:
            criteria = TaskFilter()
        elif not isinstance(criteria, TaskFilter):
            criteria = TaskFilter.model_validate(criteria)

        return [task for task in self._tasks if criteria.matches(task)]

    @staticmethod
    def _parse_sort_key(key: Union[SortKey, str, None]) -> Optional[SortKey]:
        if key is None:
            return None
        try:
            return SortKey(key)
        except ValueError:
            logger.debug("unknown_sort_key", key=str(key))
            return None
