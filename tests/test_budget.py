"""
Tests for BudgetAggregate

Integration-style tests: tasks flow through the registry and the
completion operations move the accumulators.
"""

import pytest
from datetime import timedelta
from decimal import Decimal

from budget_tracker import BudgetAggregate, TaskOutcome
from budget_tracker.audit import AuditLogger
from budget_tracker.models.audit import AuditEventType
from budget_tracker.models.task import expense_task, income_task


@pytest.fixture
def budget():
    return BudgetAggregate(initial_balance=0)


class TestBalances:
    """Tests for the two balance views."""

    def test_seed_values(self, budget):
        """Test fresh budget: income=10, expenses=5."""
        assert budget.income == 10
        assert budget.expenses == 5
        assert budget.balance == 5
        assert budget.calculate_balance() == 5

    def test_balance_ignores_base_balance(self):
        """Test that balance and calculate_balance stay distinct."""
        budget = BudgetAggregate(initial_balance=100)
        assert budget.base_balance == Decimal("100")
        assert budget.balance == 5
        assert budget.calculate_balance() == 105

    def test_default_initial_balance(self):
        """Test the base balance defaults to zero."""
        assert BudgetAggregate().base_balance == 0

    def test_direct_effect_application(self, budget):
        """Test Task.apply_effect / revert_effect on an aggregate."""
        task = income_task("Gift", 10)
        task.apply_effect(budget)
        assert budget.income == 20
        task.revert_effect(budget)
        assert budget.income == 10
        assert task.completed is False


class TestMarkDone:
    """Tests for mark_done / mark_undone."""

    def test_expense_scenario(self, budget):
        """Test expense of 15 done, then undone."""
        task = expense_task("Groceries", 15)
        budget.add_task(task)

        result = budget.mark_done(task)
        assert result.ok
        assert budget.expenses == 20
        assert budget.balance == -10
        assert budget.calculate_balance() == -10
        assert task.completed is True
        assert task.completed_date is not None

        result = budget.mark_undone(task)
        assert result.ok
        assert budget.expenses == 5
        assert budget.balance == 5
        assert task.completed is False
        assert task.completed_date is None

    def test_income_round_trip(self, budget):
        """Test done then undone restores accumulators exactly."""
        task = income_task("Salary", Decimal("123.45"))
        budget.add_task(task)
        before = (budget.income, budget.expenses)

        budget.mark_done(task)
        assert budget.income == Decimal("133.45")
        budget.mark_undone(task)

        assert (budget.income, budget.expenses) == before

    def test_mark_done_twice_applies_once(self, budget):
        """Test second mark_done is refused with ALREADY_DONE."""
        task = expense_task("Rent", 50)
        budget.add_task(task)
        budget.mark_done(task)
        first_date = task.completed_date

        result = budget.mark_done(task)

        assert not result
        assert result.outcome == TaskOutcome.ALREADY_DONE
        assert result.message == "Task is already done"
        assert budget.expenses == 55
        assert task.completed_date == first_date

    def test_mark_undone_before_done(self, budget):
        """Test mark_undone on an open task changes nothing."""
        task = income_task("Bonus", 40)
        budget.add_task(task)

        result = budget.mark_undone(task)

        assert result.outcome == TaskOutcome.NOT_DONE
        assert budget.income == 10
        assert budget.expenses == 5
        assert task.completed is False

    def test_unregistered_task_cannot_be_completed(self, budget):
        """Test mark_done / mark_undone on a task never added."""
        task = income_task("Stranger", 99)

        done = budget.mark_done(task)
        undone = budget.mark_undone(task)

        assert done.outcome == TaskOutcome.NOT_FOUND
        assert undone.outcome == TaskOutcome.NOT_FOUND
        assert task.completed is False
        assert budget.income == 10

    def test_completed_date_is_utc(self, budget):
        """Test completion timestamps carry the UTC timezone."""
        task = income_task("Salary", 10)
        budget.add_task(task)
        budget.mark_done(task)
        assert task.completed_date.utcoffset() == timedelta(0)

    def test_shared_task_only_reverts_where_applied(self):
        """Test a task in two budgets moves only the budget that completed it."""
        first, second = BudgetAggregate(), BudgetAggregate()
        task = expense_task("Rent", 15)
        first.add_task(task)
        second.add_task(task)

        first.mark_done(task)
        undone = second.mark_undone(task)
        done = second.mark_done(task)

        assert undone.outcome == TaskOutcome.NOT_DONE
        assert done.outcome == TaskOutcome.ALREADY_DONE
        assert second.expenses == 5
        assert first.expenses == 20

        assert first.mark_undone(task).ok
        assert first.expenses == 5
        assert second.expenses == 5


class TestAddDelete:
    """Tests for add_task / delete_task."""

    def test_add_task_dedup(self, budget):
        """Test a second add of the same task is a no-op."""
        task = expense_task("Fuel", 30)
        assert budget.add_task(task) == 1
        assert budget.add_task(task) == 0
        assert budget.get_tasks() == [task]
        assert budget.get_tasks()[0] is task

    def test_add_many(self, budget):
        """Test variadic add keeps order."""
        a, b = income_task("a", 1), expense_task("b", 2)
        budget.add_task(a, b)
        assert budget.get_tasks() == [a, b]

    def test_delete_unknown_task(self, budget):
        """Test deleting a task never added reports NOT_FOUND."""
        known = income_task("Known", 1)
        budget.add_task(known)
        ghost = expense_task("Ghost", 1)

        result = budget.delete_task(ghost)

        assert result.outcome == TaskOutcome.NOT_FOUND
        assert result.message == f"Task {ghost.id} isn't recognized"
        assert budget.get_tasks() == [known]
        assert budget.balance == 5

    def test_delete_known_task(self, budget):
        """Test deleting a registered task."""
        task = income_task("Known", 1)
        budget.add_task(task)
        assert budget.delete_task(task).ok
        assert budget.get_tasks() == []

    def test_deleted_task_cannot_be_completed(self, budget):
        """Test a deleted task is no longer recognized."""
        task = expense_task("Gone", 10)
        budget.add_task(task)
        budget.delete_task(task)
        assert budget.mark_done(task).outcome == TaskOutcome.NOT_FOUND


class TestQueries:
    """Tests for sorting, filtering and summary through the aggregate."""

    def test_sorted_and_filtered(self, budget):
        """Test delegation to the registry."""
        cheap = income_task("cheap", 1)
        pricey = expense_task("pricey", 100)
        budget.add_task(cheap, pricey)
        budget.mark_done(cheap)

        assert budget.list_sorted_by("cost") == [pricey, cheap]
        assert budget.list_sorted_by("status") == [cheap, pricey]
        assert budget.list_filtered({"is_income": True, "is_completed": True}) == [cheap]

    def test_summary(self, budget):
        """Test the summary snapshot."""
        task = expense_task("Rent", 15)
        budget.add_task(task, income_task("Open", 3))
        budget.mark_done(task)

        summary = budget.summary()

        assert summary.expenses == 20
        assert summary.balance == -10
        assert summary.calculated_balance == -10
        assert summary.task_count == 2
        assert summary.completed_count == 1


class TestAuditTrail:
    """Tests for audit events recorded by the aggregate."""

    def test_events_recorded(self):
        """Test the sequence of events for a typical session."""
        audit = AuditLogger()
        budget = BudgetAggregate(audit_logger=audit)
        task = expense_task("Rent", 15)

        budget.add_task(task)
        budget.add_task(task)
        budget.mark_done(task)
        budget.mark_done(task)
        budget.mark_undone(task)
        budget.delete_task(expense_task("Ghost", 1))

        types = [e.event_type for e in budget.audit_log]
        assert types == [
            AuditEventType.TASK_ADDED,
            AuditEventType.TASK_DUPLICATE_SKIPPED,
            AuditEventType.TASK_MARKED_DONE,
            AuditEventType.INVALID_TRANSITION,
            AuditEventType.TASK_MARKED_UNDONE,
            AuditEventType.TASK_NOT_FOUND,
        ]
        assert len(audit) == 6
        assert budget.audit_log[2].details["expenses"] == "20"
        assert budget.audit_log[2].details["balance"] == "-10"
        assert budget.audit_log[4].details["open_count"] == 1

    def test_audit_log_is_a_copy(self, budget):
        """Test the returned trail cannot be used to rewrite history."""
        budget.add_task(income_task("a", 1))
        budget.audit_log.clear()
        assert len(budget.audit_log) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
