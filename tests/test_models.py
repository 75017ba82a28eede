import unittest

from core.models import (
    Category, DatedOnce, Recurring, Subtask, Task, Undated, ValidationError,
    tree_from_list, tree_to_list, validate_date
)


class TestScheduleVariants(unittest.TestCase):
    def test_dated_once_rejects_malformed_date(self) -> None:
        with self.assertRaises(ValidationError):
            DatedOnce(date="2024-6-1")
        with self.assertRaises(ValidationError):
            DatedOnce(date="2024-02-30")

    def test_recurring_accepts_missing_stamp(self) -> None:
        self.assertIsNone(Recurring().last_completed_date)
        with self.assertRaises(ValidationError):
            Recurring(last_completed_date="yesterday")

    def test_validate_date_returns_value(self) -> None:
        self.assertEqual(validate_date("2024-06-01"), "2024-06-01")


class TestSubtaskWireFormat(unittest.TestCase):
    def test_undated_round_trip_keeps_only_base_fields(self) -> None:
        sub = Subtask("sub-1", "Write docs", Undated(completed=True))
        self.assertEqual(sub.to_dict(), {"id": "sub-1", "name": "Write docs", "completed": True})

    def test_dated_once_serialises_due_date_and_order(self) -> None:
        sub = Subtask("sub-1", "Write docs", DatedOnce(date="2024-06-01", order=2))
        data = sub.to_dict()
        self.assertEqual(data["dueDate"], "2024-06-01")
        self.assertEqual(data["todayOrder"], 2)
        self.assertFalse(data["completed"])
        self.assertEqual(Subtask.from_dict(data), sub)

    def test_recurring_completed_mirrors_stamp(self) -> None:
        done = Subtask("sub-1", "Stretch", Recurring(last_completed_date="2024-06-01", order=0))
        data = done.to_dict()
        self.assertTrue(data["isDaily"])
        self.assertTrue(data["completed"])
        self.assertEqual(data["lastCompletedDate"], "2024-06-01")
        self.assertEqual(data["dailyOrder"], 0)
        self.assertNotIn("dueDate", data)
        self.assertFalse(Subtask("sub-2", "Read", Recurring()).to_dict()["completed"])

    def test_legacy_daily_with_due_date_loads_as_recurring(self) -> None:
        sub = Subtask.from_dict({
            "id": "sub-9", "name": "Walk", "completed": True,
            "isDaily": True, "dueDate": "2024-05-01", "todayOrder": 4,
        })
        self.assertEqual(sub.schedule, Recurring())
        self.assertIsNone(sub.due_date)
        self.assertTrue(sub.is_daily)

    def test_empty_due_date_means_undated(self) -> None:
        sub = Subtask.from_dict({"id": "s", "name": "n", "dueDate": "", "completed": True})
        self.assertEqual(sub.schedule, Undated(completed=True))

    def test_non_integer_order_is_dropped(self) -> None:
        sub = Subtask.from_dict({"id": "s", "name": "n", "dueDate": "2024-06-01", "todayOrder": "x"})
        self.assertIsNone(sub.order)
        sub = Subtask.from_dict({"id": "s", "name": "n", "dueDate": "2024-06-01", "todayOrder": "3"})
        self.assertEqual(sub.order, 3)

    def test_create_trims_and_rejects_empty_names(self) -> None:
        sub = Subtask.create("  Plan sprint  ")
        self.assertEqual(sub.name, "Plan sprint")
        self.assertTrue(sub.id.startswith("sub-"))
        self.assertTrue(Subtask.create("x", prefix="ai").id.startswith("ai-"))
        with self.assertRaises(ValidationError):
            Subtask.create("   ")


class TestTreeWireFormat(unittest.TestCase):
    def test_tree_round_trip(self) -> None:
        tree = (
            Category("cat-1", "Work", "amber", (
                Task("task-1", "Ship", True, (Subtask("sub-1", "Tag"),), "release notes"),
            )),
        )
        data = tree_to_list(tree)
        self.assertEqual(data[0]["color"], "amber")
        self.assertEqual(data[0]["tasks"][0]["description"], "release notes")
        self.assertEqual(tree_from_list(data), tree)

    def test_duplicate_ids_are_rejected(self) -> None:
        duplicated_subtasks = [{"id": "c", "name": "C", "tasks": [
            {"id": "t", "name": "T", "subtasks": [
                {"id": "x", "name": "A"}, {"id": "x", "name": "B"}]}]}]
        duplicated_across_tasks = [{"id": "c", "name": "C", "tasks": [
            {"id": "t1", "name": "T1", "subtasks": [{"id": "s", "name": "A"}]},
            {"id": "t2", "name": "T2", "subtasks": [{"id": "s", "name": "B"}]}]}]
        duplicated_categories = [{"id": "c", "name": "A"}, {"id": "c", "name": "B"}]
        for data in (duplicated_subtasks, duplicated_across_tasks, duplicated_categories):
            with self.assertRaises(ValidationError):
                tree_from_list(data)

    def test_tree_must_be_a_list(self) -> None:
        with self.assertRaises(ValidationError):
            tree_from_list({"cat-1": {}})


if __name__ == "__main__":
    unittest.main(verbosity=2)
