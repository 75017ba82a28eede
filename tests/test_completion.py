import unittest

from core.completion import (
    MANUAL, RECURRING, Progress, category_progress, completion_for, is_done_for_today,
    is_task_done, task_progress, toggle, view_progress
)
from core.models import Category, DatedOnce, Recurring, Subtask, Task, Undated
from core.ordering import ordered_today
from core.seed import default_tree

DAY = "2024-06-01"
NEXT_DAY = "2024-06-02"


class TestCompletionCapabilities(unittest.TestCase):
    def test_capability_follows_schedule_variant(self) -> None:
        self.assertIs(completion_for(Recurring()), RECURRING)
        self.assertIs(completion_for(Undated()), MANUAL)
        self.assertIs(completion_for(DatedOnce(date=DAY)), MANUAL)

    def test_manual_toggle_keeps_date_and_order(self) -> None:
        sub = Subtask("s", "n", DatedOnce(date=DAY, order=4))
        done = toggle(sub, DAY)
        self.assertEqual(done.schedule, DatedOnce(date=DAY, completed=True, order=4))
        self.assertTrue(is_done_for_today(done, NEXT_DAY))
        self.assertEqual(toggle(done, DAY), sub)

    def test_daily_toggle_is_scoped_to_the_day(self) -> None:
        habit = Subtask("d", "Stretch", Recurring())
        done = toggle(habit, DAY)
        self.assertEqual(done.last_completed_date, DAY)
        self.assertTrue(done.to_dict()["completed"])
        self.assertTrue(is_done_for_today(done, DAY))
        self.assertFalse(is_done_for_today(done, NEXT_DAY))

    def test_daily_toggle_off_clears_stamp(self) -> None:
        done = toggle(Subtask("d", "Stretch", Recurring(order=2)), DAY)
        undone = toggle(done, DAY)
        self.assertEqual(undone.schedule, Recurring(order=2))
        self.assertFalse(undone.to_dict()["completed"])

    def test_stale_stamp_toggles_to_today(self) -> None:
        done = toggle(Subtask("d", "Stretch", Recurring()), DAY)
        again = toggle(done, NEXT_DAY)
        self.assertEqual(again.last_completed_date, NEXT_DAY)


class TestProgress(unittest.TestCase):
    def test_percent_rounds_half_up(self) -> None:
        self.assertEqual(Progress(1, 3).percent, 33)
        self.assertEqual(Progress(2, 3).percent, 67)
        self.assertEqual(Progress(1, 8).percent, 13)
        self.assertEqual(Progress(0, 0).percent, 0)
        self.assertFalse(Progress(0, 0).all_done)
        self.assertTrue(Progress(2, 2).all_done)

    def test_task_progress_counts_done_for_today(self) -> None:
        task = Task("t", "Habits", subtasks=(
            Subtask("a", "A", Recurring(last_completed_date=DAY)),
            Subtask("b", "B", Undated(completed=True)),
            Subtask("c", "C"),
        ))
        self.assertEqual(task_progress(task, DAY), Progress(2, 3))
        self.assertEqual(task_progress(task, NEXT_DAY), Progress(1, 3))

    def test_task_display_state_is_derived(self) -> None:
        task = Task("t", "T", subtasks=(Subtask("a", "A", Undated(completed=True)),))
        self.assertTrue(is_task_done(task, DAY))
        self.assertFalse(task.completed)
        self.assertFalse(is_task_done(Task("e", "Empty"), DAY))
        self.assertTrue(is_task_done(Task("m", "Manual", completed=True), DAY))

    def test_category_progress_uses_manual_task_flags(self) -> None:
        category = Category("c", "C", tasks=(Task("t1", "A", completed=True), Task("t2", "B"), Task("t3", "C")))
        self.assertEqual(category_progress(category).percent, 33)
        self.assertEqual(category_progress(default_tree()[0]), Progress(0, 2))

    def test_view_progress(self) -> None:
        tree = (Category("c", "C", tasks=(Task("t", "T", subtasks=(
            Subtask("a", "A", DatedOnce(date=DAY, completed=True)),
            Subtask("b", "B", DatedOnce(date=DAY)),
        )),)),)
        self.assertEqual(view_progress(ordered_today(tree, DAY), DAY), Progress(1, 2))


if __name__ == "__main__":
    unittest.main(verbosity=2)
