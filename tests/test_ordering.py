import json
import unittest

from core.completion import is_done_for_today, toggle
from core.models import Category, DatedOnce, Recurring, Subtask, Task, ValidationError, tree_to_list
from core.ordering import move_within_daily_set, move_within_today_set, ordered_daily, ordered_today
from core.tree import find_subtask, update_subtask

TODAY = "2024-06-01"


def _tree(*subtasks):
    return (Category("cat-1", "Work", tasks=(Task("task-1", "Sprint", subtasks=tuple(subtasks)),)),)


def _due(sub_id, order=None, completed=False, day=TODAY):
    return Subtask(sub_id, sub_id.upper(), DatedOnce(date=day, completed=completed, order=order))


def _orders(tree, today=TODAY):
    return {item.subtask.id: item.subtask.order for item in ordered_today(tree, today)}


def _ids(items):
    return [item.subtask.id for item in items]


class TestMoveWithinTodaySet(unittest.TestCase):
    def test_swap_with_neighbour_and_renumber(self) -> None:
        tree = _tree(_due("a", 0), _due("b", 1), _due("c", 2))
        moved = move_within_today_set(tree, "b", "up", TODAY)
        self.assertEqual(_orders(moved), {"b": 0, "a": 1, "c": 2})
        self.assertEqual(_ids(ordered_today(moved, TODAY)), ["b", "a", "c"])

    def test_completed_boundary_is_never_crossed(self) -> None:
        tree = _tree(_due("a", 0, completed=True), _due("b", 1), _due("c", 2))
        self.assertEqual(_ids(ordered_today(tree, TODAY)), ["b", "c", "a"])
        self.assertIs(move_within_today_set(tree, "a", "up", TODAY), tree)
        self.assertIs(move_within_today_set(tree, "c", "down", TODAY), tree)

    def test_moves_inside_completed_partition(self) -> None:
        tree = _tree(_due("a", 0, completed=True), _due("b", 1, completed=True), _due("c"))
        moved = move_within_today_set(tree, "b", "up", TODAY)
        self.assertEqual(_ids(ordered_today(moved, TODAY)), ["c", "b", "a"])
        self.assertEqual(_orders(moved), {"c": 0, "b": 1, "a": 2})

    def test_bounds_leave_tree_byte_for_byte_unchanged(self) -> None:
        tree = _tree(_due("a", 0), _due("b", 1), _due("c", 2, completed=True))
        before = json.dumps(tree_to_list(tree), sort_keys=True)
        for sub_id, direction in (("a", "up"), ("c", "down")):
            after = move_within_today_set(tree, sub_id, direction, TODAY)
            self.assertIs(after, tree)
            self.assertEqual(json.dumps(tree_to_list(after), sort_keys=True), before)

    def test_stale_orders_self_heal(self) -> None:
        tree = _tree(_due("a", 5), _due("b", 5), _due("c"), _due("d", 1))
        self.assertEqual(_ids(ordered_today(tree, TODAY)), ["d", "a", "b", "c"])
        moved = move_within_today_set(tree, "c", "up", TODAY)
        self.assertEqual(_orders(moved), {"d": 0, "a": 1, "c": 2, "b": 3})

    def test_orders_stay_dense_and_partitioned_over_many_moves(self) -> None:
        tree = _tree(
            _due("a", 3), _due("b"), _due("c", 3, completed=True), _due("d", 0), _due("e", completed=True),
            _due("other-day", 0, day="2024-06-02"),
        )
        script = [("b", "up"), ("e", "up"), ("a", "down"), ("c", "down"), ("d", "down"), ("b", "up"), ("a", "up")]
        for sub_id, direction in script:
            tree = move_within_today_set(tree, sub_id, direction, TODAY)
            items = ordered_today(tree, TODAY)
            self.assertEqual(sorted(i.subtask.order for i in items), list(range(len(items))))
            flags = [is_done_for_today(i.subtask, TODAY) for i in items]
            self.assertEqual(flags, sorted(flags))
        _, _, untouched = find_subtask(tree, "other-day")
        self.assertEqual(untouched.order, 0)

    def test_rescheduled_subtask_sorts_last_until_next_move(self) -> None:
        tree = _tree(_due("a", 0), _due("b", 1), Subtask("e", "E"))
        tree = update_subtask(tree, "e", lambda s: s.with_schedule(DatedOnce(date=TODAY)))
        self.assertEqual(_ids(ordered_today(tree, TODAY)), ["a", "b", "e"])
        self.assertIsNone(_orders(tree)["e"])
        moved = move_within_today_set(tree, "a", "down", TODAY)
        self.assertEqual(_orders(moved), {"b": 0, "a": 1, "e": 2})

    def test_unknown_or_out_of_set_ids_are_no_ops(self) -> None:
        tree = _tree(_due("a", 0), _due("b", 1), _due("later", 0, day="2024-06-02"))
        self.assertIs(move_within_today_set(tree, "missing", "up", TODAY), tree)
        self.assertIs(move_within_today_set(tree, "later", "up", TODAY), tree)

    def test_contract_violations_raise(self) -> None:
        tree = _tree(_due("a", 0), _due("b", 1))
        with self.assertRaises(ValidationError):
            move_within_today_set(tree, "b", "sideways", TODAY)
        with self.assertRaises(ValidationError):
            move_within_today_set(tree, "b", "up", "2024/06/01")
        with self.assertRaises(ValidationError):
            move_within_today_set(None, "b", "up", TODAY)


class TestMoveWithinDailySet(unittest.TestCase):
    def test_daily_order_is_user_adjustable(self) -> None:
        tree = _tree(
            Subtask("walk", "Walk", Recurring()),
            Subtask("read", "Read", Recurring()),
            Subtask("stretch", "Stretch", Recurring()),
        )
        moved = move_within_daily_set(tree, "stretch", "up", TODAY)
        self.assertEqual(_ids(ordered_daily(moved, TODAY)), ["walk", "stretch", "read"])
        _, _, read = find_subtask(moved, "read")
        self.assertEqual(read.to_dict()["dailyOrder"], 2)

    def test_done_today_habits_sort_after_pending_ones(self) -> None:
        tree = _tree(Subtask("walk", "Walk", Recurring(order=0)), Subtask("read", "Read", Recurring(order=1)))
        tree = update_subtask(tree, "walk", lambda s: toggle(s, TODAY))
        self.assertEqual(_ids(ordered_daily(tree, TODAY)), ["read", "walk"])
        self.assertIs(move_within_daily_set(tree, "walk", "up", TODAY), tree)
        self.assertEqual(_ids(ordered_daily(tree, "2024-06-02")), ["walk", "read"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
