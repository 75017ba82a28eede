#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TaskFlow Today - Ordering Engine
Пользовательский порядок для набора "сегодня" (и отдельно для привычек)

Порядок хранится на самих подзадачах как разреженная подсказка
(todayOrder / dailyOrder). Состав набора меняется при любой смене дат,
поэтому подсказка может быть устаревшей: пропуски, дубликаты, отсутствие.
Каждое перемещение заново собирает набор, сортирует его с разбиением
"невыполненные / выполненные", меняет соседей местами внутри своей части
и перенумеровывает весь набор в 0..n-1.
"""

import sys
from dataclasses import replace
from typing import Callable, Dict, List
import logging

from core.completion import is_done_for_today
from core.models import Subtask, Tree, validate_date
from core.schedule import ScheduledItem, daily_set, today_set
from core.tree import direction_delta, ensure_tree, update_subtasks

logger = logging.getLogger(__name__)

UP = "up"
DOWN = "down"

# подзадачи без порядка встают в конец своей части
UNORDERED = sys.maxsize

SetSelector = Callable[[Tree, str], List[ScheduledItem]]

def _sort_key(today: str):
    def key(item: ScheduledItem):
        order = item.subtask.order
        return (
            is_done_for_today(item.subtask, today),
            UNORDERED if order is None else order
        )
    return key

def ordered_set(tree: Tree, today: str, selector: SetSelector) -> List[ScheduledItem]:
    """Набор в порядке отображения: невыполненные, затем выполненные"""
    # sorted устойчива: при равных подсказках сохраняется порядок дерева
    return sorted(selector(tree, today), key=_sort_key(today))

def ordered_today(tree: Tree, today: str) -> List[ScheduledItem]:
    return ordered_set(tree, today, today_set)

def ordered_daily(tree: Tree, today: str) -> List[ScheduledItem]:
    return ordered_set(tree, today, daily_set)

def _with_order(order: int) -> Callable[[Subtask], Subtask]:
    def apply(subtask: Subtask) -> Subtask:
        if subtask.order == order:
            return subtask
        return subtask.with_schedule(replace(subtask.schedule, order=order))
    return apply

def renumber(tree: Tree, sequence: List[ScheduledItem]) -> Tree:
    """Записать плотный порядок 0..n-1 на все подзадачи последовательности"""
    updates: Dict[str, Callable[[Subtask], Subtask]] = {
        item.subtask.id: _with_order(position) for position, item in enumerate(sequence)
    }
    return update_subtasks(tree, updates)

def move_within_set(tree: Tree, subtask_id: str, direction: str, today: str,
                    selector: SetSelector) -> Tree:
    """Сдвинуть подзадачу на одну позицию внутри набора"""
    ensure_tree(tree)
    validate_date(today, "today")
    delta = direction_delta(direction)

    sequence = ordered_set(tree, today, selector)
    index = next((i for i, item in enumerate(sequence) if item.subtask.id == subtask_id), -1)
    if index < 0:
        logger.debug(f"Подзадача {subtask_id} не в наборе, перемещение пропущено")
        return tree

    target = index + delta
    if not 0 <= target < len(sequence):
        return tree

    # граница между невыполненными и выполненными не пересекается
    done = is_done_for_today(sequence[index].subtask, today)
    if is_done_for_today(sequence[target].subtask, today) != done:
        return tree

    sequence[index], sequence[target] = sequence[target], sequence[index]
    logger.debug(f"Подзадача {subtask_id} перемещена: {index} → {target}")
    return renumber(tree, sequence)

def move_within_today_set(tree: Tree, subtask_id: str, direction: str, today: str) -> Tree:
    return move_within_set(tree, subtask_id, direction, today, today_set)

def move_within_daily_set(tree: Tree, subtask_id: str, direction: str, today: str) -> Tree:
    return move_within_set(tree, subtask_id, direction, today, daily_set)
