#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TaskFlow Today - Schedule Classifier
Разбор дерева на три непересекающихся набора:

- today: не ежедневные подзадачи с dueDate == сегодня
- daily: ежедневные привычки (дата не важна)
- unassigned: не ежедневные подзадачи без даты

Подзадачи с прошедшей или будущей датой не входят ни в один набор.
Классификация пересчитывается при каждом чтении и нигде не сохраняется.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from core.completion import is_done_for_today
from core.models import Category, DatedOnce, Recurring, Subtask, Task, Tree, Undated, validate_date
from core.tree import ensure_tree

class ScheduleSet(Enum):
    """Наборы представлений"""
    TODAY = "today"
    DAILY = "daily"
    UNASSIGNED = "unassigned"

@dataclass(frozen=True)
class ScheduledItem:
    """Подзадача вместе с ее задачей и категорией"""
    category: Category
    task: Task
    subtask: Subtask

@dataclass(frozen=True)
class ScheduleView:
    today: Tuple[ScheduledItem, ...]
    daily: Tuple[ScheduledItem, ...]
    unassigned: Tuple[ScheduledItem, ...]

def iter_items(tree: Tree) -> Iterator[ScheduledItem]:
    for category in ensure_tree(tree):
        for task in category.tasks:
            for subtask in task.subtasks:
                yield ScheduledItem(category, task, subtask)

def classify_subtask(subtask: Subtask, today: str) -> Optional[ScheduleSet]:
    """Набор, в который попадает подзадача, или None"""
    schedule = subtask.schedule
    if isinstance(schedule, Recurring):
        return ScheduleSet.DAILY
    if isinstance(schedule, Undated):
        return ScheduleSet.UNASSIGNED
    if isinstance(schedule, DatedOnce) and schedule.date == today:
        return ScheduleSet.TODAY
    return None

def select(tree: Tree, today: str, which: ScheduleSet) -> List[ScheduledItem]:
    validate_date(today, "today")
    return [item for item in iter_items(tree) if classify_subtask(item.subtask, today) is which]

def today_set(tree: Tree, today: str) -> List[ScheduledItem]:
    return select(tree, today, ScheduleSet.TODAY)

def daily_set(tree: Tree, today: str) -> List[ScheduledItem]:
    return select(tree, today, ScheduleSet.DAILY)

def unassigned_set(tree: Tree, today: str) -> List[ScheduledItem]:
    return select(tree, today, ScheduleSet.UNASSIGNED)

def classify(tree: Tree, today: str) -> ScheduleView:
    """Все три набора за один проход, в порядке дерева"""
    validate_date(today, "today")
    buckets = {member: [] for member in ScheduleSet}
    for item in iter_items(tree):
        which = classify_subtask(item.subtask, today)
        if which is not None:
            buckets[which].append(item)
    return ScheduleView(
        today=tuple(buckets[ScheduleSet.TODAY]),
        daily=tuple(buckets[ScheduleSet.DAILY]),
        unassigned=tuple(buckets[ScheduleSet.UNASSIGNED])
    )

def sorted_unassigned(tree: Tree, today: str) -> List[ScheduledItem]:
    """Неразобранное: сначала невыполненные, затем по имени категории"""
    return sorted(
        unassigned_set(tree, today),
        key=lambda item: (is_done_for_today(item.subtask, today), item.category.name)
    )
