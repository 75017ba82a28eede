#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TaskFlow Today - Tree Operations
Поиск по дереву, неизменяемая перестройка и CRUD категорий/задач/подзадач

Каждая операция возвращает новое дерево. Если ссылка на id устарела или
изменение ничего не меняет, возвращается то же самое дерево (тот же объект).
"""

import random
from dataclasses import replace
from typing import Callable, Dict, Optional, Sequence, Tuple, TypeVar
import logging

from core.models import (
    CATEGORY_COLORS, Category, DatedOnce, Recurring, Subtask, Task, Tree,
    Undated, ValidationError, validate_date
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

SubtaskFn = Callable[[Subtask], Subtask]

def ensure_tree(tree: Optional[Tree]) -> Tree:
    if tree is None:
        raise ValidationError("Дерево не передано")
    return tree

# ===== ПОИСК =====

def find_category(tree: Tree, category_id: str) -> Optional[Category]:
    return next((c for c in tree if c.id == category_id), None)

def find_task(tree: Tree, task_id: str) -> Optional[Tuple[Category, Task]]:
    for category in tree:
        for task in category.tasks:
            if task.id == task_id:
                return category, task
    return None

def find_subtask(tree: Tree, subtask_id: str) -> Optional[Tuple[Category, Task, Subtask]]:
    for category in tree:
        for task in category.tasks:
            for subtask in task.subtasks:
                if subtask.id == subtask_id:
                    return category, task, subtask
    return None

# ===== НЕИЗМЕНЯЕМАЯ ПЕРЕСТРОЙКА =====

def _map_same(items: Sequence[T], fn: Callable[[T], T]) -> Tuple[Tuple[T, ...], bool]:
    mapped = tuple(fn(item) for item in items)
    changed = any(new is not old for new, old in zip(mapped, items))
    return mapped, changed

def map_tasks(tree: Tree, fn: Callable[[Task], Task]) -> Tree:
    """Применить fn ко всем задачам; без изменений вернуть исходное дерево"""
    def on_category(category: Category) -> Category:
        tasks, changed = _map_same(category.tasks, fn)
        return replace(category, tasks=tasks) if changed else category

    categories, changed = _map_same(ensure_tree(tree), on_category)
    return categories if changed else tree

def map_subtasks(tree: Tree, fn: SubtaskFn) -> Tree:
    """Применить fn ко всем подзадачам; без изменений вернуть исходное дерево"""
    def on_task(task: Task) -> Task:
        subtasks, changed = _map_same(task.subtasks, fn)
        return replace(task, subtasks=subtasks) if changed else task

    return map_tasks(tree, on_task)

def update_subtasks(tree: Tree, updates: Dict[str, SubtaskFn]) -> Tree:
    """Обновить несколько подзадач за одну перестройку дерева"""
    if not updates:
        return tree
    return map_subtasks(tree, lambda s: updates[s.id](s) if s.id in updates else s)

def update_subtask(tree: Tree, subtask_id: str, fn: SubtaskFn) -> Tree:
    return update_subtasks(tree, {subtask_id: fn})

def update_task(tree: Tree, task_id: str, fn: Callable[[Task], Task]) -> Tree:
    return map_tasks(tree, lambda t: fn(t) if t.id == task_id else t)

def update_category(tree: Tree, category_id: str, fn: Callable[[Category], Category]) -> Tree:
    categories, changed = _map_same(ensure_tree(tree), lambda c: fn(c) if c.id == category_id else c)
    return categories if changed else tree

def move_item(items: Tuple[T, ...], index: int, delta: int) -> Tuple[T, ...]:
    """Поменять местами элемент index и index+delta; вне границ - без изменений"""
    target = index + delta
    if delta == 0 or index < 0 or not 0 <= target < len(items):
        return items
    moved = list(items)
    moved[index], moved[target] = moved[target], moved[index]
    return tuple(moved)

def _index_of(items: Sequence, item_id: str) -> int:
    return next((i for i, item in enumerate(items) if item.id == item_id), -1)

# ===== КАТЕГОРИИ =====

def add_category(tree: Tree, name: str, color: Optional[str] = None) -> Tuple[Tree, Category]:
    category = Category.create(name, color or random.choice(CATEGORY_COLORS))
    return ensure_tree(tree) + (category,), category

def rename_category(tree: Tree, category_id: str, name: str) -> Tree:
    name = name.strip()
    return update_category(tree, category_id, lambda c: replace(c, name=name) if c.name != name else c)

def delete_category(tree: Tree, category_id: str) -> Tree:
    """Удаление категории вместе со всеми задачами и подзадачами"""
    remaining = tuple(c for c in ensure_tree(tree) if c.id != category_id)
    return remaining if len(remaining) != len(tree) else tree

def move_category(tree: Tree, category_id: str, direction: str) -> Tree:
    delta = direction_delta(direction)
    return move_item(ensure_tree(tree), _index_of(tree, category_id), delta)

# ===== ЗАДАЧИ =====

def add_task(tree: Tree, category_id: str, name: str) -> Tuple[Tree, Optional[Task]]:
    if find_category(tree, category_id) is None:
        return tree, None
    task = Task.create(name)
    return update_category(tree, category_id, lambda c: replace(c, tasks=c.tasks + (task,))), task

def rename_task(tree: Tree, task_id: str, name: str) -> Tree:
    name = name.strip()
    return update_task(tree, task_id, lambda t: replace(t, name=name) if t.name != name else t)

def set_task_description(tree: Tree, task_id: str, description: Optional[str]) -> Tree:
    description = (description or "").strip() or None
    return update_task(
        tree, task_id,
        lambda t: replace(t, description=description) if t.description != description else t
    )

def toggle_task(tree: Tree, task_id: str) -> Tree:
    """Ручной флаг completed задачи; не выводится из подзадач"""
    return update_task(tree, task_id, lambda t: replace(t, completed=not t.completed))

def delete_task(tree: Tree, task_id: str) -> Tree:
    def on_category(category: Category) -> Category:
        tasks = tuple(t for t in category.tasks if t.id != task_id)
        return replace(category, tasks=tasks) if len(tasks) != len(category.tasks) else category

    categories, changed = _map_same(ensure_tree(tree), on_category)
    return categories if changed else tree

def move_task(tree: Tree, category_id: str, task_id: str, delta: int) -> Tree:
    """Сдвиг задачи внутри категории на delta позиций (±1 или ±колонки сетки)"""
    def on_category(category: Category) -> Category:
        tasks = move_item(category.tasks, _index_of(category.tasks, task_id), delta)
        return replace(category, tasks=tasks) if tasks is not category.tasks else category

    return update_category(tree, category_id, on_category)

# ===== ПОДЗАДАЧИ =====

def add_subtask(tree: Tree, task_id: str, name: str) -> Tuple[Tree, Optional[Subtask]]:
    if find_task(tree, task_id) is None:
        return tree, None
    subtask = Subtask.create(name)
    return append_subtasks(tree, task_id, [subtask]), subtask

def append_subtasks(tree: Tree, task_id: str, subtasks: Sequence[Subtask]) -> Tree:
    if not subtasks:
        return tree
    return update_task(tree, task_id, lambda t: replace(t, subtasks=t.subtasks + tuple(subtasks)))

def rename_subtask(tree: Tree, subtask_id: str, name: str) -> Tree:
    name = name.strip()
    return update_subtask(tree, subtask_id, lambda s: replace(s, name=name) if s.name != name else s)

def delete_subtask(tree: Tree, subtask_id: str) -> Tree:
    def on_task(task: Task) -> Task:
        subtasks = tuple(s for s in task.subtasks if s.id != subtask_id)
        return replace(task, subtasks=subtasks) if len(subtasks) != len(task.subtasks) else task

    return map_tasks(tree, on_task)

def move_subtask(tree: Tree, task_id: str, subtask_id: str, delta: int) -> Tree:
    """Сдвиг подзадачи внутри задачи на delta позиций"""
    def on_task(task: Task) -> Task:
        subtasks = move_item(task.subtasks, _index_of(task.subtasks, subtask_id), delta)
        return replace(task, subtasks=subtasks) if subtasks is not task.subtasks else task

    return update_task(tree, task_id, on_task)

def set_due_date(tree: Tree, subtask_id: str, due_date: Optional[str]) -> Tree:
    """Назначить или снять дату; todayOrder при переносе сбрасывается"""
    if due_date:
        validate_date(due_date, "dueDate")

    def reschedule(subtask: Subtask) -> Subtask:
        schedule = subtask.schedule
        if isinstance(schedule, Recurring):
            # у ежедневных подзадач дата не используется
            return subtask
        if (due_date or None) == subtask.due_date:
            return subtask
        if due_date:
            return subtask.with_schedule(DatedOnce(date=due_date, completed=schedule.completed))
        return subtask.with_schedule(Undated(completed=schedule.completed))

    return update_subtask(tree, subtask_id, reschedule)

def toggle_daily(tree: Tree, subtask_id: str) -> Tree:
    """Переключение режима ежедневной привычки"""
    def flip(subtask: Subtask) -> Subtask:
        if subtask.is_daily:
            return subtask.with_schedule(Undated())
        return subtask.with_schedule(Recurring())

    return update_subtask(tree, subtask_id, flip)

def direction_delta(direction: str) -> int:
    if direction == "up":
        return -1
    if direction == "down":
        return 1
    raise ValidationError(f"Неизвестное направление: {direction!r}")
