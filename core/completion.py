#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TaskFlow Today - Completion Tracker
Выполнено ли "на сегодня" и переключение выполнения

Ручное выполнение (ManualCompletion) хранит флаг в режиме Undated/DatedOnce.
Ежедневное (RecurringCompletion) выводится из даты последнего выполнения,
поэтому на следующий день привычка снова не выполнена.
"""

from dataclasses import dataclass, replace
from typing import Iterable

from core.models import Category, Recurring, Schedule, Subtask, Task

class ManualCompletion:
    """Постоянный флаг completed"""

    def is_done(self, schedule: Schedule, today: str) -> bool:
        return schedule.completed

    def toggle(self, schedule: Schedule, today: str) -> Schedule:
        return replace(schedule, completed=not schedule.completed)

class RecurringCompletion:
    """Выполнение на конкретный день через lastCompletedDate"""

    def is_done(self, schedule: Recurring, today: str) -> bool:
        return schedule.last_completed_date == today

    def toggle(self, schedule: Recurring, today: str) -> Recurring:
        if self.is_done(schedule, today):
            return replace(schedule, last_completed_date=None)
        return replace(schedule, last_completed_date=today)

MANUAL = ManualCompletion()
RECURRING = RecurringCompletion()

def completion_for(schedule: Schedule):
    return RECURRING if isinstance(schedule, Recurring) else MANUAL

def is_done_for_today(subtask: Subtask, today: str) -> bool:
    return completion_for(subtask.schedule).is_done(subtask.schedule, today)

def toggle(subtask: Subtask, today: str) -> Subtask:
    return subtask.with_schedule(completion_for(subtask.schedule).toggle(subtask.schedule, today))

# ===== ПРОГРЕСС =====

@dataclass(frozen=True)
class Progress:
    done: int
    total: int

    @property
    def percent(self) -> int:
        return int(self.done * 100 / self.total + 0.5) if self.total else 0

    @property
    def all_done(self) -> bool:
        return self.total > 0 and self.done == self.total

def subtask_progress(subtasks: Iterable[Subtask], today: str) -> Progress:
    flags = [is_done_for_today(s, today) for s in subtasks]
    return Progress(done=sum(flags), total=len(flags))

def task_progress(task: Task, today: str) -> Progress:
    return subtask_progress(task.subtasks, today)

def is_task_done(task: Task, today: str) -> bool:
    """Отображаемый статус задачи; обратно в дерево не сохраняется"""
    return task.completed or task_progress(task, today).all_done

def category_progress(category: Category) -> Progress:
    """Доля задач с ручным флагом completed"""
    return Progress(
        done=sum(1 for t in category.tasks if t.completed),
        total=len(category.tasks)
    )

def view_progress(items: Iterable, today: str) -> Progress:
    """Прогресс по производному представлению (сегодня, привычки)"""
    return subtask_progress((item.subtask for item in items), today)

