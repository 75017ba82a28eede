#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TaskFlow Today - Core Package
Модель данных, классификация расписания, порядок "сегодня" и выполнение
"""

from .models import (
    ValidationError,
    Undated,
    DatedOnce,
    Recurring,
    Subtask,
    Task,
    Category,
    Tree
)

from .schedule import (
    ScheduleSet,
    ScheduledItem,
    ScheduleView,
    classify
)

from .ordering import (
    UP,
    DOWN,
    ordered_today,
    ordered_daily,
    move_within_today_set,
    move_within_daily_set
)

from .completion import (
    is_done_for_today,
    toggle
)

from .store import TreeStore

__all__ = [
    # Models
    'ValidationError',
    'Undated',
    'DatedOnce',
    'Recurring',
    'Subtask',
    'Task',
    'Category',
    'Tree',

    # Schedule
    'ScheduleSet',
    'ScheduledItem',
    'ScheduleView',
    'classify',

    # Ordering
    'UP',
    'DOWN',
    'ordered_today',
    'ordered_daily',
    'move_within_today_set',
    'move_within_daily_set',

    # Completion
    'is_done_for_today',
    'toggle',

    'TreeStore'
]
