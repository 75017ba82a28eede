#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TaskFlow Today - Core Data Models
Модели данных: категории, задачи, подзадачи и режимы планирования

Дерево неизменяемо: любые изменения строят новые объекты через
dataclasses.replace, поэтому сравнение по идентичности достаточно для
обнаружения изменений.
"""

import re
import uuid
from datetime import date
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple, Union
import logging

logger = logging.getLogger(__name__)

# ===== VALIDATION HELPERS =====

class ValidationError(Exception):
    """Нарушение контракта вызывающей стороной (неверная дата, пустое имя)"""
    pass

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

def validate_date(value: str, field_name: str = "date") -> str:
    """Валидация календарной даты в формате YYYY-MM-DD"""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError(f"{field_name} должен быть датой в формате YYYY-MM-DD: {value!r}")
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Неверная дата в поле {field_name}: {value!r}")
    return value

def validate_text(text: str, min_length: int = 1, max_length: int = 200, field_name: str = "name") -> str:
    """Валидация текстовых полей"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} должен быть строкой")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} должен содержать минимум {min_length} символов")

    if len(text) > max_length:
        raise ValidationError(f"{field_name} должен содержать максимум {max_length} символов")

    return text

def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"

# ===== SCHEDULING MODES =====

@dataclass(frozen=True)
class Undated:
    """Подзадача без даты: попадает в неразобранное"""
    completed: bool = False

@dataclass(frozen=True)
class DatedOnce:
    """Подзадача на конкретный день"""
    date: str
    completed: bool = False
    order: Optional[int] = None  # todayOrder, подсказка порядка в "сегодня"

    def __post_init__(self):
        validate_date(self.date, "dueDate")

@dataclass(frozen=True)
class Recurring:
    """Ежедневная привычка: выполнение отмечается датой"""
    last_completed_date: Optional[str] = None
    order: Optional[int] = None  # dailyOrder

    def __post_init__(self):
        if self.last_completed_date is not None:
            validate_date(self.last_completed_date, "lastCompletedDate")

Schedule = Union[Undated, DatedOnce, Recurring]

CATEGORY_COLORS = ('blue', 'purple', 'emerald', 'amber', 'rose', 'indigo')

# ===== CORE MODELS =====

@dataclass(frozen=True)
class Subtask:
    """Подзадача"""
    id: str
    name: str
    schedule: Schedule = field(default_factory=Undated)

    @property
    def is_daily(self) -> bool:
        return isinstance(self.schedule, Recurring)

    @property
    def due_date(self) -> Optional[str]:
        if isinstance(self.schedule, DatedOnce):
            return self.schedule.date
        return None

    @property
    def order(self) -> Optional[int]:
        return getattr(self.schedule, "order", None)

    @property
    def last_completed_date(self) -> Optional[str]:
        if isinstance(self.schedule, Recurring):
            return self.schedule.last_completed_date
        return None

    @property
    def completed(self) -> bool:
        """Сохраняемый флаг completed в старом формате"""
        if isinstance(self.schedule, Recurring):
            return self.schedule.last_completed_date is not None
        return self.schedule.completed

    def with_schedule(self, schedule: Schedule) -> "Subtask":
        return replace(self, schedule=schedule)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "completed": self.completed,
        }
        schedule = self.schedule
        if isinstance(schedule, DatedOnce):
            data["dueDate"] = schedule.date
            if schedule.order is not None:
                data["todayOrder"] = schedule.order
        elif isinstance(schedule, Recurring):
            data["isDaily"] = True
            if schedule.last_completed_date is not None:
                data["lastCompletedDate"] = schedule.last_completed_date
            if schedule.order is not None:
                data["dailyOrder"] = schedule.order
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subtask":
        completed = bool(data.get("completed", False))
        if data.get("isDaily"):
            # dueDate у ежедневных подзадач игнорируется
            schedule: Schedule = Recurring(
                last_completed_date=data.get("lastCompletedDate") or None,
                order=_optional_int(data.get("dailyOrder"))
            )
        elif data.get("dueDate"):
            schedule = DatedOnce(
                date=data["dueDate"],
                completed=completed,
                order=_optional_int(data.get("todayOrder"))
            )
        else:
            schedule = Undated(completed=completed)
        return cls(id=str(data["id"]), name=str(data["name"]), schedule=schedule)

    @classmethod
    def create(cls, name: str, prefix: str = "sub") -> "Subtask":
        """Создание новой подзадачи"""
        return cls(id=new_id(prefix), name=validate_text(name))

@dataclass(frozen=True)
class Task:
    """Задача с упорядоченным списком подзадач"""
    id: str
    name: str
    completed: bool = False
    subtasks: Tuple[Subtask, ...] = ()
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "completed": self.completed,
            "subtasks": [s.to_dict() for s in self.subtasks],
        }
        if self.description:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            completed=bool(data.get("completed", False)),
            subtasks=tuple(Subtask.from_dict(s) for s in data.get("subtasks", [])),
            description=data.get("description") or None
        )

    @classmethod
    def create(cls, name: str) -> "Task":
        """Создание новой задачи"""
        return cls(id=new_id("task"), name=validate_text(name))

@dataclass(frozen=True)
class Category:
    """Категория (проект) с задачами"""
    id: str
    name: str
    color: str = "blue"
    tasks: Tuple[Task, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            color=str(data.get("color", "blue")),
            tasks=tuple(Task.from_dict(t) for t in data.get("tasks", []))
        )

    @classmethod
    def create(cls, name: str, color: str) -> "Category":
        """Создание новой категории"""
        return cls(id=new_id("cat"), name=validate_text(name), color=color)

# Все сохраняемое состояние: упорядоченный список категорий
Tree = Tuple[Category, ...]

def tree_from_list(data: List[Dict[str, Any]]) -> Tree:
    if not isinstance(data, list):
        raise ValidationError("Дерево должно быть списком категорий")
    tree = tuple(Category.from_dict(c) for c in data)
    _ensure_unique_ids(tree)
    return tree

def _ensure_unique_ids(tree: Tree) -> None:
    """Идентификаторы уникальны во всём дереве"""
    seen = set()
    for category in tree:
        ids = [category.id]
        for task in category.tasks:
            ids.append(task.id)
            ids.extend(subtask.id for subtask in task.subtasks)
        for item_id in ids:
            if item_id in seen:
                raise ValidationError(f"Повторяющийся id: {item_id!r}")
            seen.add(item_id)

def tree_to_list(tree: Tree) -> List[Dict[str, Any]]:
    return [c.to_dict() for c in tree]

def _optional_int(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
