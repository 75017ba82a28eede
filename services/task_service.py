# services/task_service.py

import logging
from typing import Callable, List, Optional

from config import config
from core import completion, ordering, schedule
from core import tree as tree_ops
from core.completion import Progress
from core.models import Category, Subtask, Tree
from core.schedule import ScheduledItem
from core.store import TreeStore
from services.ai_service import AIService
from utils.datetime_utils import today_str
from utils.validators import is_valid_name

logger = logging.getLogger(__name__)

class TaskService:
    """
    Сервис задач: единая точка для всех действий пользователя

    Возможности:
    - Представления "сегодня", привычки и неразобранное
    - Ручной порядок в "сегодня" и в привычках
    - Выполнение, перенос дат, режим ежедневной привычки
    - CRUD категорий, задач и подзадач
    - AI подсказки подзадач

    "Сегодня" берется из часов при каждом вызове и не кэшируется.
    """

    def __init__(self, store: TreeStore, ai_service: Optional[AIService] = None,
                 today_provider: Optional[Callable[[], str]] = None):
        self.store = store
        self.ai_service = ai_service
        self.today_provider = today_provider or (lambda: today_str(config.timezone))
        logger.info("✅ TaskService инициализирован")

    @property
    def tree(self) -> Tree:
        return self.store.tree

    def today(self) -> str:
        return self.today_provider()

    # ===== ПРЕДСТАВЛЕНИЯ =====

    def categories(self) -> Tree:
        return self.store.tree

    def today_view(self) -> List[ScheduledItem]:
        return ordering.ordered_today(self.store.tree, self.today())

    def daily_view(self) -> List[ScheduledItem]:
        return ordering.ordered_daily(self.store.tree, self.today())

    def unassigned_view(self) -> List[ScheduledItem]:
        return schedule.sorted_unassigned(self.store.tree, self.today())

    def view_progress(self, items: List[ScheduledItem]) -> Progress:
        return completion.view_progress(items, self.today())

    # ===== ПОРЯДОК =====

    def move_today(self, subtask_id: str, direction: str) -> bool:
        today = self.today()
        return self.store.apply(
            lambda t: ordering.move_within_today_set(t, subtask_id, direction, today)
        )

    def move_daily(self, subtask_id: str, direction: str) -> bool:
        today = self.today()
        return self.store.apply(
            lambda t: ordering.move_within_daily_set(t, subtask_id, direction, today)
        )

    # ===== ВЫПОЛНЕНИЕ И РАСПИСАНИЕ =====

    def toggle_subtask(self, subtask_id: str) -> bool:
        today = self.today()
        return self.store.apply(
            lambda t: tree_ops.update_subtask(t, subtask_id, lambda s: completion.toggle(s, today))
        )

    def set_due_date(self, subtask_id: str, due_date: Optional[str]) -> bool:
        return self.store.apply(lambda t: tree_ops.set_due_date(t, subtask_id, due_date))

    def toggle_daily(self, subtask_id: str) -> bool:
        return self.store.apply(lambda t: tree_ops.toggle_daily(t, subtask_id))

    # ===== КАТЕГОРИИ =====

    def add_category(self, name: str) -> Optional[Category]:
        if not is_valid_name(name):
            logger.debug("Пустое имя категории, добавление пропущено")
            return None
        tree, category = tree_ops.add_category(self.store.tree, name)
        self.store.replace(tree)
        logger.info(f"✅ Создана категория {category.id}: {category.name}")
        return category

    def rename_category(self, category_id: str, name: str) -> bool:
        if not is_valid_name(name):
            return False
        return self.store.apply(lambda t: tree_ops.rename_category(t, category_id, name))

    def delete_category(self, category_id: str) -> bool:
        changed = self.store.apply(lambda t: tree_ops.delete_category(t, category_id))
        if changed:
            logger.info(f"🗑️ Категория {category_id} удалена")
        return changed

    def move_category(self, category_id: str, direction: str) -> bool:
        return self.store.apply(lambda t: tree_ops.move_category(t, category_id, direction))

    # ===== ЗАДАЧИ =====

    def add_task(self, category_id: str, name: str) -> Optional[str]:
        if not is_valid_name(name):
            return None
        tree, task = tree_ops.add_task(self.store.tree, category_id, name)
        self.store.replace(tree)
        return task.id if task else None

    def rename_task(self, task_id: str, name: str) -> bool:
        if not is_valid_name(name):
            return False
        return self.store.apply(lambda t: tree_ops.rename_task(t, task_id, name))

    def set_task_description(self, task_id: str, description: Optional[str]) -> bool:
        return self.store.apply(lambda t: tree_ops.set_task_description(t, task_id, description))

    def toggle_task(self, task_id: str) -> bool:
        return self.store.apply(lambda t: tree_ops.toggle_task(t, task_id))

    def delete_task(self, task_id: str) -> bool:
        return self.store.apply(lambda t: tree_ops.delete_task(t, task_id))

    def move_task(self, category_id: str, task_id: str, delta: int) -> bool:
        return self.store.apply(lambda t: tree_ops.move_task(t, category_id, task_id, delta))

    # ===== ПОДЗАДАЧИ =====

    def add_subtask(self, task_id: str, name: str) -> Optional[str]:
        if not is_valid_name(name):
            return None
        tree, subtask = tree_ops.add_subtask(self.store.tree, task_id, name)
        self.store.replace(tree)
        return subtask.id if subtask else None

    def rename_subtask(self, subtask_id: str, name: str) -> bool:
        if not is_valid_name(name):
            return False
        return self.store.apply(lambda t: tree_ops.rename_subtask(t, subtask_id, name))

    def delete_subtask(self, subtask_id: str) -> bool:
        return self.store.apply(lambda t: tree_ops.delete_subtask(t, subtask_id))

    def move_subtask(self, task_id: str, subtask_id: str, delta: int) -> bool:
        return self.store.apply(lambda t: tree_ops.move_subtask(t, task_id, subtask_id, delta))

    # ===== AI ПОДСКАЗКИ =====

    async def generate_subtasks(self, category_id: str, task_id: str) -> int:
        """
        Запросить подзадачи у AI и добавить их к задаче

        Хранилище не блокируется на время запроса: результат применяется к
        дереву, актуальному на момент ответа. Ошибки запроса дают 0 новых подзадач.
        """
        found = tree_ops.find_task(self.store.tree, task_id)
        if self.ai_service is None or found is None or found[0].id != category_id:
            return 0

        category, task = found
        suggestions = await self.ai_service.suggest_subtasks(task.name, category.name)
        if not suggestions:
            logger.info(f"🤖 Подсказки для задачи {task_id} не получены")
            return 0

        new_subtasks = [Subtask.create(name, prefix="ai") for name in suggestions if is_valid_name(name)]
        if not self.store.apply(lambda t: tree_ops.append_subtasks(t, task_id, new_subtasks)):
            logger.warning(f"⚠️ Задача {task_id} удалена до получения подсказок")
            return 0

        logger.info(f"✅ Добавлено {len(new_subtasks)} подзадач к задаче {task_id}")
        return len(new_subtasks)

# ===== ГЛОБАЛЬНЫЙ ЭКЗЕМПЛЯР =====

_global_task_service = None

def get_task_service() -> TaskService:
    """Получить глобальный экземпляр TaskService"""
    if _global_task_service is None:
        raise RuntimeError("TaskService не инициализирован")
    return _global_task_service

def initialize_task_service(store: TreeStore, ai_service: Optional[AIService] = None,
                            today_provider: Optional[Callable[[], str]] = None) -> TaskService:
    """Инициализация глобального TaskService"""
    global _global_task_service
    _global_task_service = TaskService(store, ai_service, today_provider)
    return _global_task_service

def reset_task_service(task_service: Optional[TaskService] = None):
    """Сброс глобального TaskService (только указанного, если он передан)"""
    global _global_task_service
    if task_service is None or _global_task_service is task_service:
        _global_task_service = None
