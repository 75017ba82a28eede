# services/__init__.py

"""
Модуль сервисов TaskFlow Today

Этот модуль связывает хранилище, дерево, AI подсказки и сервис задач.
"""

import logging
from typing import Callable, Optional

from config import AppConfig, config as default_config
from core.store import TreeStore
from utils.datetime_utils import today_str

from .ai_service import AIService
from .storage import JsonFileStorage, StorageError, StorageCorruptionError
from .task_service import TaskService, get_task_service, initialize_task_service, reset_task_service

logger = logging.getLogger(__name__)

class ServiceManager:
    """
    Менеджер для управления всеми сервисами

    Обеспечивает:
    - Правильную инициализацию сервисов в нужном порядке
    - Управление зависимостями между сервисами
    - Корректное закрытие всех сервисов
    """

    def __init__(self, app_config: Optional[AppConfig] = None):
        self.config = app_config or default_config
        self.storage: Optional[JsonFileStorage] = None
        self.store: Optional[TreeStore] = None
        self.ai_service: Optional[AIService] = None
        self.task_service: Optional[TaskService] = None
        self.initialized = False

    def initialize_services(self, today_provider: Optional[Callable[[], str]] = None,
                            ai_client=None) -> TaskService:
        """Инициализация всех сервисов"""
        logger.info("🔧 Инициализация сервисов TaskFlow...")
        self.config.ensure_directories()

        # 1. Хранилище и дерево
        self.storage = JsonFileStorage(
            self.config.storage.path,
            storage_key=self.config.storage.storage_key,
            backup_dir=self.config.storage.backup_dir
        )
        self.store = TreeStore(self.storage.load, self.storage.save)

        # 2. AI подсказки (необязательны)
        self.ai_service = AIService(self.config.ai, client=ai_client)

        # 3. Сервис задач
        today_provider = today_provider or (lambda: today_str(self.config.timezone))
        self.task_service = initialize_task_service(self.store, self.ai_service, today_provider)

        self.initialized = True
        logger.info("✅ Все сервисы инициализированы успешно!")
        return self.task_service

    def health_check(self) -> dict:
        """Проверка состояния всех сервисов"""
        return {
            "status": "healthy" if self.initialized else "error",
            "services": {
                "storage": {
                    "status": "active" if self.storage else "missing",
                    "path": str(self.storage.path) if self.storage else None,
                    "version": self.store.version if self.store else None
                },
                "ai_service": {
                    "status": "active" if self.ai_service and self.ai_service.enabled else "disabled"
                }
            }
        }

    def close_services(self):
        """Закрытие всех сервисов"""
        logger.info("🛑 Закрытие сервисов...")
        if self.task_service is not None:
            reset_task_service(self.task_service)
        self.task_service = None
        self.ai_service = None
        self.store = None
        self.storage = None
        self.initialized = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close_services()

# Глобальный экземпляр менеджера сервисов
_service_manager = None

def get_service_manager(app_config: Optional[AppConfig] = None) -> ServiceManager:
    """Получить глобальный менеджер сервисов"""
    global _service_manager
    if _service_manager is None:
        _service_manager = ServiceManager(app_config)
    return _service_manager

def initialize_all_services(app_config: Optional[AppConfig] = None,
                            today_provider: Optional[Callable[[], str]] = None) -> TaskService:
    """Инициализация всех сервисов"""
    return get_service_manager(app_config).initialize_services(today_provider)

def close_all_services():
    """Закрытие всех сервисов"""
    global _service_manager
    if _service_manager:
        _service_manager.close_services()
        _service_manager = None

__all__ = [
    'AIService',
    'JsonFileStorage',
    'StorageError',
    'StorageCorruptionError',
    'TaskService',
    'ServiceManager',
    'get_task_service',
    'get_service_manager',
    'initialize_all_services',
    'close_all_services'
]
