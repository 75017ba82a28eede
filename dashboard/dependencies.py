"""
Зависимости FastAPI приложения
"""

import logging

from fastapi import HTTPException, Request, status

from services.task_service import TaskService

logger = logging.getLogger(__name__)

def get_task_service(request: Request) -> TaskService:
    """Сервис задач, привязанный к приложению"""
    task_service = getattr(request.app.state, "task_service", None)
    if task_service is None:
        logger.error("❌ TaskService не инициализирован")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Сервис задач не инициализирован"
        )
    return task_service
