"""
TaskFlow Today - HTTP API на FastAPI

Тонкий слой поверх TaskService: представления "сегодня", привычек и
неразобранного, плюс все действия пользователя.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import AppConfig, config as default_config
from core.models import ValidationError
from services import close_all_services, get_service_manager, initialize_all_services
from services.storage import StorageError
from services.task_service import TaskService

from .api import tasks
from .schemas import HealthCheck

logger = logging.getLogger(__name__)

def create_app(task_service: Optional[TaskService] = None,
               app_config: Optional[AppConfig] = None) -> FastAPI:
    """Фабрика приложения; без task_service сервисы поднимаются при старте"""
    app_config = app_config or default_config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_services = app.state.task_service is None
        if owns_services:
            app.state.task_service = initialize_all_services(app_config)
            app.state.service_manager = get_service_manager()
        logger.info("✅ TaskFlow API готов к работе")

        yield

        logger.info("🛑 Остановка TaskFlow API...")
        if owns_services:
            close_all_services()
            app.state.task_service = None
            app.state.service_manager = None

    app = FastAPI(
        title="TaskFlow Today",
        description="Категории, задачи и подзадачи с фокусом на сегодня",
        version="1.0.0",
        docs_url="/api/docs" if app_config.server.debug_mode or app_config.is_development() else None,
        redoc_url=None,
        lifespan=lifespan
    )
    app.state.task_service = task_service
    app.state.service_manager = None
    app.state.start_time = time.time()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.debug(f"{request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s")
        return response

    # ===== ОБРАБОТЧИКИ ОШИБОК =====

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"❌ Ошибка хранилища: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Ошибка сохранения данных"})

    # ===== МАРШРУТЫ =====

    app.include_router(tasks.router)

    @app.get("/health", response_model=HealthCheck)
    async def health_check():
        """Health check для мониторинга"""
        service = app.state.task_service
        if service is None:
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "service": "taskflow", "timestamp": time.time()}
            )
        data = {
            "today": service.today(),
            "categories": len(service.categories()),
            "version": service.store.version,
            "uptime_seconds": time.time() - app.state.start_time
        }
        if app.state.service_manager is not None:
            data["services"] = app.state.service_manager.health_check()["services"]
        return HealthCheck(status="healthy", timestamp=time.time(), data=data)

    return app

def run_dashboard(app_config: Optional[AppConfig] = None):
    """Запуск HTTP API через uvicorn"""
    app_config = app_config or default_config
    host = app_config.server.host
    port = app_config.server.port

    logger.info(f"🌐 Запуск TaskFlow API на http://{host}:{port}")
    try:
        uvicorn.run(
            create_app(app_config=app_config),
            host=host,
            port=port,
            log_level="debug" if app_config.server.debug_mode else "info",
            log_config=None,
            server_header=False
        )
    except KeyboardInterrupt:
        logger.info("👋 TaskFlow API остановлен")
