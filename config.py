#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TaskFlow Today - Configuration
Централизованная конфигурация с валидацией

Версия: 1.0.0
"""

import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class StorageConfig:
    """Конфигурация локального хранилища"""
    data_dir: Path
    backup_dir: Path
    storage_key: str = "taskflow_data"

    @property
    def path(self) -> Path:
        """Файл с сохраненным деревом"""
        return self.data_dir / f"{self.storage_key}.json"

@dataclass
class AIConfig:
    """Конфигурация AI сервиса подсказок"""
    openai_api_key: Optional[str]
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 500
    request_timeout: int = 30
    max_suggestions: int = 5

    @property
    def enabled(self) -> bool:
        return bool(self.openai_api_key)

@dataclass
class ServerConfig:
    """Конфигурация HTTP сервера"""
    host: str = "127.0.0.1"
    port: int = 8080
    debug_mode: bool = False

class AppConfig:
    """Главный класс конфигурации"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        # Директории
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.backup_dir = Path(os.getenv('BACKUP_DIR', 'backups'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        # Хранилище
        self.storage = StorageConfig(
            data_dir=self.data_dir,
            backup_dir=self.backup_dir,
            storage_key=os.getenv('STORAGE_KEY', 'taskflow_data')
        )

        # AI конфигурация
        self.ai = AIConfig(
            openai_api_key=os.getenv('OPENAI_API_KEY') or None,
            openai_model=os.getenv('OPENAI_MODEL', 'gpt-4o-mini'),
            openai_max_tokens=int(os.getenv('OPENAI_MAX_TOKENS', 500)),
            request_timeout=int(os.getenv('AI_TIMEOUT', 30)),
            max_suggestions=int(os.getenv('AI_MAX_SUGGESTIONS', 5))
        )

        # Сервер
        self.server = ServerConfig(
            host=os.getenv('HOST', '127.0.0.1'),
            port=int(os.getenv('PORT', 8080)),
            debug_mode=os.getenv('DEBUG_MODE', 'false').lower() == 'true'
        )

        # Часовой пояс, в котором считается "сегодня"
        self.timezone = os.getenv('TIMEZONE', 'UTC')

        # Логирование
        self.log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
        self.log_to_file = os.getenv('LOG_TO_FILE', 'false').lower() == 'true'
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if not 1024 <= self.server.port <= 65535:
            errors.append(f"Порт {self.server.port} вне допустимого диапазона (1024-65535)")

        if self.timezone not in pytz.all_timezones_set:
            errors.append(f"Неизвестный часовой пояс: {self.timezone}")

        if self.ai.max_suggestions <= 0:
            errors.append("AI_MAX_SUGGESTIONS должен быть положительным числом")

        if not self.storage.storage_key.strip():
            errors.append("STORAGE_KEY не может быть пустым")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [self.data_dir, self.backup_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        logging_config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'httpx': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'openai': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'uvicorn.access': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            logging_config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"taskflow_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return logging_config

    def is_development(self) -> bool:
        """Проверка режима разработки"""
        return self.environment == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        """Проверка продакшн режима"""
        return self.environment == Environment.PRODUCTION

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'environment': self.environment.value,
            'server': {
                'host': self.server.host,
                'port': self.server.port,
                'debug_mode': self.server.debug_mode
            },
            'storage_path': str(self.storage.path),
            'timezone': self.timezone,
            'ai_enabled': self.ai.enabled,
            'ai_model': self.ai.openai_model,
            'log_level': self.log_level.value
        }

def load_config() -> AppConfig:
    """Свежее чтение конфигурации из окружения"""
    return AppConfig()

# Глобальный экземпляр конфигурации
config = AppConfig()

__all__ = [
    'config',
    'load_config',
    'AppConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'AIConfig',
    'ServerConfig'
]
