# services/storage.py

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from core.models import Tree, ValidationError, tree_from_list, tree_to_list
from core.seed import default_tree

logger = logging.getLogger(__name__)

# ===== EXCEPTIONS =====

class StorageError(Exception):
    """Базовое исключение для ошибок хранилища"""
    pass

class StorageCorruptionError(StorageError):
    """Сохраненные данные не читаются"""
    pass

class JsonFileStorage:
    """
    Локальное хранилище дерева в JSON файле

    Все дерево лежит под одним фиксированным ключом. Файл читается
    один раз при старте и перезаписывается целиком после каждого изменения.
    Поврежденный файл считается отсутствующим: он переносится в папку
    бэкапов, а вместо него используется дерево по умолчанию.
    """

    def __init__(self, path: Path, storage_key: str = "taskflow_data",
                 backup_dir: Optional[Path] = None,
                 seed: Callable[[], Tree] = default_tree):
        self.path = Path(path)
        self.storage_key = storage_key
        self.backup_dir = Path(backup_dir) if backup_dir else self.path.parent / "backups"
        self.seed = seed

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Tree:
        """Загрузка дерева; при отсутствии или повреждении - дерево по умолчанию"""
        if not self.path.exists():
            logger.info("📂 Файл данных не найден, начинаем с дерева по умолчанию")
            return self.seed()

        try:
            tree = self._read()
        except StorageCorruptionError as e:
            logger.warning(f"⚠️ Данные повреждены ({e}), используем дерево по умолчанию")
            self._move_corrupted()
            return self.seed()

        logger.info(f"📂 Загружено {len(tree)} категорий из {self.path}")
        return tree

    def _read(self) -> Tree:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageCorruptionError(f"Ошибка парсинга JSON: {e}")
        except OSError as e:
            raise StorageError(f"Не удалось прочитать {self.path}: {e}")

        if not isinstance(data, dict) or self.storage_key not in data:
            raise StorageCorruptionError(f"Нет ключа {self.storage_key}")

        try:
            return tree_from_list(data[self.storage_key])
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise StorageCorruptionError(f"Неверная запись: {e}")

    def _move_corrupted(self):
        """Перенос поврежденного файла в бэкапы"""
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            backup_name = f"corrupted_backup_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
            backup_path = self.backup_dir / backup_name
            self.path.replace(backup_path)
            logger.warning(f"🔄 Поврежденный файл перемещен в {backup_path}")
        except OSError as e:
            logger.error(f"❌ Ошибка создания бэкапа: {e}")

    def save(self, tree: Tree):
        """Атомарное сохранение через временный файл"""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_file = self.path.with_suffix('.tmp')
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump({self.storage_key: tree_to_list(tree)}, f, ensure_ascii=False, indent=2)
            temp_file.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"❌ Ошибка сохранения данных: {e}")
            raise StorageError(f"Не удалось сохранить {self.path}: {e}") from e

        logger.debug(f"💾 Дерево сохранено ({len(tree)} категорий)")
