#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TaskFlow Today - Tree Store
Каноническое дерево категорий с версией и внедренными load/save

Бизнес-логики здесь нет: хранилище только заменяет дерево целиком и
сохраняет его после каждой реальной замены.
"""

import threading
from typing import Callable
import logging

from core.models import Tree
from core.tree import ensure_tree

logger = logging.getLogger(__name__)

Loader = Callable[[], Tree]
Saver = Callable[[Tree], None]

class TreeStore:
    """Версионированный контейнер дерева"""

    def __init__(self, load: Loader, save: Saver):
        self._save = save
        self._lock = threading.RLock()
        self._tree: Tree = ensure_tree(load())
        self.version = 0

    @property
    def tree(self) -> Tree:
        return self._tree

    def replace(self, new_tree: Tree) -> bool:
        """Заменить дерево; тот же объект означает отсутствие изменений"""
        ensure_tree(new_tree)
        with self._lock:
            if new_tree is self._tree:
                return False
            # сначала запись: при ошибке сохранения дерево в памяти не меняется
            self._save(new_tree)
            self._tree = new_tree
            self.version += 1
            logger.debug(f"Дерево заменено, версия {self.version}")
            return True

    def apply(self, transform: Callable[[Tree], Tree]) -> bool:
        """Применить чистое преобразование к текущему дереву"""
        with self._lock:
            return self.replace(transform(self._tree))
