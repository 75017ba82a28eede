#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TaskFlow Today - командная строка

Категории, задачи и подзадачи с фокусом на сегодня:
    python main.py today
    python main.py move-today sub-2 up
    python main.py schedule sub-5 2025-01-20
    python main.py serve
"""

import argparse
import asyncio
import logging
import sys
from typing import Callable, Dict, List, Optional

from config import AppConfig, load_config
from core.models import ValidationError
from core.ordering import DOWN, UP
from services import ServiceManager
from services.storage import StorageError
from services.task_service import TaskService
from ui import messages
from utils.logger import setup_logging
from utils.validators import is_valid_date

logger = logging.getLogger(__name__)

def date_arg(value: str) -> str:
    """Тип argparse для дат YYYY-MM-DD"""
    if not is_valid_date(value):
        raise argparse.ArgumentTypeError(f"неверная дата '{value}', ожидается YYYY-MM-DD")
    return value

# ===== КОМАНДЫ =====

def cmd_today(service: TaskService, args) -> str:
    items = service.today_view()
    return messages.today_message(items, service.today(), service.view_progress(items))

def cmd_daily(service: TaskService, args) -> str:
    items = service.daily_view()
    return messages.daily_message(items, service.today(), service.view_progress(items))

def cmd_unassigned(service: TaskService, args) -> str:
    return messages.unassigned_message(service.unassigned_view(), service.today())

def cmd_tree(service: TaskService, args) -> str:
    return messages.tree_message(service.categories(), service.today())

def cmd_move_today(service: TaskService, args) -> str:
    return messages.change_message(service.move_today(args.subtask_id, args.direction))

def cmd_move_daily(service: TaskService, args) -> str:
    return messages.change_message(service.move_daily(args.subtask_id, args.direction))

def cmd_toggle(service: TaskService, args) -> str:
    return messages.change_message(service.toggle_subtask(args.subtask_id))

def cmd_schedule(service: TaskService, args) -> str:
    return messages.change_message(service.set_due_date(args.subtask_id, args.date))

def cmd_daily_toggle(service: TaskService, args) -> str:
    return messages.change_message(service.toggle_daily(args.subtask_id))

def cmd_add_category(service: TaskService, args) -> str:
    category = service.add_category(args.name)
    return messages.created_message(category.id if category else None)

def cmd_add_task(service: TaskService, args) -> str:
    return messages.created_message(service.add_task(args.category_id, args.name))

def cmd_add_subtask(service: TaskService, args) -> str:
    return messages.created_message(service.add_subtask(args.task_id, args.name))

def cmd_suggest(service: TaskService, args) -> str:
    added = asyncio.run(service.generate_subtasks(args.category_id, args.task_id))
    return messages.suggestions_message(added)

COMMANDS: Dict[str, Callable[[TaskService, argparse.Namespace], str]] = {
    'today': cmd_today,
    'daily': cmd_daily,
    'unassigned': cmd_unassigned,
    'tree': cmd_tree,
    'move-today': cmd_move_today,
    'move-daily': cmd_move_daily,
    'toggle': cmd_toggle,
    'schedule': cmd_schedule,
    'habit': cmd_daily_toggle,
    'add-category': cmd_add_category,
    'add-task': cmd_add_task,
    'add-subtask': cmd_add_subtask,
    'suggest': cmd_suggest,
}

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='taskflow', description='TaskFlow Today - фокус на сегодня')
    parser.add_argument('--today', type=date_arg, default=None,
                        help='Дата "сегодня" (YYYY-MM-DD) вместо часов')
    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('today', help='Подзадачи на сегодня')
    sub.add_parser('daily', help='Ежедневные привычки')
    sub.add_parser('unassigned', help='Подзадачи без даты')
    sub.add_parser('tree', help='Все категории, задачи и подзадачи')

    for name, help_text in (('move-today', 'Сдвинуть в списке "сегодня"'),
                            ('move-daily', 'Сдвинуть в списке привычек')):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('subtask_id')
        p.add_argument('direction', choices=[UP, DOWN])

    p = sub.add_parser('toggle', help='Отметить выполнение')
    p.add_argument('subtask_id')

    p = sub.add_parser('schedule', help='Назначить дату; без даты - снять')
    p.add_argument('subtask_id')
    p.add_argument('date', nargs='?', type=date_arg, default=None)

    p = sub.add_parser('habit', help='Включить/выключить ежедневную привычку')
    p.add_argument('subtask_id')

    p = sub.add_parser('add-category', help='Новая категория')
    p.add_argument('name')

    p = sub.add_parser('add-task', help='Новая задача в категории')
    p.add_argument('category_id')
    p.add_argument('name')

    p = sub.add_parser('add-subtask', help='Новая подзадача')
    p.add_argument('task_id')
    p.add_argument('name')

    p = sub.add_parser('suggest', help='AI подсказки подзадач')
    p.add_argument('category_id')
    p.add_argument('task_id')

    sub.add_parser('serve', help='Запустить HTTP API')
    return parser

def main(argv: Optional[List[str]] = None, app_config: Optional[AppConfig] = None) -> int:
    args = build_parser().parse_args(argv)
    app_config = app_config or load_config()
    setup_logging(app_config)

    if args.command == 'serve':
        from dashboard.app import run_dashboard
        run_dashboard(app_config)
        return 0

    today_provider = (lambda: args.today) if args.today else None
    try:
        with ServiceManager(app_config) as manager:
            service = manager.initialize_services(today_provider)
            output = COMMANDS[args.command](service, args)
    except ValidationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2
    except StorageError as e:
        logger.error(f"❌ Ошибка хранилища: {e}")
        return 1

    print(output)
    return 0

if __name__ == "__main__":
    sys.exit(main())
