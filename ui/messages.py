from core.completion import category_progress, is_done_for_today, is_task_done, task_progress
from utils.datetime_utils import format_date
from utils.text_utils import truncate
from ui.progress import progress_bar, tasks_progress_bar

def _item_line(idx, item, today):
    status = "✅" if is_done_for_today(item.subtask, today) else "⬜️"
    return (
        f"{idx}. {status} {truncate(item.subtask.name)} "
        f"[{item.category.name} / {truncate(item.task.name, 32)}] ({item.subtask.id})"
    )

def _items_block(items, today):
    lines = []
    separator_shown = False
    for idx, item in enumerate(items, 1):
        if not separator_shown and is_done_for_today(item.subtask, today):
            lines.append("── Выполнено ──")
            separator_shown = True
        lines.append(_item_line(idx, item, today))
    return lines

def today_message(items, today, progress):
    header = f"Фокус на сегодня ({format_date(today)})\n" + tasks_progress_bar(progress)
    if not items:
        return header + "\nНа сегодня ничего не запланировано. Назначьте даты подзадачам."
    if progress.all_done:
        header += "\n✨ Все сделано!"
    return header + "\n" + "\n".join(_items_block(items, today))

def daily_message(items, today, progress):
    header = "Ежедневные привычки\n" + tasks_progress_bar(progress)
    if not items:
        return header + "\nПривычек пока нет. Отметьте подзадачу как ежедневную."
    return header + "\n" + "\n".join(_items_block(items, today))

def unassigned_message(items, today):
    if not items:
        return "Неразобранное\nВсе подзадачи распределены по датам."
    return "Неразобранное\n" + "\n".join(_items_block(items, today))

def tree_message(tree, today):
    if not tree:
        return "У вас пока нет проектов. Создайте первый!"
    lines = []
    for category in tree:
        lines.append(f"📁 {category.name} ({category.id}) " + progress_bar(category_progress(category).percent))
        for task in category.tasks:
            status = "✅" if is_task_done(task, today) else "⬜️"
            progress = task_progress(task, today)
            lines.append(f"  {status} {task.name} ({task.id}) {progress.done}/{progress.total}")
            for subtask in task.subtasks:
                mark = "✔" if is_done_for_today(subtask, today) else "·"
                extra = " 🔁" if subtask.is_daily else (f" 📅 {subtask.due_date}" if subtask.due_date else "")
                lines.append(f"      {mark} {subtask.name} ({subtask.id}){extra}")
    return "\n".join(lines)

def suggestions_message(count):
    if count == 0:
        return "🤖 Подсказки не получены."
    return f"🤖 Добавлено подзадач: {count}"

def change_message(changed):
    return "✅ Готово" if changed else "ℹ️ Ничего не изменилось"

def created_message(item_id):
    if item_id is None:
        return "⚠️ Не создано: проверьте имя и идентификатор родителя"
    return f"✅ Создано: {item_id}"
