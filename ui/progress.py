# ui/progress.py

def progress_bar(percent: int, length: int = 12):
    """Генерирует текстовый progress bar (emoji/блоки)"""
    done = int(length * percent // 100)
    todo = length - done
    return "🟩" * done + "⬜️" * todo + f" {percent}%"

def tasks_progress_bar(progress):
    return f"{progress.done}/{progress.total} " + progress_bar(progress.percent)
