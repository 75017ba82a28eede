# core/seed.py

"""Дерево по умолчанию для первого запуска"""

from core.models import Category, Subtask, Task, Tree, Undated

def default_tree() -> Tree:
    return (
        Category(
            id='cat-1',
            name='Work Project X',
            color='blue',
            tasks=(
                Task(
                    id='task-1',
                    name='Design System Implementation',
                    subtasks=(
                        Subtask('sub-1', 'Define color palette', Undated(completed=True)),
                        Subtask('sub-2', 'Create typography scales'),
                        Subtask('sub-3', 'Build button components'),
                    )
                ),
                Task(
                    id='task-2',
                    name='API Integration',
                    subtasks=(
                        Subtask('sub-4', 'Setup Axios client', Undated(completed=True)),
                        Subtask('sub-5', 'Implement Auth hooks'),
                    )
                ),
            )
        ),
        Category(
            id='cat-2',
            name='Personal Growth',
            color='purple',
            tasks=(
                Task(
                    id='task-3',
                    name='Learning React Performance',
                    subtasks=(
                        Subtask('sub-6', 'Master useMemo and useCallback'),
                        Subtask('sub-7', 'Study React DevTools profiler'),
                    )
                ),
            )
        ),
    )
