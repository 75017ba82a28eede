from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from core.models import tree_to_list
from services.task_service import TaskService

from ..dependencies import get_task_service
from ..schemas import (
    ChangeResponse, CreatedResponse, DeltaRequest, DescriptionRequest, DirectionRequest,
    DueDateRequest, NameRequest, ProgressOut, ScheduledItemOut, SuggestResponse, ViewResponse
)

router = APIRouter(prefix="/api", tags=["tasks"])

def _view(service: TaskService, items, with_progress: bool = True) -> ViewResponse:
    today = service.today()
    return ViewResponse(
        today=today,
        items=[ScheduledItemOut.from_item(item, today) for item in items],
        progress=ProgressOut.from_progress(service.view_progress(items)) if with_progress else None
    )

# ===== ПРЕДСТАВЛЕНИЯ =====

@router.get("/today", response_model=ViewResponse)
async def get_today(service: TaskService = Depends(get_task_service)):
    """Подзадачи на сегодня в ручном порядке"""
    return _view(service, service.today_view())

@router.get("/daily", response_model=ViewResponse)
async def get_daily(service: TaskService = Depends(get_task_service)):
    """Ежедневные привычки"""
    return _view(service, service.daily_view())

@router.get("/unassigned", response_model=ViewResponse)
async def get_unassigned(service: TaskService = Depends(get_task_service)):
    """Подзадачи без даты"""
    return _view(service, service.unassigned_view(), with_progress=False)

@router.get("/tree", response_model=List[Dict[str, Any]])
async def get_tree(service: TaskService = Depends(get_task_service)):
    """Все дерево категорий в формате хранилища"""
    return tree_to_list(service.categories())

# ===== ПОРЯДОК =====

@router.post("/today/{subtask_id}/move", response_model=ChangeResponse)
async def move_today(subtask_id: str, body: DirectionRequest,
                     service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.move_today(subtask_id, body.direction))

@router.post("/daily/{subtask_id}/move", response_model=ChangeResponse)
async def move_daily(subtask_id: str, body: DirectionRequest,
                     service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.move_daily(subtask_id, body.direction))

# ===== КАТЕГОРИИ =====

@router.post("/categories", response_model=CreatedResponse)
async def create_category(body: NameRequest, service: TaskService = Depends(get_task_service)):
    category = service.add_category(body.name)
    return CreatedResponse(created=category is not None, id=category.id if category else None)

@router.patch("/categories/{category_id}", response_model=ChangeResponse)
async def rename_category(category_id: str, body: NameRequest,
                          service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.rename_category(category_id, body.name))

@router.delete("/categories/{category_id}", response_model=ChangeResponse)
async def delete_category(category_id: str, service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.delete_category(category_id))

@router.post("/categories/{category_id}/move", response_model=ChangeResponse)
async def move_category(category_id: str, body: DirectionRequest,
                        service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.move_category(category_id, body.direction))

# ===== ЗАДАЧИ =====

@router.post("/categories/{category_id}/tasks", response_model=CreatedResponse)
async def create_task(category_id: str, body: NameRequest,
                      service: TaskService = Depends(get_task_service)):
    task_id = service.add_task(category_id, body.name)
    return CreatedResponse(created=task_id is not None, id=task_id)

@router.post("/categories/{category_id}/tasks/{task_id}/move", response_model=ChangeResponse)
async def move_task(category_id: str, task_id: str, body: DeltaRequest,
                    service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.move_task(category_id, task_id, body.delta))

@router.post("/categories/{category_id}/tasks/{task_id}/suggest", response_model=SuggestResponse)
async def suggest_subtasks(category_id: str, task_id: str,
                           service: TaskService = Depends(get_task_service)):
    """AI подсказки подзадач; при ошибке добавляется 0"""
    return SuggestResponse(added=await service.generate_subtasks(category_id, task_id))

@router.patch("/tasks/{task_id}", response_model=ChangeResponse)
async def rename_task(task_id: str, body: NameRequest, service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.rename_task(task_id, body.name))

@router.put("/tasks/{task_id}/description", response_model=ChangeResponse)
async def set_task_description(task_id: str, body: DescriptionRequest,
                               service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.set_task_description(task_id, body.description))

@router.post("/tasks/{task_id}/toggle", response_model=ChangeResponse)
async def toggle_task(task_id: str, service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.toggle_task(task_id))

@router.delete("/tasks/{task_id}", response_model=ChangeResponse)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.delete_task(task_id))

# ===== ПОДЗАДАЧИ =====

@router.post("/tasks/{task_id}/subtasks", response_model=CreatedResponse)
async def create_subtask(task_id: str, body: NameRequest, service: TaskService = Depends(get_task_service)):
    subtask_id = service.add_subtask(task_id, body.name)
    return CreatedResponse(created=subtask_id is not None, id=subtask_id)

@router.post("/tasks/{task_id}/subtasks/{subtask_id}/move", response_model=ChangeResponse)
async def move_subtask(task_id: str, subtask_id: str, body: DeltaRequest,
                       service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.move_subtask(task_id, subtask_id, body.delta))

@router.patch("/subtasks/{subtask_id}", response_model=ChangeResponse)
async def rename_subtask(subtask_id: str, body: NameRequest,
                         service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.rename_subtask(subtask_id, body.name))

@router.delete("/subtasks/{subtask_id}", response_model=ChangeResponse)
async def delete_subtask(subtask_id: str, service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.delete_subtask(subtask_id))

@router.post("/subtasks/{subtask_id}/toggle", response_model=ChangeResponse)
async def toggle_subtask(subtask_id: str, service: TaskService = Depends(get_task_service)):
    """Отметка выполнения (для привычек - только на сегодня)"""
    return ChangeResponse(changed=service.toggle_subtask(subtask_id))

@router.put("/subtasks/{subtask_id}/due-date", response_model=ChangeResponse)
async def set_due_date(subtask_id: str, body: DueDateRequest,
                       service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.set_due_date(subtask_id, body.due_date))

@router.post("/subtasks/{subtask_id}/daily", response_model=ChangeResponse)
async def toggle_daily(subtask_id: str, service: TaskService = Depends(get_task_service)):
    return ChangeResponse(changed=service.toggle_daily(subtask_id))
