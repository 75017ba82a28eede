"""
Модели запросов и ответов HTTP API TaskFlow Today
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from core.completion import Progress, is_done_for_today
from core.schedule import ScheduledItem
from utils.validators import MAX_NAME_LENGTH, is_valid_date

# ===== ЗАПРОСЫ =====

class NameRequest(BaseModel):
    name: str = Field(..., max_length=MAX_NAME_LENGTH)

class DescriptionRequest(BaseModel):
    description: Optional[str] = Field(None, max_length=1000)

class DirectionRequest(BaseModel):
    direction: Literal["up", "down"]

class DeltaRequest(BaseModel):
    delta: int

class DueDateRequest(BaseModel):
    due_date: Optional[str] = Field(..., alias="dueDate")

    model_config = {"populate_by_name": True}

    @field_validator('due_date')
    @classmethod
    def validate_due_date(cls, v):
        if v is None or v.strip() == "":
            return None
        if not is_valid_date(v.strip()):
            raise ValueError('Дата должна быть в формате YYYY-MM-DD')
        return v.strip()

# ===== ОТВЕТЫ =====

class ChangeResponse(BaseModel):
    changed: bool

class CreatedResponse(BaseModel):
    created: bool
    id: Optional[str] = None

class SuggestResponse(BaseModel):
    added: int

class ProgressOut(BaseModel):
    done: int
    total: int
    percent: int

    @classmethod
    def from_progress(cls, progress: Progress) -> "ProgressOut":
        return cls(done=progress.done, total=progress.total, percent=progress.percent)

class ScheduledItemOut(BaseModel):
    category_id: str
    category_name: str
    task_id: str
    task_name: str
    done: bool
    subtask: Dict[str, Any]

    @classmethod
    def from_item(cls, item: ScheduledItem, today: str) -> "ScheduledItemOut":
        return cls(
            category_id=item.category.id,
            category_name=item.category.name,
            task_id=item.task.id,
            task_name=item.task.name,
            done=is_done_for_today(item.subtask, today),
            subtask=item.subtask.to_dict()
        )

class ViewResponse(BaseModel):
    today: str
    items: List[ScheduledItemOut]
    progress: Optional[ProgressOut] = None

class HealthCheck(BaseModel):
    status: str
    service: str = "taskflow"
    version: str = "1.0.0"
    timestamp: float
    data: Dict[str, Any] = {}
