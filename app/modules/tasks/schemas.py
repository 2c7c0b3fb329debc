from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from app.config import settings


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    points: int = Field(default_factory=lambda: settings.default_task_points)
    timer_minutes: Optional[int] = Field(default_factory=lambda: settings.default_task_timer_minutes, ge=1)
    task_order: int = Field(default=1, ge=1)

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Title is required")
        return v.strip()


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    points: Optional[int] = None
    timer_minutes: Optional[int] = Field(default=None, ge=1)
    task_order: Optional[int] = Field(default=None, ge=1)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Title is required")
        return v.strip() if v else v


class TaskResponse(BaseModel):
    id: str
    workshop_id: str
    title: str
    description: Optional[str] = None
    points: int = 0
    timer_minutes: Optional[int] = None
    task_order: int
    is_active: bool = False
    is_ended: bool = False
    start_time: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @field_validator("is_active", "is_ended", mode="before")
    @classmethod
    def null_is_false(cls, v):
        return bool(v)

    @field_validator("points", mode="before")
    @classmethod
    def null_points(cls, v):
        return v or 0

    class Config:
        from_attributes = True


class TaskEndResponse(BaseModel):
    ended: TaskResponse
    next_task: Optional[TaskResponse] = None
    already_ended: bool = False
    halted_reason: Optional[str] = None  # why next_task is None when the sequence stopped
