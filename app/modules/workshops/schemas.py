from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime

from app.modules.workshops.lifecycle import normalize_status


class WorkshopCreate(BaseModel):
    title: str
    description: Optional[str] = None
    duration: Optional[str] = None
    banner_url: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Title is required")
        return v.strip()


class WorkshopUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[str] = None
    banner_url: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Title is required")
        return v.strip() if v else v


class WorkshopResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    duration: Optional[str] = None
    banner_url: Optional[str] = None
    status: str = "draft"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Optional[str]) -> str:
        return normalize_status(v)

    class Config:
        from_attributes = True


class WorkshopStats(BaseModel):
    participants: int = 0
    groups: int = 0
    tasks: int = 0


class WorkshopWithStatsResponse(WorkshopResponse):
    stats: WorkshopStats


class WorkshopOverview(BaseModel):
    workshop_id: str
    status: str
    total_participants: int = 0
    total_groups: int = 0
    total_tasks: int = 0
    active_tasks: int = 0
    completed_submissions: int = 0
