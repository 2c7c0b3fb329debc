from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class AnnouncementCreate(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def message_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Message cannot be empty")
        return v.strip()


class AnnouncementResponse(BaseModel):
    id: str
    workshop_id: str
    message: str
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None

    class Config:
        from_attributes = True
