from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class ParticipantResponse(BaseModel):
    id: str
    user_id: str
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    mobile_number: Optional[str] = None
    group_id: Optional[str] = None
    group_name: Optional[str] = None
    group_code: Optional[str] = None
    tasks_completed: int = 0


class TeamResponse(BaseModel):
    group_code: str
    group_name: str
    members: List[ParticipantResponse] = Field(default_factory=list)
