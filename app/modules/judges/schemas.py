from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class JudgeAssign(BaseModel):
    user_id: str


class UserLookupResponse(BaseModel):
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None


class JudgeResponse(BaseModel):
    id: str
    workshop_id: str
    user_id: str
    assigned_at: Optional[datetime] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
