from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


def _name_required(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("Group name is required")
    return v.strip()


class GroupCreate(BaseModel):
    group_name: str

    @field_validator("group_name")
    @classmethod
    def name_required(cls, v: str) -> str:
        return _name_required(v)


class GroupBulkCreate(BaseModel):
    count: int = Field(default=5, ge=1)


class GroupUpdate(BaseModel):
    group_name: str

    @field_validator("group_name")
    @classmethod
    def name_required(cls, v: str) -> str:
        return _name_required(v)


class GroupResponse(BaseModel):
    id: str
    workshop_id: str
    group_name: str
    group_code: str
    slogan: Optional[str] = None
    logo_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GroupWithMembersResponse(GroupResponse):
    member_count: int = 0
