from pydantic import BaseModel, Field, field_validator
from typing import Optional, List


class LeaderboardEntryResponse(BaseModel):
    id: str
    workshop_id: str
    group_id: str
    total_score: int = 0
    tasks_completed: int = 0
    rank: Optional[int] = None
    group_name: Optional[str] = None
    group_code: Optional[str] = None
    members: List[str] = Field(default_factory=list)

    @field_validator("total_score", "tasks_completed", mode="before")
    @classmethod
    def null_is_zero(cls, v):
        return v or 0

    class Config:
        from_attributes = True


class ScoreAdjustment(BaseModel):
    delta: int
