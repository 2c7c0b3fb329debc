from fastapi import APIRouter, Depends
from pydantic import EmailStr
from app.database.supabase_client import get_service_supabase
from app.modules.judges.schemas import JudgeAssign, JudgeResponse, UserLookupResponse
from app.modules.judges.service import JudgeService
from app.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["judges"])


def get_judge_service(supabase: Client = Depends(get_service_supabase)) -> JudgeService:
    return JudgeService(supabase)


@router.get("/workshops/{workshop_id}/judges", response_model=List[JudgeResponse])
def list_judges(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: JudgeService = Depends(get_judge_service)
):
    return service.list_judges(workshop_id)


@router.post("/workshops/{workshop_id}/judges", response_model=JudgeResponse, status_code=201)
def assign_judge(
    workshop_id: str,
    judge_data: JudgeAssign,
    user_data: Dict = Depends(require_admin),
    service: JudgeService = Depends(get_judge_service)
):
    """Assign a user as judge; 409 if they already are one"""
    return service.assign_judge(workshop_id, judge_data)


@router.delete("/judges/{judge_id}", status_code=204)
def remove_judge(
    judge_id: str,
    user_data: Dict = Depends(require_admin),
    service: JudgeService = Depends(get_judge_service)
):
    service.remove_judge(judge_id)
    return None


@router.get("/users/lookup", response_model=UserLookupResponse)
def lookup_user(
    email: EmailStr,
    user_data: Dict = Depends(require_admin),
    service: JudgeService = Depends(get_judge_service)
):
    """Find a user by email before assigning them"""
    return service.find_user_by_email(email)
