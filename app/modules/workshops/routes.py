from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.workshops.schemas import (
    WorkshopCreate, WorkshopUpdate, WorkshopResponse, WorkshopWithStatsResponse, WorkshopOverview
)
from app.modules.workshops.service import WorkshopService
from app.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict, Union

router = APIRouter(prefix="/workshops", tags=["workshops"])


def get_workshop_service(supabase: Client = Depends(get_service_supabase)) -> WorkshopService:
    return WorkshopService(supabase)


@router.post("", response_model=WorkshopResponse, status_code=201)
def create_workshop(
    workshop_data: WorkshopCreate,
    user_data: Dict = Depends(require_admin),
    service: WorkshopService = Depends(get_workshop_service)
):
    """Create a new workshop (starts as draft)"""
    return service.create_workshop(workshop_data)


@router.get("", response_model=Union[List[WorkshopWithStatsResponse], List[WorkshopResponse]])
def list_workshops(
    with_stats: bool = False,
    limit: int = 50,
    offset: int = 0,
    user_data: Dict = Depends(require_admin),
    service: WorkshopService = Depends(get_workshop_service)
):
    """List workshops, newest first. with_stats adds participant/group/task counts."""
    if with_stats:
        return service.list_workshops_with_stats(limit=limit, offset=offset)
    return service.list_workshops(limit=limit, offset=offset)


@router.get("/{workshop_id}", response_model=WorkshopResponse)
def get_workshop(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: WorkshopService = Depends(get_workshop_service)
):
    return service.get_workshop_by_id(workshop_id)


@router.put("/{workshop_id}", response_model=WorkshopResponse)
def update_workshop(
    workshop_id: str,
    workshop_data: WorkshopUpdate,
    user_data: Dict = Depends(require_admin),
    service: WorkshopService = Depends(get_workshop_service)
):
    return service.update_workshop(workshop_id, workshop_data)


@router.delete("/{workshop_id}", status_code=204)
def delete_workshop(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: WorkshopService = Depends(get_workshop_service)
):
    service.delete_workshop(workshop_id)
    return None


@router.get("/{workshop_id}/overview", response_model=WorkshopOverview)
def get_workshop_overview(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: WorkshopService = Depends(get_workshop_service)
):
    """Status plus participant, group, task and submission counts"""
    return service.get_overview(workshop_id)


@router.post("/{workshop_id}/start", response_model=WorkshopResponse)
def start_workshop(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: WorkshopService = Depends(get_workshop_service)
):
    """Move a draft workshop to live"""
    return service.start_workshop(workshop_id)


@router.post("/{workshop_id}/end", response_model=WorkshopResponse)
def end_workshop(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: WorkshopService = Depends(get_workshop_service)
):
    """Complete a live workshop; every task is ended with it"""
    return service.end_workshop(workshop_id)
