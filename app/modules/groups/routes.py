from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.core.exports import csv_response
from app.modules.groups.schemas import (
    GroupCreate, GroupBulkCreate, GroupUpdate, GroupResponse, GroupWithMembersResponse
)
from app.modules.groups.service import GroupService
from app.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["groups"])


def get_group_service(supabase: Client = Depends(get_service_supabase)) -> GroupService:
    return GroupService(supabase)


@router.get("/workshops/{workshop_id}/groups", response_model=List[GroupWithMembersResponse])
def list_groups(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: GroupService = Depends(get_group_service)
):
    """Groups with their member counts"""
    return service.list_groups_with_member_counts(workshop_id)


@router.post("/workshops/{workshop_id}/groups", response_model=GroupResponse, status_code=201)
def create_group(
    workshop_id: str,
    group_data: GroupCreate,
    user_data: Dict = Depends(require_admin),
    service: GroupService = Depends(get_group_service)
):
    return service.create_group(workshop_id, group_data)


@router.post("/workshops/{workshop_id}/groups/bulk", response_model=List[GroupResponse], status_code=201)
def bulk_create_groups(
    workshop_id: str,
    bulk_data: GroupBulkCreate,
    user_data: Dict = Depends(require_admin),
    service: GroupService = Depends(get_group_service)
):
    """Generate N numbered teams, each with its own join code"""
    return service.bulk_create_groups(workshop_id, bulk_data)


@router.get("/workshops/{workshop_id}/groups/export")
def export_group_codes(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: GroupService = Depends(get_group_service)
):
    return csv_response(service.export_codes_csv(workshop_id), "workshop-group-codes.csv")


@router.get("/groups/{group_id}", response_model=GroupResponse)
def get_group(
    group_id: str,
    user_data: Dict = Depends(require_admin),
    service: GroupService = Depends(get_group_service)
):
    return service.get_group_by_id(group_id)


@router.put("/groups/{group_id}", response_model=GroupResponse)
def update_group(
    group_id: str,
    group_data: GroupUpdate,
    user_data: Dict = Depends(require_admin),
    service: GroupService = Depends(get_group_service)
):
    return service.update_group(group_id, group_data)


@router.delete("/groups/{group_id}", status_code=204)
def delete_group(
    group_id: str,
    user_data: Dict = Depends(require_admin),
    service: GroupService = Depends(get_group_service)
):
    service.delete_group(group_id)
    return None
