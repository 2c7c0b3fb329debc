from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.announcements.schemas import AnnouncementCreate, AnnouncementResponse
from app.modules.announcements.service import AnnouncementService
from app.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/workshops/{workshop_id}/announcements", tags=["announcements"])


def get_announcement_service(supabase: Client = Depends(get_service_supabase)) -> AnnouncementService:
    return AnnouncementService(supabase)


@router.get("", response_model=List[AnnouncementResponse])
def list_announcements(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: AnnouncementService = Depends(get_announcement_service)
):
    return service.list_announcements(workshop_id)


@router.post("", response_model=AnnouncementResponse, status_code=201)
def send_announcement(
    workshop_id: str,
    announcement_data: AnnouncementCreate,
    user_data: Dict = Depends(require_admin),
    service: AnnouncementService = Depends(get_announcement_service)
):
    """Broadcast a message to everyone in the workshop"""
    return service.create_announcement(workshop_id, announcement_data, created_by=user_data["id"])
