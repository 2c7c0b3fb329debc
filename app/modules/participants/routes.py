from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.core.exports import csv_response
from app.modules.participants.schemas import ParticipantResponse, TeamResponse
from app.modules.participants.service import ParticipantService
from app.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/workshops/{workshop_id}/participants", tags=["participants"])


def get_participant_service(supabase: Client = Depends(get_service_supabase)) -> ParticipantService:
    return ParticipantService(supabase)


@router.get("", response_model=List[ParticipantResponse])
def list_participants(
    workshop_id: str,
    q: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: ParticipantService = Depends(get_participant_service)
):
    """Participants, optionally filtered by name, email or team"""
    return service.list_participants(workshop_id, q)


@router.get("/teams", response_model=List[TeamResponse])
def list_teams(
    workshop_id: str,
    q: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: ParticipantService = Depends(get_participant_service)
):
    """Same participants grouped by team"""
    return service.list_teams(workshop_id, q)


@router.get("/export")
def export_participants(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: ParticipantService = Depends(get_participant_service)
):
    return csv_response(service.export_csv(workshop_id), "workshop-participants.csv")
