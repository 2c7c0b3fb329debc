from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.core.exports import csv_response
from app.modules.leaderboard.schemas import LeaderboardEntryResponse, ScoreAdjustment
from app.modules.leaderboard.service import LeaderboardService
from app.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["leaderboard"])


def get_leaderboard_service(supabase: Client = Depends(get_service_supabase)) -> LeaderboardService:
    return LeaderboardService(supabase)


@router.get("/workshops/{workshop_id}/leaderboard", response_model=List[LeaderboardEntryResponse])
def get_leaderboard(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: LeaderboardService = Depends(get_leaderboard_service)
):
    return service.get_leaderboard(workshop_id)


@router.post("/workshops/{workshop_id}/leaderboard/refresh", response_model=List[LeaderboardEntryResponse])
def refresh_leaderboard(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: LeaderboardService = Depends(get_leaderboard_service)
):
    """Recalculate stored ranks from current scores"""
    return service.refresh_ranks(workshop_id)


@router.get("/workshops/{workshop_id}/leaderboard/export")
def export_leaderboard(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: LeaderboardService = Depends(get_leaderboard_service)
):
    return csv_response(service.export_csv(workshop_id), "workshop-leaderboard.csv")


@router.post("/leaderboard/{entry_id}/adjust", response_model=LeaderboardEntryResponse)
def adjust_points(
    entry_id: str,
    adjustment: ScoreAdjustment,
    user_data: Dict = Depends(require_admin),
    service: LeaderboardService = Depends(get_leaderboard_service)
):
    """Add or remove points; ranks stay as they are until the next refresh"""
    return service.adjust_score(entry_id, adjustment.delta)
