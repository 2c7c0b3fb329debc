from supabase import Client
from app.core.exports import to_csv
from app.core.lookups import fetch_group_members, fetch_profiles
from app.modules.participants.filters import filter_participants, group_by_team
from app.modules.participants.schemas import ParticipantResponse, TeamResponse
from typing import Dict, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ParticipantService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _completed_by_group(self, group_ids: List[str]) -> Dict[str, int]:
        if not group_ids:
            return {}
        result = self.supabase.table("team_task_submissions")\
            .select("group_id")\
            .eq("status", "completed")\
            .in_("group_id", group_ids)\
            .execute()
        counts: Dict[str, int] = {}
        for row in (result.data or []):
            counts[row["group_id"]] = counts.get(row["group_id"], 0) + 1
        return counts

    def list_participants(self, workshop_id: str, query: Optional[str] = None) -> List[ParticipantResponse]:
        """Registered participants, newest first, with profile, team and completed task count"""
        try:
            registrations = self.supabase.table("user_workshops")\
                .select("id, user_id, status, created_at")\
                .eq("workshop_id", workshop_id)\
                .order("created_at", desc=True)\
                .execute()
            rows = registrations.data or []
            if not rows:
                return []

            profiles = fetch_profiles(self.supabase, [r["user_id"] for r in rows])

            groups = self.supabase.table("workshop_groups")\
                .select("id, group_name, group_code")\
                .eq("workshop_id", workshop_id)\
                .execute()
            groups_by_id = {g["id"]: g for g in (groups.data or [])}

            # Only memberships in this workshop's groups count
            group_of_user: Dict[str, dict] = {}
            for m in fetch_group_members(self.supabase, list(groups_by_id)):
                group_of_user.setdefault(m["user_id"], groups_by_id[m["group_id"]])

            completed = self._completed_by_group(list(groups_by_id))

            participants = []
            for row in rows:
                profile = profiles.get(row["user_id"]) or {}
                group = group_of_user.get(row["user_id"])
                participants.append(ParticipantResponse(
                    **row,
                    full_name=profile.get("full_name"),
                    email=profile.get("email"),
                    mobile_number=profile.get("mobile_number"),
                    group_id=group["id"] if group else None,
                    group_name=group["group_name"] if group else None,
                    group_code=group["group_code"] if group else None,
                    tasks_completed=completed.get(group["id"], 0) if group else 0,
                ))
            return filter_participants(participants, query)
        except Exception as e:
            logger.error(f"Error listing participants: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_teams(self, workshop_id: str, query: Optional[str] = None) -> List[TeamResponse]:
        return group_by_team(self.list_participants(workshop_id, query))

    def export_csv(self, workshop_id: str) -> str:
        participants = self.list_participants(workshop_id)
        return to_csv(
            ["Name", "Email", "Mobile", "Group", "Tasks Completed", "Status", "Joined Date"],
            [
                (
                    p.full_name or "N/A",
                    p.email or "N/A",
                    p.mobile_number or "N/A",
                    p.group_name or "Not Joined",
                    p.tasks_completed,
                    p.status,
                    p.created_at.date().isoformat() if p.created_at else "",
                )
                for p in participants
            ],
        )
