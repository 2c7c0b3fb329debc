from supabase import Client
from app.core.lookups import fetch_profiles
from app.modules.judges.schemas import JudgeAssign, JudgeResponse, UserLookupResponse
from app.modules.realtime.registry import NotificationRegistry, registry
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class JudgeService:
    def __init__(self, supabase: Client, notifier: NotificationRegistry = registry):
        self.supabase = supabase
        self.notifier = notifier

    def list_judges(self, workshop_id: str) -> List[JudgeResponse]:
        try:
            result = self.supabase.table("workshop_judges")\
                .select("id, workshop_id, user_id, assigned_at")\
                .eq("workshop_id", workshop_id)\
                .execute()
            rows = result.data or []
            profiles = fetch_profiles(self.supabase, [r["user_id"] for r in rows])
            return [
                JudgeResponse(
                    **row,
                    full_name=(profiles.get(row["user_id"]) or {}).get("full_name"),
                    email=(profiles.get(row["user_id"]) or {}).get("email"),
                )
                for row in rows
            ]
        except Exception as e:
            logger.error(f"Error listing judges: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def find_user_by_email(self, email: str) -> UserLookupResponse:
        """Look up a registered user to assign as judge"""
        try:
            result = self.supabase.table("profiles")\
                .select("id, full_name, email")\
                .eq("email", email)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserLookupResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error looking up user: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def assign_judge(self, workshop_id: str, judge_data: JudgeAssign) -> JudgeResponse:
        try:
            existing = self.supabase.table("workshop_judges")\
                .select("id")\
                .eq("workshop_id", workshop_id)\
                .eq("user_id", judge_data.user_id)\
                .execute()
            if existing.data:
                raise HTTPException(status_code=409, detail="User is already a judge")

            result = self.supabase.table("workshop_judges").insert({
                "workshop_id": workshop_id,
                "user_id": judge_data.user_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to assign judge")

            self.notifier.notify("workshop_judges", workshop_id)
            profile = fetch_profiles(self.supabase, [judge_data.user_id]).get(judge_data.user_id) or {}
            return JudgeResponse(
                **result.data[0],
                full_name=profile.get("full_name"),
                email=profile.get("email"),
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error assigning judge: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def remove_judge(self, judge_id: str) -> bool:
        try:
            result = self.supabase.table("workshop_judges")\
                .delete()\
                .eq("id", judge_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Judge not found")

            self.notifier.notify("workshop_judges", result.data[0].get("workshop_id"))
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error removing judge: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))
