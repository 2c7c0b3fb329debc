from supabase import Client
from app.modules.announcements.schemas import AnnouncementCreate, AnnouncementResponse
from app.modules.realtime.registry import NotificationRegistry, registry
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class AnnouncementService:
    def __init__(self, supabase: Client, notifier: NotificationRegistry = registry):
        self.supabase = supabase
        self.notifier = notifier

    def list_announcements(self, workshop_id: str) -> List[AnnouncementResponse]:
        """Newest first"""
        try:
            result = self.supabase.table("announcements")\
                .select("*")\
                .eq("workshop_id", workshop_id)\
                .order("created_at", desc=True)\
                .execute()
            return [AnnouncementResponse(**a) for a in (result.data or [])]
        except Exception as e:
            logger.error(f"Error listing announcements: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_announcement(
        self, workshop_id: str, announcement_data: AnnouncementCreate, created_by: Optional[str] = None
    ) -> AnnouncementResponse:
        try:
            result = self.supabase.table("announcements").insert({
                "workshop_id": workshop_id,
                "message": announcement_data.message,
                "created_by": created_by,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to send announcement")

            logger.info(f"Announcement sent to workshop {workshop_id}")
            self.notifier.notify("announcements", workshop_id)
            return AnnouncementResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error sending announcement: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))
