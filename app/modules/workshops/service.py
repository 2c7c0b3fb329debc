from supabase import Client
from app.modules.workshops.schemas import (
    WorkshopCreate, WorkshopUpdate, WorkshopResponse, WorkshopStats,
    WorkshopWithStatsResponse, WorkshopOverview
)
from app.modules.workshops.lifecycle import (
    LIVE, COMPLETED, WorkshopStateError, validate_transition
)
from app.modules.realtime.registry import NotificationRegistry, registry
from typing import List
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class WorkshopService:
    def __init__(self, supabase: Client, notifier: NotificationRegistry = registry):
        self.supabase = supabase
        self.notifier = notifier

    def create_workshop(self, workshop_data: WorkshopCreate) -> WorkshopResponse:
        """Create a new workshop in draft state"""
        try:
            result = self.supabase.table("workshops").insert({
                "title": workshop_data.title,
                "description": workshop_data.description,
                "duration": workshop_data.duration,
                "banner_url": workshop_data.banner_url,
                "status": "draft",
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create workshop")

            workshop = WorkshopResponse(**result.data[0])
            self.notifier.notify("workshops", workshop.id)
            return workshop
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating workshop: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_workshop_by_id(self, workshop_id: str) -> WorkshopResponse:
        """Get workshop by ID"""
        try:
            result = self.supabase.table("workshops")\
                .select("*")\
                .eq("id", workshop_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Workshop not found")

            return WorkshopResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error getting workshop: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_workshop(self, workshop_id: str, workshop_data: WorkshopUpdate) -> WorkshopResponse:
        """Update workshop details (status changes go through start/end)"""
        try:
            update_data = workshop_data.model_dump(exclude_none=True)
            if not update_data:
                return self.get_workshop_by_id(workshop_id)
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("workshops")\
                .update(update_data)\
                .eq("id", workshop_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Workshop not found")

            self.notifier.notify("workshops", workshop_id)
            return WorkshopResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating workshop: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_workshop(self, workshop_id: str) -> bool:
        """Delete workshop; child rows go with it through ON DELETE CASCADE"""
        try:
            result = self.supabase.table("workshops")\
                .delete()\
                .eq("id", workshop_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Workshop not found")

            self.notifier.notify("workshops", workshop_id)
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting workshop: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_workshops(self, limit: int = 50, offset: int = 0) -> List[WorkshopResponse]:
        """List workshops, newest first"""
        try:
            result = self.supabase.table("workshops")\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [WorkshopResponse(**workshop) for workshop in (result.data or [])]
        except Exception as e:
            logger.error(f"Error listing workshops: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def _count(self, table: str, column: str, value: str) -> int:
        result = self.supabase.table(table)\
            .select("id", count="exact", head=True)\
            .eq(column, value)\
            .execute()
        return result.count or 0

    def get_workshop_stats(self, workshop_id: str) -> WorkshopStats:
        try:
            return WorkshopStats(
                participants=self._count("user_workshops", "workshop_id", workshop_id),
                groups=self._count("workshop_groups", "workshop_id", workshop_id),
                tasks=self._count("workshop_tasks", "workshop_id", workshop_id),
            )
        except Exception as e:
            logger.error(f"Error getting workshop stats: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_workshops_with_stats(self, limit: int = 50, offset: int = 0) -> List[WorkshopWithStatsResponse]:
        workshops = self.list_workshops(limit=limit, offset=offset)
        return [
            WorkshopWithStatsResponse(**w.model_dump(), stats=self.get_workshop_stats(w.id))
            for w in workshops
        ]

    def get_overview(self, workshop_id: str) -> WorkshopOverview:
        """Counts shown on the workshop control panel"""
        workshop = self.get_workshop_by_id(workshop_id)
        try:
            tasks = self.supabase.table("workshop_tasks")\
                .select("id, is_active")\
                .eq("workshop_id", workshop_id)\
                .execute()
            task_rows = tasks.data or []

            groups = self.supabase.table("workshop_groups")\
                .select("id")\
                .eq("workshop_id", workshop_id)\
                .execute()
            group_ids = [g["id"] for g in (groups.data or [])]

            completed = 0
            if group_ids:
                submissions = self.supabase.table("team_task_submissions")\
                    .select("id", count="exact", head=True)\
                    .eq("status", "completed")\
                    .in_("group_id", group_ids)\
                    .execute()
                completed = submissions.count or 0

            return WorkshopOverview(
                workshop_id=workshop_id,
                status=workshop.status,
                total_participants=self._count("user_workshops", "workshop_id", workshop_id),
                total_groups=len(group_ids),
                total_tasks=len(task_rows),
                active_tasks=sum(1 for t in task_rows if t.get("is_active")),
                completed_submissions=completed,
            )
        except Exception as e:
            logger.error(f"Error getting workshop overview: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def start_workshop(self, workshop_id: str) -> WorkshopResponse:
        """draft -> live"""
        workshop = self.get_workshop_by_id(workshop_id)
        try:
            validate_transition(workshop.status, LIVE)
        except WorkshopStateError as e:
            raise HTTPException(status_code=409, detail=str(e))

        try:
            # Conditional on the status we validated so a concurrent start/end cannot be overwritten
            result = self.supabase.table("workshops")\
                .update({"status": LIVE, "updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", workshop_id)\
                .eq("status", workshop.status)\
                .execute()
        except Exception as e:
            logger.error(f"Error starting workshop: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            current = self.get_workshop_by_id(workshop_id)
            if current.status != LIVE:
                raise HTTPException(
                    status_code=409,
                    detail=f"Workshop status changed to '{current.status}' while starting"
                )
            return current

        logger.info(f"Workshop {workshop_id} started")
        self.notifier.notify("workshops", workshop_id)
        return WorkshopResponse(**result.data[0])

    def end_workshop(self, workshop_id: str) -> WorkshopResponse:
        """live -> completed, ending every task in the same transaction (end_workshop RPC)"""
        workshop = self.get_workshop_by_id(workshop_id)
        try:
            validate_transition(workshop.status, COMPLETED)
        except WorkshopStateError as e:
            raise HTTPException(status_code=409, detail=str(e))

        try:
            self.supabase.rpc("end_workshop", {"p_workshop_id": workshop_id}).execute()
        except Exception as e:
            if "not live" in str(e):
                raise HTTPException(status_code=409, detail="Workshop is no longer live")
            logger.error(f"Error ending workshop: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

        logger.info(f"Workshop {workshop_id} completed; all tasks ended")
        self.notifier.notify("workshop_tasks", workshop_id)
        self.notifier.notify("workshops", workshop_id)
        return self.get_workshop_by_id(workshop_id)
