from supabase import Client
from app.config import settings
from app.core.exports import to_csv
from app.modules.groups.codes import GroupCodeExhaustedError, generate_unique_code
from app.modules.groups.schemas import (
    GroupCreate, GroupBulkCreate, GroupUpdate, GroupResponse, GroupWithMembersResponse
)
from app.modules.realtime.registry import NotificationRegistry, registry
from typing import List, Optional, Set
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class GroupService:
    def __init__(self, supabase: Client, notifier: NotificationRegistry = registry):
        self.supabase = supabase
        self.notifier = notifier

    def _code_exists(self, code: str) -> bool:
        result = self.supabase.table("workshop_groups")\
            .select("id")\
            .eq("group_code", code)\
            .limit(1)\
            .execute()
        return bool(result.data)

    def _new_code(self, reserved: Optional[Set[str]] = None) -> str:
        try:
            return generate_unique_code(
                self._code_exists,
                length=settings.group_code_length,
                max_attempts=settings.group_code_max_attempts,
                reserved=reserved,
            )
        except GroupCodeExhaustedError as e:
            logger.error(str(e))
            raise HTTPException(status_code=500, detail="Could not generate a unique group code")

    def create_group(self, workshop_id: str, group_data: GroupCreate) -> GroupResponse:
        """Create a group with a fresh join code"""
        try:
            result = self.supabase.table("workshop_groups").insert({
                "workshop_id": workshop_id,
                "group_name": group_data.group_name,
                "group_code": self._new_code(),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create group")

            self.notifier.notify("workshop_groups", workshop_id)
            return GroupResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating group: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def bulk_create_groups(self, workshop_id: str, bulk_data: GroupBulkCreate) -> List[GroupResponse]:
        """Create "Team 1" .. "Team N" in one insert"""
        if bulk_data.count > settings.bulk_group_limit:
            raise HTTPException(
                status_code=400,
                detail=f"At most {settings.bulk_group_limit} groups can be created at once"
            )
        try:
            codes: Set[str] = set()
            rows = []
            for i in range(bulk_data.count):
                code = self._new_code(reserved=codes)
                codes.add(code)
                rows.append({
                    "workshop_id": workshop_id,
                    "group_name": f"Team {i + 1}",
                    "group_code": code,
                })

            result = self.supabase.table("workshop_groups").insert(rows).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create groups")

            logger.info(f"Created {len(result.data)} groups in workshop {workshop_id}")
            self.notifier.notify("workshop_groups", workshop_id)
            return [GroupResponse(**group) for group in result.data]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating groups: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_group_by_id(self, group_id: str) -> GroupResponse:
        try:
            result = self.supabase.table("workshop_groups")\
                .select("*")\
                .eq("id", group_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Group not found")

            return GroupResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error getting group: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_group(self, group_id: str, group_data: GroupUpdate) -> GroupResponse:
        """Rename a group; the join code never changes"""
        try:
            result = self.supabase.table("workshop_groups")\
                .update({"group_name": group_data.group_name})\
                .eq("id", group_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Group not found")

            group = GroupResponse(**result.data[0])
            self.notifier.notify("workshop_groups", group.workshop_id)
            return group
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating group: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_group(self, group_id: str) -> bool:
        """Delete group; its members are removed by ON DELETE CASCADE"""
        group = self.get_group_by_id(group_id)
        try:
            result = self.supabase.table("workshop_groups")\
                .delete()\
                .eq("id", group_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Group not found")

            self.notifier.notify("workshop_groups", group.workshop_id)
            self.notifier.notify("group_members", group.workshop_id)
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting group: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_groups(self, workshop_id: str) -> List[GroupResponse]:
        """Groups of a workshop in creation order"""
        try:
            result = self.supabase.table("workshop_groups")\
                .select("*")\
                .eq("workshop_id", workshop_id)\
                .order("created_at")\
                .execute()
            return [GroupResponse(**group) for group in (result.data or [])]
        except Exception as e:
            logger.error(f"Error listing groups: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_groups_with_member_counts(self, workshop_id: str) -> List[GroupWithMembersResponse]:
        groups = self.list_groups(workshop_id)
        if not groups:
            return []
        try:
            members = self.supabase.table("group_members")\
                .select("group_id")\
                .in_("group_id", [g.id for g in groups])\
                .execute()
            counts = {}
            for m in (members.data or []):
                counts[m["group_id"]] = counts.get(m["group_id"], 0) + 1
            return [
                GroupWithMembersResponse(**g.model_dump(), member_count=counts.get(g.id, 0))
                for g in groups
            ]
        except Exception as e:
            logger.error(f"Error counting group members: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def export_codes_csv(self, workshop_id: str) -> str:
        groups = self.list_groups(workshop_id)
        return to_csv(["Group Name", "Join Code"], [(g.group_name, g.group_code) for g in groups])
