from supabase import Client
from app.core.exports import to_csv
from app.core.lookups import fetch_groups, fetch_group_members, fetch_profiles
from app.modules.leaderboard.ranking import apply_adjustment, compute_ranks
from app.modules.leaderboard.schemas import LeaderboardEntryResponse
from app.modules.realtime.registry import NotificationRegistry, registry
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class LeaderboardService:
    def __init__(self, supabase: Client, notifier: NotificationRegistry = registry):
        self.supabase = supabase
        self.notifier = notifier

    def _fetch_entries(self, workshop_id: str) -> List[dict]:
        result = self.supabase.table("workshop_leaderboard")\
            .select("id, workshop_id, group_id, total_score, tasks_completed, rank")\
            .eq("workshop_id", workshop_id)\
            .order("total_score", desc=True)\
            .order("id")\
            .execute()
        return result.data or []

    def get_leaderboard(self, workshop_id: str) -> List[LeaderboardEntryResponse]:
        """Entries by score (highest first) with team name, code and member names"""
        try:
            rows = self._fetch_entries(workshop_id)
            group_ids = [r["group_id"] for r in rows]
            groups = fetch_groups(self.supabase, group_ids)
            memberships = fetch_group_members(self.supabase, group_ids)
            profiles = fetch_profiles(self.supabase, [m["user_id"] for m in memberships])

            members_by_group = {}
            for m in memberships:
                name = (profiles.get(m["user_id"]) or {}).get("full_name")
                if name:
                    members_by_group.setdefault(m["group_id"], []).append(name)

            entries = []
            for row in rows:
                group = groups.get(row["group_id"]) or {}
                entries.append(LeaderboardEntryResponse(
                    **row,
                    group_name=group.get("group_name"),
                    group_code=group.get("group_code"),
                    members=members_by_group.get(row["group_id"], []),
                ))
            return entries
        except Exception as e:
            logger.error(f"Error getting leaderboard: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_entry_by_id(self, entry_id: str) -> LeaderboardEntryResponse:
        try:
            result = self.supabase.table("workshop_leaderboard")\
                .select("*")\
                .eq("id", entry_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Leaderboard entry not found")

            return LeaderboardEntryResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error getting leaderboard entry: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def refresh_ranks(self, workshop_id: str) -> List[LeaderboardEntryResponse]:
        """Recompute and store ranks from current scores, one write per entry"""
        try:
            entries = [LeaderboardEntryResponse(**row) for row in self._fetch_entries(workshop_id)]
            for entry_id, rank in compute_ranks(entries):
                self.supabase.table("workshop_leaderboard")\
                    .update({"rank": rank})\
                    .eq("id", entry_id)\
                    .execute()
        except Exception as e:
            # Writes are not batched: entries updated before the failure keep their new rank
            logger.error(f"Error refreshing ranks for workshop {workshop_id}: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

        logger.info(f"Refreshed ranks for {len(entries)} leaderboard entries in workshop {workshop_id}")
        self.notifier.notify("workshop_leaderboard", workshop_id)
        return self.get_leaderboard(workshop_id)

    def adjust_score(self, entry_id: str, delta: int) -> LeaderboardEntryResponse:
        """Add delta to an entry's score. The stored rank is left as is until the next refresh."""
        entry = self.get_entry_by_id(entry_id)
        new_score = apply_adjustment(entry.total_score, delta)
        try:
            result = self.supabase.table("workshop_leaderboard")\
                .update({"total_score": new_score})\
                .eq("id", entry_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error adjusting points: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Leaderboard entry not found")

        logger.info(f"Adjusted entry {entry_id} by {delta:+d} to {new_score}")
        self.notifier.notify("workshop_leaderboard", entry.workshop_id)
        return LeaderboardEntryResponse(**result.data[0])

    def export_csv(self, workshop_id: str) -> str:
        entries = self.get_leaderboard(workshop_id)
        return to_csv(
            ["Rank", "Team Name", "Group Code", "Members", "Score", "Tasks Completed"],
            [
                (
                    e.rank or "N/A",
                    e.group_name or "N/A",
                    e.group_code or "N/A",
                    "; ".join(e.members) or "N/A",
                    e.total_score,
                    e.tasks_completed,
                )
                for e in entries
            ],
        )
