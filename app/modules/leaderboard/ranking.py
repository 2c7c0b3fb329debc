"""Rank computation for the workshop leaderboard.

Ranks are stored, not derived: they change only when refreshed, so a score
adjustment leaves the previous ordering in place until then.
"""
from typing import List, Sequence, Tuple

from app.modules.leaderboard.schemas import LeaderboardEntryResponse


def compute_ranks(entries: Sequence[LeaderboardEntryResponse]) -> List[Tuple[str, int]]:
    """Return (entry_id, rank) by total_score descending.

    The sort is stable: equal scores keep the order they were passed in.
    """
    ordered = sorted(entries, key=lambda e: e.total_score, reverse=True)
    return [(entry.id, position + 1) for position, entry in enumerate(ordered)]


def apply_adjustment(total_score: int, delta: int) -> int:
    # No floor: penalties can take a team below zero
    return total_score + delta
