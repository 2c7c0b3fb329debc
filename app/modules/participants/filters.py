from typing import List, Optional, Sequence

from app.modules.participants.schemas import ParticipantResponse, TeamResponse


def filter_participants(participants: Sequence[ParticipantResponse], query: Optional[str]) -> List[ParticipantResponse]:
    """Case-insensitive substring match on name, email or team name."""
    if not query or not query.strip():
        return list(participants)
    needle = query.strip().lower()
    return [
        p for p in participants
        if any(needle in (field or "").lower() for field in (p.full_name, p.email, p.group_name))
    ]


def group_by_team(participants: Sequence[ParticipantResponse]) -> List[TeamResponse]:
    """Participants bucketed by group code, teams in first-seen order. Ungrouped people are left out."""
    teams = {}
    for p in participants:
        if not p.group_code:
            continue
        if p.group_code not in teams:
            teams[p.group_code] = TeamResponse(group_code=p.group_code, group_name=p.group_name or "")
        teams[p.group_code].members.append(p)
    return list(teams.values())
