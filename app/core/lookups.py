"""Batched reads shared by the participant, judge and leaderboard views."""
from supabase import Client
from typing import Dict, Iterable, List


def fetch_profiles(supabase: Client, user_ids: Iterable[str]) -> Dict[str, dict]:
    """profiles rows keyed by id"""
    ids = list(dict.fromkeys(user_ids))
    if not ids:
        return {}
    result = supabase.table("profiles")\
        .select("id, full_name, email, mobile_number")\
        .in_("id", ids)\
        .execute()
    return {p["id"]: p for p in (result.data or [])}


def fetch_groups(supabase: Client, group_ids: Iterable[str]) -> Dict[str, dict]:
    """workshop_groups rows keyed by id"""
    ids = list(dict.fromkeys(group_ids))
    if not ids:
        return {}
    result = supabase.table("workshop_groups")\
        .select("id, workshop_id, group_name, group_code")\
        .in_("id", ids)\
        .execute()
    return {g["id"]: g for g in (result.data or [])}


def fetch_group_members(supabase: Client, group_ids: Iterable[str]) -> List[dict]:
    ids = list(dict.fromkeys(group_ids))
    if not ids:
        return []
    result = supabase.table("group_members")\
        .select("group_id, user_id")\
        .in_("group_id", ids)\
        .execute()
    return result.data or []
