# Supabase table: workshop_leaderboard
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- workshop_id: uuid (foreign key to workshops.id, not null, ON DELETE CASCADE)
- group_id: uuid (foreign key to workshop_groups.id, not null)
- total_score: integer (default: 0) - may go negative through manual adjustments
- tasks_completed: integer (default: 0)
- rank: integer (nullable) - stored, only rewritten by an explicit rank refresh
"""
