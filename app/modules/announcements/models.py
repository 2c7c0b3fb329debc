# Supabase table: announcements
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- workshop_id: uuid (foreign key to workshops.id, not null, ON DELETE CASCADE)
- message: text (not null)
- created_at: timestamp (default: now())
- created_by: uuid (foreign key to auth.users.id, nullable, ON DELETE SET NULL)

Rows are never updated; the API offers create and list only.
"""
