# Supabase table: workshop_judges
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- workshop_id: uuid (foreign key to workshops.id, not null, ON DELETE CASCADE)
- user_id: uuid (foreign key to profiles.id, not null)
- assigned_at: timestamp (default: now())
"""
