# Supabase tables: workshop_groups, group_members
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

workshop_groups:
- id: uuid (primary key)
- workshop_id: uuid (foreign key to workshops.id, not null, ON DELETE CASCADE)
- group_name: text (not null)
- group_code: text (not null) - 6 chars [A-Z0-9], participants join with it
- slogan: text (nullable)
- logo_url: text (nullable)
- created_at: timestamp (default: now())

group_members:
- id: uuid (primary key)
- group_id: uuid (foreign key to workshop_groups.id, not null, ON DELETE CASCADE)
- user_id: uuid (foreign key to profiles.id, not null)
- created_at: timestamp (default: now())
"""
