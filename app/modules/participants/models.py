# Supabase tables: user_workshops, profiles, team_task_submissions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

user_workshops:
- id: uuid (primary key)
- workshop_id: uuid (foreign key to workshops.id, not null)
- user_id: uuid (foreign key to profiles.id, not null)
- status: text (not null) - registration status, e.g. registered, attended
- created_at: timestamp (default: now())

profiles:
- id: uuid (primary key, same as auth.users.id)
- full_name: text
- email: text
- mobile_number: text (nullable)

team_task_submissions:
- id: uuid (primary key)
- group_id: uuid (foreign key to workshop_groups.id)
- task_id: uuid (foreign key to workshop_tasks.id)
- status: text - 'completed' counts towards tasks completed
"""
