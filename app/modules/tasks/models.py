# Supabase table: workshop_tasks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- workshop_id: uuid (foreign key to workshops.id, not null, ON DELETE CASCADE)
- title: text (not null)
- description: text (nullable)
- points: integer (default: 10)
- timer_minutes: integer (nullable)
- task_order: integer (not null) - 1-based position in the workshop; not unique in storage
- is_active: boolean (default: false)
- is_ended: boolean (default: false) - terminal; an ended task is never active again
- start_time: timestamp (nullable) - stamped on activation, cleared on deactivation
- created_at: timestamp (default: now())
"""
