# Supabase table: workshops
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
#
# Migration: supabase/migrations/20251107115512_workshop_lifecycle.sql adds status
# and the end_workshop() function used to end a workshop in one transaction.

"""
Expected Supabase table structure:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- duration: text (nullable) - free text shown to participants, e.g. "3 hours"
- banner_url: text (nullable)
- status: text (default: 'draft') - values: draft, live, completed
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Related counts come from user_workshops (participants), workshop_groups,
workshop_tasks and team_task_submissions (status = 'completed').
"""
