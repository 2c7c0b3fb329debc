"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import require_admin
from app.database.supabase_client import get_supabase, get_service_supabase
from app.main import app
from app.modules.auth.service import clear_auth_cache
from app.modules.realtime.routes import get_websocket_admin
from tests.fakes import FakeSupabase

ADMIN = {"id": "admin-1", "email": "admin@example.com", "app_metadata": {}, "user_metadata": {}}


@pytest.fixture
def db():
    """Fresh in-memory backend per test."""
    return FakeSupabase()


@pytest.fixture
def client(db):
    """TestClient wired to the fake backend with an admin already signed in."""
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_service_supabase] = lambda: db
    app.dependency_overrides[require_admin] = lambda: ADMIN
    app.dependency_overrides[get_websocket_admin] = lambda: ADMIN
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(db):
    """TestClient on the fake backend without the admin shortcut."""
    clear_auth_cache()
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_service_supabase] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture
def workshop(db):
    return db.seed("workshops", title="Hack Day", description=None, status="draft")


@pytest.fixture
def live_workshop(db):
    return db.seed("workshops", title="Live Hack Day", status="live")


def seed_task(db, workshop_id, order, title=None, is_active=False, is_ended=False, start_time=None, **extra):
    return db.seed(
        "workshop_tasks",
        workshop_id=workshop_id,
        title=title or f"Task {order}",
        points=10,
        timer_minutes=30,
        task_order=order,
        is_active=is_active,
        is_ended=is_ended,
        start_time=start_time,
        **extra,
    )
