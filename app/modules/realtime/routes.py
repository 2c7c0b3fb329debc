import asyncio
import logging
from contextlib import ExitStack
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status
from supabase import Client

from app.config import settings
from app.core.dependencies import get_user_roles, is_super_user
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.service import AuthService
from app.modules.realtime.registry import WATCHED_TABLES, ChangeEvent, registry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


def get_websocket_admin(
    token: Optional[str] = None,
    supabase: Client = Depends(get_supabase),
    service_supabase: Client = Depends(get_service_supabase),
) -> Optional[Dict]:
    """Browsers cannot set headers on a WebSocket, so the JWT comes as ?token=. None means rejected."""
    if not token:
        return None
    try:
        user_data = AuthService(supabase).get_current_user(token)
    except HTTPException:
        return None
    if is_super_user(user_data):
        return user_data
    roles = get_user_roles(user_data["id"], service_supabase)
    if any(role in settings.get_admin_roles_list() for role in roles):
        return user_data
    return None


def enqueue_change(queue: asyncio.Queue, event: ChangeEvent) -> bool:
    """Queue a signal for one socket. A full queue drops it; clients re-fetch on the next signal anyway."""
    try:
        queue.put_nowait(event)
        return True
    except asyncio.QueueFull:
        logger.debug(f"Change queue full; dropped {event.table} signal for {event.workshop_id}")
        return False


@router.websocket("/workshops/{workshop_id}/changes")
async def workshop_changes(
    websocket: WebSocket,
    workshop_id: str,
    user_data: Optional[Dict] = Depends(get_websocket_admin),
):
    """Push a {"type": "change", "table": ...} message whenever one of the workshop's tables changes.

    Messages carry no row data; clients re-fetch the affected view.
    """
    if user_data is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue(maxsize=settings.realtime_queue_size)

    def on_change(event: ChangeEvent) -> None:
        # Writes happen on threadpool workers
        loop.call_soon_threadsafe(enqueue_change, queue, event)

    async def pump() -> None:
        while True:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=settings.realtime_heartbeat_seconds)
            except asyncio.TimeoutError:
                await websocket.send_json({"type": "heartbeat"})
                continue
            await websocket.send_json({
                "type": "change",
                "table": event.table,
                "workshop_id": event.workshop_id,
            })

    with ExitStack() as subscriptions:
        for table in WATCHED_TABLES:
            subscriptions.enter_context(registry.subscribe(table, on_change, workshop_id=workshop_id))
        await websocket.accept()
        logger.info(f"Change feed opened for workshop {workshop_id} by {user_data['id']}")

        sender = asyncio.create_task(pump())
        try:
            while True:
                # Client messages are ignored; receiving is how a disconnect is noticed
                await websocket.receive_text()
        except WebSocketDisconnect:
            logger.info(f"Change feed closed for workshop {workshop_id}")
        finally:
            sender.cancel()
            try:
                await sender
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.warning(f"Change feed sender for workshop {workshop_id} failed: {e}")
