from supabase import Client
from app.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskResponse, TaskEndResponse
from app.modules.tasks.sequencer import TaskStateError, ensure_can_activate, find_next_task
from app.modules.realtime.registry import NotificationRegistry, registry
from typing import List, Optional, Tuple
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TaskService:
    def __init__(self, supabase: Client, notifier: NotificationRegistry = registry):
        self.supabase = supabase
        self.notifier = notifier

    def list_tasks(self, workshop_id: str) -> List[TaskResponse]:
        """Tasks of a workshop in sequence order; ties on task_order go to the earliest created"""
        try:
            result = self.supabase.table("workshop_tasks")\
                .select("*")\
                .eq("workshop_id", workshop_id)\
                .order("task_order")\
                .order("created_at")\
                .order("id")\
                .execute()
            return [TaskResponse(**task) for task in (result.data or [])]
        except Exception as e:
            logger.error(f"Error listing tasks: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_task_by_id(self, task_id: str) -> TaskResponse:
        try:
            result = self.supabase.table("workshop_tasks")\
                .select("*")\
                .eq("id", task_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Task not found")

            return TaskResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error getting task: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_task(self, workshop_id: str, task_data: TaskCreate) -> TaskResponse:
        try:
            result = self.supabase.table("workshop_tasks").insert({
                **task_data.model_dump(),
                "workshop_id": workshop_id,
                "is_active": False,
                "is_ended": False,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create task")

            self.notifier.notify("workshop_tasks", workshop_id)
            return TaskResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating task: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_task(self, task_id: str, task_data: TaskUpdate) -> TaskResponse:
        task = self.get_task_by_id(task_id)
        if task.is_ended:
            raise HTTPException(status_code=409, detail="Ended tasks cannot be edited")
        update_data = task_data.model_dump(exclude_none=True)
        if not update_data:
            return task
        return self._write(task, update_data)

    def delete_task(self, task_id: str) -> bool:
        task = self.get_task_by_id(task_id)
        if task.is_ended:
            raise HTTPException(status_code=409, detail="Ended tasks cannot be deleted")
        try:
            result = self.supabase.table("workshop_tasks")\
                .delete()\
                .eq("id", task_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Task not found")
            self.notifier.notify("workshop_tasks", task.workshop_id)
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting task: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def _write(self, task: TaskResponse, update_data: dict) -> TaskResponse:
        """Update one task row and signal its workshop"""
        try:
            result = self.supabase.table("workshop_tasks")\
                .update(update_data)\
                .eq("id", task.id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating task {task.id}: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Task not found")

        self.notifier.notify("workshop_tasks", task.workshop_id)
        return TaskResponse(**result.data[0])

    def activate_task(self, task_id: str) -> TaskResponse:
        """Make a task the active one and stamp its start time"""
        task = self.get_task_by_id(task_id)
        if task.is_active and not task.is_ended:
            return task
        try:
            ensure_can_activate(task, self.list_tasks(task.workshop_id))
        except TaskStateError as e:
            raise HTTPException(status_code=409, detail=str(e))

        activated = self._write(task, {"is_active": True, "start_time": _now()})
        logger.info(f"Task {task.id} (#{task.task_order}) activated in workshop {task.workshop_id}")
        return activated

    def deactivate_task(self, task_id: str) -> TaskResponse:
        task = self.get_task_by_id(task_id)
        if not task.is_active:
            return task
        deactivated = self._write(task, {"is_active": False, "start_time": None})
        logger.info(f"Task {task.id} (#{task.task_order}) deactivated")
        return deactivated

    def toggle_task(self, task_id: str) -> TaskResponse:
        task = self.get_task_by_id(task_id)
        if task.is_ended:
            raise HTTPException(status_code=409, detail="Cannot activate an ended task")
        if task.is_active:
            return self.deactivate_task(task_id)
        return self.activate_task(task_id)

    def end_task(self, task_id: str) -> TaskEndResponse:
        """End a task for good and hand over to the next one in order.

        Ending an already ended task changes nothing and activates nothing.
        """
        task = self.get_task_by_id(task_id)
        if task.is_ended:
            return TaskEndResponse(ended=task, next_task=None, already_ended=True)

        ended = self._write(task, {"is_active": False, "is_ended": True})
        logger.info(f"Task {task.id} (#{task.task_order}) ended in workshop {task.workshop_id}")

        next_task, halted_reason = self._advance(ended)
        return TaskEndResponse(ended=ended, next_task=next_task, halted_reason=halted_reason)

    def _advance(self, ended: TaskResponse) -> Tuple[Optional[TaskResponse], Optional[str]]:
        """Activate the successor of an ended task. Returns (activated task, reason if none)."""
        tasks = self.list_tasks(ended.workshop_id)
        candidate = find_next_task(ended, tasks)
        if candidate is None:
            reason = f"No pending task with order {ended.task_order + 1}"
            logger.info(f"{reason} in workshop {ended.workshop_id}; sequence halted")
            return None, reason
        try:
            ensure_can_activate(candidate, tasks)
        except TaskStateError as e:
            logger.warning(f"Not advancing to task {candidate.id}: {e}")
            return None, str(e)
        activated = self._write(candidate, {"is_active": True, "start_time": _now()})
        logger.info(f"Advanced workshop {ended.workshop_id} to task #{candidate.task_order} ({candidate.id})")
        return activated, None
