from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskResponse, TaskEndResponse
from app.modules.tasks.service import TaskService
from app.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["tasks"])


def get_task_service(supabase: Client = Depends(get_service_supabase)) -> TaskService:
    return TaskService(supabase)


@router.get("/workshops/{workshop_id}/tasks", response_model=List[TaskResponse])
def list_tasks(
    workshop_id: str,
    user_data: Dict = Depends(require_admin),
    service: TaskService = Depends(get_task_service)
):
    """Tasks of a workshop ordered by task_order"""
    return service.list_tasks(workshop_id)


@router.post("/workshops/{workshop_id}/tasks", response_model=TaskResponse, status_code=201)
def create_task(
    workshop_id: str,
    task_data: TaskCreate,
    user_data: Dict = Depends(require_admin),
    service: TaskService = Depends(get_task_service)
):
    return service.create_task(workshop_id, task_data)


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    user_data: Dict = Depends(require_admin),
    service: TaskService = Depends(get_task_service)
):
    return service.get_task_by_id(task_id)


@router.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    user_data: Dict = Depends(require_admin),
    service: TaskService = Depends(get_task_service)
):
    return service.update_task(task_id, task_data)


@router.delete("/tasks/{task_id}", status_code=204)
def delete_task(
    task_id: str,
    user_data: Dict = Depends(require_admin),
    service: TaskService = Depends(get_task_service)
):
    service.delete_task(task_id)
    return None


@router.post("/tasks/{task_id}/activate", response_model=TaskResponse)
def activate_task(
    task_id: str,
    user_data: Dict = Depends(require_admin),
    service: TaskService = Depends(get_task_service)
):
    """Activate a task; 409 if it has ended or another task is active"""
    return service.activate_task(task_id)


@router.post("/tasks/{task_id}/deactivate", response_model=TaskResponse)
def deactivate_task(
    task_id: str,
    user_data: Dict = Depends(require_admin),
    service: TaskService = Depends(get_task_service)
):
    return service.deactivate_task(task_id)


@router.post("/tasks/{task_id}/toggle", response_model=TaskResponse)
def toggle_task(
    task_id: str,
    user_data: Dict = Depends(require_admin),
    service: TaskService = Depends(get_task_service)
):
    return service.toggle_task(task_id)


@router.post("/tasks/{task_id}/end", response_model=TaskEndResponse)
def end_task(
    task_id: str,
    user_data: Dict = Depends(require_admin),
    service: TaskService = Depends(get_task_service)
):
    """End a task and activate the next one in order, if any"""
    return service.end_task(task_id)
