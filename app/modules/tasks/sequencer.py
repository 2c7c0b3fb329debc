"""Task sequencing rules for a single workshop.

Tasks run one at a time in task_order. Ending a task hands over to the task
whose order is exactly one higher, if it has not been ended already.
"""
from typing import Optional, Sequence

from app.modules.tasks.schemas import TaskResponse


class TaskStateError(ValueError):
    """Raised when a task cannot make the requested transition."""


def active_tasks(tasks: Sequence[TaskResponse], exclude_id: Optional[str] = None) -> list:
    return [t for t in tasks if t.is_active and not t.is_ended and t.id != exclude_id]


def ensure_can_activate(task: TaskResponse, tasks: Sequence[TaskResponse]) -> None:
    """Ended tasks stay ended, and only one task per workshop may be active."""
    if task.is_ended:
        raise TaskStateError("Cannot activate an ended task")
    others = active_tasks(tasks, exclude_id=task.id)
    if others:
        raise TaskStateError(
            f"Task #{others[0].task_order} '{others[0].title}' is already active; "
            f"deactivate or end it first"
        )


def find_next_task(ended: TaskResponse, tasks: Sequence[TaskResponse]) -> Optional[TaskResponse]:
    """First not-ended task with task_order == ended.task_order + 1, in list order.

    Callers pass tasks ordered by (task_order, created_at, id), so a duplicated
    order resolves to the earliest created task.
    """
    target = ended.task_order + 1
    for task in tasks:
        if task.id != ended.id and task.task_order == target and not task.is_ended:
            return task
    return None
