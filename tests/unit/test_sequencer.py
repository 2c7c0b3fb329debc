"""Unit tests for task sequencing rules."""

import pytest

from app.modules.tasks.schemas import TaskResponse
from app.modules.tasks.sequencer import TaskStateError, ensure_can_activate, find_next_task


def make_task(task_id, order, is_active=False, is_ended=False):
    return TaskResponse(
        id=task_id,
        workshop_id="w1",
        title=f"Task {order}",
        task_order=order,
        is_active=is_active,
        is_ended=is_ended,
    )


class TestEnsureCanActivate:

    def test_inactive_task_can_activate(self):
        tasks = [make_task("t1", 1), make_task("t2", 2)]
        ensure_can_activate(tasks[0], tasks)

    def test_ended_task_cannot_activate(self):
        ended = make_task("t1", 1, is_ended=True)
        with pytest.raises(TaskStateError, match="ended"):
            ensure_can_activate(ended, [ended])

    def test_second_active_task_rejected(self):
        tasks = [make_task("t1", 1, is_active=True), make_task("t2", 2)]
        with pytest.raises(TaskStateError, match="already active"):
            ensure_can_activate(tasks[1], tasks)

    def test_stale_active_flag_on_ended_task_ignored(self):
        tasks = [make_task("t1", 1, is_active=True, is_ended=True), make_task("t2", 2)]
        ensure_can_activate(tasks[1], tasks)


class TestFindNextTask:

    def test_next_order_found(self):
        tasks = [make_task("t1", 1), make_task("t2", 2), make_task("t3", 3)]
        assert find_next_task(tasks[0], tasks).id == "t2"

    def test_last_task_has_no_successor(self):
        tasks = [make_task("t1", 1), make_task("t2", 2), make_task("t3", 3)]
        assert find_next_task(tasks[2], tasks) is None

    def test_ended_successor_skipped(self):
        tasks = [make_task("t1", 1), make_task("t2", 2, is_ended=True), make_task("t3", 3)]
        assert find_next_task(tasks[0], tasks) is None

    def test_gap_in_order_halts_sequence(self):
        tasks = [make_task("t1", 1), make_task("t3", 3)]
        assert find_next_task(tasks[0], tasks) is None

    def test_duplicate_order_first_in_list_wins(self):
        tasks = [make_task("t1", 1), make_task("t2a", 2), make_task("t2b", 2)]
        assert find_next_task(tasks[0], tasks).id == "t2a"

    def test_list_position_does_not_matter_for_lookup(self):
        tasks = [make_task("t3", 3), make_task("t2", 2), make_task("t1", 1)]
        assert find_next_task(tasks[2], tasks).id == "t2"
