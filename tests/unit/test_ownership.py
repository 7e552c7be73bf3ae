"""Unit tests for the ownership guard."""

import pytest

from taskvault.core.errors import NotFound, NotOwner
from taskvault.domain.task import Task
from taskvault.services import ownership, task_service


def _task(owner_id: str) -> Task:
    return Task(
        id="t1",
        title="Buy milk",
        description="2% milk",
        owner_id=owner_id,
        created="2026-01-01T00:00:00.000000Z",
        updated="2026-01-01T00:00:00.000000Z",
    )


@pytest.mark.unit
def test_owner_passes_through():
    task = _task("ann")

    assert ownership.assert_owner(task, "ann") is task


@pytest.mark.unit
def test_other_user_rejected():
    with pytest.raises(NotOwner):
        ownership.assert_owner(_task("ann"), "bob")


@pytest.mark.unit
async def test_classify_missing_task(db):
    with pytest.raises(NotFound):
        await ownership.classify_missed_write(task_id="missing", requester_id="ann")


@pytest.mark.unit
async def test_classify_foreign_task(ann, bob):
    task = await task_service.create_task(owner_id=ann.id, title="Buy milk", description="2% milk")

    with pytest.raises(NotOwner):
        await ownership.classify_missed_write(task_id=task.id, requester_id=bob.id)


@pytest.mark.unit
async def test_classify_own_task_reports_not_found(ann):
    """The owner's write missed, so the task vanished in between."""
    task = await task_service.create_task(owner_id=ann.id, title="Buy milk", description="2% milk")

    with pytest.raises(NotFound):
        await ownership.classify_missed_write(task_id=task.id, requester_id=ann.id)
