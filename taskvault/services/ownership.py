"""Ownership checks for single-task operations."""

import logging
from typing import NoReturn

from taskvault.core import db_client
from taskvault.core.errors import NotFound, NotOwner
from taskvault.core.logging import log_with_user_context
from taskvault.domain.task import Task


logger = logging.getLogger(__name__)


def assert_owner(task: Task, requester_id: str) -> Task:
    """Return the task unchanged if the requester owns it.

    Raises:
        NotOwner: If the task belongs to someone else
    """
    if task.owner_id != requester_id:
        log_with_user_context(logger, "warning", "task_owner_mismatch", user_id=requester_id, task_id=task.id)
        raise NotOwner
    return task


async def classify_missed_write(*, task_id: str, requester_id: str) -> NoReturn:
    """Explain why a write conditioned on (id, owner) matched no row.

    Only reads, so a mismatch never mutates the task.

    Raises:
        NotFound: If no task has this ID
        NotOwner: If the task exists but belongs to someone else
    """
    try:
        record = await db_client.get_record(collection="tasks", record_id=task_id)
    except db_client.RecordNotFoundError as e:
        raise NotFound from e
    assert_owner(Task(**record), requester_id)
    # Owned by the requester yet the conditional write missed: the task was
    # removed between the write and this read.
    raise NotFound
