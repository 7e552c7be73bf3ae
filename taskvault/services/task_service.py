"""Task service for creating, reading, updating and deleting owned tasks."""

import logging
from typing import Any

from taskvault.core import db_client
from taskvault.core.errors import NotFound, ValidationFailed
from taskvault.core.logging import log_with_user_context, span
from taskvault.domain.task import Task, TaskStatus, validate_task_fields
from taskvault.services.ownership import assert_owner, classify_missed_write


logger = logging.getLogger(__name__)

COLLECTION = "tasks"

# Fields a caller may change; id, owner_id and timestamps are never taken from input
UPDATABLE_FIELDS = ("title", "description", "status")


async def create_task(*, owner_id: str, title: str, description: str, status: str | None = None) -> Task:
    """Create a task owned by the caller.

    Args:
        owner_id: ID of the authenticated user
        title: Non-empty title
        description: Non-empty description
        status: Optional status, defaults to "pending"

    Returns:
        The created task

    Raises:
        ValidationFailed: If title/description are empty or status is unknown
        db_client.DatabaseError: If database operation fails
    """
    with span("task_service.create_task"):
        errors = validate_task_fields(title=title, description=description, status=status, require_all=True)
        if errors:
            raise ValidationFailed(errors)

        record = await db_client.create_record(
            collection=COLLECTION,
            data={
                "title": title.strip(),
                "description": description.strip(),
                "status": status or TaskStatus.PENDING.value,
                "owner_id": owner_id,
            },
        )
        task = Task(**record)
        log_with_user_context(logger, "info", "task_created", user_id=owner_id, task_id=task.id)
        return task


async def get_task(*, task_id: str) -> Task:
    """Fetch a task by ID without any ownership check.

    Raises:
        NotFound: If no task has this ID
    """
    try:
        record = await db_client.get_record(collection=COLLECTION, record_id=task_id)
    except db_client.RecordNotFoundError as e:
        raise NotFound from e
    return Task(**record)


async def get_owned_task(*, task_id: str, owner_id: str) -> Task:
    """Fetch a task the caller owns.

    Raises:
        NotFound: If no task has this ID
        NotOwner: If the task belongs to another user
    """
    task = await get_task(task_id=task_id)
    return assert_owner(task, owner_id)


async def update_task(
    *,
    task_id: str,
    owner_id: str,
    fields: dict[str, Any],
    require_all: bool = False,
) -> Task:
    """Apply field changes to an owned task in one conditional write.

    The write only matches when both the ID and the owner match, so there is
    no window between the ownership check and the update.

    Args:
        task_id: Task to change
        owner_id: ID of the authenticated user
        fields: New values; keys outside UPDATABLE_FIELDS are ignored
        require_all: Require title and description to be present (full replace)

    Returns:
        The updated task

    Raises:
        ValidationFailed: If a supplied value is empty or invalid
        NotFound: If no task has this ID
        NotOwner: If the task belongs to another user
    """
    with span("task_service.update_task"):
        changes = {key: fields[key] for key in UPDATABLE_FIELDS if fields.get(key) is not None}
        errors = validate_task_fields(
            title=changes.get("title"),
            description=changes.get("description"),
            status=changes.get("status"),
            require_all=require_all,
        )
        if errors:
            raise ValidationFailed(errors)

        changes = {key: value.strip() for key, value in changes.items()}
        if not changes:
            # Nothing to write; still enforce existence and ownership
            return await get_owned_task(task_id=task_id, owner_id=owner_id)

        try:
            record = await db_client.update_record(
                collection=COLLECTION,
                record_id=task_id,
                data=changes,
                where=db_client.eq("owner_id", owner_id),
            )
        except db_client.RecordNotFoundError:
            await classify_missed_write(task_id=task_id, requester_id=owner_id)

        log_with_user_context(
            logger, "info", "task_updated", user_id=owner_id, task_id=task_id, fields=sorted(changes)
        )
        return Task(**record)


async def delete_task(*, task_id: str, owner_id: str) -> None:
    """Permanently delete an owned task in one conditional write.

    Raises:
        NotFound: If no task has this ID (including a second delete)
        NotOwner: If the task belongs to another user
    """
    with span("task_service.delete_task"):
        try:
            await db_client.delete_record(
                collection=COLLECTION,
                record_id=task_id,
                where=db_client.eq("owner_id", owner_id),
            )
        except db_client.RecordNotFoundError:
            await classify_missed_write(task_id=task_id, requester_id=owner_id)

        log_with_user_context(logger, "info", "task_deleted", user_id=owner_id, task_id=task_id)
