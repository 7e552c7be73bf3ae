"""Filtered, paginated task listings scoped to one owner."""

import logging
from typing import Any

from taskvault.core import db_client
from taskvault.core.config import constants
from taskvault.core.errors import FieldError, InvalidPagination
from taskvault.core.logging import log_with_user_context, span
from taskvault.domain.task import Pagination, Task, TaskPage


logger = logging.getLogger(__name__)

COLLECTION = "tasks"
SEARCH_FIELDS = ("title", "description")
# Newest first; insertion order breaks ties within the same microsecond
LIST_SORT = "created DESC, rowid DESC"


def build_task_filter(*, owner_id: str, search: str | None = None, status: str | None = None) -> db_client.Filter:
    """Compose the owner predicate with the optional search and status predicates.

    A predicate is only added when its value is present, and the owner
    predicate is always part of the result.
    """
    where = db_client.eq("owner_id", owner_id)
    if search:
        where &= db_client.any_of(*(db_client.contains(field, search) for field in SEARCH_FIELDS))
    if status:
        where &= db_client.eq("status", status)
    return where


def _parse_positive(field: str, raw: str | int | None, default: int) -> tuple[int | None, list[FieldError]]:
    if raw is None or raw == "":
        return default, []
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None, [FieldError(field=field, message=f"{field.capitalize()} must be a positive integer")]
    if value < 1:
        return None, [FieldError(field=field, message=f"{field.capitalize()} must be a positive integer")]
    return value, []


def parse_pagination(page: str | int | None = None, limit: str | int | None = None) -> Pagination:
    """Turn raw query values into a pagination window.

    Missing values fall back to page 1 and limit 10.

    Raises:
        InvalidPagination: If page or limit is not a positive integer
    """
    page_value, errors = _parse_positive("page", page, constants.DEFAULT_PAGE)
    limit_value, limit_errors = _parse_positive("limit", limit, constants.DEFAULT_PAGE_LIMIT)
    errors.extend(limit_errors)
    if errors:
        raise InvalidPagination(errors)

    return Pagination(page=page_value, limit=limit_value)


async def list_tasks(
    *,
    owner_id: str,
    search: str | None = None,
    status: str | None = None,
    page: str | int | None = None,
    limit: str | int | None = None,
) -> TaskPage:
    """List the owner's tasks, newest first.

    Args:
        owner_id: ID of the authenticated user; no other owner's tasks are ever returned
        search: Case-insensitive substring matched against title or description
        status: Exact status value to keep
        page: 1-based page number (raw query value)
        limit: Page size (raw query value)

    Returns:
        The requested page together with the total match count

    Raises:
        InvalidPagination: If page or limit is unusable
        db_client.DatabaseError: If database operation fails
    """
    with span("task_query.list_tasks"):
        window = parse_pagination(page, limit)
        where = build_task_filter(owner_id=owner_id, search=search, status=status)

        total = await db_client.count_records(collection=COLLECTION, where=where)
        records: list[dict[str, Any]] = []
        # Windows past the last match skip the query; limit and offset stay within the match count
        if window.offset < total:
            records = await db_client.list_records(
                collection=COLLECTION,
                per_page=min(window.limit, total - window.offset),
                offset=window.offset,
                where=where,
                sort=LIST_SORT,
            )

        result = TaskPage(
            items=[Task(**record) for record in records],
            page=window.page,
            limit=window.limit,
            total=total,
        )
        log_with_user_context(
            logger,
            "debug",
            "tasks_listed",
            user_id=owner_id,
            returned=len(result.items),
            total=total,
            filtered=bool(search or status),
        )
        return result
