"""SQLite database client wrapper with CRUD operations."""

import asyncio
import functools
import json
import logging
import re
import sqlite3
import threading
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, ParamSpec, TypeVar

import aiosqlite

from taskvault.core.config import settings


logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
_SORT_TERM = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\s*(ASC|DESC)?$", re.IGNORECASE)
_LIKE_ESCAPE = "\\"


class DatabaseError(RuntimeError):
    """Store operation failed for a reason other than a missing record."""


class RecordNotFoundError(KeyError):
    """No record matched the requested id (and conditions)."""


class DuplicateRecordError(DatabaseError):
    """Insert or update violated a uniqueness constraint."""


def _validate_identifier(name: str, kind: str = "collection") -> None:
    """Validate that a collection or field name contains only alphanumeric characters and underscores."""
    if not _IDENTIFIER.match(name):
        msg = f"Invalid {kind} name: {name}. Only alphanumeric characters and underscores are allowed."
        raise ValueError(msg)


def utc_now() -> str:
    """Current UTC time as a fixed-width ISO string, so string order equals time order."""
    return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2).replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class Filter:
    """A parameterized SQL predicate.

    Filters compose with ``&`` and ``|``; an empty filter matches every row.
    """

    clause: str = ""
    params: tuple[Any, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.clause)

    def __and__(self, other: "Filter") -> "Filter":
        return all_of(self, other)

    def __or__(self, other: "Filter") -> "Filter":
        return any_of(self, other)


def eq(field: str, value: Any) -> Filter:
    """Exact match on a field."""
    _validate_identifier(field, "field")
    return Filter(f"{field} = ?", (value,))


def contains(field: str, text: str) -> Filter:
    """Case-insensitive substring match on a text field."""
    _validate_identifier(field, "field")
    pattern = f"%{escape_like(text.casefold())}%"
    return Filter(f"casefold({field}) LIKE ? ESCAPE '{_LIKE_ESCAPE}'", (pattern,))


def _combine(operator: str, filters: tuple[Filter, ...]) -> Filter:
    parts = [f for f in filters if f]
    if not parts:
        return Filter()
    if len(parts) == 1:
        return parts[0]
    clause = f" {operator} ".join(f"({f.clause})" for f in parts)
    params = tuple(p for f in parts for p in f.params)
    return Filter(clause, params)


def all_of(*filters: Filter) -> Filter:
    """Conjunction of filters, skipping empty ones."""
    return _combine("AND", filters)


def any_of(*filters: Filter) -> Filter:
    """Disjunction of filters, skipping empty ones."""
    return _combine("OR", filters)


def _parse_sort(sort: str) -> str:
    """Validate a sort string like ``created DESC, rowid DESC`` for use in ORDER BY."""
    terms = []
    for raw in sort.split(","):
        match = _SORT_TERM.match(raw.strip())
        if not match:
            msg = f"Invalid sort term: {raw.strip()}"
            raise ValueError(msg)
        direction = (match.group(2) or "ASC").upper()
        terms.append(f"{match.group(1)} {direction}")
    return ", ".join(terms)


def _encode_values(data: dict[str, Any]) -> list[Any]:
    values = []
    for val in data.values():
        if isinstance(val, datetime):
            values.append(val.isoformat())
        elif isinstance(val, dict | list):
            values.append(json.dumps(val))
        else:
            values.append(val)
    return values


def _casefold(value: str | None) -> str | None:
    return value.casefold() if isinstance(value, str) else value


def get_db_path(db_path: str | None = None) -> Path:
    """Get the resolved SQLite database file path."""
    path_str = db_path or settings.sqlite_db_path
    return Path(path_str).resolve()


def _bounded(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Fail a store operation with DatabaseError once it exceeds the configured timeout."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await asyncio.wait_for(func(*args, **kwargs), timeout=settings.db_operation_timeout_seconds)
        except TimeoutError as e:
            logger.error(
                "db_operation_timeout",
                extra={"operation": func.__name__, "timeout": settings.db_operation_timeout_seconds},
            )
            msg = f"{func.__name__} timed out after {settings.db_operation_timeout_seconds}s"
            raise DatabaseError(msg) from e

    return wrapper


_db_connections: dict[tuple[int, int, str], aiosqlite.Connection] = {}
_db_lock = asyncio.Lock()


async def get_connection(*, db_path: str | None = None) -> aiosqlite.Connection:
    """Get or create a cached connection for the current thread, loop, and db path."""
    thread_id = threading.get_ident()
    loop = asyncio.get_running_loop()
    loop_id = id(loop)
    path = get_db_path(db_path)
    cache_key = (thread_id, loop_id, str(path))

    if cache_key in _db_connections:
        return _db_connections[cache_key]

    async with _db_lock:
        # Double-check after acquiring lock
        if cache_key in _db_connections:
            return _db_connections[cache_key]

        path.parent.mkdir(parents=True, exist_ok=True)

        conn = await aiosqlite.connect(str(path))
        await conn.execute("PRAGMA foreign_keys = ON")
        await conn.execute("PRAGMA journal_mode = WAL")
        await conn.create_function("casefold", 1, _casefold, deterministic=True)

        _db_connections[cache_key] = conn

        logger.info(
            "Created new SQLite connection",
            extra={"db_path": str(path), "thread_id": thread_id, "loop_id": loop_id},
        )
        return conn


async def close_connection(*, db_path: str | None = None) -> None:
    """Close the cached SQLite connection for the current thread, loop, and db path."""
    thread_id = threading.get_ident()
    loop_id = id(asyncio.get_running_loop())
    path = get_db_path(db_path)
    cache_key = (thread_id, loop_id, str(path))

    async with _db_lock:
        conn = _db_connections.pop(cache_key, None)
        if conn is None:
            return
        await conn.close()
        logger.info(
            "Closed SQLite connection",
            extra={"thread_id": thread_id, "loop_id": loop_id, "db_path": str(path)},
        )


async def init_db(*, db_path: str | None = None) -> None:
    """Initialize the database schema by delegating to schema.init_db()."""
    from taskvault.core import schema

    await schema.init_db(db_path=db_path)


def _row_to_record(cursor: aiosqlite.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    columns = [description[0] for description in cursor.description]
    return dict(zip(columns, row, strict=True))


@_bounded
async def create_record(*, collection: str, data: dict[str, Any]) -> dict[str, Any]:
    """Insert a new record and return it with its generated id and timestamps."""
    _validate_identifier(collection)
    now = utc_now()
    record = {"id": uuid.uuid4().hex, "created": now, "updated": now, **data}
    for column in record:
        _validate_identifier(column, "field")

    try:
        conn = await get_connection()
        columns_str = ", ".join(record)
        placeholders_str = ", ".join("?" for _ in record)
        query = f"INSERT INTO {collection} ({columns_str}) VALUES ({placeholders_str})"  # noqa: S608 - identifiers are validated
        await conn.execute(query, _encode_values(record))
        await conn.commit()
    except sqlite3.IntegrityError as e:
        logger.warning("create_record_conflict", extra={"collection": collection, "error": str(e)})
        msg = f"Duplicate record in {collection}: {e}"
        raise DuplicateRecordError(msg) from e
    except Exception as e:
        if isinstance(e, sqlite3.OperationalError) and "no such table" in str(e):
            logger.error("Table not found", extra={"collection": collection})
            msg = f"Table '{collection}' does not exist. Call init_db() first."
            raise DatabaseError(msg) from e
        logger.error("create_record_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to create record in {collection}: {e}"
        raise DatabaseError(msg) from e

    logger.info("Created record", extra={"collection": collection, "record_id": record["id"]})
    return record


@_bounded
async def get_record(*, collection: str, record_id: str) -> dict[str, Any]:
    """Fetch a single record by ID, raising RecordNotFoundError if not found."""
    _validate_identifier(collection)
    try:
        conn = await get_connection()
        query = f"SELECT * FROM {collection} WHERE id = ?"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, (record_id,))
        row = await cursor.fetchone()
    except Exception as e:
        logger.error("get_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to get record from {collection}: {e}"
        raise DatabaseError(msg) from e

    if row is None:
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)
    return _row_to_record(cursor, row)


@_bounded
async def get_first_record(*, collection: str, where: Filter) -> dict[str, Any] | None:
    """Return the first record matching the filter, or None."""
    _validate_identifier(collection)
    try:
        conn = await get_connection()
        if where:
            query = f"SELECT * FROM {collection} WHERE {where.clause} LIMIT 1"  # noqa: S608 - clause is parameterized
        else:
            query = f"SELECT * FROM {collection} LIMIT 1"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, where.params)
        row = await cursor.fetchone()
    except Exception as e:
        logger.error("get_first_record_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to get first record from {collection}: {e}"
        raise DatabaseError(msg) from e

    return None if row is None else _row_to_record(cursor, row)


@_bounded
async def update_record(
    *,
    collection: str,
    record_id: str,
    data: dict[str, Any],
    where: Filter | None = None,
) -> dict[str, Any]:
    """Update a record by ID and return the updated record.

    When ``where`` is given the update only applies if the row also matches it,
    in the same statement. A miss on either condition raises RecordNotFoundError.
    """
    if not data:
        msg = "Empty update payload"
        raise ValueError(msg)

    _validate_identifier(collection)
    changes = {**data, "updated": utc_now()}
    for column in changes:
        _validate_identifier(column, "field")
    condition = all_of(Filter("id = ?", (record_id,)), where or Filter())

    try:
        conn = await get_connection()
        set_clause = ", ".join(f"{key} = ?" for key in changes)
        query = f"UPDATE {collection} SET {set_clause} WHERE {condition.clause}"  # noqa: S608 - identifiers are validated
        cursor = await conn.execute(query, [*_encode_values(changes), *condition.params])
        await conn.commit()
    except sqlite3.IntegrityError as e:
        logger.warning("update_record_conflict", extra={"collection": collection, "record_id": record_id})
        msg = f"Duplicate record in {collection}: {e}"
        raise DuplicateRecordError(msg) from e
    except Exception as e:
        logger.error("update_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to update record in {collection}: {e}"
        raise DatabaseError(msg) from e

    if cursor.rowcount == 0:
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)

    logger.info("Updated record", extra={"collection": collection, "record_id": record_id})
    return await get_record(collection=collection, record_id=record_id)


@_bounded
async def delete_record(*, collection: str, record_id: str, where: Filter | None = None) -> None:
    """Delete a record by ID (and optional extra condition), raising RecordNotFoundError on a miss."""
    _validate_identifier(collection)
    condition = all_of(Filter("id = ?", (record_id,)), where or Filter())

    try:
        conn = await get_connection()
        query = f"DELETE FROM {collection} WHERE {condition.clause}"  # noqa: S608 - collection is validated
        cursor = await conn.execute(query, condition.params)
        await conn.commit()
    except Exception as e:
        logger.error("delete_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
        msg = f"Failed to delete record from {collection}: {e}"
        raise DatabaseError(msg) from e

    if cursor.rowcount == 0:
        msg = f"Record not found in {collection}: {record_id}"
        raise RecordNotFoundError(msg)

    logger.info("Deleted record", extra={"collection": collection, "record_id": record_id})


@_bounded
async def list_records(
    *,
    collection: str,
    page: int = 1,
    per_page: int = 50,
    where: Filter | None = None,
    sort: str = "",
    offset: int | None = None,
) -> list[dict[str, Any]]:
    """List records with optional filtering, sorting, and pagination.

    An explicit ``offset`` takes precedence over the one derived from ``page``.
    """
    _validate_identifier(collection)
    where = where or Filter()
    order_by = _parse_sort(sort) if sort else "rowid ASC"
    where_clause = f"WHERE {where.clause}" if where else ""
    if offset is None:
        offset = (page - 1) * per_page

    try:
        conn = await get_connection()
        query = f"SELECT * FROM {collection} {where_clause} ORDER BY {order_by} LIMIT ? OFFSET ?"  # noqa: S608 - clause is parameterized
        cursor = await conn.execute(query, [*where.params, per_page, offset])
        rows = await cursor.fetchall()
    except Exception as e:
        logger.error("list_records_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to list records from {collection}: {e}"
        raise DatabaseError(msg) from e

    records = [_row_to_record(cursor, row) for row in rows]
    logger.info("Listed records", extra={"collection": collection, "count": len(records)})
    return records


@_bounded
async def count_records(*, collection: str, where: Filter | None = None) -> int:
    """Count records matching the filter."""
    _validate_identifier(collection)
    where = where or Filter()
    where_clause = f"WHERE {where.clause}" if where else ""

    try:
        conn = await get_connection()
        query = f"SELECT COUNT(*) FROM {collection} {where_clause}"  # noqa: S608 - clause is parameterized
        cursor = await conn.execute(query, where.params)
        row = await cursor.fetchone()
    except Exception as e:
        logger.error("count_records_failed", extra={"collection": collection, "error": str(e)})
        msg = f"Failed to count records in {collection}: {e}"
        raise DatabaseError(msg) from e

    return int(row[0]) if row else 0
