"""Task domain models, enums and validation."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from taskvault.core.config import constants
from taskvault.core.errors import FieldError


class TaskStatus(StrEnum):
    """Task lifecycle status."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Task(BaseModel):
    """Task data transfer object."""

    id: str = Field(..., description="Opaque task ID")
    title: str = Field(..., description="Task title")
    description: str = Field(..., description="Detailed task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Current status")
    owner_id: str = Field(..., description="Owning user ID; set at creation, never reassigned")
    created: str = Field(..., description="Creation timestamp (ISO format)")
    updated: str = Field(..., description="Last update timestamp (ISO format)")

    def public(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "owner": self.owner_id,
            "createdAt": self.created,
            "updatedAt": self.updated,
        }


class Pagination(BaseModel):
    """A validated pagination window."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=constants.DEFAULT_PAGE, ge=1)
    limit: int = Field(default=constants.DEFAULT_PAGE_LIMIT, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class TaskPage(BaseModel):
    """One page of a task listing plus the paging arithmetic."""

    items: list[Task]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        # ceil(total / limit) without float rounding
        return -(-self.total // self.limit)

    def pagination_block(self) -> dict[str, int]:
        return {"page": self.page, "limit": self.limit, "total": self.total, "pages": self.pages}


def _check_text(field: str, value: str | None, *, max_length: int, required: bool) -> list[FieldError]:
    label = field.capitalize()
    if value is None:
        return [FieldError(field=field, message=f"{label} is required")] if required else []
    if not value.strip():
        return [FieldError(field=field, message=f"{label} is required")]
    if len(value) > max_length:
        return [FieldError(field=field, message=f"{label} too long (max {max_length} characters)")]
    return []


def validate_task_fields(
    *,
    title: str | None,
    description: str | None,
    status: str | None,
    require_all: bool,
) -> list[FieldError]:
    """Validate task input, returning every field error found.

    With ``require_all`` a missing title or description is an error; otherwise
    only supplied values are checked. Status is always optional.
    """
    errors = [
        *_check_text("title", title, max_length=constants.MAX_TITLE_LENGTH, required=require_all),
        *_check_text("description", description, max_length=constants.MAX_DESCRIPTION_LENGTH, required=require_all),
    ]
    if status is not None and status not in {s.value for s in TaskStatus}:
        allowed = ", ".join(s.value for s in TaskStatus)
        errors.append(FieldError(field="status", message=f"Status must be one of: {allowed}"))
    return errors
