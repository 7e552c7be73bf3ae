"""Domain models and DTOs."""

from taskvault.domain.create_models import LoginRequest, RegisterRequest, TaskCreate
from taskvault.domain.task import Pagination, Task, TaskPage, TaskStatus
from taskvault.domain.update_models import ProfileUpdate, TaskUpdate
from taskvault.domain.user import PublicUser, User


__all__ = [
    "LoginRequest",
    "Pagination",
    "ProfileUpdate",
    "PublicUser",
    "RegisterRequest",
    "Task",
    "TaskCreate",
    "TaskPage",
    "TaskStatus",
    "TaskUpdate",
    "User",
]
