from taskvault.services import (
    ownership,
    session_service,
    task_query,
    task_service,
    user_service,
)


__all__ = [
    "ownership",
    "session_service",
    "task_query",
    "task_service",
    "user_service",
]
