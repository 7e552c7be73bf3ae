"""Task routes; every operation is scoped to the authenticated owner."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from taskvault.domain.create_models import TaskCreate
from taskvault.domain.update_models import TaskUpdate
from taskvault.interface.auth_gate import AuthContext, require_user
from taskvault.interface.responses import success
from taskvault.services import task_query, task_service


router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("")
async def list_tasks(
    *,
    auth: AuthContext = Depends(require_user),
    search: str | None = Query(default=None),
    status_filter: str | None = Query(default=None, alias="status"),
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
) -> JSONResponse:
    """List the caller's tasks with optional search, status filter and paging."""
    result = await task_query.list_tasks(
        owner_id=auth.user_id,
        search=search,
        status=status_filter,
        page=page,
        limit=limit,
    )
    return success(
        data=[task.public() for task in result.items],
        pagination=result.pagination_block(),
    )


@router.get("/{task_id}")
async def get_task(task_id: str, auth: AuthContext = Depends(require_user)) -> JSONResponse:
    task = await task_service.get_owned_task(task_id=task_id, owner_id=auth.user_id)
    return success(data=task.public())


@router.post("")
async def create_task(body: TaskCreate, auth: AuthContext = Depends(require_user)) -> JSONResponse:
    task = await task_service.create_task(
        owner_id=auth.user_id,
        title=body.title,
        description=body.description,
        status=body.status,
    )
    return success(status.HTTP_201_CREATED, data=task.public())


@router.put("/{task_id}")
async def update_task(task_id: str, body: TaskUpdate, auth: AuthContext = Depends(require_user)) -> JSONResponse:
    """Update a task; title and description must both be present."""
    task = await task_service.update_task(
        task_id=task_id,
        owner_id=auth.user_id,
        fields=body.model_dump(exclude_none=True),
        require_all=True,
    )
    return success(data=task.public())


@router.delete("/{task_id}")
async def delete_task(task_id: str, auth: AuthContext = Depends(require_user)) -> JSONResponse:
    await task_service.delete_task(task_id=task_id, owner_id=auth.user_id)
    return success(data={})
