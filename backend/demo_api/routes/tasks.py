"""
SDLC Demo API — Task Route Handlers
====================================

What:  CRUD for the in-memory task board plus a statistics summary.

Route ordering:
    /stats/summary is declared before /{task_id} so "stats" is never parsed
    as a task ID.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from demo_api.dependencies import get_task_service
from demo_api.exceptions import utc_timestamp
from demo_api.schemas.common import ErrorResponse
from demo_api.schemas.task import (
    TaskCreate,
    TaskFilters,
    TaskListResponse,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdate,
)
from demo_api.services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])

_NOT_FOUND = {404: {"description": "Task not found", "model": ErrorResponse}}
_INVALID = {400: {"description": "Invalid task fields", "model": ErrorResponse}}


@router.get("", response_model=TaskListResponse, summary="List tasks with optional filters")
async def list_tasks(
    status: Optional[str] = Query(default=None, description="todo, in-progress or done"),
    priority: Optional[str] = Query(default=None, description="low, medium or high"),
    assignee: Optional[str] = Query(default=None, description="Case-insensitive substring of the assignee"),
    search: Optional[str] = Query(default=None, description="Case-insensitive search in title and description"),
    tasks: TaskService = Depends(get_task_service),
) -> TaskListResponse:
    filters = TaskFilters(status=status, priority=priority, assignee=assignee, search=search)
    data = tasks.list_tasks(status=status, priority=priority, assignee=assignee, search=search)
    logger.info("Tasks list requested with filters %s", filters.model_dump(exclude_none=True))
    return TaskListResponse(data=data, total=len(data), filters=filters, timestamp=utc_timestamp())


@router.get("/stats/summary", response_model=TaskStatsResponse, summary="Task statistics")
async def task_stats(tasks: TaskService = Depends(get_task_service)) -> TaskStatsResponse:
    logger.info("Task statistics requested")
    return TaskStatsResponse(data=tasks.stats(), timestamp=utc_timestamp())


@router.get("/{task_id}", response_model=TaskResponse, responses=_NOT_FOUND, summary="Get a task by ID")
async def get_task(task_id: int, tasks: TaskService = Depends(get_task_service)) -> TaskResponse:
    task = tasks.get_task(task_id)
    logger.info("Task %d requested", task_id)
    return TaskResponse(data=task, timestamp=utc_timestamp())


@router.post("", status_code=201, response_model=TaskResponse, responses=_INVALID, summary="Create a task")
async def create_task(
    payload: TaskCreate,
    tasks: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task = tasks.create_task(payload)
    return TaskResponse(data=task, message="Task created successfully", timestamp=utc_timestamp())


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    responses={**_NOT_FOUND, **_INVALID},
    summary="Update a task",
)
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    tasks: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task = tasks.update_task(task_id, payload)
    return TaskResponse(data=task, message="Task updated successfully", timestamp=utc_timestamp())


@router.delete("/{task_id}", response_model=TaskResponse, responses=_NOT_FOUND, summary="Delete a task")
async def delete_task(task_id: int, tasks: TaskService = Depends(get_task_service)) -> TaskResponse:
    task = tasks.delete_task(task_id)
    return TaskResponse(data=task, message="Task deleted successfully", timestamp=utc_timestamp())
