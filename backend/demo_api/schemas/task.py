"""
SDLC Demo API — Task Schemas
=============================

Task lifecycle:
    status:   todo → in-progress → done
    priority: low | medium | high

Request bodies accept any string for status and priority so the service can
reply with the documented 400 message listing the valid values (instead of
FastAPI's generic schema error).
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TaskStatus = Literal["todo", "in-progress", "done"]
TaskPriority = Literal["low", "medium", "high"]

VALID_STATUSES = ("todo", "in-progress", "done")
VALID_PRIORITIES = ("low", "medium", "high")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Task(_CamelModel):
    id: int
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    assignee: Optional[str] = None
    created_at: str
    updated_at: str
    due_date: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class TaskCreate(_CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    assignee: Optional[str] = None
    due_date: Optional[str] = None
    tags: Optional[List[str]] = None


class TaskUpdate(TaskCreate):
    """
    Body of PUT /api/tasks/{id}.

    Empty title/description/status/priority keep the existing value;
    assignee, dueDate and tags are replaced whenever they are present in
    the body, even when null.
    """


class TaskFilters(BaseModel):
    status: Optional[str] = None
    priority: Optional[str] = None
    assignee: Optional[str] = None
    search: Optional[str] = None


class TaskListResponse(BaseModel):
    data: List[Task]
    total: int
    filters: TaskFilters
    timestamp: str


class TaskResponse(BaseModel):
    data: Task
    timestamp: str
    message: Optional[str] = None


class TaskStats(_CamelModel):
    total: int
    by_status: Dict[str, int]
    by_priority: Dict[str, int]
    assigned: int
    unassigned: int
    overdue: int


class TaskStatsResponse(BaseModel):
    data: TaskStats
    timestamp: str
