"""
SDLC Demo API — Task Service
=============================

What:  In-memory task board backing /api/tasks.
Why:   A full CRUD resource with filtering and validation for exercising
       the API, analytics and monitoring end-to-end.
How:   A list of Task models seeded with three demo tasks. One instance per app.

Validation (400 Bad Request):
    - create: title and description are required
    - create/update: status must be todo, in-progress or done
    - create/update: priority must be low, medium or high
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from demo_api.exceptions import NotFoundError, ValidationError, utc_timestamp
from demo_api.schemas.task import (
    VALID_PRIORITIES,
    VALID_STATUSES,
    Task,
    TaskCreate,
    TaskStats,
    TaskUpdate,
)

logger = logging.getLogger(__name__)


def _validate_choices(status: Optional[str], priority: Optional[str]) -> None:
    if status and status not in VALID_STATUSES:
        raise ValidationError(
            message="Invalid status. Must be: todo, in-progress, or done",
            field="status",
        )
    if priority and priority not in VALID_PRIORITIES:
        raise ValidationError(
            message="Invalid priority. Must be: low, medium, or high",
            field="priority",
        )


def _is_overdue(due_date: Optional[str], now: datetime) -> bool:
    if not due_date:
        return False
    try:
        due = datetime.fromisoformat(due_date.replace("Z", "+00:00"))
    except ValueError:
        return False
    if due.tzinfo is None:
        due = due.replace(tzinfo=timezone.utc)
    return due < now


class TaskService:
    """CRUD, filtering and summary statistics over the in-memory task list."""

    def __init__(self):
        now = utc_timestamp()
        self._tasks: List[Task] = [
            Task(
                id=1,
                title="Setup CI/CD Pipeline",
                description="Configure GitHub Actions for automated testing and deployment",
                status="done",
                priority="high",
                assignee="John Doe",
                created_at=now,
                updated_at=now,
                tags=["devops", "automation"],
            ),
            Task(
                id=2,
                title="Add monitoring endpoints",
                description="Implement health checks and metrics collection",
                status="in-progress",
                priority="medium",
                assignee="Jane Smith",
                created_at=now,
                updated_at=now,
                tags=["monitoring", "observability"],
            ),
            Task(
                id=3,
                title="Write API documentation",
                description="Create comprehensive API documentation with examples",
                status="todo",
                priority="medium",
                created_at=now,
                updated_at=now,
                tags=["documentation"],
            ),
        ]

    def list_tasks(
        self,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        assignee: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Task]:
        """
        Filter tasks. All filters are optional and combine with AND.

        assignee: case-insensitive substring of the assignee name
        search:   case-insensitive substring of title or description
        """
        tasks = list(self._tasks)
        if status:
            tasks = [t for t in tasks if t.status == status]
        if priority:
            tasks = [t for t in tasks if t.priority == priority]
        if assignee:
            needle = assignee.lower()
            tasks = [t for t in tasks if t.assignee and needle in t.assignee.lower()]
        if search:
            needle = search.lower()
            tasks = [
                t for t in tasks
                if needle in t.title.lower() or needle in t.description.lower()
            ]
        return tasks

    def get_task(self, task_id: int) -> Task:
        return self._tasks[self._index_of(task_id)]

    def create_task(self, payload: TaskCreate) -> Task:
        if not payload.title or not payload.description:
            raise ValidationError(message="Title and description are required")
        _validate_choices(payload.status, payload.priority)

        now = utc_timestamp()
        task = Task(
            id=max((t.id for t in self._tasks), default=0) + 1,
            title=payload.title,
            description=payload.description,
            status=payload.status or "todo",
            priority=payload.priority or "medium",
            assignee=payload.assignee,
            created_at=now,
            updated_at=now,
            due_date=payload.due_date,
            tags=payload.tags or [],
        )
        self._tasks.append(task)
        logger.info("New task created: %d", task.id)
        return task

    def update_task(self, task_id: int, payload: TaskUpdate) -> Task:
        index = self._index_of(task_id)
        _validate_choices(payload.status, payload.priority)

        existing = self._tasks[index]
        provided = payload.model_fields_set
        updated = existing.model_copy(
            update={
                "title": payload.title or existing.title,
                "description": payload.description or existing.description,
                "status": payload.status or existing.status,
                "priority": payload.priority or existing.priority,
                "assignee": payload.assignee if "assignee" in provided else existing.assignee,
                "due_date": payload.due_date if "due_date" in provided else existing.due_date,
                "tags": (payload.tags or []) if "tags" in provided else existing.tags,
                "updated_at": utc_timestamp(),
            }
        )
        self._tasks[index] = updated
        logger.info("Task %d updated", task_id)
        return updated

    def delete_task(self, task_id: int) -> Task:
        index = self._index_of(task_id)
        deleted = self._tasks.pop(index)
        logger.info("Task %d deleted", task_id)
        return deleted

    def stats(self) -> TaskStats:
        now = datetime.now(timezone.utc)
        tasks = self._tasks
        return TaskStats(
            total=len(tasks),
            by_status={
                "todo": sum(1 for t in tasks if t.status == "todo"),
                "inProgress": sum(1 for t in tasks if t.status == "in-progress"),
                "done": sum(1 for t in tasks if t.status == "done"),
            },
            by_priority={p: sum(1 for t in tasks if t.priority == p) for p in VALID_PRIORITIES},
            assigned=sum(1 for t in tasks if t.assignee),
            unassigned=sum(1 for t in tasks if not t.assignee),
            overdue=sum(1 for t in tasks if _is_overdue(t.due_date, now)),
        )

    def _index_of(self, task_id: int) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise NotFoundError(resource="Task", resource_id=task_id)
