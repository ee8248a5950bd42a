# src/taskforge/api/routers/tasks.py
"""CRUD routes for task records."""

from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from ...core.errors import TaskNotFound
from ...core.logging import color_palette, log
from ...core.models.tasks import (
    MessageEnvelope,
    TaskCreate,
    TaskEnvelope,
    TaskPage,
    TaskRead,
    TaskUpdate,
)
from ...core.query.builder import QueryBuilder
from ...core.query.pagination import paginate
from ...db.store import TaskStore


class TaskListParams(BaseModel):
    """Raw list parameters; the QueryBuilder does all coercion and bounding."""

    status: Optional[str] = Query(None, description="Filter by status: pending, in_progress, completed")
    priority: Optional[str] = Query(None, description="Filter by priority: low, medium, high")
    search: Optional[str] = Query(None, description="Case-insensitive text search in title and description")
    due_date_from: Optional[str] = Query(None, description="Due on or after this ISO-8601 date")
    due_date_to: Optional[str] = Query(None, description="Due on or before this ISO-8601 date")
    sort_by: Optional[str] = Query(None, description="Field to sort by (default created_at)")
    sort_order: Optional[str] = Query(None, description="asc or desc (default desc)")
    page: Optional[str] = Query(None, description="Page number, starting at 1")
    per_page: Optional[str] = Query(None, description="Items per page, 1 to 100 (default 10)")


class TaskCrudOps:
    """Registers the task CRUD routes on a router."""

    def __init__(
        self,
        router: APIRouter,
        store_dependency: Callable[..., TaskStore],
        prefix: str = "/tasks",
    ):
        self.router = router
        self.store_dependency = store_dependency
        self.prefix = prefix

    def _get_route_path(self, operation: str = "") -> str:
        return f"{self.prefix}/{operation}" if operation else self.prefix

    def read_list(self) -> None:
        """Add the filtered, sorted and paginated list route."""

        @self.router.get(
            self._get_route_path(),
            response_model=TaskPage,
            summary="Get all tasks with filtering, sorting, and pagination",
        )
        async def list_tasks(
            params: TaskListParams = Depends(),
            store: TaskStore = Depends(self.store_dependency),
        ) -> TaskPage:
            spec = QueryBuilder(params.model_dump(exclude_none=True)).build()
            log.debug(
                f"List {color_palette['task']('tasks')}: {len(spec.conditions)} filter(s), "
                f"search={spec.search.text if spec.search else None!r}, "
                f"sort={spec.sort_by} {spec.sort_dir.value}, page={spec.page}x{spec.per_page}"
            )
            page = await paginate(store, spec)
            return TaskPage(
                data=[TaskRead.model_validate(task) for task in page.data],
                meta=page.meta,
                links=page.links,
            )

    def read_one(self) -> None:
        @self.router.get(
            self._get_route_path("{task_id}"),
            response_model=TaskEnvelope,
            response_model_exclude_none=True,
            summary="Get single task by ID",
            responses={404: {"description": "Task not found"}},
        )
        def get_task(task_id: str, store: TaskStore = Depends(self.store_dependency)) -> TaskEnvelope:
            task = store.get(task_id)
            if task is None:
                raise TaskNotFound(task_id)
            return TaskEnvelope(data=TaskRead.model_validate(task))

    def create(self) -> None:
        @self.router.post(
            self._get_route_path(),
            response_model=TaskEnvelope,
            status_code=status.HTTP_201_CREATED,
            summary="Create a new task",
        )
        def create_task(
            payload: TaskCreate, store: TaskStore = Depends(self.store_dependency)
        ) -> TaskEnvelope:
            task = store.create(payload.model_dump())
            log.info(f"Task {color_palette['task'](task.id)} created")
            return TaskEnvelope(message="Task created successfully", data=TaskRead.model_validate(task))

    def update(self) -> None:
        @self.router.put(
            self._get_route_path("{task_id}"),
            response_model=TaskEnvelope,
            summary="Update task by ID",
            responses={404: {"description": "Task not found"}},
        )
        def update_task(
            task_id: str,
            payload: TaskUpdate,
            store: TaskStore = Depends(self.store_dependency),
        ) -> TaskEnvelope:
            changes = payload.model_dump(exclude_unset=True, exclude_none=True)
            task = store.update(task_id, changes)
            if task is None:
                raise TaskNotFound(task_id)
            log.info(f"Task {color_palette['task'](task.id)} updated ({', '.join(changes) or 'no fields'})")
            return TaskEnvelope(message="Task updated successfully", data=TaskRead.model_validate(task))

    def delete(self) -> None:
        @self.router.delete(
            self._get_route_path("{task_id}"),
            response_model=MessageEnvelope,
            summary="Delete task by ID",
            responses={404: {"description": "Task not found"}},
        )
        def delete_task(task_id: str, store: TaskStore = Depends(self.store_dependency)) -> MessageEnvelope:
            if not store.delete(task_id):
                raise TaskNotFound(task_id)
            log.info(f"Task {color_palette['task'](task_id)} deleted")
            return MessageEnvelope(message="Task deleted successfully")

    def generate_all(self) -> None:
        """Generate all task routes."""
        self.read_list()
        self.read_one()
        self.create()
        self.update()
        self.delete()
