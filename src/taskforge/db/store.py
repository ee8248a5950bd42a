"""Store client for task records.

Every call opens its own session from the client's pool, so `find` and
`count` can safely run on different threads at the same time.
"""

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional

from sqlalchemy import ColumnElement, delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskforge.core.errors import StoreUnavailable
from taskforge.core.logging import color_palette, log
from taskforge.core.query.builder import FilterCondition, QuerySpec, SortDirection
from taskforge.core.query.operators import (
    LIKE_ESCAPE,
    LIST_OPERATORS,
    OPERATOR_MAP,
    PATTERN_OPERATORS,
)
from taskforge.db.client import DbClient
from taskforge.db.models import Task, utcnow

# Columns a client-supplied payload may write.
WRITABLE_FIELDS = ("title", "description", "status", "priority", "due_date")


def compile_condition(condition: FilterCondition) -> ColumnElement[bool]:
    """Turn a FilterCondition into a SQLAlchemy clause via OPERATOR_MAP."""
    column = getattr(Task, condition.field)
    method = getattr(column, OPERATOR_MAP[condition.op])

    if condition.op in LIST_OPERATORS:
        return method(list(condition.value))
    if condition.op == "isnull":
        return column.is_(None) if condition.value else column.is_not(None)
    if condition.op in PATTERN_OPERATORS:
        return method(condition.value, escape=LIKE_ESCAPE)
    return method(condition.value)


def compile_where(spec: QuerySpec) -> List[ColumnElement[bool]]:
    clauses = [compile_condition(c) for c in spec.conditions]
    if spec.search is not None:
        clauses.append(or_(*(compile_condition(c) for c in spec.search.conditions)))
    return clauses


def compile_order_by(spec: QuerySpec) -> List[Any]:
    """Sort key first, then id in the same direction so ties are stable."""
    columns = [getattr(Task, spec.sort_by)]
    if spec.sort_by != "id":
        columns.append(Task.id)
    if spec.sort_dir is SortDirection.ASC:
        return [c.asc() for c in columns]
    return [c.desc() for c in columns]


def _plain(value: Any) -> Any:
    """Enum members are stored by value, timestamps as naive UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return getattr(value, "value", value)


class TaskStore:
    def __init__(self, db_client: DbClient):
        self.db_client = db_client

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        with self.db_client.session() as session:
            try:
                yield session
            except SQLAlchemyError as exc:
                session.rollback()
                log.error(f"Store {color_palette['error'](operation)} failed: {exc}")
                raise StoreUnavailable(detail=str(exc)) from exc

    # ===== List Operations =====

    def find(self, spec: QuerySpec, skip: int, limit: int) -> List[Task]:
        stmt = (
            select(Task)
            .where(*compile_where(spec))
            .order_by(*compile_order_by(spec))
            .offset(skip)
            .limit(limit)
        )
        with self._session("find") as session:
            return list(session.scalars(stmt))

    def count(self, spec: QuerySpec) -> int:
        stmt = select(func.count()).select_from(Task).where(*compile_where(spec))
        with self._session("count") as session:
            return session.scalar(stmt) or 0

    # ===== Single Record Operations =====

    def get(self, task_id: str) -> Optional[Task]:
        with self._session("get") as session:
            return session.get(Task, task_id)

    def create(self, data: Dict[str, Any]) -> Task:
        return self.create_many([data])[0]

    def create_many(self, items: Iterable[Dict[str, Any]]) -> List[Task]:
        """Insert records; `created_at`/`updated_at` default to now."""
        now = utcnow()
        tasks = []
        for item in items:
            values = {"created_at": now, "updated_at": now}
            values.update({k: _plain(v) for k, v in item.items()})
            tasks.append(Task(**values))

        with self._session("create") as session:
            session.add_all(tasks)
            session.commit()
        return tasks

    def update(self, task_id: str, changes: Dict[str, Any]) -> Optional[Task]:
        """Apply `changes` to writable fields; returns None if the id is unknown."""
        with self._session("update") as session:
            task = session.get(Task, task_id)
            if task is None:
                return None
            for field, value in changes.items():
                if field in WRITABLE_FIELDS:
                    setattr(task, field, _plain(value))
            # never move updated_at backwards, even if the clock does
            task.updated_at = max(utcnow(), task.updated_at)
            session.commit()
            return task

    def delete(self, task_id: str) -> bool:
        with self._session("delete") as session:
            result = session.execute(delete(Task).where(Task.id == task_id))
            session.commit()
            return result.rowcount > 0

    def clear(self) -> int:
        with self._session("clear") as session:
            result = session.execute(delete(Task))
            session.commit()
            return result.rowcount
