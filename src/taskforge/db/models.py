"""SQLAlchemy model for persisted task records."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from taskforge.core.models.tasks import TaskPriority, TaskStatus


def utcnow() -> datetime:
    """Current time as naive UTC, the form every timestamp is stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_task_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("idx_tasks_status_priority", "status", "priority"),
        Index("idx_tasks_status_due_date", "status", "due_date"),
        Index("idx_tasks_priority_due_date", "priority", "due_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_task_id)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskStatus.PENDING.value, index=True
    )
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskPriority.MEDIUM.value, index=True
    )
    due_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)

    def __repr__(self) -> str:
        return f"<Task {self.id} {self.status}/{self.priority} {self.title!r}>"
