"""Database interaction components for taskforge."""

from taskforge.db.client import DbClient
from taskforge.db.models import Base, Task
from taskforge.db.store import TaskStore

__all__ = ["DbClient", "Base", "Task", "TaskStore"]
