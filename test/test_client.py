from sqlalchemy import inspect, select

from taskforge.core.config import DbConfig
from taskforge.db.client import DbClient
from taskforge.db.models import Task


def test_engine_is_created_lazily(tmp_path):
    client = DbClient(DbConfig(url=f"sqlite:///{tmp_path / 'lazy.db'}"))
    assert client._engine is None
    assert client.test_connection() is True
    assert client._engine is not None
    client.dispose()
    assert client._engine is None


def test_engine_is_shared(db_client):
    assert db_client.engine is db_client.engine


def test_schema_includes_indexes(db_client):
    names = {index["name"] for index in inspect(db_client.engine).get_indexes("tasks")}
    assert {
        "idx_tasks_status_priority",
        "idx_tasks_status_due_date",
        "idx_tasks_priority_due_date",
        "ix_tasks_status",
        "ix_tasks_due_date",
        "ix_tasks_created_at",
    } <= names


def test_in_memory_database_keeps_its_schema_across_sessions():
    client = DbClient(DbConfig(url="sqlite://"))
    client.create_all()
    with client.session() as session:
        assert session.scalars(select(Task)).all() == []
    client.dispose()
