# test/conftest.py

from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pytest
from fastapi.testclient import TestClient

from taskforge.core.config import Settings
from taskforge.core.query.builder import QuerySpec
from taskforge.db.client import DbClient
from taskforge.db.models import Task
from taskforge.db.store import TaskStore
from taskforge.forge import create_app

API_TOKEN = "test-token"
BASE_TIME = datetime(2024, 1, 1, 9, 0, 0)


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file; ignores any local .env."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'tasks.db'}",
        api_tokens=[API_TOKEN],
        log_level="WARNING",
    )


@pytest.fixture()
def db_client(settings: Settings):
    client = DbClient(settings.db_config())
    client.create_all()
    yield client
    client.dispose()


@pytest.fixture()
def store(db_client: DbClient) -> TaskStore:
    return TaskStore(db_client)


@pytest.fixture()
def client(settings: Settings, db_client: DbClient):
    """Authenticated client; the schema already exists via `db_client`."""
    app = create_app(settings)
    with TestClient(app, headers={"Authorization": f"Bearer {API_TOKEN}"}) as test_client:
        yield test_client


def task_payload(index: int = 0, **overrides: Any) -> Dict[str, Any]:
    payload = {
        "title": f"Task number {index}",
        "description": f"Description for task number {index}",
        "status": "pending",
        "priority": "medium",
        "due_date": BASE_TIME + timedelta(days=index),
    }
    payload.update(overrides)
    return payload


def seed(store: TaskStore, count: int, **overrides: Any) -> List[Task]:
    """Insert `count` tasks whose created_at increases by one minute each."""
    items = []
    for i in range(count):
        item = task_payload(i, **overrides)
        item["created_at"] = BASE_TIME + timedelta(minutes=i)
        item["updated_at"] = item["created_at"]
        items.append(item)
    return store.create_many(items)


class FakeStore:
    """
    In-memory store for pagination tests.

    Applies no filtering; records calls so tests can assert on them.
    """

    def __init__(self, records: Sequence[Any] = (), fail_on: str = ""):
        self.records = list(records)
        self.fail_on = fail_on
        self.calls: List[tuple] = []

    def find(self, spec: QuerySpec, skip: int, limit: int) -> List[Any]:
        self.calls.append(("find", skip, limit))
        if self.fail_on == "find":
            raise RuntimeError("find failed")
        return self.records[skip: skip + limit]

    def count(self, spec: QuerySpec) -> int:
        self.calls.append(("count",))
        if self.fail_on == "count":
            raise RuntimeError("count failed")
        return len(self.records)
