from fastapi.testclient import TestClient

from taskforge.core.config import Settings
from taskforge.forge import create_app


def test_service_info(client):
    body = client.get("/").json()
    assert body == {
        "success": True,
        "message": "Taskforge API is running",
        "version": "0.1.0",
        "documentation": "/api-docs",
    }


def test_health_reports_database(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["database_connected"] is True
    assert body["version"] == "0.1.0"
    assert body["uptime"] >= 0


def test_ping(client):
    response = client.get("/health/ping")
    assert response.status_code == 200
    assert response.text == "pong"


def test_docs_are_served(client):
    assert client.get("/api-docs").status_code == 200
    schema = client.get("/openapi.json").json()
    assert "/api/tasks" in schema["paths"]
    assert "/api/tasks/{task_id}" in schema["paths"]


def test_health_degraded_when_database_unreachable(tmp_path):
    settings = Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'missing' / 'nested' / 'tasks.db'}",
        auto_create_schema=False,
        log_level="WARNING",
    )
    with TestClient(create_app(settings)) as client:
        body = client.get("/health").json()
    assert body["status"] == "degraded"
    assert body["database_connected"] is False
