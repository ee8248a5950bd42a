# src/taskforge/api/routers/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from ...core.config import Settings
from ...db.client import DbClient


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: datetime
    version: str
    uptime: float
    database_connected: bool


class ServiceInfo(BaseModel):
    success: bool = True
    message: str
    version: str
    documentation: str


class HealthGenerator:
    """Generates the service banner and health check routes."""

    def __init__(self, app: FastAPI, settings: Settings, db_client: DbClient, start_time: datetime):
        self.app = app
        self.settings = settings
        self.db_client = db_client
        self.start_time = start_time
        self.router = APIRouter(tags=["Health"])

    def generate_routes(self):
        """Creates and registers the health endpoints."""

        @self.router.get("/", response_model=ServiceInfo, summary="Service information")
        def service_info() -> ServiceInfo:
            return ServiceInfo(
                message=f"{self.settings.project_name} is running",
                version=self.settings.version,
                documentation=self.app.docs_url or "",
            )

        @self.router.get(
            "/health",
            response_model=HealthResponse,
            summary="Health check",
            description="Get the current health status of the API",
        )
        def health_check() -> HealthResponse:
            is_connected = self.db_client.test_connection()
            now = datetime.now(timezone.utc)
            return HealthResponse(
                status="healthy" if is_connected else "degraded",
                timestamp=now,
                version=self.settings.version,
                uptime=(now - self.start_time).total_seconds(),
                database_connected=is_connected,
            )

        @self.router.get(
            "/health/ping",
            response_class=PlainTextResponse,
            summary="Ping",
            description="Simple ping endpoint for load balancers",
        )
        def ping() -> str:
            return "pong"

        self.app.include_router(self.router)
