"""Application assembly for the taskforge API."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskforge.api.auth import require_auth
from taskforge.api.errors import register_error_handlers
from taskforge.api.routers.health import HealthGenerator
from taskforge.api.routers.tasks import TaskCrudOps
from taskforge.core.config import Settings, get_settings
from taskforge.core.logging import color_palette, configure_logging, log
from taskforge.db.client import DbClient
from taskforge.db.store import TaskStore


class TaskForge:
    """Builds the FastAPI app and owns the resources it shares across requests."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.db_client = DbClient(settings.db_config())
        self.store = TaskStore(self.db_client)
        self.start_time = datetime.now(timezone.utc)
        self.app = FastAPI(
            lifespan=self._lifespan,
            docs_url="/api-docs",
            debug=settings.debug,
        )
        self._initialize_app()

    def _initialize_app(self) -> None:
        """Initialize FastAPI app configuration."""
        self.app.title = self.settings.project_name
        self.app.version = self.settings.version
        self.app.description = self.settings.description

        if self.settings.author:
            self.app.contact = {"name": self.settings.author, "email": self.settings.email}

        self.app.state.settings = self.settings
        self.app.state.db_client = self.db_client

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=self.settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        log.section(f"Starting {self.settings.project_name}")
        if self.settings.auto_create_schema:
            self.db_client.create_all()
        if not self.settings.api_tokens:
            log.warn("No API tokens configured; every task route will answer 401")
        yield
        self.db_client.dispose()

    def get_store(self) -> TaskStore:
        return self.store

    def gen_task_routes(self) -> None:
        log.section("Generating Task Routes")
        router = APIRouter(prefix="/api", tags=["Tasks"], dependencies=[Depends(require_auth)])
        TaskCrudOps(router=router, store_dependency=self.get_store).generate_all()
        self.app.include_router(router)
        with log.indented():
            for route in router.routes:
                log.debug(f"{', '.join(sorted(route.methods))} {color_palette['route'](route.path)}")
        log.success(f"Generated routes for {color_palette['route']('/api/tasks')}")

    def gen_health_routes(self) -> None:
        HealthGenerator(self.app, self.settings, self.db_client, self.start_time).generate_routes()
        log.success("Generated health routes")

    def configure_error_handlers(self) -> None:
        register_error_handlers(self.app, debug=self.settings.debug)
        log.success("Configured global error handlers")

    def generate_all_routes(self) -> None:
        self.gen_health_routes()
        self.gen_task_routes()
        self.configure_error_handlers()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Application factory used by uvicorn and the tests."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    forge = TaskForge(settings)
    forge.generate_all_routes()
    return forge.app
