"""Database client owning the engine and its connection pool."""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import Engine, create_engine, inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskforge.core.config import DbConfig, PoolConfig
from taskforge.core.logging import color_palette, log
from taskforge.db.models import Base


class DbClient:
    """
    Lazily builds a pooled engine on first use and hands out sessions.

    One client is owned by the application and disposed on shutdown.
    """

    def __init__(self, config: DbConfig):
        self.config = config
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._lock = threading.Lock()

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    engine = self._create_engine()
                    # Factory first: readers only check _engine outside the lock
                    self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
                    self._engine = engine
        return self._engine

    def _create_engine(self) -> Engine:
        url = make_url(self.config.url)
        kwargs = {"echo": self.config.echo}

        if url.get_backend_name() == "sqlite":
            kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # A single shared connection, or each thread sees its own empty database
                kwargs["poolclass"] = StaticPool
            else:
                kwargs.update(self._pool_kwargs(self.config.pool))
        else:
            kwargs.update(self._pool_kwargs(self.config.pool))

        log.info(
            f"Creating engine for {color_palette['value'](url.render_as_string(hide_password=True))}"
        )
        return create_engine(url, **kwargs)

    @staticmethod
    def _pool_kwargs(pool: PoolConfig) -> dict:
        return {
            "pool_size": pool.pool_size,
            "max_overflow": pool.max_overflow,
            "pool_timeout": pool.pool_timeout,
            "pool_recycle": pool.pool_recycle,
            "pool_pre_ping": pool.pool_pre_ping,
        }

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            self.engine  # builds the factory as well
        return self._session_factory

    @contextmanager
    def session(self) -> Iterator[Session]:
        with self.session_factory() as session:
            yield session

    def test_connection(self) -> bool:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as exc:
            log.warn(f"Database connection check failed: {exc}")
            return False

    def create_all(self) -> None:
        """Create tables and indexes that do not exist yet."""
        Base.metadata.create_all(self.engine)
        tables = inspect(self.engine).get_table_names()
        log.success(f"Schema ready ({color_palette['count'](len(tables))} tables)")

    def dispose(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                log.info("Database engine disposed")
            self._engine = None
            self._session_factory = None
