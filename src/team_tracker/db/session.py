"""SQLite engine, session factory and schema bootstrap."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..config import Settings
from ..models.tables import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine for one SQLite file and hands out sessions."""

    def __init__(self, path: Path, busy_timeout: float = 30.0) -> None:
        self.path = Path(path)
        self.busy_timeout = busy_timeout
        self.engine: Engine = self._create_engine()
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "Database":
        return cls(app_settings.database_path, busy_timeout=app_settings.sqlite_busy_timeout_seconds)

    def _create_engine(self) -> Engine:
        return create_engine(
            f"sqlite:///{self.path}",
            # requests run on the FastAPI thread pool; the timeout makes concurrent
            # writers wait for the file lock instead of failing straight away
            connect_args={"check_same_thread": False, "timeout": self.busy_timeout},
        )

    def reset(self) -> None:
        """Delete the database file so the next connection starts from an empty store."""
        self.engine.dispose()
        for candidate in (self.path, self.path.with_name(f"{self.path.name}-journal")):
            if candidate.exists():
                logger.info(f"Removing existing database file: {candidate}")
                candidate.unlink()

    def create_schema(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        Base.metadata.create_all(self.engine)
        logger.info(f"Database schema ready at {self.path}")

    def session(self) -> Session:
        return self._session_factory()

    def table_counts(self) -> dict[str, int]:
        """Row count for every table, used by the health endpoint."""
        counts: dict[str, int] = {}
        with self.session() as session:
            for table in Base.metadata.sorted_tables:
                counts[table.name] = session.scalar(select(func.count()).select_from(table)) or 0
        return counts

    def dispose(self) -> None:
        self.engine.dispose()

