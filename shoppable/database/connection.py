"""Database connection management."""

import logging
from contextlib import contextmanager
from typing import Generator, Protocol

from sqlalchemy import event, create_engine, Engine
from sqlalchemy.orm import sessionmaker, Session

from .models import Base

logger = logging.getLogger(__name__)


class DatabaseSettings(Protocol):
    """Protocol for database settings."""

    database_url: str
    db_pool_size: int
    db_pool_overflow: int
    log_level: str


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self, settings: DatabaseSettings):
        self.settings = settings
        self.engine: Engine | None = None
        self.session_factory: sessionmaker[Session] | None = None

    def initialize(self) -> None:
        """Initialize the database connection and create tables."""
        logger.info(f"Connecting to database: {self._get_log_safe_url()}")

        database_url = self.settings.database_url
        engine_options = {
            "pool_pre_ping": True,
            "echo": self.settings.log_level.upper() == "DEBUG",
        }
        # SQLite's default pools do not take size/overflow arguments
        if not database_url.startswith("sqlite"):
            engine_options["pool_size"] = self.settings.db_pool_size
            engine_options["max_overflow"] = self.settings.db_pool_overflow

        self.engine = create_engine(database_url, **engine_options)

        @event.listens_for(self.engine, "connect")
        def receive_connect(dbapi_connection, connection_record):
            logger.debug("Database connection established")

        self.session_factory = sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
        )

        Base.metadata.create_all(self.engine)
        logger.info("Database tables created/verified")

    def close(self) -> None:
        """Close the database connection."""
        if self.engine:
            self.engine.dispose()
            self.engine = None
            self.session_factory = None
            logger.info("Database connections closed")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session with automatic cleanup."""
        if not self.session_factory:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        session = self.session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        else:
            session.commit()
        finally:
            session.close()

    def _get_log_safe_url(self) -> str:
        """Get database URL with password masked for logging."""
        url = self.settings.database_url
        if "@" in url and "://" in url:
            scheme, rest = url.split("://", 1)
            if "@" in rest:
                credentials, host_part = rest.split("@", 1)
                if ":" in credentials:
                    user, _ = credentials.split(":", 1)
                    return f"{scheme}://{user}:***@{host_part}"
                else:
                    return f"{scheme}://{credentials}:***@{host_part}"
        return url


def init_database(settings: DatabaseSettings) -> DatabaseManager:
    """Create and initialize a database manager."""
    db_manager = DatabaseManager(settings)
    db_manager.initialize()
    return db_manager
