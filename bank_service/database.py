"""Database connection and session management."""
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from bank_service.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def _engine_options(url: str) -> dict:
    """Pick engine options for the given database URL."""
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live as long as their connection, so share one
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,  # Enable connection health checks
        "pool_size": 5,
        "max_overflow": 10,
    }


class Database:
    """
    Handle on the record store.

    Owns the SQLAlchemy engine and the session factory. One instance is
    created when the application starts and disposed when it stops.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine = create_engine(url, **_engine_options(url))
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def connect(self) -> bool:
        """
        Create missing tables and check connectivity.

        Returns False (after logging) when the store is unreachable; the
        service keeps running and individual requests fail instead.
        """
        try:
            # Create tables if they don't exist (in production, use migrations)
            Base.metadata.create_all(bind=self.engine)
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(
                "database_connection_failed",
                dialect=self.engine.dialect.name,
                error=str(e),
            )
            return False

        logger.info("database_connected", dialect=self.engine.dialect.name)
        return True

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("database_disposed", dialect=self.engine.dialect.name)


def get_db(request: Request) -> Iterator[Session]:
    """Dependency that provides a database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
