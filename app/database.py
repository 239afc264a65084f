"""Database session management."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import get_settings
from app.exceptions import StoreUnavailableError

logger = logging.getLogger("newsline")

settings = get_settings()


def engine_options(database_url: str, timeout_seconds: float) -> dict:
    """Engine keyword arguments that bound how long a caller waits on the database.

    SQLite waits at most `timeout_seconds` for a lock. Server backends wait at
    most that long for a pooled connection; PostgreSQL also gets a per-statement
    timeout. Other server backends have no statement bound.
    """
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False, "timeout": timeout_seconds}}
    options = {"pool_pre_ping": True, "pool_timeout": timeout_seconds}
    if database_url.startswith("postgresql"):
        options["connect_args"] = {"options": f"-c statement_timeout={int(timeout_seconds * 1000)}"}
    return options


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **engine_options(settings.DATABASE_URL, settings.DB_TIMEOUT_SECONDS),
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def get_db() -> Generator[Session, None, None]:
    """Yield a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(db: Session) -> Iterator[None]:
    """Roll back and raise StoreUnavailableError when the database cannot be reached."""
    try:
        yield
    except OperationalError as e:
        db.rollback()
        logger.error("Database unavailable: %s", e)
        raise StoreUnavailableError("Database unavailable") from e
