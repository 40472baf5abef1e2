"""
Database utilities and connection management.

WHAT: SQLite engine setup with WAL mode for the durable relay store
WHY: Let the command slot survive process restarts when configured to
HOW: SQLAlchemy sync engine built on demand, session context manager
"""

from contextlib import contextmanager

from sqlalchemy import create_engine, text, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from pathlib import Path

from ..utils.logger import get_logger

logger = get_logger(__name__)

# Base for models
Base = declarative_base()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a sync engine, enabling WAL mode for SQLite URLs.

    Args:
        database_url: SQLAlchemy URL
        echo: Log SQL statements

    Returns:
        Engine instance
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        db_path = database_url.replace("sqlite:///", "")
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        connect_args["check_same_thread"] = False  # Allow multi-threaded access

    engine = create_engine(database_url, connect_args=connect_args, echo=echo, future=True)

    if database_url.startswith("sqlite"):
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            """Enable WAL mode for better concurrency."""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to engine."""
    return sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False
    )


@contextmanager
def session_scope(factory: sessionmaker):
    """
    Context manager for database session.

    Usage:
        with session_scope(factory) as db:
            # use db session
            pass

    Yields:
        Session: SQLAlchemy session
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def ping_database(engine: Engine) -> dict:
    """
    Check database connectivity.

    Returns:
        Dict with status and info
    """
    try:
        with engine.connect() as conn:
            result = conn.execute(text("SELECT 1"))
            result.fetchone()

        return {
            "available": True,
            "url": str(engine.url),
            "error": None
        }
    except Exception as e:
        logger.error(f"Database ping failed: {e}")
        return {
            "available": False,
            "url": str(engine.url),
            "error": str(e)
        }


def init_db(engine: Engine):
    """Create all tables."""
    # Register models on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database initialized ({engine.url})")


def close_db(engine: Engine):
    """Close database connections."""
    engine.dispose()
    logger.info("Database connections closed")
