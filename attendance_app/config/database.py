"""
Database connection settings for the attendance persistence adapters.
Provides SQLAlchemy engine and session factory creation.

The analytics engine itself never touches the database; only the
repositories behind RecordStore / DayOffStore and the persisted alert
workflow do.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from attendance_app.config.settings import settings
from attendance_app.models.base import Base

logger = logging.getLogger(__name__)


def create_db_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create a SQLAlchemy engine.

    In-memory SQLite URLs share one connection so every session sees the
    same database.
    """
    url = url or settings.DATABASE_URL
    echo = settings.DATABASE_ECHO if echo is None else echo

    kwargs: Dict[str, Any] = {"echo": echo, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(url, **kwargs)
    logger.debug(f"Database engine created for {engine.url.render_as_string(hide_password=True)}")
    return engine


def create_session_factory(engine: Optional[Engine] = None) -> sessionmaker:
    """Create a session factory bound to the given (or default) engine"""
    return sessionmaker(
        bind=engine or create_db_engine(),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def init_db(engine: Engine) -> None:
    """Create all tables known to the declarative base"""
    # Import models so they register on Base.metadata
    import attendance_app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")

