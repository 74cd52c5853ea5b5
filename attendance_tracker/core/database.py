"""
Database configuration, session management and schema migrations
"""

from pathlib import Path
from typing import Iterator

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine
import structlog

from attendance_tracker.core.config import get_settings

logger = structlog.get_logger(__name__)
settings = get_settings()

MIGRATIONS_PATH = Path(__file__).resolve().parent.parent / "migrations"


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections get WAL and foreign keys enabled"""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    engine = create_engine(url, echo=echo, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def alembic_config() -> AlembicConfig:
    cfg = AlembicConfig()
    cfg.set_main_option("script_location", str(MIGRATIONS_PATH))
    return cfg


def run_migrations(target: Engine = engine) -> None:
    """
    Bring the store up to the current schema.

    Safe to run on every startup: revisions already applied are skipped and
    each revision inspects the live schema before creating tables or adding
    columns, so stores created before migrations were tracked are upgraded
    in place.
    """
    logger.info("Starting database setup and migration check")
    cfg = alembic_config()
    with target.begin() as connection:
        cfg.attributes["connection"] = connection
        command.upgrade(cfg, "head")
    logger.info("Database setup and migration check complete")


def get_session() -> Iterator[Session]:
    """Dependency to get database session"""
    with Session(engine) as session:
        yield session
