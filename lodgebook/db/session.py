"""Database engine and session management for the SQL snapshot store."""
import logging
from typing import Callable, Optional

from sqlalchemy import Engine, create_engine, inspect
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from lodgebook.config.settings import StorageSettings
from lodgebook.models.base import Base

logger = logging.getLogger(__name__)


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given database URL.

    In-memory SQLite shares one connection so every session sees the
    same database.
    """
    in_memory = url in ("sqlite://", "sqlite+pysqlite://") or (
        url.startswith("sqlite") and ":memory:" in url
    )
    if in_memory:
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> Callable[[], Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """
    Create the snapshot table if it does not exist yet.
    """
    existing_tables = inspect(engine).get_table_names()
    if "snapshot_blobs" in existing_tables:
        logger.debug("Snapshot table already present")
        return
    Base.metadata.create_all(bind=engine)
    logger.info("Snapshot table created")


def session_factory_from_settings(
    storage: StorageSettings,
    engine: Optional[Engine] = None,
) -> Callable[[], Session]:
    engine = engine or build_engine(storage.DATABASE_URL, echo=storage.DATABASE_ECHO)
    init_db(engine)
    return build_session_factory(engine)
