from __future__ import annotations

import logging
from typing import Optional

from lodgebook.config.settings import Settings, get_settings
from lodgebook.core.logging import setup_logging
from lodgebook.db.session import session_factory_from_settings
from lodgebook.repositories import (
    FileGateway,
    InMemoryGateway,
    PersistenceGateway,
    SqlAlchemyGateway,
)
from lodgebook.services.store import HostelStore

logger = logging.getLogger(__name__)


def build_gateway(settings: Settings) -> PersistenceGateway:
    """Gateway for ``settings.storage.STORAGE_BACKEND``."""
    storage = settings.storage
    if storage.STORAGE_BACKEND == "memory":
        return InMemoryGateway()
    if storage.STORAGE_BACKEND == "database":
        return SqlAlchemyGateway(session_factory_from_settings(storage))
    return FileGateway(storage.STORAGE_DIR)


def create_store(settings: Optional[Settings] = None) -> HostelStore:
    """
    Store factory.

    - Configures logging from Settings.
    - Builds the gateway named by the storage backend.
    - Loads the snapshot (defaults for anything not stored yet).
    """
    settings = settings or get_settings()
    setup_logging(settings)

    gateway = build_gateway(settings)
    logger.info(
        f"Opening {settings.PROJECT_NAME} store ({settings.ENVIRONMENT}, "
        f"{settings.storage.STORAGE_BACKEND} backend)"
    )
    return HostelStore(gateway, settings=settings).load()
