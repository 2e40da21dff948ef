"""
SQLAlchemy gateway: one ``snapshot_blobs`` row per collection.
"""

import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lodgebook.core.exceptions import PersistenceError
from lodgebook.models import SnapshotBlob
from lodgebook.repositories.base import PersistenceGateway

logger = logging.getLogger(__name__)

__all__ = ["SqlAlchemyGateway"]


class SqlAlchemyGateway(PersistenceGateway):
    """
    Persist collections through a SQLAlchemy session factory.

    Each call opens its own short-lived session; a failed write is
    rolled back before the error is raised.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def load(self, key: str) -> Optional[bytes]:
        session = self._session_factory()
        try:
            blob = session.get(SnapshotBlob, key)
            return bytes(blob.payload) if blob is not None else None
        except SQLAlchemyError as exc:
            logger.error(f"Failed to load snapshot '{key}': {exc}")
            raise PersistenceError(
                f"Could not load '{key}' from database", collection=key, operation="load"
            ) from exc
        finally:
            session.close()

    def save(self, key: str, payload: bytes) -> None:
        session = self._session_factory()
        try:
            session.merge(SnapshotBlob(key=key, payload=payload))
            session.commit()
            logger.debug(f"Snapshot '{key}' saved ({len(payload)} bytes)")
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error(f"Failed to save snapshot '{key}': {exc}")
            raise PersistenceError(
                f"Could not save '{key}' to database", collection=key, operation="save"
            ) from exc
        finally:
            session.close()
