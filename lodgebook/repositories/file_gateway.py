"""
File gateway: one ``<key>.json`` file per collection in a directory.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from lodgebook.core.exceptions import PersistenceError
from lodgebook.repositories.base import PersistenceGateway

logger = logging.getLogger(__name__)

__all__ = ["FileGateway"]


class FileGateway(PersistenceGateway):
    """
    Store each collection as a JSON file.

    Writes go to a temporary file in the same directory which then
    replaces the target, so a crash never leaves a half-written snapshot.
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.error(f"Failed to read snapshot file {path}: {exc}")
            raise PersistenceError(
                f"Could not read '{key}' from {path}", collection=key, operation="load"
            ) from exc

    def save(self, key: str, payload: bytes) -> None:
        path = self._path(key)
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            logger.error(f"Failed to write snapshot file {path}: {exc}")
            raise PersistenceError(
                f"Could not write '{key}' to {path}", collection=key, operation="save"
            ) from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
