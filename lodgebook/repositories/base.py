"""
Persistence gateway contract.

A gateway is a key-value blob store keyed by collection name. It knows
nothing about entities; encoding lives in ``snapshot_codec``.
"""

from abc import ABC, abstractmethod
from typing import Optional

__all__ = ["PersistenceGateway"]


class PersistenceGateway(ABC):
    """
    Blob store the snapshot is read from at startup and written to after
    each committed mutation.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[bytes]:
        """
        Return the stored payload for ``key``, or ``None`` when absent.

        Raises:
            PersistenceError: If the backend cannot be read
        """

    @abstractmethod
    def save(self, key: str, payload: bytes) -> None:
        """
        Replace the payload stored under ``key``.

        Raises:
            PersistenceError: If the backend cannot be written
        """

    def close(self) -> None:
        """Release backend resources."""
