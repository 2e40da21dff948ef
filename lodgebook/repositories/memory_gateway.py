"""In-process gateway: a dict of payloads. Used in tests and for throwaway stores."""

from typing import Dict, List, Optional

from lodgebook.repositories.base import PersistenceGateway

__all__ = ["InMemoryGateway"]


class InMemoryGateway(PersistenceGateway):

    def __init__(self, blobs: Optional[Dict[str, bytes]] = None) -> None:
        self.blobs: Dict[str, bytes] = dict(blobs or {})
        self.saved_keys: List[str] = []

    def load(self, key: str) -> Optional[bytes]:
        return self.blobs.get(key)

    def save(self, key: str, payload: bytes) -> None:
        self.blobs[key] = bytes(payload)
        self.saved_keys.append(key)
