"""
Encoding of snapshot collections to and from gateway payloads.

Payloads are UTF-8 JSON using the camelCase entity shapes, so blobs
written by earlier versions of the system load unchanged.
"""

import logging
from typing import Any, Dict, List

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from lodgebook.core.exceptions import PersistenceError
from lodgebook.schemas import Collection, MessFeeConfig, Payment, Resident, Room

logger = logging.getLogger(__name__)

__all__ = ["SnapshotCodec"]


class SnapshotCodec:
    """Serialize and deserialize one collection at a time."""

    def __init__(self) -> None:
        self._adapters: Dict[Collection, TypeAdapter] = {
            Collection.RESIDENTS: TypeAdapter(List[Resident]),
            Collection.PAYMENTS: TypeAdapter(List[Payment]),
            Collection.ROOMS: TypeAdapter(List[Room]),
            Collection.MESS_FEE: TypeAdapter(MessFeeConfig),
        }

    def encode(self, collection: Collection, value: Any) -> bytes:
        adapter = self._adapters[collection]
        return adapter.dump_json(value, by_alias=True, exclude_none=True)

    def decode(self, collection: Collection, payload: bytes) -> Any:
        adapter = self._adapters[collection]
        try:
            return adapter.validate_json(payload)
        except PydanticValidationError as exc:
            logger.error(
                f"Stored '{collection.value}' snapshot is invalid: {exc.error_count()} error(s)"
            )
            raise PersistenceError(
                f"Stored '{collection.value}' snapshot could not be decoded",
                collection=collection.value,
                operation="decode",
            ) from exc
