from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.application.errors import (
    AppError,
    DeserializationError,
    SerializationError,
    StorageError,
)
from src.application.interfaces.lot_codec import LotCodec
from src.domain.models.lot import Lot

logger = logging.getLogger(__name__)


@asynccontextmanager
async def state_call(operation: str, key: str | None = None) -> AsyncIterator[None]:
    """Re-signal world state failures as StorageError naming operation and key."""
    try:
        yield
    except StorageError as exc:
        logger.warning("%s: world state failure on key=%r: %s", operation, key, exc.message)
        raise StorageError(
            f"{operation} failed for key {key!r}: {exc.message}",
            details={**(exc.details or {}), "operation": operation, "key": key},
        ) from exc
    except AppError:
        raise
    except Exception as exc:
        logger.warning("%s: world state failure on key=%r: %s", operation, key, exc)
        raise StorageError(
            f"{operation} failed for key {key!r}: {exc}",
            details={"operation": operation, "key": key},
        ) from exc


def encode_lot(codec: LotCodec, lot: Lot, operation: str) -> bytes:
    try:
        return codec.encode(lot)
    except SerializationError as exc:
        raise SerializationError(
            f"{operation}: asset {lot.id} could not be serialized",
            details={**(exc.details or {}), "operation": operation, "key": lot.id},
        ) from exc


def decode_lot(codec: LotCodec, data: bytes, operation: str, key: str) -> Lot:
    try:
        return codec.decode(data)
    except DeserializationError as exc:
        logger.warning("%s: stored value under key=%r does not decode", operation, key)
        raise DeserializationError(
            f"{operation}: asset {key} could not be deserialized",
            details={**(exc.details or {}), "operation": operation, "key": key},
        ) from exc
