from __future__ import annotations

import json
import logging
from pathlib import Path

from src.application.errors import DeserializationError, ValidationError
from src.domain.models.lot import Lot
from src.infrastructure.serialization.lot_codec import JSONLotCodec

logger = logging.getLogger(__name__)


def load_seed(path: str | Path, codec: JSONLotCodec | None = None) -> list[Lot]:
    """Read an InitLedger seed set: a JSON array of lot records."""
    codec = codec or JSONLotCodec()
    seed_path = Path(path)
    try:
        raw = json.loads(seed_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValidationError(
            f"Cannot read ledger seed file {seed_path}", details={"path": str(seed_path)}
        ) from exc
    if not isinstance(raw, list):
        raise ValidationError(
            "Ledger seed file must contain a JSON array of lot records",
            details={"path": str(seed_path)},
        )
    lots: list[Lot] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise DeserializationError(
                f"Seed entry {index} is not a lot record", details={"index": index}
            )
        lot = codec.decode_mapping(item)
        if not lot.id:
            raise ValidationError(f"Seed entry {index} has no ID", details={"index": index})
        lots.append(lot)
    logger.info("Loaded %d seed asset(s) from %s", len(lots), seed_path)
    return lots
