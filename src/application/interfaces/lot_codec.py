from __future__ import annotations

from typing import Protocol

from src.domain.models.lot import Lot


class LotCodec(Protocol):
    """Canonical byte encoding of a Lot.

    ``encode`` raises ``SerializationError``; ``decode`` raises
    ``DeserializationError``.
    """

    def encode(self, lot: Lot) -> bytes: ...

    def decode(self, data: bytes) -> Lot: ...
