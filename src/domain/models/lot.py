from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(slots=True)
class LotProduct:
    name: str = ""
    quantity: int = 0
    unit_value: int = 0
    unit: str = ""
    # Record keys this schema does not know about, kept for re-encoding
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class Lot:
    id: str
    nf_id: str = ""
    lot_products: list[LotProduct] = field(default_factory=list)
    owner: str = ""
    owner_id: int = 0
    lot_type: str = ""
    created_at: str = ""
    # Caller-supplied; never derived from lot_products
    total: int = 0
    formated_address: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        lot_id: str,
        *,
        nf_id: str,
        lot_products: Iterable[LotProduct],
        owner: str,
        owner_id: int,
        lot_type: str,
        created_at: str,
        total: int,
        formated_address: str,
    ) -> Lot:
        return cls(
            id=lot_id,
            nf_id=nf_id,
            lot_products=list(lot_products),
            owner=owner,
            owner_id=owner_id,
            lot_type=lot_type,
            created_at=created_at,
            total=total,
            formated_address=formated_address,
        )

    def with_owner(self, owner: str, owner_id: int) -> Lot:
        """Return a copy carrying the new owner; every other field is shared as-is."""
        return replace(self, owner=owner, owner_id=owner_id)
