from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from src.application.errors import AlreadyExists, ValidationError
from src.application.interfaces.lot_codec import LotCodec
from src.application.interfaces.transaction_context import TransactionContext
from src.application.use_cases.assets import asset_exists
from src.application.use_cases.assets.common import encode_lot, state_call
from src.domain.models.lot import Lot, LotProduct

logger = logging.getLogger(__name__)

OPERATION = "CreateAsset"


@dataclass(slots=True)
class CreateAssetInput:
    id: str
    nf_id: str = ""
    lot_products: Sequence[LotProduct] = field(default_factory=list)
    owner: str = ""
    owner_id: int = 0
    lot_type: str = ""
    created_at: str = ""
    total: int = 0
    formated_address: str = ""


async def execute(ctx: TransactionContext, codec: LotCodec, payload: CreateAssetInput) -> Lot:
    if not payload.id:
        raise ValidationError("Asset id must not be empty", details={"operation": OPERATION})
    if await asset_exists.execute(ctx, payload.id, operation=OPERATION):
        raise AlreadyExists(
            f"The asset {payload.id} already exists",
            details={"operation": OPERATION, "key": payload.id},
        )
    lot = Lot.create(
        payload.id,
        nf_id=payload.nf_id,
        lot_products=payload.lot_products,
        owner=payload.owner,
        owner_id=payload.owner_id,
        lot_type=payload.lot_type,
        created_at=payload.created_at,
        total=payload.total,
        formated_address=payload.formated_address,
    )
    data = encode_lot(codec, lot, OPERATION)
    async with state_call(OPERATION, lot.id):
        await ctx.state.put(lot.id, data)
    logger.info("Created asset %s owned by %s (%s)", lot.id, lot.owner, lot.owner_id)
    return lot
