from __future__ import annotations

import logging

from src.application.interfaces.lot_codec import LotCodec
from src.application.interfaces.transaction_context import TransactionContext
from src.application.use_cases.assets import read_asset
from src.application.use_cases.assets.common import encode_lot, state_call
from src.domain.models.lot import Lot

logger = logging.getLogger(__name__)

OPERATION = "TransferAsset"


async def execute(
    ctx: TransactionContext,
    codec: LotCodec,
    asset_id: str,
    new_owner: str,
    new_owner_id: int,
) -> Lot:
    current = await read_asset.execute(ctx, codec, asset_id, operation=OPERATION)
    updated = current.with_owner(new_owner, new_owner_id)
    data = encode_lot(codec, updated, OPERATION)
    async with state_call(OPERATION, asset_id):
        await ctx.state.put(asset_id, data)
    logger.info(
        "Transferred asset %s from %s (%s) to %s (%s)",
        asset_id,
        current.owner,
        current.owner_id,
        new_owner,
        new_owner_id,
    )
    return updated
