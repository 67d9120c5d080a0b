from __future__ import annotations

from src.application.errors import NotFound
from src.application.interfaces.lot_codec import LotCodec
from src.application.interfaces.transaction_context import TransactionContext
from src.application.use_cases.assets.common import decode_lot, state_call
from src.domain.models.lot import Lot

OPERATION = "ReadAsset"


async def execute(
    ctx: TransactionContext,
    codec: LotCodec,
    asset_id: str,
    *,
    operation: str = OPERATION,
) -> Lot:
    async with state_call(operation, asset_id):
        value = await ctx.state.get(asset_id)
    if not value:
        raise NotFound(
            f"The asset {asset_id} does not exist",
            details={"operation": operation, "key": asset_id},
        )
    return decode_lot(codec, value, operation, asset_id)
