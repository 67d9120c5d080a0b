from __future__ import annotations

from collections.abc import AsyncIterator

from src.application.interfaces.lot_codec import LotCodec
from src.application.interfaces.transaction_context import TransactionContext
from src.application.use_cases.assets.common import decode_lot, state_call
from src.domain.models.lot import Lot

OPERATION = "GetAllAssets"


async def iter_assets(ctx: TransactionContext, codec: LotCodec) -> AsyncIterator[Lot]:
    """Yield every stored Lot in key order from a fresh open-ended scan.

    Stops at the first record that fails to decode. The scan is released
    however iteration ends, including when the consumer stops early.
    """
    async with state_call(OPERATION):
        entries = await ctx.state.scan("", "")
    try:
        while True:
            async with state_call(OPERATION):
                entry = await anext(entries, None)
            if entry is None:
                return
            yield decode_lot(codec, entry.value, OPERATION, entry.key)
    finally:
        async with state_call(OPERATION):
            await entries.close()


async def execute(ctx: TransactionContext, codec: LotCodec) -> list[Lot]:
    return [lot async for lot in iter_assets(ctx, codec)]
