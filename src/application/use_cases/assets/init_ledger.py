from __future__ import annotations

import logging
from collections.abc import Iterable

from src.application.interfaces.lot_codec import LotCodec
from src.application.interfaces.transaction_context import TransactionContext
from src.application.use_cases.assets.common import encode_lot, state_call
from src.domain.models.lot import Lot

logger = logging.getLogger(__name__)

OPERATION = "InitLedger"


async def execute(ctx: TransactionContext, codec: LotCodec, seed: Iterable[Lot]) -> int:
    written = 0
    for lot in seed:
        data = encode_lot(codec, lot, OPERATION)
        async with state_call(OPERATION, lot.id):
            await ctx.state.put(lot.id, data)
        written += 1
    logger.info("Seeded world state with %d asset(s)", written)
    return written
