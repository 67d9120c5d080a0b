from __future__ import annotations

from src.application.interfaces.transaction_context import TransactionContext
from src.application.use_cases.assets.common import state_call

OPERATION = "AssetExists"


async def execute(ctx: TransactionContext, asset_id: str, *, operation: str = OPERATION) -> bool:
    async with state_call(operation, asset_id):
        value = await ctx.state.get(asset_id)
    return bool(value)
