from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.asset_registry import AssetRegistry
from src.application.interfaces.transaction_context import TransactionContext
from src.interfaces.http.deps import get_registry, get_transaction
from src.interfaces.http.schemas.assets import InitLedgerResponse

router = APIRouter(prefix="/ledger", tags=["ledger"])


@router.post("/init", response_model=InitLedgerResponse)
async def init_ledger(
    *,
    ctx: TransactionContext = Depends(get_transaction),
    registry: AssetRegistry = Depends(get_registry),
):
    written = await registry.init_ledger(ctx)
    await ctx.commit()
    return InitLedgerResponse(written=written)
