from __future__ import annotations

from fastapi import APIRouter, Depends, status

from src.application.asset_registry import AssetRegistry
from src.application.interfaces.transaction_context import TransactionContext
from src.interfaces.http.deps import get_registry, get_transaction
from src.interfaces.http.schemas.assets import (
    ExistsResponse,
    LotCreate,
    LotResponse,
    LotTransfer,
)

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get("/", response_model=list[LotResponse])
async def get_all_assets(
    *,
    ctx: TransactionContext = Depends(get_transaction),
    registry: AssetRegistry = Depends(get_registry),
):
    lots = await registry.get_all_assets(ctx)
    return [LotResponse.from_domain(x) for x in lots]


@router.post("/", response_model=LotResponse, status_code=status.HTTP_201_CREATED)
async def create_asset(
    payload: LotCreate,
    *,
    ctx: TransactionContext = Depends(get_transaction),
    registry: AssetRegistry = Depends(get_registry),
):
    created = await registry.create_asset(
        ctx,
        payload.id,
        nf_id=payload.nf_id,
        lot_products=[p.to_domain() for p in payload.lot_products],
        owner=payload.owner,
        owner_id=payload.owner_id,
        lot_type=payload.lot_type,
        created_at=payload.created_at,
        total=payload.total,
        formated_address=payload.formated_address,
    )
    await ctx.commit()
    return LotResponse.from_domain(created)


@router.get("/{asset_id}", response_model=LotResponse)
async def read_asset(
    asset_id: str,
    *,
    ctx: TransactionContext = Depends(get_transaction),
    registry: AssetRegistry = Depends(get_registry),
):
    lot = await registry.read_asset(ctx, asset_id)
    return LotResponse.from_domain(lot)


@router.get("/{asset_id}/exists", response_model=ExistsResponse)
async def asset_exists(
    asset_id: str,
    *,
    ctx: TransactionContext = Depends(get_transaction),
    registry: AssetRegistry = Depends(get_registry),
):
    return ExistsResponse(exists=await registry.asset_exists(ctx, asset_id))


@router.put("/{asset_id}/owner", response_model=LotResponse)
async def transfer_asset(
    asset_id: str,
    payload: LotTransfer,
    *,
    ctx: TransactionContext = Depends(get_transaction),
    registry: AssetRegistry = Depends(get_registry),
):
    updated = await registry.transfer_asset(ctx, asset_id, payload.new_owner, payload.new_owner_id)
    await ctx.commit()
    return LotResponse.from_domain(updated)
