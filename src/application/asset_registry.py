from __future__ import annotations

from collections.abc import AsyncIterator, Iterable, Sequence

from src.application.interfaces.lot_codec import LotCodec
from src.application.interfaces.transaction_context import TransactionContext
from src.application.use_cases.assets import (
    asset_exists,
    create_asset,
    get_all_assets,
    init_ledger,
    read_asset,
    transfer_asset,
)
from src.domain.models.lot import Lot, LotProduct


class AssetRegistry:
    """Lot registry operations as invoked by the hosting platform.

    Every call takes the transaction context it runs in; the registry keeps
    no store handle of its own. Committing is the caller's job.
    """

    def __init__(self, codec: LotCodec, *, seed: Iterable[Lot] = ()) -> None:
        self.codec = codec
        self.seed: tuple[Lot, ...] = tuple(seed)

    async def init_ledger(self, ctx: TransactionContext) -> int:
        return await init_ledger.execute(ctx, self.codec, self.seed)

    async def create_asset(
        self,
        ctx: TransactionContext,
        asset_id: str,
        *,
        nf_id: str,
        lot_products: Sequence[LotProduct],
        owner: str,
        owner_id: int,
        lot_type: str,
        created_at: str,
        total: int,
        formated_address: str,
    ) -> Lot:
        payload = create_asset.CreateAssetInput(
            id=asset_id,
            nf_id=nf_id,
            lot_products=lot_products,
            owner=owner,
            owner_id=owner_id,
            lot_type=lot_type,
            created_at=created_at,
            total=total,
            formated_address=formated_address,
        )
        return await create_asset.execute(ctx, self.codec, payload)

    async def read_asset(self, ctx: TransactionContext, asset_id: str) -> Lot:
        return await read_asset.execute(ctx, self.codec, asset_id)

    async def asset_exists(self, ctx: TransactionContext, asset_id: str) -> bool:
        return await asset_exists.execute(ctx, asset_id)

    async def transfer_asset(
        self, ctx: TransactionContext, asset_id: str, new_owner: str, new_owner_id: int
    ) -> Lot:
        return await transfer_asset.execute(ctx, self.codec, asset_id, new_owner, new_owner_id)

    async def get_all_assets(self, ctx: TransactionContext) -> list[Lot]:
        return await get_all_assets.execute(ctx, self.codec)

    def iter_assets(self, ctx: TransactionContext) -> AsyncIterator[Lot]:
        return get_all_assets.iter_assets(ctx, self.codec)
