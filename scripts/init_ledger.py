#!/usr/bin/env python3
"""
Script to seed the world state with the InitLedger seed set.

Runs InitLedger once inside a single transaction against the configured
backend (DATABASE_URL) and commits.

Usage:
  python scripts/init_ledger.py [--seed path/to/seed.json] [--list]
"""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.asset_registry import AssetRegistry
from src.application.errors import AppError
from src.config.settings import get_settings
from src.infrastructure.db.session import (
    SQLAlchemyTransactionContext,
    create_engine,
    create_session_factory,
)
from src.infrastructure.serialization.lot_codec import JSONLotCodec
from src.infrastructure.serialization.seed import load_seed


async def init_ledger(seed_path: str | None, show: bool) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    codec = JSONLotCodec()

    try:
        path = seed_path or settings.ledger_seed_path
        seed = load_seed(path, codec) if path else []
        registry = AssetRegistry(codec, seed=seed)

        async with SQLAlchemyTransactionContext(session_factory) as ctx:
            written = await registry.init_ledger(ctx)
            await ctx.commit()
        print(f"✅ InitLedger wrote {written} asset(s)")

        if show:
            async with SQLAlchemyTransactionContext(session_factory) as ctx:
                async for lot in registry.iter_assets(ctx):
                    print(f"   {lot.id}: owner={lot.owner} ({lot.owner_id}) total={lot.total}")
    except AppError as exc:
        print(f"\n❌ Error seeding ledger: [{exc.code}] {exc.message}")
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Seed the world state via InitLedger")
    parser.add_argument("--seed", help="JSON array of lot records (defaults to LEDGER_SEED_PATH)")
    parser.add_argument("--list", action="store_true", help="List every asset afterwards")

    args = parser.parse_args()

    asyncio.run(init_ledger(args.seed, args.list))
