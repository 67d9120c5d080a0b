from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator, Callable
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.application.asset_registry import AssetRegistry
from src.config.settings import Settings
from src.domain.models.lot import Lot, LotProduct
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import world_state  # noqa: F401
from src.infrastructure.db.session import create_engine, create_session_factory
from src.infrastructure.repos.world_state_memory import (
    InMemoryLedger,
    InMemoryTransactionContext,
)
from src.infrastructure.serialization.lot_codec import JSONLotCodec
from src.interfaces.http.main import create_app


def make_lot(lot_id: str = "lot1", **overrides) -> Lot:
    values = {
        "nf_id": "NF-0001",
        "lot_products": [
            LotProduct(name="Coffee", quantity=10, unit_value=7, unit="kg"),
            LotProduct(name="Cocoa", quantity=3, unit_value=10, unit="kg"),
        ],
        "owner": "Bob",
        "owner_id": 3,
        "lot_type": "harvest",
        "created_at": "2024-03-01T12:00:00Z",
        "total": 100,
        "formated_address": "Rua das Flores 12, Belo Horizonte",
    }
    values.update(overrides)
    return Lot.create(lot_id, **values)


@pytest.fixture()
def lot_factory() -> Callable[..., Lot]:
    return make_lot


@pytest.fixture()
def codec() -> JSONLotCodec:
    return JSONLotCodec()


@pytest.fixture()
def registry(codec: JSONLotCodec) -> AssetRegistry:
    return AssetRegistry(codec)


@pytest.fixture()
def ledger() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture()
async def ctx(ledger: InMemoryLedger) -> AsyncIterator[InMemoryTransactionContext]:
    async with InMemoryTransactionContext(ledger) as context:
        yield context


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "state_backend": "sql",
            "log_level": "INFO",
        }
    )


@pytest.fixture()
async def session_factory(
    test_settings: Settings,
) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_engine(test_settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture()
def app(test_settings: Settings):
    return create_app(settings=test_settings)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
    await app.state.engine.dispose()
