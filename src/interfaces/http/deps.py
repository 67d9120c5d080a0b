from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from src.application.asset_registry import AssetRegistry
from src.application.interfaces.transaction_context import TransactionContext
from src.config.settings import Settings, get_settings


async def get_transaction(request: Request) -> AsyncIterator[TransactionContext]:
    factory = getattr(request.app.state, "transaction_factory", None)
    if factory is None:
        raise RuntimeError("Transaction factory not configured")
    ctx = factory()
    async with ctx:
        yield ctx


def get_registry(request: Request) -> AssetRegistry:
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise RuntimeError("Asset registry not configured")
    return registry


def get_app_settings() -> Settings:
    return get_settings()
