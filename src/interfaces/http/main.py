from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.application.asset_registry import AssetRegistry
from src.application.interfaces.transaction_context import TransactionContext
from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import (
    SQLAlchemyTransactionContext,
    create_engine,
    create_session_factory,
)
from src.infrastructure.repos.world_state_memory import InMemoryLedger, InMemoryTransactionContext
from src.infrastructure.serialization.lot_codec import JSONLotCodec
from src.infrastructure.serialization.seed import load_seed
from src.interfaces.http.deps import get_app_settings
from src.interfaces.http.routers import assets, ledger
from src.interfaces.middleware.error_handler import register_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    transaction_factory: Callable[[], TransactionContext] | None = None,
    registry: AssetRegistry | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Lot Registry",
        version="0.1.0",
        description="Asset registry of lots over an ordered key/value world state",
        lifespan=lifespan,
    )
    app.state.settings = settings
    if transaction_factory is None:
        if settings.state_backend == "memory":
            app.state.ledger = InMemoryLedger()
            transaction_factory = lambda: InMemoryTransactionContext(app.state.ledger)  # noqa: E731
        else:
            app.state.engine = create_engine(settings.database_url)
            app.state.session_factory = create_session_factory(app.state.engine)
            transaction_factory = lambda: SQLAlchemyTransactionContext(  # noqa: E731
                app.state.session_factory
            )
    app.state.transaction_factory = transaction_factory
    if registry is None:
        codec = JSONLotCodec()
        seed = load_seed(settings.ledger_seed_path, codec) if settings.ledger_seed_path else ()
        registry = AssetRegistry(codec, seed=seed)
    app.state.registry = registry
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(assets.router)
    api.include_router(ledger.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:  # noqa: ANN001
        return {"status": "ok"}

    app.include_router(api)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
