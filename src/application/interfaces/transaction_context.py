from __future__ import annotations

from typing import Protocol

from src.domain.ports.world_state import WorldState


class TransactionContext(Protocol):
    # Valid only between __aenter__ and __aexit__
    state: WorldState

    async def __aenter__(self) -> TransactionContext: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
