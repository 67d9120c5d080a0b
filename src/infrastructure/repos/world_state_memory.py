from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from src.application.errors import StorageError
from src.domain.ports.world_state import StateEntry, StateIterator, WorldState

logger = logging.getLogger(__name__)


class InMemoryLedger:
    """Committed key/value pairs shared by every transaction opened on it."""

    def __init__(self, initial: Mapping[str, bytes] | None = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def snapshot(self) -> dict[str, bytes]:
        return dict(self._data)

    def apply(self, writes: Mapping[str, bytes]) -> None:
        for key, value in writes.items():
            if value:
                self._data[key] = value
            else:
                self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)


class InMemoryStateIterator(StateIterator):
    def __init__(self, entries: Iterable[StateEntry]) -> None:
        self._entries = iter(list(entries))
        self.closed = False

    async def __anext__(self) -> StateEntry:
        if self.closed:
            raise StorageError("State iterator already closed")
        try:
            return next(self._entries)
        except StopIteration:
            raise StopAsyncIteration from None

    async def close(self) -> None:
        self.closed = True


class InMemoryWorldState(WorldState):
    """Ledger view with buffered writes; reads see this transaction's own writes."""

    def __init__(self, ledger: InMemoryLedger) -> None:
        self._ledger = ledger
        self.writes: dict[str, bytes] = {}

    async def get(self, key: str) -> bytes | None:
        if key in self.writes:
            return self.writes[key] or None
        return self._ledger.get(key)

    async def put(self, key: str, value: bytes) -> None:
        _ensure_key(key)
        if not isinstance(value, (bytes, bytearray)):
            raise StorageError("State value must be bytes", details={"key": key})
        self.writes[key] = bytes(value)

    async def scan(self, start_key: str = "", end_key: str = "") -> StateIterator:
        merged = self._ledger.snapshot()
        merged.update(self.writes)
        keys = sorted(
            k
            for k, v in merged.items()
            if v and k >= start_key and (not end_key or k < end_key)
        )
        return InMemoryStateIterator(StateEntry(k, merged[k]) for k in keys)


class InMemoryTransactionContext:
    def __init__(self, ledger: InMemoryLedger) -> None:
        self._ledger = ledger
        self.state: InMemoryWorldState | None = None

    async def __aenter__(self) -> InMemoryTransactionContext:
        self.state = InMemoryWorldState(self._ledger)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc:
            await self.rollback()
        self.state = None

    async def commit(self) -> None:
        if not self.state:
            return
        logger.debug("Committing %d buffered write(s)", len(self.state.writes))
        self._ledger.apply(self.state.writes)
        self.state.writes = {}

    async def rollback(self) -> None:
        if not self.state:
            return
        self.state.writes = {}


def _ensure_key(key: str) -> None:
    if not key:
        raise StorageError("State key must not be empty")
