from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StateEntry:
    key: str
    value: bytes


class StateIterator(ABC):
    """Cursor over an ordered key range.

    Must be released with ``close()`` (or by leaving ``async with``) on every
    exit path; closing twice is a no-op.
    """

    @abstractmethod
    async def __anext__(self) -> StateEntry: ...

    @abstractmethod
    async def close(self) -> None: ...

    def __aiter__(self) -> StateIterator:
        return self

    async def __aenter__(self) -> StateIterator:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


class WorldState(ABC):
    """Transaction-scoped view of the ledger's key/value namespace.

    Implementations raise ``StorageError`` for driver failures.
    """

    @abstractmethod
    async def get(self, key: str) -> bytes | None: ...

    @abstractmethod
    async def put(self, key: str, value: bytes) -> None: ...

    @abstractmethod
    async def scan(self, start_key: str = "", end_key: str = "") -> StateIterator:
        """Open a cursor over ``[start_key, end_key)`` in ascending key order.

        Empty bounds leave that side of the range open, so ``scan("", "")``
        walks the whole namespace.
        """
