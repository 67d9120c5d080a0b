from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncResult, AsyncSession

from src.application.errors import StorageError
from src.domain.ports.world_state import StateEntry, StateIterator, WorldState
from src.infrastructure.db.orm.world_state import WorldStateORM


class SQLAlchemyStateIterator(StateIterator):
    def __init__(self, result: AsyncResult) -> None:
        self._result: AsyncResult | None = result

    async def __anext__(self) -> StateEntry:
        if self._result is None:
            raise StorageError("State iterator already closed")
        try:
            row = await self._result.fetchone()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to advance world state scan") from exc
        if row is None:
            raise StopAsyncIteration
        key, value = row
        return StateEntry(key=key, value=bytes(value))

    async def close(self) -> None:
        if self._result is None:
            return
        result, self._result = self._result, None
        try:
            await result.close()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to release world state scan") from exc


class SQLAlchemyWorldState(WorldState):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, key: str) -> bytes | None:
        stmt = select(WorldStateORM.value).where(WorldStateORM.key == key)
        try:
            res = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StorageError("Failed to read from world state", details={"key": key}) from exc
        value = res.scalar_one_or_none()
        return bytes(value) if value else None

    async def put(self, key: str, value: bytes) -> None:
        if not key:
            raise StorageError("State key must not be empty")
        stmt = self._upsert(key, bytes(value))
        try:
            await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StorageError("Failed to put to world state", details={"key": key}) from exc

    async def scan(self, start_key: str = "", end_key: str = "") -> StateIterator:
        stmt = select(WorldStateORM.key, WorldStateORM.value).order_by(WorldStateORM.key)
        if start_key:
            stmt = stmt.where(WorldStateORM.key >= start_key)
        if end_key:
            stmt = stmt.where(WorldStateORM.key < end_key)
        try:
            result = await self.session.stream(stmt)
        except SQLAlchemyError as exc:
            raise StorageError(
                "Failed to open world state scan",
                details={"start_key": start_key, "end_key": end_key},
            ) from exc
        return SQLAlchemyStateIterator(result)

    def _upsert(self, key: str, value: bytes):
        dialect = self.session.bind.dialect.name if self.session.bind else ""
        if dialect == "postgresql":
            insert = postgresql.insert
        elif dialect == "sqlite":
            insert = sqlite.insert
        else:
            raise StorageError(f"Unsupported world state dialect: {dialect or 'unbound'}")
        stmt = insert(WorldStateORM).values(key=key, value=value)
        return stmt.on_conflict_do_update(
            index_elements=[WorldStateORM.key],
            set_={"value": stmt.excluded.value},
        )
