from __future__ import annotations

import pytest

from src.application.errors import StorageError
from src.infrastructure.repos.world_state_memory import (
    InMemoryLedger,
    InMemoryTransactionContext,
)


async def _keys(state, start="", end=""):
    async with await state.scan(start, end) as entries:
        return [entry.key async for entry in entries]


async def test_reads_see_own_writes_before_commit(ledger):
    async with InMemoryTransactionContext(ledger) as ctx:
        await ctx.state.put("k1", b"v1")
        assert await ctx.state.get("k1") == b"v1"
        assert await _keys(ctx.state) == ["k1"]
        assert len(ledger) == 0
        await ctx.commit()
    assert ledger.get("k1") == b"v1"


async def test_writes_are_discarded_without_commit(ledger):
    async with InMemoryTransactionContext(ledger) as ctx:
        await ctx.state.put("k1", b"v1")
    assert ledger.get("k1") is None


async def test_failed_transaction_rolls_back(ledger):
    with pytest.raises(RuntimeError):
        async with InMemoryTransactionContext(ledger) as ctx:
            await ctx.state.put("k1", b"v1")
            raise RuntimeError("boom")
    assert len(ledger) == 0


async def test_scan_orders_keys_and_applies_bounds():
    ledger = InMemoryLedger({"lot3": b"3", "lot1": b"1", "a": b"a"})
    async with InMemoryTransactionContext(ledger) as ctx:
        await ctx.state.put("lot2", b"2")
        assert await _keys(ctx.state) == ["a", "lot1", "lot2", "lot3"]
        assert await _keys(ctx.state, "lot1", "lot3") == ["lot1", "lot2"]
        assert await _keys(ctx.state, "lot2") == ["lot2", "lot3"]
        assert await _keys(ctx.state, "", "lot") == ["a"]


async def test_empty_value_counts_as_absent(ledger):
    async with InMemoryTransactionContext(ledger) as ctx:
        await ctx.state.put("k1", b"")
        assert await ctx.state.get("k1") is None
        assert await _keys(ctx.state) == []


async def test_closed_iterator_refuses_to_advance(ctx):
    await ctx.state.put("k1", b"v1")
    entries = await ctx.state.scan()
    await entries.close()
    await entries.close()
    assert entries.closed
    with pytest.raises(StorageError):
        await entries.__anext__()


@pytest.mark.parametrize("key", ["", None])
async def test_empty_key_is_rejected(ctx, key):
    with pytest.raises(StorageError):
        await ctx.state.put(key, b"v")


async def test_empty_key_reads_as_absent(ctx):
    assert await ctx.state.get("") is None


async def test_non_bytes_value_is_rejected(ctx):
    with pytest.raises(StorageError):
        await ctx.state.put("k1", "text")
