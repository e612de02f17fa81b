"""
Per-cell serialization of read-modify-write sequences.

Recording an expense reads a formula, appends a term and writes it
back. Two commands doing that to the same cell at once would both
read the same "before" and one expense would be lost. Holding the
cell's lock across the whole sequence prevents that within this
process. Other writers (a second bot instance, a person editing the
sheet) are not covered.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class CellLocks:
    """A registry of asyncio locks keyed by cell reference."""

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}

    def lock_for(self, cell: str) -> asyncio.Lock:
        # Runs on the event loop thread only, so plain dict access is safe
        lock = self._locks.get(cell)
        if lock is None:
            lock = self._locks[cell] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, cell: str) -> AsyncIterator[None]:
        """Hold the lock of `cell` for the duration of the block."""
        async with self.lock_for(cell):
            yield

    def __len__(self) -> int:
        return len(self._locks)
