"""Single-slot sync queue with coalescing and rollback.

At most one bulk request is in flight. Batches submitted meanwhile wait
in the queue, one slot per kind, and are merged so the next request
carries the latest position for every id. The queue remembers the last
snapshot the server has confirmed; when a request fails, that snapshot
goes back into the store and everything still queued fails with it.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from swimlane.apply import apply_updates
from swimlane.model.board import Board, CardUpdate, ColumnUpdate
from swimlane.store import REMOTE, ROLLBACK, BoardStore
from swimlane.sync import PersistenceFailure, SyncClient, SyncResult

logger = logging.getLogger(__name__)


@dataclass
class _Batch:
    kind: str
    updates: dict[Any, CardUpdate | ColumnUpdate] = field(default_factory=dict)
    waiters: list[asyncio.Future] = field(default_factory=list)


class SyncQueue:
    """Serializes reorder batches to the server, one request at a time."""

    def __init__(self, client: SyncClient, store: BoardStore) -> None:
        self._client = client
        self._store = store
        self._pending: dict[str, _Batch] = {}
        self._confirmed: Board | None = None
        self._task: asyncio.Task | None = None
        self._unwatch = store.watch(self._on_board_replaced)

    @property
    def busy(self) -> bool:
        """True while a request is in flight or batches are waiting."""
        return self._task is not None and not self._task.done()

    @property
    def confirmed(self) -> Board | None:
        """The snapshot to roll back to, or None when nothing is unconfirmed."""
        return self._confirmed

    async def submit(self, kind: str, updates: Sequence[CardUpdate | ColumnUpdate], base: Board) -> SyncResult:
        """Queue a batch and wait for the request that carries it.

        base is the snapshot the batch was computed against; it becomes the
        rollback point unless earlier batches are still unconfirmed.
        Raises PersistenceFailure if the batch, or one it was queued behind,
        is rejected.
        """
        if self._confirmed is None:
            self._confirmed = base

        batch = self._pending.get(kind)
        if batch is None:
            batch = self._pending[kind] = _Batch(kind)
        elif self.busy:
            logger.debug("coalescing %d %s updates into queued batch", len(updates), kind)
        for update in updates:
            batch.updates[update.id] = update

        waiter = asyncio.get_running_loop().create_future()
        batch.waiters.append(waiter)

        if not self.busy:
            self._task = asyncio.create_task(self._drain())
        return await waiter

    async def _drain(self) -> None:
        while self._pending:
            kind = next(iter(self._pending))
            batch = self._pending.pop(kind)
            updates = list(batch.updates.values())
            try:
                result = await self._client.send(kind, updates)
            except PersistenceFailure as exc:
                self._fail(batch, exc)
                return
            except asyncio.CancelledError:
                self._fail(batch, PersistenceFailure("sync cancelled"))
                raise
            except Exception as exc:
                logger.exception("unexpected error sending %s batch", kind)
                self._fail(batch, PersistenceFailure(str(exc)))
                return

            self._confirmed = apply_updates(self._confirmed, kind, updates)
            for waiter in batch.waiters:
                if not waiter.done():
                    waiter.set_result(result)
        self._confirmed = None

    def _fail(self, batch: _Batch, exc: PersistenceFailure) -> None:
        """Roll the store back to the confirmed snapshot and fail every waiter."""
        waiters = list(batch.waiters)
        for queued in self._pending.values():
            waiters.extend(queued.waiters)
        self._pending.clear()

        confirmed = self._confirmed
        self._confirmed = None
        logger.warning("%s batch rejected (%s); rolling back", batch.kind, exc)
        if confirmed is not None:
            self._store.replace(confirmed, ROLLBACK)

        for waiter in waiters:
            if not waiter.done():
                waiter.set_exception(exc)

    def _on_board_replaced(self, old: Board, new: Board, reason: str) -> None:
        """A pushed snapshot wins over our unconfirmed base."""
        if reason == REMOTE and self._confirmed is not None:
            self._confirmed = new

    async def aclose(self) -> None:
        """Cancel any in-flight request and stop watching the store."""
        if self.busy:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._unwatch()
