"""Tests for the single-slot sync queue."""

import asyncio

import pytest

from swimlane.apply import apply_updates
from swimlane.model.board import CardUpdate, ColumnUpdate
from swimlane.moves import calculate_card_move
from swimlane.store import OPTIMISTIC, BoardStore
from swimlane.sync import PersistenceFailure, SyncClient
from swimlane.sync_queue import SyncQueue
from tests.conftest import _card_order, _make_board, _wait_for


def _setup(service, board):
    client = SyncClient("http://board.test", transport=service.transport())
    store = BoardStore(board)
    return client, store, SyncQueue(client, store)


def _optimistic(store, kind, updates):
    base = store.board
    store.replace(apply_updates(base, kind, updates), OPTIMISTIC)
    return base


@pytest.mark.asyncio
async def test_submit_confirms(service, board):
    client, store, queue = _setup(service, board)
    updates = calculate_card_move(3, 1, 1, board)
    base = _optimistic(store, "cards", updates)

    result = await queue.submit("cards", updates, base)

    assert result.updated_count == 3
    assert not queue.busy
    assert queue.confirmed is None
    assert _card_order(store.board, 1) == [(3, 1), (1, 2), (2, 3)]
    await client.aclose()


@pytest.mark.asyncio
async def test_failure_rolls_back_to_base(service, board):
    client, store, queue = _setup(service, board)
    service.fail_next(500)
    updates = calculate_card_move(3, 1, 1, board)
    base = _optimistic(store, "cards", updates)

    with pytest.raises(PersistenceFailure):
        await queue.submit("cards", updates, base)

    assert store.board is board
    assert queue.confirmed is None
    await client.aclose()


@pytest.mark.asyncio
async def test_batches_queued_behind_a_request_are_coalesced(service, board):
    client, store, queue = _setup(service, board)
    service.hold()

    first = calculate_card_move(3, 1, 1, board)
    t1 = asyncio.create_task(queue.submit("cards", first, _optimistic(store, "cards", first)))
    await _wait_for(lambda: len(service.requests) == 1)
    assert queue.busy

    swap = [CardUpdate(5, 2, 1), CardUpdate(4, 2, 2)]
    t2 = asyncio.create_task(queue.submit("cards", swap, _optimistic(store, "cards", swap)))
    swap_back = [CardUpdate(4, 2, 1), CardUpdate(5, 2, 2)]
    t3 = asyncio.create_task(queue.submit("cards", swap_back, _optimistic(store, "cards", swap_back)))
    await asyncio.sleep(0)

    service.release()
    r1, r2, r3 = await asyncio.gather(t1, t2, t3)

    assert len(service.requests) == 2
    assert service.requests[1][1] == {
        "updates": [
            {"id": 5, "columnId": 2, "position": 2},
            {"id": 4, "columnId": 2, "position": 1},
        ]
    }
    assert r1.updated_count == 3
    assert r2 is r3
    assert _card_order(service.board, 2) == [(4, 1), (5, 2)]
    assert not queue.busy
    await client.aclose()


@pytest.mark.asyncio
async def test_failure_fails_everything_queued(service, board):
    client, store, queue = _setup(service, board)
    service.hold()
    service.fail_next(503, "maintenance")

    first = calculate_card_move(3, 1, 1, board)
    t1 = asyncio.create_task(queue.submit("cards", first, _optimistic(store, "cards", first)))
    await _wait_for(lambda: len(service.requests) == 1)
    columns = [ColumnUpdate(3, 1), ColumnUpdate(1, 2), ColumnUpdate(2, 3)]
    t2 = asyncio.create_task(queue.submit("columns", columns, _optimistic(store, "columns", columns)))
    await asyncio.sleep(0)

    service.release()
    results = await asyncio.gather(t1, t2, return_exceptions=True)

    assert all(isinstance(r, PersistenceFailure) for r in results)
    assert results[0] is results[1]
    assert len(service.requests) == 1
    assert store.board is board
    await client.aclose()


@pytest.mark.asyncio
async def test_rollback_keeps_confirmed_batches(service, board):
    client, store, queue = _setup(service, board)
    service.hold()
    service.fail_next(500, path="/api/columns/bulk-reorder")

    cards = calculate_card_move(3, 1, 1, board)
    t1 = asyncio.create_task(queue.submit("cards", cards, _optimistic(store, "cards", cards)))
    await _wait_for(lambda: len(service.requests) == 1)
    columns = [ColumnUpdate(3, 1), ColumnUpdate(1, 2), ColumnUpdate(2, 3)]
    t2 = asyncio.create_task(queue.submit("columns", columns, _optimistic(store, "columns", columns)))
    await asyncio.sleep(0)

    service.release()
    r1, r2 = await asyncio.gather(t1, t2, return_exceptions=True)

    assert r1.updated_count == 3
    assert isinstance(r2, PersistenceFailure)
    assert store.board == apply_updates(board, "cards", cards)
    assert [c.id for c in store.board.columns] == [1, 2, 3]
    await client.aclose()


@pytest.mark.asyncio
async def test_remote_push_rebases_rollback(service, board):
    client, store, queue = _setup(service, board)
    service.hold()
    service.fail_next(500)

    updates = calculate_card_move(3, 1, 1, board)
    t1 = asyncio.create_task(queue.submit("cards", updates, _optimistic(store, "cards", updates)))
    await _wait_for(lambda: len(service.requests) == 1)

    pushed = _make_board(name="Pushed by someone else")
    store.receive_remote(pushed)
    assert queue.confirmed is pushed

    service.release()
    with pytest.raises(PersistenceFailure):
        await t1
    assert store.board is pushed
    await client.aclose()


@pytest.mark.asyncio
async def test_aclose_cancels_in_flight(service, board):
    client, store, queue = _setup(service, board)
    service.hold()

    updates = calculate_card_move(3, 1, 1, board)
    t1 = asyncio.create_task(queue.submit("cards", updates, _optimistic(store, "cards", updates)))
    await _wait_for(lambda: len(service.requests) == 1)

    await queue.aclose()

    with pytest.raises(PersistenceFailure, match="cancelled"):
        await t1
    assert store.board is board
    assert not queue.busy
    await client.aclose()
