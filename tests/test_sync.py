"""Tests for SyncClient against the in-memory board service."""

import httpx
import pytest

from swimlane.model.board import CardUpdate, ColumnUpdate
from swimlane.moves import calculate_card_move
from swimlane.sync import ConsistencyFailure, PersistenceFailure, SyncClient
from tests.conftest import _card_order


def _client(service, **kwargs):
    return SyncClient("http://board.test", transport=service.transport(), **kwargs)


@pytest.mark.asyncio
async def test_reorder_cards(service, board):
    updates = calculate_card_move(3, 1, 1, board)
    async with _client(service) as client:
        result = await client.reorder_cards(updates)

    assert result.updated_count == 3
    assert result.message == "Cards reordered successfully"
    assert service.requests == [
        (
            "/api/cards/bulk-reorder",
            {
                "updates": [
                    {"id": 3, "columnId": 1, "position": 1},
                    {"id": 1, "columnId": 1, "position": 2},
                    {"id": 2, "columnId": 1, "position": 3},
                ]
            },
        )
    ]
    assert _card_order(service.board, 1) == [(3, 1), (1, 2), (2, 3)]


@pytest.mark.asyncio
async def test_reorder_columns(service):
    async with _client(service) as client:
        result = await client.reorder_columns([ColumnUpdate(1, 2), ColumnUpdate(2, 1)])

    assert result.updated_count == 2
    assert service.requests[0][0] == "/api/columns/bulk-reorder"
    assert [c.id for c in service.board.columns] == [2, 1, 3]


@pytest.mark.asyncio
async def test_missing_card_is_consistency_failure(service, board):
    async with _client(service) as client:
        with pytest.raises(ConsistencyFailure) as exc_info:
            await client.reorder_cards([CardUpdate(1, 1, 2), CardUpdate(99, 1, 1)])

    assert exc_info.value.status == 404
    assert exc_info.value.message == "One or more cards not found"
    assert service.board == board


@pytest.mark.asyncio
async def test_server_error(service):
    service.fail_next(500, "database unavailable")
    async with _client(service) as client:
        with pytest.raises(PersistenceFailure) as exc_info:
            await client.reorder_cards([CardUpdate(1, 1, 2)])

    assert not isinstance(exc_info.value, ConsistencyFailure)
    assert exc_info.value.status == 500
    assert "database unavailable" in str(exc_info.value)


@pytest.mark.asyncio
async def test_timeout(service):
    service.fail_next(exc=httpx.ReadTimeout("read timed out"))
    async with _client(service, timeout=0.5) as client:
        with pytest.raises(PersistenceFailure, match="timed out") as exc_info:
            await client.reorder_cards([CardUpdate(1, 1, 2)])

    assert exc_info.value.status is None


@pytest.mark.asyncio
async def test_slow_response_times_out(service):
    service.hold()
    async with _client(service, timeout=0.05) as client:
        with pytest.raises(PersistenceFailure, match="timed out"):
            await client.reorder_cards([CardUpdate(1, 1, 2)])

    assert len(service.requests) == 1


@pytest.mark.asyncio
async def test_connection_error(service):
    service.fail_next(exc=httpx.ConnectError("connection refused"))
    async with _client(service) as client:
        with pytest.raises(PersistenceFailure, match="connection refused"):
            await client.reorder_columns([ColumnUpdate(1, 2)])


@pytest.mark.asyncio
async def test_empty_batch_is_not_sent(service):
    async with _client(service) as client:
        with pytest.raises(ValueError):
            await client.reorder_cards([])
    assert service.requests == []


@pytest.mark.asyncio
async def test_non_json_error_body():
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))
    async with SyncClient("http://board.test", transport=transport) as client:
        with pytest.raises(PersistenceFailure, match="HTTP 502"):
            await client.reorder_cards([CardUpdate(1, 1, 1)])


@pytest.mark.asyncio
async def test_updated_cards_fallback():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"message": "ok", "updatedCards": [{"id": 1}, {"id": 2}]})
    )
    async with SyncClient("http://board.test", transport=transport) as client:
        result = await client.reorder_cards([CardUpdate(1, 1, 2), CardUpdate(2, 1, 1)])
    assert result.updated_count == 2


@pytest.mark.asyncio
async def test_sends_token():
    seen = []

    def handler(request):
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json={"updatedCount": 1})

    async with SyncClient("http://board.test", token="s3cret", transport=httpx.MockTransport(handler)) as client:
        await client.reorder_columns([ColumnUpdate(1, 1)])
    assert seen == ["Bearer s3cret"]


@pytest.mark.asyncio
async def test_fetch_board(service, board):
    async with _client(service) as client:
        fetched = await client.fetch_board(1)
        payload = await client.fetch_board_payload(1)

    assert fetched == board
    assert payload["board"]["role"] == "owner"


@pytest.mark.asyncio
async def test_fetch_unknown_board(service):
    async with _client(service) as client:
        with pytest.raises(ConsistencyFailure):
            await client.fetch_board(42)


@pytest.mark.asyncio
async def test_from_config(service):
    config = {
        "api_url": "http://board.test",
        "timeout": 2.0,
        "token": None,
        "card_reorder_path": "/api/cards/bulk-reorder",
        "column_reorder_path": "/api/columns/bulk-reorder",
        "board_path": "/api/boards/{board_id}",
    }
    async with SyncClient.from_config(config, transport=service.transport()) as client:
        assert await client.fetch_board(1) == service.board
