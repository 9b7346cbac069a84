"""Bulk persistence of reorder batches over HTTP.

One drag produces one request. A batch either lands whole or fails whole;
nothing is retried here, since a retry could race a newer drag and write a
stale order back.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Sequence

import httpx

from swimlane.model.board import Board, CardUpdate, ColumnUpdate
from swimlane.model.loader import load_board
from swimlane.model.writer import updates_payload

logger = logging.getLogger(__name__)

# Statuses the board service uses to reject a malformed batch before writing.
CONSISTENCY_STATUSES = {400, 404, 409, 422}


class PersistenceFailure(Exception):
    """The server did not confirm the batch: network error, timeout or non-2xx."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class ConsistencyFailure(PersistenceFailure):
    """The server rejected the whole batch as malformed (missing ids, mixed boards)."""


@dataclass(frozen=True)
class SyncResult:
    """Server acknowledgement of a batch."""

    message: str
    updated_count: int


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"HTTP {response.status_code}"


class SyncClient:
    """Async client for the board service's bulk reorder endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        token: str | None = None,
        card_reorder_path: str = "/api/cards/bulk-reorder",
        column_reorder_path: str = "/api/columns/bulk-reorder",
        board_path: str = "/api/boards/{board_id}",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._paths = {
            CardUpdate.kind: card_reorder_path,
            ColumnUpdate.kind: column_reorder_path,
        }
        self._board_path = board_path
        self._timeout = timeout
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: dict[str, Any], **kwargs) -> SyncClient:
        return cls(
            config["api_url"],
            timeout=config["timeout"],
            token=config["token"],
            card_reorder_path=config["card_reorder_path"],
            column_reorder_path=config["column_reorder_path"],
            board_path=config["board_path"],
            **kwargs,
        )

    async def __aenter__(self) -> SyncClient:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            # httpx bounds each phase separately; this bounds the whole call
            response = await asyncio.wait_for(self._http.request(method, path, **kwargs), self._timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            raise PersistenceFailure(f"{method} {path} timed out") from exc
        except httpx.HTTPError as exc:
            raise PersistenceFailure(f"{method} {path} failed: {exc}") from exc

        if not response.is_success:
            message = _error_message(response)
            if response.status_code in CONSISTENCY_STATUSES:
                raise ConsistencyFailure(message, response.status_code)
            raise PersistenceFailure(message, response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise PersistenceFailure(f"{method} {path}: invalid JSON response", response.status_code) from exc

    async def send(self, kind: str, updates: Sequence[CardUpdate | ColumnUpdate]) -> SyncResult:
        """POST one batch to the endpoint for its kind."""
        if not updates:
            raise ValueError("refusing to send an empty batch")
        path = self._paths.get(kind)
        if path is None:
            raise ValueError(f"unknown update kind: {kind}")

        logger.debug("sending %d %s updates to %s", len(updates), kind, path)
        data = await self._request("POST", path, json=updates_payload(updates))
        data = data if isinstance(data, dict) else {}
        count = data.get("updatedCount")
        if count is None:
            count = len(data.get("updatedCards") or [])
        result = SyncResult(message=data.get("message") or "", updated_count=int(count))
        logger.info("%s reorder confirmed: %d updated", kind, result.updated_count)
        return result

    async def reorder_cards(self, updates: Sequence[CardUpdate]) -> SyncResult:
        return await self.send(CardUpdate.kind, updates)

    async def reorder_columns(self, updates: Sequence[ColumnUpdate]) -> SyncResult:
        return await self.send(ColumnUpdate.kind, updates)

    async def fetch_board_payload(self, board_id: Any) -> dict:
        """GET the raw board payload."""
        data = await self._request("GET", self._board_path.format(board_id=board_id))
        if not isinstance(data, dict):
            raise PersistenceFailure(f"board {board_id}: unexpected response shape")
        return data

    async def fetch_board(self, board_id: Any) -> Board:
        """GET a board and normalize it into a snapshot."""
        return load_board(await self.fetch_board_payload(board_id))
