"""Main Textual application for swimlane."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from textual.app import App

from swimlane.drag import DragController
from swimlane.model.loader import board_role, can_reorder, load_board
from swimlane.store import LOAD, BoardStore
from swimlane.sync import PersistenceFailure, SyncClient
from swimlane.sync_queue import SyncQueue
from swimlane.ui.board import BoardScreen

logger = logging.getLogger(__name__)


class SwimlaneApp(App):
    """Kanban board client."""

    CSS = """
    Tooltip {
        padding: 0 1;
        margin: 0;
    }
    """

    TITLE = "swimlane"
    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+r", "reload", "Reload"),
    ]

    def __init__(self, config: dict[str, Any], board_id: Any, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__()
        self.config = config
        self.board_id = board_id
        self.client = SyncClient.from_config(config, transport=transport)
        self.store: BoardStore | None = None
        self.controller: DragController | None = None

    async def on_mount(self) -> None:
        try:
            payload = await self.client.fetch_board_payload(self.board_id)
            board = load_board(payload)
        except (PersistenceFailure, KeyError, ValueError) as exc:
            logger.error("could not load board %s: %s", self.board_id, exc)
            self.exit(return_code=1, message=f"error: could not load board {self.board_id}: {exc}")
            return

        self.store = BoardStore(board)
        queue = SyncQueue(self.client, self.store)
        self.controller = DragController(self.store, queue, can_reorder=can_reorder(board_role(payload)))
        self.push_screen(BoardScreen(self.controller))

    async def action_reload(self) -> None:
        """Fetch the board again, replacing whatever is shown."""
        if self.controller is None:
            return
        if self.controller.queue.busy:
            self.notify("Wait for the current move to be saved", severity="warning")
            return
        try:
            board = await self.client.fetch_board(self.board_id)
        except (PersistenceFailure, KeyError, ValueError) as exc:
            self.notify(f"Reload failed: {exc}", severity="error")
            return
        self.store.replace(board, LOAD)

    async def action_quit(self) -> None:
        """Stop any in-flight sync and quit."""
        if self.controller is not None:
            await self.controller.queue.aclose()
        await self.client.aclose()
        self.exit()
