"""The single owned reference to the current board snapshot."""

from __future__ import annotations

import logging
from typing import Callable

from swimlane.model.board import Board

logger = logging.getLogger(__name__)

Callback = Callable[[Board, Board, str], None]

LOAD = "load"
OPTIMISTIC = "optimistic"
ROLLBACK = "rollback"
REMOTE = "remote"


class BoardStore:
    """Holds the current Board and tells watchers when it is swapped.

    Snapshots are immutable, so swapping the reference is the only way
    state changes. Rolling back is swapping an older snapshot back in.
    Watchers receive (old, new, reason).
    """

    def __init__(self, board: Board) -> None:
        self._board = board
        self._watchers: list[Callback] = []

    @property
    def board(self) -> Board:
        return self._board

    def watch(self, callback: Callback) -> Callable[[], None]:
        """Watch for snapshot swaps. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    def replace(self, board: Board, reason: str) -> None:
        """Swap in a new snapshot and notify watchers."""
        old = self._board
        if board is old:
            return
        self._board = board
        logger.debug("board %s v%d -> v%d (%s)", board.id, old.version, board.version, reason)
        for cb in list(self._watchers):
            cb(old, board, reason)

    def receive_remote(self, board: Board) -> None:
        """Accept a pushed snapshot from another editor. Last write wins."""
        self.replace(board, REMOTE)
