"""Drag lifecycle: capture, calculate, apply, sync, then commit or roll back.

States:

    IDLE --start--> DRAGGING --end, no target--> IDLE
                    DRAGGING --end, target-----> RESOLVING
    RESOLVING --no updates--> IDLE
    RESOLVING --updates-----> APPLYING --> SYNCING --ok/fail--> IDLE

A drag may start while an earlier batch is still SYNCING; that batch keeps
going in the SyncQueue and the new one is queued behind it.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable

from swimlane.apply import apply_updates
from swimlane.ids import CARD, COLUMN, DROP_ZONE, DragRef, drop_zone_id, parse_drag_id
from swimlane.model.board import CardUpdate, ColumnUpdate
from swimlane.moves import calculate_card_move, calculate_column_move, resolve_drop_target
from swimlane.store import OPTIMISTIC, BoardStore
from swimlane.sync import PersistenceFailure
from swimlane.sync_queue import SyncQueue

logger = logging.getLogger(__name__)


class DragState(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RESOLVING = "resolving"
    APPLYING = "applying"
    SYNCING = "syncing"


class Outcome(str, enum.Enum):
    CANCELLED = "cancelled"
    INVALID = "invalid"
    NOOP = "noop"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass
class DragOutcome:
    """What a finished drag amounted to."""

    status: Outcome
    updates: list[CardUpdate | ColumnUpdate] = field(default_factory=list)
    error: PersistenceFailure | None = None


TransitionCallback = Callable[[DragState, DragState], None]
ErrorCallback = Callable[[PersistenceFailure], None]


class DragController:
    """Sequences one drag at a time through the reordering engine.

    can_reorder is the caller's precomputed permission for this board;
    when False every drag is refused before anything happens.
    """

    def __init__(self, store: BoardStore, queue: SyncQueue, can_reorder: bool = True) -> None:
        self.store = store
        self.queue = queue
        self.can_reorder = can_reorder
        self._state = DragState.IDLE
        self._active: DragRef | None = None
        self._transition_listeners: list[TransitionCallback] = []
        self._error_listeners: list[ErrorCallback] = []

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def active(self) -> DragRef | None:
        """The item being dragged, if any."""
        return self._active

    def on_transition(self, callback: TransitionCallback) -> Callable[[], None]:
        """Call back on every state change. Returns an unsubscribe callable."""
        self._transition_listeners.append(callback)
        return lambda: callback in self._transition_listeners and self._transition_listeners.remove(callback)

    def on_error(self, callback: ErrorCallback) -> Callable[[], None]:
        self._error_listeners.append(callback)
        return lambda: callback in self._error_listeners and self._error_listeners.remove(callback)

    def _set_state(self, new: DragState) -> None:
        old = self._state
        if old is new:
            return
        self._state = new
        logger.debug("drag %s -> %s", old.value, new.value)
        for cb in list(self._transition_listeners):
            cb(old, new)

    def _settle(self) -> None:
        """Leave the current cycle: SYNCING if a batch is still out, else IDLE."""
        self._active = None
        self._set_state(DragState.SYNCING if self.queue.busy else DragState.IDLE)

    # -- events --

    def drag_start(self, item_id) -> bool:
        """Capture the dragged item. Returns False if the drag is refused."""
        if not self.can_reorder:
            logger.debug("drag refused: board is read-only")
            return False
        if self._state not in (DragState.IDLE, DragState.SYNCING):
            logger.debug("drag refused: already %s", self._state.value)
            return False
        ref = parse_drag_id(item_id)
        if ref is None or ref.kind not in (CARD, COLUMN):
            logger.debug("drag refused: not a draggable id %r", item_id)
            return False
        self._active = ref
        self._set_state(DragState.DRAGGING)
        return True

    def drag_cancel(self) -> None:
        """Abandon the drag. Nothing has been changed yet, so nothing to undo."""
        if self._state is DragState.DRAGGING:
            self._settle()

    async def drag_end(self, over_id) -> DragOutcome:
        """Finish the drag over over_id (None when dropped outside any target)."""
        if self._state is not DragState.DRAGGING or self._active is None:
            return DragOutcome(Outcome.CANCELLED)

        active = self._active
        if over_id is None:
            self._settle()
            return DragOutcome(Outcome.CANCELLED)

        self._set_state(DragState.RESOLVING)
        base = self.store.board
        if active.kind == CARD:
            kind = CardUpdate.kind
            updates = self._resolve_card(active.id, over_id)
        else:
            kind = ColumnUpdate.kind
            updates = self._resolve_column(active.id, over_id)

        if updates is None:
            logger.debug("drop of %s over %r is not a valid move", active, over_id)
            self._settle()
            return DragOutcome(Outcome.INVALID)
        if not updates:
            self._settle()
            return DragOutcome(Outcome.NOOP)

        self._set_state(DragState.APPLYING)
        self.store.replace(apply_updates(base, kind, updates), OPTIMISTIC)

        self._active = None
        self._set_state(DragState.SYNCING)
        try:
            await self.queue.submit(kind, updates, base)
        except PersistenceFailure as exc:
            logger.warning("reorder of %s failed: %s", active, exc)
            self._finish_sync()
            for cb in list(self._error_listeners):
                cb(exc)
            return DragOutcome(Outcome.ROLLED_BACK, updates, exc)

        self._finish_sync()
        return DragOutcome(Outcome.COMMITTED, updates)

    def _finish_sync(self) -> None:
        # A newer drag may have taken over the state machine meanwhile.
        if self._state is DragState.SYNCING and not self.queue.busy:
            self._set_state(DragState.IDLE)

    # -- resolution --

    def _resolve_card(self, card_id, over_id) -> list[CardUpdate] | None:
        board = self.store.board
        ref = parse_drag_id(over_id)
        if ref is not None and ref.kind == COLUMN:
            # Dropping a card on a column header appends it to that column.
            over_id = drop_zone_id(ref.id)
        target = resolve_drop_target(over_id, board)
        if target is None or target.column_id is None:
            return None
        return calculate_card_move(card_id, target.column_id, target.position, board)

    def _resolve_column(self, column_id, over_id) -> list[ColumnUpdate] | None:
        board = self.store.board
        ref = parse_drag_id(over_id)
        if ref is None:
            return None
        if ref.kind in (DROP_ZONE, COLUMN):
            over = board.column(ref.id)
        else:
            target = resolve_drop_target(over_id, board)
            over = board.column(target.column_id) if target else None
        if over is None:
            return None
        return calculate_column_move(column_id, over.position, board)
