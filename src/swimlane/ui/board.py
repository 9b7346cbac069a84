"""Board screen showing kanban columns and cards."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Static

from swimlane.drag import DragController, DragState
from swimlane.ids import card_drag_id, column_drag_id
from swimlane.model.board import Board
from swimlane.model.positions import sort_by_position
from swimlane.sync import PersistenceFailure
from swimlane.ui.card import CardWidget, keyboard_drop_id
from swimlane.ui.column import ColumnWidget
from swimlane.ui.constants import (
    ICON_ARCHIVED,
    ICON_BOARD,
    ICON_LOCKED,
    ICON_SYNC_ACTIVE,
    ICON_SYNC_FAILED,
    ICON_SYNC_IDLE,
)
from swimlane.ui.drag import ColumnPlaceholder, DropTarget
from swimlane.ui.watcher import StoreWatcherMixin


def _status_icon(state: DragState, failed: bool) -> str:
    if state is DragState.SYNCING:
        return ICON_SYNC_ACTIVE
    return ICON_SYNC_FAILED if failed else ICON_SYNC_IDLE


class BoardScreen(StoreWatcherMixin, DropTarget, Screen):
    """Main board screen showing all columns."""

    DEFAULT_CSS = """
    BoardScreen {
        layers: base overlay;
    }
    #board-header {
        height: 1;
        padding: 0 1;
        background: $panel;
    }
    #board-title {
        width: 1fr;
        text-style: bold;
    }
    #sync-status {
        width: auto;
    }
    #columns {
        height: 1fr;
        overflow-x: auto;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel_drag", "Cancel drag", show=False),
        ("ctrl+left", "nudge_column('left')", "Column left"),
        ("ctrl+right", "nudge_column('right')", "Column right"),
    ]

    def __init__(self, controller: DragController):
        self._init_watcher()
        super().__init__()
        self.controller = controller
        self._active_draggable = None
        self._column_placeholder: ColumnPlaceholder | None = None
        self._focus_card_id = None
        self._failed = False

    @property
    def board(self) -> Board:
        return self.controller.store.board

    def compose(self) -> ComposeResult:
        board = self.board
        title = f"{ICON_BOARD} {board.name}"
        if board.archived:
            title += f" {ICON_ARCHIVED}"
        if not self.controller.can_reorder:
            title += f" {ICON_LOCKED}"
        with Horizontal(id="board-header"):
            yield Static(title, id="board-title")
            yield Static(ICON_SYNC_IDLE, id="sync-status")
        with Horizontal(id="columns"):
            for column in board.columns:
                yield ColumnWidget(column)
        yield Footer()

    def on_mount(self) -> None:
        self.store_watch(self.controller.store, self._on_board_replaced)
        self.keep_watch(self.controller.on_transition(self._on_drag_transition))
        self.keep_watch(self.controller.on_error(self._on_sync_error))
        self.call_after_refresh(self._focus_first_card)

    def _focus_first_card(self) -> None:
        cards = list(self.query(CardWidget))
        if cards:
            cards[0].focus()

    # -- engine callbacks --

    def _on_board_replaced(self, old: Board, new: Board, reason: str) -> None:
        self.call_later(self._render_board, new)

    def _on_drag_transition(self, old: DragState, new: DragState) -> None:
        if new is DragState.DRAGGING:
            self._failed = False
        self.query_one("#sync-status", Static).update(_status_icon(new, self._failed))

    def _on_sync_error(self, exc: PersistenceFailure) -> None:
        self._failed = True
        self.query_one("#sync-status", Static).update(_status_icon(self.controller.state, True))
        self.notify(f"Move not saved: {exc.message}", title="Reorder failed", severity="error")

    async def _render_board(self, board: Board) -> None:
        """Bring the widgets in line with a snapshot.

        Columns that are the same object as before keep their widgets;
        only columns the update touched are recomposed.
        """
        if board is not self.board:
            return  # a newer snapshot is already queued
        container = self.query_one("#columns", Horizontal)
        widgets = list(container.query(ColumnWidget))
        if [w.column.id for w in widgets] == [c.id for c in board.columns]:
            for widget, column in zip(widgets, board.columns):
                if widget.column is not column:
                    await widget.set_column(column)
        else:
            await container.remove_children()
            await container.mount_all([ColumnWidget(c) for c in board.columns])
        self._refocus()

    def _refocus(self) -> None:
        if self._focus_card_id is None:
            return
        for widget in self.query(CardWidget):
            if widget.card.id == self._focus_card_id:
                widget.focus()
                return

    # -- drag entry points used by the widgets --

    def begin_drag(self, item_id: str) -> bool:
        return self.controller.drag_start(item_id)

    def end_drag(self, over_id: str | None) -> None:
        self.run_worker(self.controller.drag_end(over_id), group="drag")

    def on_card_widget_move_requested(self, event: CardWidget.MoveRequested) -> None:
        """Keyboard nudges run through the same lifecycle as a mouse drag."""
        event.stop()
        card_id = event.card.card.id
        over_id = keyboard_drop_id(self.board, card_id, event.direction)
        if over_id is None:
            return
        self._focus_card_id = card_id
        if self.begin_drag(card_drag_id(card_id)):
            self.end_drag(over_id)

    def action_nudge_column(self, direction: str) -> None:
        """Move the focused card's column one step left or right."""
        focused = self.focused
        if not isinstance(focused, CardWidget):
            return
        columns = sort_by_position(self.board.columns)
        index = next((i for i, c in enumerate(columns) if c.id == focused.card.column_id), None)
        if index is None:
            return
        target = index + (-1 if direction == "left" else 1)
        if not 0 <= target < len(columns):
            return
        self._focus_card_id = focused.card.id
        if self.begin_drag(column_drag_id(columns[index].id)):
            self.end_drag(column_drag_id(columns[target].id))

    # -- screen routes mouse events to the active draggable --

    def on_mouse_move(self, event) -> None:
        if self._active_draggable is not None:
            self._active_draggable.fly(event.screen_x, event.screen_y)

    def on_mouse_up(self, event) -> None:
        if self._active_draggable is not None:
            self._active_draggable.land(event.screen_x, event.screen_y)

    def action_cancel_drag(self) -> None:
        if self._active_draggable is not None:
            self._active_draggable.abort()

    # -- DropTarget: board accepting column drops --

    def drag_over(self, draggable, x: int, y: int) -> bool:
        if not isinstance(draggable, ColumnWidget):
            return False
        self._ensure_column_placeholder(self._column_insert_before(draggable, x))
        return True

    def drag_away(self, draggable) -> None:
        if self._column_placeholder is not None and self._column_placeholder.parent is not None:
            self._column_placeholder.remove()
        self._column_placeholder = None

    def drop_id(self, draggable, x: int, y: int) -> str | None:
        """Drop over whichever column currently holds the slot under the pointer."""
        if not isinstance(draggable, ColumnWidget):
            return None
        before = self._column_insert_before(draggable, x)
        others = [w for w in self.query_one("#columns", Horizontal).query(ColumnWidget) if w is not draggable]
        slot = others.index(before) if before is not None else len(others)
        columns = sort_by_position(self.board.columns)
        return column_drag_id(columns[min(slot, len(columns) - 1)].id)

    def _column_insert_before(self, draggable, screen_x: int) -> ColumnWidget | None:
        for col in self.query_one("#columns", Horizontal).query(ColumnWidget):
            if col is draggable:
                continue
            if screen_x < col.region.x + col.region.width // 2:
                return col
        return None

    def _ensure_column_placeholder(self, insert_before: ColumnWidget | None) -> None:
        container = self.query_one("#columns", Horizontal)
        if self._column_placeholder is None:
            self._column_placeholder = ColumnPlaceholder()
            if insert_before is None:
                container.mount(self._column_placeholder)
            else:
                container.mount(self._column_placeholder, before=insert_before)
            return
        if insert_before is None:
            container.move_child(self._column_placeholder, after=len(container.children) - 1)
        else:
            container.move_child(self._column_placeholder, before=insert_before)
