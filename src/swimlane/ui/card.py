"""Card widgets for the board UI."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import Static

from swimlane.ids import card_drag_id, drop_zone_id
from swimlane.model.board import Board, Card
from swimlane.model.card import find_card_column
from swimlane.model.positions import sort_by_position
from swimlane.ui.card_indicators import build_footer_text
from swimlane.ui.drag import DraggableMixin


def keyboard_drop_id(board: Board, card_id, direction: str) -> str | None:
    """Drop identifier equivalent to nudging a card one step in a direction.

    "up"/"down" drop over the neighbouring card, "left"/"right" drop on the
    end of the neighbouring column. None when there is nowhere to go.
    """
    column = find_card_column(board, card_id)
    if column is None:
        return None

    if direction in ("up", "down"):
        cards = sort_by_position(column.cards)
        index = next(i for i, c in enumerate(cards) if c.id == card_id)
        index += -1 if direction == "up" else 1
        if not 0 <= index < len(cards):
            return None
        return card_drag_id(cards[index].id)

    if direction in ("left", "right"):
        columns = sort_by_position(board.columns)
        index = next(i for i, c in enumerate(columns) if c.id == column.id)
        index += -1 if direction == "left" else 1
        if not 0 <= index < len(columns):
            return None
        return drop_zone_id(columns[index].id)

    raise ValueError(f"unknown direction: {direction}")


class CardWidget(DraggableMixin, Static, can_focus=True):
    """A single card in a column."""

    BINDINGS = [
        ("shift+up", "nudge('up')", "Move up"),
        ("shift+down", "nudge('down')", "Move down"),
        ("shift+left", "nudge('left')", "Move left"),
        ("shift+right", "nudge('right')", "Move right"),
    ]

    DEFAULT_CSS = """
    CardWidget {
        width: 100%;
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
        background: $surface;
    }
    CardWidget:focus {
        background: $primary;
    }
    CardWidget.dragging {
        display: none;
    }
    CardWidget #card-footer {
        width: 100%;
        height: 1;
        color: $text-muted;
    }
    """

    class MoveRequested(Message):
        """Posted when the keyboard asks to nudge the card."""

        def __init__(self, card: CardWidget, direction: str) -> None:
            super().__init__()
            self.card = card
            self.direction = direction

    def __init__(self, card: Card):
        Static.__init__(self)
        self._init_draggable()
        self.card = card

    def compose(self) -> ComposeResult:
        yield Static(self.card.title or str(self.card.id), id="card-title")
        yield Static(build_footer_text(self.card), id="card-footer")

    def drag_id(self) -> str:
        return card_drag_id(self.card.id)

    def draggable_make_ghost(self):
        return DragGhost(self.card)

    def action_nudge(self, direction: str) -> None:
        self.post_message(self.MoveRequested(self, direction))


class DragGhost(Static):
    """Floating overlay showing the card being dragged."""

    DEFAULT_CSS = """
    DragGhost {
        layer: overlay;
        height: auto;
    }
    """

    def __init__(self, card: Card):
        super().__init__()
        self._card = card

    def compose(self) -> ComposeResult:
        yield CardWidget(self._card)
