"""Column widgets for the board UI."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Rule, Static

from swimlane.ids import card_drag_id, column_drag_id, drop_zone_id
from swimlane.model.board import Column
from swimlane.model.positions import sort_by_position
from swimlane.ui.card import CardWidget
from swimlane.ui.drag import CardPlaceholder, DraggableMixin, DropTarget


class DropZone(Static):
    """Empty area at the end of a column; dropping here appends."""

    DEFAULT_CSS = """
    DropZone {
        width: 100%;
        height: 3;
        color: $text-muted;
        content-align: center middle;
    }
    """


class ColumnWidget(DraggableMixin, DropTarget, Vertical):
    """A single column on the board."""

    DEFAULT_CSS = """
    ColumnWidget {
        width: 1fr;
        height: auto;
        min-height: 100%;
        min-width: 25;
        max-width: 25;
        padding: 0 1;
        border-right: tall $surface-lighten-1;
    }
    ColumnWidget.dragging {
        layer: overlay;
        border: solid $primary;
        opacity: 0.8;
    }
    ColumnWidget > #column-title {
        width: 100%;
        text-align: center;
        text-style: bold;
    }
    ColumnWidget > Rule.-horizontal {
        margin: 0;
    }
    """

    HORIZONTAL_ONLY = True

    def __init__(self, column: Column):
        Vertical.__init__(self)
        self._init_draggable()
        self.column = column
        self._card_placeholder: CardPlaceholder | None = None

    def compose(self) -> ComposeResult:
        yield Static(self.column.name, id="column-title")
        yield Rule()
        for card in self.column.cards:
            yield CardWidget(card)
        yield DropZone("＋" if self.column.cards else "drop here")

    async def set_column(self, column: Column) -> None:
        """Show a new snapshot of this column."""
        self.column = column
        self._card_placeholder = None
        await self.recompose()

    def card_widget(self, card_id) -> CardWidget | None:
        for widget in self.query(CardWidget):
            if widget.card.id == card_id:
                return widget
        return None

    # -- DraggableMixin: column being dragged --

    def drag_id(self) -> str:
        return column_drag_id(self.column.id)

    def place_ghost(self, x: int, y: int) -> None:
        """The column is its own ghost, offset within the scrolling row."""
        container = self.screen.query_one("#columns", Horizontal)
        region = container.region
        self.styles.offset = (
            x - self._grab.x - region.x + container.scroll_x,
            y - self._grab.y - region.y + container.scroll_y,
        )

    def _put_down(self) -> None:
        self.styles.offset = (0, 0)
        super()._put_down()

    # -- DropTarget: column accepting card drops --

    def drag_over(self, draggable, x: int, y: int) -> bool:
        if not isinstance(draggable, CardWidget):
            return False
        self._ensure_card_placeholder(self._insert_before(draggable, y))
        return True

    def drag_away(self, draggable) -> None:
        if self._card_placeholder is not None and self._card_placeholder.parent is not None:
            self._card_placeholder.remove()
        self._card_placeholder = None

    def drop_id(self, draggable, x: int, y: int) -> str | None:
        if not isinstance(draggable, CardWidget):
            return None
        # Dropping over a card lands at that card's current position, so
        # count the visible slots above the pointer and drop over whatever
        # card holds that position now.
        before = self._insert_before(draggable, y)
        others = [w for w in self.query(CardWidget) if w is not draggable and w.parent is self]
        slot = others.index(before) if isinstance(before, CardWidget) else len(others)
        cards = sort_by_position(self.column.cards)
        if slot >= len(others) or slot >= len(cards):
            return drop_zone_id(self.column.id)
        return card_drag_id(cards[slot].id)

    def _insert_before(self, draggable, screen_y: int) -> Static:
        """The first card whose midpoint is below the pointer, else the drop zone."""
        for card in self.query(CardWidget):
            if card is draggable or card.parent is not self:
                continue
            if screen_y < card.region.y + card.region.height // 2:
                return card
        return self.query_one(DropZone)

    def _ensure_card_placeholder(self, insert_before: Static) -> None:
        if self._card_placeholder is None or self._card_placeholder.parent is not self:
            self._card_placeholder = CardPlaceholder()
            self.mount(self._card_placeholder, before=insert_before)
            return
        children = list(self.children)
        if children.index(self._card_placeholder) + 1 != children.index(insert_before):
            self.move_child(self._card_placeholder, before=insert_before)
