"""Mouse drag-and-drop plumbing for the board UI.

A drag has three phases, all driven by the screen once it starts:

- lift: the pointer moved past the threshold and the controller agreed
- fly: the ghost follows the pointer, drop targets show placeholders
- land: the target under the pointer names the drop identifier

Widgets only track pointer state and placeholders. Whether a drag may
start, and what a drop means, is decided by the screen's DragController.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from textual.geometry import Offset
from textual.widgets import Static

if TYPE_CHECKING:
    from textual.widget import Widget


class DropTarget:
    """Mixin for widgets that can accept drops."""

    def drag_over(self, draggable: DraggableMixin, x: int, y: int) -> bool:
        """Called while a draggable hovers over this target. Return True to accept."""
        return False

    def drag_away(self, draggable: DraggableMixin) -> None:
        """Called when a draggable leaves this target."""

    def drop_id(self, draggable: DraggableMixin, x: int, y: int) -> str | None:
        """Return the drop identifier for a release at (x, y), or None to decline."""
        return None


class DraggableMixin:
    """Mixin for widgets that can be dragged.

    Subclasses should:
    - Call _init_draggable() in __init__
    - Implement drag_id() returning the item's drag identifier
    - Optionally override draggable_make_ghost(), DRAG_THRESHOLD and HORIZONTAL_ONLY
    """

    DRAG_THRESHOLD = 2
    HORIZONTAL_ONLY = False

    def _init_draggable(self) -> None:
        self._press: Offset | None = None
        self._grab = Offset(0, 0)
        self._ghost: Widget | None = None
        self._hover: DropTarget | None = None
        self._lifted = False

    @property
    def is_dragging(self) -> bool:
        return self._lifted

    def drag_id(self) -> str:
        raise NotImplementedError

    def draggable_make_ghost(self) -> Widget:
        return self

    # -- pointer tracking before the drag starts --

    def _past_threshold(self, x: int, y: int) -> bool:
        dx = abs(x - self._press.x)
        dy = abs(y - self._press.y)
        if self.HORIZONTAL_ONLY:
            return dx > self.DRAG_THRESHOLD
        return max(dx, dy) > self.DRAG_THRESHOLD

    def on_mouse_down(self, event) -> None:
        if event.button != 1:
            return
        event.stop()
        self._press = Offset(event.screen_x, event.screen_y)
        self.capture_mouse()

    def on_mouse_move(self, event) -> None:
        if self._press is None:
            return
        event.stop()
        if self._past_threshold(event.screen_x, event.screen_y):
            press, self._press = self._press, None
            self.release_mouse()
            self.lift(press)

    def on_mouse_up(self, event) -> None:
        event.stop()
        self._press = None
        self.release_mouse()

    # -- the drag itself --

    def lift(self, press: Offset) -> None:
        """Start dragging, if the screen's controller allows it."""
        if not self.screen.begin_drag(self.drag_id()):
            return

        region = self.region
        self._lifted = True
        self._grab = press - region.offset
        self.add_class("dragging")

        self._ghost = self.draggable_make_ghost()
        if self._ghost is not self:
            self._ghost.styles.width = region.width
            self._ghost.styles.offset = region.offset
            self.screen.mount(self._ghost)

        self.screen._active_draggable = self
        self.screen.capture_mouse()

    def fly(self, x: int, y: int) -> None:
        """Follow the pointer and tell the target underneath."""
        self.place_ghost(x, y)
        target = next(self._targets_at(x, y), None)
        if target is None:
            return  # placeholder stays with the last target
        if self._hover is not None and target is not self._hover:
            self._hover.drag_away(self)
        self._hover = target
        target.drag_over(self, x, y)

    def place_ghost(self, x: int, y: int) -> None:
        if self._ghost is not None:
            self._ghost.styles.offset = (x - self._grab.x, y - self._grab.y)

    def land(self, x: int, y: int) -> None:
        """Drop on the innermost target that accepts, falling back to the last one hovered."""
        over_id = None
        for target in (*self._targets_at(x, y), self._hover):
            if target is not None:
                over_id = target.drop_id(self, x, y)
                if over_id is not None:
                    break
        self._put_down()
        self.screen.end_drag(over_id)

    def abort(self) -> None:
        self._put_down()
        self.screen.end_drag(None)

    def _put_down(self) -> None:
        """Clear placeholders and the ghost, and hand the mouse back."""
        self.screen.release_mouse()
        if self._hover is not None:
            self._hover.drag_away(self)
            self._hover = None
        if self._ghost is not None and self._ghost is not self:
            self._ghost.remove()
        self._ghost = None
        self._lifted = False
        self._grab = Offset(0, 0)
        self.remove_class("dragging")
        self.screen._active_draggable = None

    def _targets_at(self, x: int, y: int) -> Iterator[DropTarget]:
        """DropTargets under (x, y), innermost first, looking through the ghost."""
        seen: set[int] = set()
        ghost = self._ghost if self._ghost is not self else None
        for widget, _region in self.screen.get_widgets_at(x, y):
            if ghost is not None and (widget is ghost or ghost in widget.ancestors):
                continue
            for node in (widget, *widget.ancestors):
                if isinstance(node, DropTarget) and node is not self and id(node) not in seen:
                    seen.add(id(node))
                    yield node


class CardPlaceholder(Static):
    """Gap showing where a dragged card will land."""

    DEFAULT_CSS = """
    CardPlaceholder {
        width: 100%;
        height: 3;
        margin-bottom: 1;
        border: dashed $primary;
        background: $surface-darken-1;
    }
    """


class ColumnPlaceholder(Static):
    """Gap showing where a dragged column will land."""

    DEFAULT_CSS = """
    ColumnPlaceholder {
        width: 1fr;
        min-width: 25;
        max-width: 25;
        height: 100%;
        border: dashed $primary;
        background: $surface-darken-1;
    }
    """
