"""Turn a drop into the minimal list of position updates.

Pure functions over a Board snapshot: no I/O, no mutation. A result of
None means the move can't happen (unknown item or target); an empty list
means the item is already where it was dropped.
"""

from __future__ import annotations

from typing import NamedTuple

from swimlane.ids import CARD, COLUMN, DROP_ZONE, parse_drag_id
from swimlane.model.board import Board, CardId, CardUpdate, ColumnUpdate
from swimlane.model.card import find_card_column
from swimlane.model.positions import renumber, sort_by_position


class DropTarget(NamedTuple):
    """Where a dragged item lands: a container and a 1-based position."""

    column_id: int | None
    position: int


def _insert(items: list, item, target_position: int) -> list:
    """Insert item before the 1-based target_position, clamped to the list."""
    index = min(max(target_position - 1, 0), len(items))
    return items[:index] + [item] + items[index:]


def calculate_card_move(
    card_id: CardId,
    target_column_id: int,
    target_position: int,
    board: Board,
) -> list[CardUpdate] | None:
    """Compute the card updates for moving a card to target_position in target_column_id.

    Same column: renumber the column and emit only cards whose position
    changed. Across columns: renumber the source without the card and the
    target with it; the moved card is always emitted since its column
    changed.
    """
    source = find_card_column(board, card_id)
    if source is None:
        return None
    target = board.column(target_column_id)
    if target is None or target.board_id != source.board_id:
        return None

    card = next(c for c in source.cards if c.id == card_id)
    updates: list[CardUpdate] = []

    if source.id == target.id:
        remaining = [c for c in sort_by_position(source.cards) if c.id != card_id]
        for c, position in renumber(_insert(remaining, card, target_position)):
            if c.position != position:
                updates.append(CardUpdate(c.id, target.id, position))
        return updates

    for c, position in renumber([c for c in sort_by_position(source.cards) if c.id != card_id]):
        if c.position != position:
            updates.append(CardUpdate(c.id, source.id, position))

    for c, position in renumber(_insert(sort_by_position(target.cards), card, target_position)):
        if c.id == card_id or c.position != position:
            updates.append(CardUpdate(c.id, target.id, position))

    return updates


def calculate_column_move(column_id: int, target_position: int, board: Board) -> list[ColumnUpdate] | None:
    """Compute the column updates for moving a column to target_position."""
    column = board.column(column_id)
    if column is None:
        return None

    remaining = [c for c in sort_by_position(board.columns) if c.id != column_id]
    return [
        ColumnUpdate(c.id, position)
        for c, position in renumber(_insert(remaining, column, target_position))
        if c.position != position
    ]


def resolve_drop_target(over_id, board: Board) -> DropTarget | None:
    """Work out where a drop over over_id lands.

    - Over a card: insert before it, at its pre-move position.
    - Over a column's drop zone: append after the highest position.
    - Over a column: take that column's position (column drags).
    """
    ref = parse_drag_id(over_id)
    if ref is None:
        return None

    if ref.kind == DROP_ZONE:
        column = board.column(ref.id)
        if column is None:
            return None
        highest = max((c.position for c in column.cards), default=0)
        return DropTarget(column.id, highest + 1)

    if ref.kind == COLUMN:
        column = board.column(ref.id)
        if column is None:
            return None
        return DropTarget(None, column.position)

    if ref.kind == CARD:
        column = find_card_column(board, ref.id)
        if column is None:
            return None
        card = next(c for c in column.cards if c.id == ref.id)
        return DropTarget(column.id, card.position)

    return None
