"""Card lookup and creation for board snapshots."""

from dataclasses import replace

from swimlane.model.board import Board, Card, CardId, Column
from swimlane.model.positions import next_position


def find_card_column(board: Board, card_id: CardId) -> Column | None:
    """Find the column containing a card."""
    for col in board.columns:
        for card in col.cards:
            if card.id == card_id:
                return col
    return None


def find_card(board: Board, card_id: CardId) -> Card | None:
    """Find a card anywhere on the board."""
    col = find_card_column(board, card_id)
    if col is None:
        return None
    return next(card for card in col.cards if card.id == card_id)


def create_card(board: Board, column_id: int, card_id: CardId, title: str, **attrs) -> tuple[Board, Card]:
    """Append a new card to a column.

    The card lands at position count + 1. Returns (new_board, card).
    """
    column = board.column(column_id)
    if column is None:
        raise KeyError(column_id)

    card = Card(
        id=card_id,
        column_id=column_id,
        position=next_position(column.cards),
        title=title,
        **attrs,
    )
    new_column = replace(column, cards=column.cards + (card,))
    columns = tuple(new_column if c is column else c for c in board.columns)
    return replace(board, columns=columns, version=board.version + 1), card
