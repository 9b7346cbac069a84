"""Column lookup and creation for board snapshots."""

from dataclasses import replace

from swimlane.model.board import Board, Column
from swimlane.model.positions import next_position


def find_column(board: Board, column_id: int) -> Column | None:
    """Find a column by id."""
    return board.column(column_id)


def create_column(board: Board, column_id: int, name: str, **attrs) -> tuple[Board, Column]:
    """Append a new empty column to the board.

    The column lands at position count + 1. Returns (new_board, column).
    """
    if board.column(column_id) is not None:
        raise ValueError(f"column {column_id} already exists")

    column = Column(
        id=column_id,
        board_id=board.id,
        name=name,
        position=next_position(board.columns),
        **attrs,
    )
    return replace(board, columns=board.columns + (column,), version=board.version + 1), column
