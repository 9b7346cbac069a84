"""Apply update lists to a board snapshot before the server confirms them."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from swimlane.model.board import Board, CardUpdate, Column, ColumnUpdate
from swimlane.model.positions import sort_by_position

logger = logging.getLogger(__name__)


def apply_card_updates(board: Board, updates: Sequence[CardUpdate]) -> Board:
    """Return a new Board with each card moved to its updated column and position.

    Columns no update touches are carried over as the same objects; touched
    columns are rebuilt and re-sorted by position. The input board is left
    as it was.
    """
    cards_by_column = {col.id: list(col.cards) for col in board.columns}
    touched: set[int] = set()

    for update in updates:
        if update.column_id not in cards_by_column:
            logger.warning("skipping update for card %s: unknown column %s", update.id, update.column_id)
            continue

        found = None
        for column_id, cards in cards_by_column.items():
            for index, card in enumerate(cards):
                if card.id == update.id:
                    found = (column_id, index, card)
                    break
            if found:
                break
        if found is None:
            logger.warning("skipping update for unknown card %s", update.id)
            continue

        column_id, index, card = found
        del cards_by_column[column_id][index]
        cards_by_column[update.column_id].append(
            replace(card, column_id=update.column_id, position=update.position)
        )
        touched.add(column_id)
        touched.add(update.column_id)

    if not touched:
        return replace(board, version=board.version + 1)

    columns: list[Column] = []
    for col in board.columns:
        if col.id in touched:
            col = replace(col, cards=tuple(sort_by_position(cards_by_column[col.id])))
        columns.append(col)
    return replace(board, columns=tuple(columns), version=board.version + 1)


def apply_column_updates(board: Board, updates: Sequence[ColumnUpdate]) -> Board:
    """Return a new Board with column positions updated and columns re-sorted."""
    positions = {u.id: u.position for u in updates}
    unknown = positions.keys() - {col.id for col in board.columns}
    for column_id in sorted(unknown):
        logger.warning("skipping update for unknown column %s", column_id)

    columns = [
        replace(col, position=positions[col.id]) if col.id in positions and col.position != positions[col.id] else col
        for col in board.columns
    ]
    return replace(board, columns=tuple(sort_by_position(columns)), version=board.version + 1)


def apply_updates(board: Board, kind: str, updates: Sequence[CardUpdate | ColumnUpdate]) -> Board:
    """Dispatch a batch to the applier for its kind ("cards" or "columns")."""
    if kind == CardUpdate.kind:
        return apply_card_updates(board, updates)
    if kind == ColumnUpdate.kind:
        return apply_column_updates(board, updates)
    raise ValueError(f"unknown update kind: {kind}")
