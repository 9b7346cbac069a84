"""Immutable board snapshots and position rules."""

from swimlane.model.board import Board, Card, CardUpdate, Column, ColumnUpdate
from swimlane.model.card import create_card, find_card, find_card_column
from swimlane.model.column import create_column, find_column
from swimlane.model.loader import board_role, can_reorder, load_board
from swimlane.model.positions import is_dense, next_position, position_violations, renumber, sort_by_position
from swimlane.model.writer import board_to_dict, updates_payload

__all__ = [
    "Board",
    "Card",
    "CardUpdate",
    "Column",
    "ColumnUpdate",
    "board_role",
    "board_to_dict",
    "can_reorder",
    "create_card",
    "create_column",
    "find_card",
    "find_card_column",
    "find_column",
    "is_dense",
    "load_board",
    "next_position",
    "position_violations",
    "renumber",
    "sort_by_position",
    "updates_payload",
]
