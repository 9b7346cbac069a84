"""Snapshot types for a board: columns with their ordered cards."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Union

CardId = Union[int, str]


@dataclass(frozen=True)
class Card:
    """A card at a 1-based position within its column."""

    id: CardId
    column_id: int
    position: int
    title: str = ""
    description: str = ""
    priority: str | None = None
    assignee_id: str | None = None
    due_date: date | None = None


@dataclass(frozen=True)
class Column:
    """A column at a 1-based position within its board."""

    id: int
    board_id: Any
    name: str
    position: int
    cards: tuple[Card, ...] = ()
    color: str | None = None


@dataclass(frozen=True)
class Board:
    """The complete in-memory board state at one point in time.

    Boards are never mutated. Every change produces a new Board that
    shares the Column objects it did not touch, so consumers can compare
    columns by identity to find what changed. ``version`` counts derived
    snapshots and is ignored by equality.
    """

    id: Any
    name: str
    archived: bool = False
    owner_id: str | None = None
    columns: tuple[Column, ...] = ()
    version: int = field(default=0, compare=False)

    def column(self, column_id: int) -> Column | None:
        for col in self.columns:
            if col.id == column_id:
                return col
        return None


@dataclass(frozen=True)
class CardUpdate:
    """New column and position for one card."""

    id: CardId
    column_id: int
    position: int

    kind = "cards"

    def to_payload(self) -> dict:
        return {"id": self.id, "columnId": self.column_id, "position": self.position}


@dataclass(frozen=True)
class ColumnUpdate:
    """New position for one column."""

    id: int
    position: int

    kind = "columns"

    def to_payload(self) -> dict:
        return {"id": self.id, "position": self.position}
