"""Dense 1..N position rules for ordered siblings."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Iterator, Sequence, TypeVar

from swimlane.model.board import Board

T = TypeVar("T")


def sort_by_position(items: Iterable[T]) -> list[T]:
    """Stable ascending sort on ``.position``."""
    return sorted(items, key=lambda item: item.position)


def is_dense(positions: Iterable[int]) -> bool:
    """True if positions are exactly {1..N} with no duplicates.

    [1, 2, 3] → True, [2, 1] → True, [1, 3] → False, [1, 1] → False
    """
    values = list(positions)
    return sorted(values) == list(range(1, len(values) + 1))


def renumber(items: Sequence[T]) -> Iterator[tuple[T, int]]:
    """Yield (item, new_position) pairs numbering items 1..N in order."""
    for index, item in enumerate(items):
        yield item, index + 1


def next_position(items: Sequence) -> int:
    """Position for an item appended to items."""
    return len(items) + 1


def _describe(label: str, positions: list[int]) -> list[str]:
    problems = []
    counts = Counter(positions)
    for pos in sorted(p for p, n in counts.items() if n > 1):
        problems.append(f"{label}: duplicate position {pos}")
    expected = set(range(1, len(positions) + 1))
    missing = sorted(expected - set(positions))
    if missing:
        problems.append(f"{label}: missing positions {', '.join(str(p) for p in missing)}")
    return problems


def position_violations(board: Board) -> list[str]:
    """List every gap or duplicate in the board's column and card positions."""
    problems = _describe(f"board {board.id} columns", [c.position for c in board.columns])
    for col in board.columns:
        problems.extend(_describe(f"column {col.id} cards", [c.position for c in col.cards]))
    return problems
