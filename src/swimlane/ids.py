"""Drag and drop identifiers.

Every draggable item and drop zone is addressed by one string:

- ``card-<id>``: a card (id is an integer or a UUID)
- ``column-<id>``: a column, as a dragged item or as a drop target
- ``column-drop-<id>``: the empty area at the end of a column
"""

from __future__ import annotations

from typing import NamedTuple, Union

CARD = "card"
COLUMN = "column"
DROP_ZONE = "column-drop"


class DragRef(NamedTuple):
    """A parsed drag identifier."""

    kind: str
    id: Union[int, str]


def normalize_id(raw: Union[int, str]) -> Union[int, str]:
    """Integers stay integers, digit strings become integers, others stay strings.

    "12" → 12, 12 → 12, "9b2e…" → "9b2e…"
    """
    if isinstance(raw, str) and raw.isdigit():
        return int(raw)
    return raw


def card_drag_id(card_id: Union[int, str]) -> str:
    return f"{CARD}-{card_id}"


def column_drag_id(column_id: int) -> str:
    return f"{COLUMN}-{column_id}"


def drop_zone_id(column_id: int) -> str:
    return f"{DROP_ZONE}-{column_id}"


def parse_drag_id(value: Union[int, str, None]) -> DragRef | None:
    """Parse a drag identifier, or None if it isn't one.

    "column-drop-3" → DragRef("column-drop", 3)
    "column-3" → DragRef("column", 3)
    "card-17" → DragRef("card", 17)
    7 → DragRef("card", 7)  (bare integers are card ids)
    """
    if value is None:
        return None
    if isinstance(value, int):
        return DragRef(CARD, value)

    for kind in (DROP_ZONE, COLUMN):
        prefix = f"{kind}-"
        if value.startswith(prefix):
            rest = value[len(prefix) :]
            if not rest.isdigit():
                return None
            return DragRef(kind, int(rest))

    prefix = f"{CARD}-"
    if value.startswith(prefix) and len(value) > len(prefix):
        return DragRef(CARD, normalize_id(value[len(prefix) :]))
    return None
