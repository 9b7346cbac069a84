"""Normalize board payloads from the API into Board snapshots.

The board service is not consistent about its shapes: keys arrive in
camelCase or snake_case, related records arrive as a single object, a
one-element array or null, and ordering is not guaranteed. Everything is
folded into one canonical shape here so the engine never sees the
difference.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from swimlane.ids import normalize_id
from swimlane.model.board import Board, Card, Column
from swimlane.model.positions import sort_by_position

DEFAULT_PRIORITY = "medium"

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    """Convert camelCase to snake_case.

    "columnId" → "column_id", "isArchived" → "is_archived", "id" → "id"
    """
    return _CAMEL.sub("_", key).lower()


def _snake_keys(data: dict) -> dict[str, Any]:
    return {_snake(k): v for k, v in data.items()}


def _one(value: Any) -> dict | None:
    """Collapse an object, a list of objects, or null into one object or None."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        return _snake_keys(value)
    return None


def _many(value: Any) -> list[dict]:
    """Collapse a list, a single object, or null into a list of objects."""
    if value is None:
        return []
    if isinstance(value, dict):
        value = [value]
    return [_snake_keys(v) for v in value if isinstance(v, dict)]


def _integer(data: dict, key: str) -> int:
    """Read a required integer field; null or garbage is a ValueError."""
    value = data[key]
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key}: expected an integer, got {value!r}") from None


def _parse_date(raw: Any) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, date):
        return raw
    text = str(raw)
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return date.fromisoformat(text[:10])


def _related_id(data: dict, key: str) -> Any:
    """Read ``<key>_id``, falling back to the id of a nested ``<key>`` record."""
    value = data.get(f"{key}_id")
    if value is not None:
        return value
    related = _one(data.get(key))
    return related.get("id") if related else None


def normalize_card(raw: dict, column_id: int) -> Card:
    data = _snake_keys(raw)
    assignee = _related_id(data, "assignee")
    if assignee is None:
        users = _one(data.get("users"))
        assignee = users.get("id") if users else None
    return Card(
        id=normalize_id(data["id"]),
        column_id=int(data.get("column_id") or column_id),
        position=_integer(data, "position"),
        title=data.get("title") or "",
        description=data.get("description") or "",
        priority=data.get("priority") or DEFAULT_PRIORITY,
        assignee_id=assignee,
        due_date=_parse_date(data.get("due_date")),
    )


def normalize_column(raw: dict, board_id: Any) -> Column:
    data = _snake_keys(raw)
    column_id = _integer(data, "id")
    cards = sort_by_position(normalize_card(c, column_id) for c in _many(data.get("cards")))
    return Column(
        id=column_id,
        board_id=data.get("board_id") or board_id,
        name=data.get("title") or data.get("name") or "",
        position=_integer(data, "position"),
        cards=tuple(cards),
        color=data.get("color"),
    )


def _unwrap(payload: dict) -> dict:
    """Accept both ``{"board": {...}}`` and a bare board object."""
    if "board" in payload and isinstance(payload["board"], (dict, list)):
        return _one(payload["board"]) or {}
    return _snake_keys(payload)


def load_board(payload: dict) -> Board:
    """Build a Board snapshot from a board API payload."""
    data = _unwrap(payload)
    board_id = data["id"]
    columns = sort_by_position(normalize_column(c, board_id) for c in _many(data.get("columns")))
    archived = data.get("is_archived", data.get("archived", False))
    return Board(
        id=board_id,
        name=data.get("name") or "",
        archived=bool(archived),
        owner_id=_related_id(data, "owner"),
        columns=tuple(columns),
    )


def board_role(payload: dict) -> str:
    """The requesting user's role on the board; unknown means viewer."""
    data = _unwrap(payload)
    role = data.get("role") or data.get("user_role")
    return role if role in ("owner", "admin", "member", "viewer") else "viewer"


def can_reorder(role: str) -> bool:
    """Whether a board role may submit reorder batches."""
    return role in ("owner", "admin", "member")
