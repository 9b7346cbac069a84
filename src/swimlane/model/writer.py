"""Serialize snapshots and update lists back to plain data."""

from __future__ import annotations

from typing import Iterable

from swimlane.model.board import Board, Card, CardUpdate, Column, ColumnUpdate


def card_to_dict(card: Card) -> dict:
    data = {
        "id": card.id,
        "columnId": card.column_id,
        "position": card.position,
        "title": card.title,
        "priority": card.priority,
    }
    if card.description:
        data["description"] = card.description
    if card.assignee_id is not None:
        data["assigneeId"] = card.assignee_id
    if card.due_date is not None:
        data["dueDate"] = card.due_date.isoformat()
    return data


def column_to_dict(column: Column) -> dict:
    data = {
        "id": column.id,
        "title": column.name,
        "position": column.position,
        "cards": [card_to_dict(c) for c in column.cards],
    }
    if column.color:
        data["color"] = column.color
    return data


def board_to_dict(board: Board) -> dict:
    """Board in the API's canonical camelCase shape."""
    return {
        "id": board.id,
        "name": board.name,
        "isArchived": board.archived,
        "ownerId": board.owner_id,
        "columns": [column_to_dict(c) for c in board.columns],
    }


def updates_payload(updates: Iterable[CardUpdate | ColumnUpdate]) -> dict:
    """Request body for a bulk reorder endpoint."""
    return {"updates": [u.to_payload() for u in updates]}
