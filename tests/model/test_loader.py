"""Tests for normalizing board payloads."""

from datetime import date

import pytest

from swimlane.model.loader import board_role, can_reorder, load_board, normalize_card


def _payload(**board_overrides):
    board = {
        "id": 7,
        "name": "Roadmap",
        "isArchived": False,
        "ownerId": "u-1",
        "role": "member",
        "columns": [
            {
                "id": 12,
                "title": "Doing",
                "position": 2,
                "cards": [
                    {"id": 31, "columnId": 12, "title": "Second", "position": 2},
                    {"id": 30, "columnId": 12, "title": "First", "position": 1},
                ],
            },
            {"id": 11, "title": "Todo", "position": 1, "cards": []},
        ],
    }
    board.update(board_overrides)
    return {"board": board}


def test_load_board_basic():
    board = load_board(_payload())
    assert board.id == 7
    assert board.name == "Roadmap"
    assert board.owner_id == "u-1"
    assert board.archived is False


def test_load_board_sorts_columns_and_cards():
    board = load_board(_payload())
    assert [c.id for c in board.columns] == [11, 12]
    assert [c.id for c in board.column(12).cards] == [30, 31]


def test_load_board_column_fields():
    column = load_board(_payload()).column(12)
    assert column.name == "Doing"
    assert column.board_id == 7
    assert column.position == 2


def test_load_board_bare_object():
    board = load_board(_payload()["board"])
    assert board.id == 7


def test_load_board_archived():
    assert load_board(_payload(isArchived=True)).archived is True


def test_load_board_no_columns():
    board = load_board({"board": {"id": 1, "name": "Empty"}})
    assert board.columns == ()


def test_load_board_missing_id():
    with pytest.raises(KeyError):
        load_board({"board": {"name": "No id"}})


def test_normalize_card_defaults():
    card = normalize_card({"id": 5, "position": 1}, column_id=3)
    assert card.column_id == 3
    assert card.priority == "medium"
    assert card.title == ""
    assert card.assignee_id is None
    assert card.due_date is None


def test_normalize_card_snake_case_keys():
    card = normalize_card({"id": 5, "column_id": 4, "position": 2, "due_date": "2024-05-01"}, column_id=3)
    assert card.column_id == 4
    assert card.due_date == date(2024, 5, 1)


def test_normalize_card_timestamp_due_date():
    card = normalize_card({"id": 5, "position": 1, "dueDate": "2024-05-01T00:00:00.000Z"}, column_id=3)
    assert card.due_date == date(2024, 5, 1)


def test_normalize_card_ids():
    assert normalize_card({"id": "17", "position": 1}, 1).id == 17
    uuid = "0b1c7a52-3f5e-4d1a-9c3e-5b8f2a7d6e10"
    assert normalize_card({"id": uuid, "position": 1}, 1).id == uuid


def test_normalize_card_assignee_variants():
    assert normalize_card({"id": 1, "position": 1, "assigneeId": "u-2"}, 1).assignee_id == "u-2"
    assert normalize_card({"id": 1, "position": 1, "assignee": {"id": "u-3"}}, 1).assignee_id == "u-3"
    assert normalize_card({"id": 1, "position": 1, "users": [{"id": "u-4"}]}, 1).assignee_id == "u-4"
    assert normalize_card({"id": 1, "position": 1, "users": {"id": "u-5"}}, 1).assignee_id == "u-5"
    assert normalize_card({"id": 1, "position": 1, "users": []}, 1).assignee_id is None


def test_board_role():
    assert board_role(_payload()) == "member"
    assert board_role(_payload(role=None)) == "viewer"
    assert board_role(_payload(role="superuser")) == "viewer"


def test_can_reorder():
    assert can_reorder("owner")
    assert can_reorder("admin")
    assert can_reorder("member")
    assert not can_reorder("viewer")


def test_normalize_card_null_position():
    with pytest.raises(ValueError, match="position"):
        normalize_card({"id": 5, "position": None}, column_id=3)


def test_load_board_bad_column_position():
    payload = _payload(columns=[{"id": 11, "title": "Todo", "position": "first", "cards": []}])
    with pytest.raises(ValueError):
        load_board(payload)
