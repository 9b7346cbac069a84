"""Tests for 'swimlane card' commands."""

import json

import pytest

from swimlane.cli.card import card_list, card_move
from swimlane.model.board import Column
from tests.cli.conftest import _args
from tests.conftest import _card_order, _make_board, _make_card, _make_column


def test_card_list(backend, config_file, capsys):
    assert card_list(_args(config_file, column=None)) == 0

    out = capsys.readouterr().out
    assert "Todo" in out
    assert "1. 1  Card 1" in out
    assert "2. 5  Card 5" in out


def test_card_list_filter_column(backend, config_file, capsys):
    assert card_list(_args(config_file, column="2")) == 0

    out = capsys.readouterr().out
    assert "Doing" in out
    assert "Card 1" not in out


def test_card_list_json(backend, config_file, capsys):
    assert card_list(_args(config_file, json=True, column=None)) == 0

    data = json.loads(capsys.readouterr().out)
    assert len(data) == 5
    assert data[0]["title"] == "Card 1"
    assert data[3]["column"] == {"id": 2, "name": "Doing"}


def test_card_list_unknown_column(backend, config_file, capsys):
    with pytest.raises(SystemExit):
        card_list(_args(config_file, column="9"))
    assert "Column '9' not found" in capsys.readouterr().err


def test_card_move_within_column(backend, config_file, capsys):
    args = _args(config_file, id="3", column="1", position=1)
    assert card_move(args) == 0

    assert "Moved card 3 to Todo at position 1 (3 updated)" in capsys.readouterr().out
    assert _card_order(backend.board, 1) == [(3, 1), (1, 2), (2, 3)]


def test_card_move_appends_by_default(backend, config_file, capsys):
    args = _args(config_file, json=True, id="1", column="2", position=None)
    assert card_move(args) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["column"]["name"] == "Doing"
    assert data["position"] == 3
    assert _card_order(backend.board, 1) == [(2, 1), (3, 2)]
    assert _card_order(backend.board, 2) == [(4, 1), (5, 2), (1, 3)]


def test_card_move_noop(backend, config_file, capsys):
    assert card_move(_args(config_file, id="2", column="1", position=2)) == 0

    assert "already there" in capsys.readouterr().out
    assert backend.requests == []


def test_card_move_unknown_card(backend, config_file, capsys):
    with pytest.raises(SystemExit) as exc_info:
        card_move(_args(config_file, id="99", column="1", position=1))
    assert exc_info.value.code == 1
    assert "Card '99' not found" in capsys.readouterr().err


def test_card_move_rejected(backend, config_file, capsys):
    backend.fail_next(404, "One or more cards not found")

    with pytest.raises(SystemExit):
        card_move(_args(config_file, json=True, id="3", column="1", position=1))
    err = json.loads(capsys.readouterr().err)
    assert err["error"] == "move not saved: One or more cards not found"
    assert _card_order(backend.board, 1) == [(1, 1), (2, 2), (3, 3)]


def test_card_move_in_gapped_column(backend, config_file, capsys):
    gappy = Column(id=1, board_id=1, name="Todo", position=1, cards=(_make_card(1, 1, 1), _make_card(2, 1, 3)))
    backend.board = _make_board([gappy, _make_column(2, 2, [4, 5], name="Doing")])

    assert card_move(_args(config_file, id="1", column="1", position=1)) == 0

    assert "Moved card 1 to Todo at position 1 (1 updated)" in capsys.readouterr().out
    assert sorted(_card_order(backend.board, 1)) == [(1, 1), (2, 2)]
