"""Shared test helpers: board builders and an in-memory board service."""

import asyncio

import pytest

from swimlane.model.board import Board, Card, Column
from tests.fake_backend import FakeBoardService


def _make_card(card_id, column_id, position, title=None, **attrs):
    """Helper to build a card."""
    attrs.setdefault("priority", "medium")
    return Card(id=card_id, column_id=column_id, position=position, title=title or f"Card {card_id}", **attrs)


def _make_column(column_id, position, card_ids=(), name=None, board_id=1, **attrs):
    """Helper to build a column whose cards sit at positions 1..N in the given order."""
    cards = tuple(_make_card(card_id, column_id, i + 1) for i, card_id in enumerate(card_ids))
    return Column(id=column_id, board_id=board_id, name=name or f"Column {column_id}", position=position, cards=cards, **attrs)


def _make_board(columns=(), board_id=1, name="Test Board", **attrs):
    """Helper to build a board."""
    return Board(id=board_id, name=name, columns=tuple(columns), **attrs)


def _sample_board():
    """Todo: cards 1, 2, 3. Doing: cards 4, 5. Done: empty."""
    return _make_board(
        [
            _make_column(1, 1, [1, 2, 3], name="Todo"),
            _make_column(2, 2, [4, 5], name="Doing"),
            _make_column(3, 3, [], name="Done"),
        ]
    )


def _card_order(board, column_id):
    """(id, position) pairs of a column's cards in stored order."""
    return [(c.id, c.position) for c in board.column(column_id).cards]


async def _wait_for(predicate, rounds=200):
    """Yield to the event loop until predicate() holds."""
    for _ in range(rounds):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


@pytest.fixture
def board():
    return _sample_board()


@pytest.fixture
def service(board):
    return FakeBoardService(board)
