"""Tests for CLI argument parsing."""

from swimlane.cli import build_parser, build_tui_parser
from swimlane.cli.board import board_summary
from swimlane.cli.card import card_list, card_move
from swimlane.cli.check import check_positions
from swimlane.cli.column import column_list


def test_card_move_args():
    args = build_parser().parse_args(["card", "move", "3", "--column", "2", "--position", "1", "--json"])
    assert args.func is card_move
    assert args.id == "3"
    assert args.column == "2"
    assert args.position == 1
    assert args.json is True


def test_nouns_without_verb():
    parser = build_parser()
    assert parser.parse_args(["board"]).func is board_summary
    assert parser.parse_args(["column"]).func is column_list
    args = parser.parse_args(["card"])
    assert args.func is card_list
    assert args.column is None


def test_common_options():
    args = build_parser().parse_args(["check", "--board", "7", "--url", "http://board.test", "-v"])
    assert args.func is check_positions
    assert args.board == "7"
    assert args.url == "http://board.test"
    assert args.verbose is True


def test_tui_args():
    args = build_tui_parser().parse_args(["7", "--config", "/tmp/c.yaml"])
    assert args.board_id == "7"
    assert args.config == "/tmp/c.yaml"
