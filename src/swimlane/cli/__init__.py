"""CLI argument parser and dispatch for swimlane."""

import argparse

from swimlane.cli.board import board_get, board_summary
from swimlane.cli.card import card_list, card_move
from swimlane.cli.check import check_positions
from swimlane.cli.column import column_list, column_move
from swimlane.cli.init import init_config
from swimlane.cli.web import serve_web


def common_parser() -> argparse.ArgumentParser:
    """Options shared by every command, including TUI mode."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Config file (default: $SWIMLANE_CONFIG or ~/.config/swimlane/config.yaml)")
    common.add_argument("--url", help="Board service URL (overrides the config file)")
    common.add_argument("--board", help="Board ID (overrides the config file)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return common


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = common_parser()

    parser = argparse.ArgumentParser(
        prog="swimlane",
        description="Kanban board client with drag-and-drop reordering",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- init ---
    init_p = nouns.add_parser("init", help="Write a config file", parents=[common])
    init_p.add_argument("--token", help="API token")
    init_p.add_argument("--timeout", type=float, help="Request timeout in seconds (default: 10)")
    init_p.add_argument("--force", action="store_true", help="Overwrite an existing config file")
    init_p.set_defaults(func=init_config)

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_show_p = board_verbs.add_parser("show", help="Show board summary", parents=[common])
    board_show_p.set_defaults(func=board_summary)

    board_get_p = board_verbs.add_parser("get", help="Dump board as JSON", parents=[common])
    board_get_p.set_defaults(func=board_get)

    # board with no verb = show
    board_p.set_defaults(func=board_summary)

    # --- card ---
    card_p = nouns.add_parser("card", help="Card operations", parents=[common])
    card_verbs = card_p.add_subparsers(dest="verb")

    card_list_p = card_verbs.add_parser("list", help="List cards", parents=[common])
    card_list_p.add_argument("--column", dest="column", help="Filter by column ID")
    card_list_p.set_defaults(func=card_list)

    card_move_p = card_verbs.add_parser("move", help="Move a card", parents=[common])
    card_move_p.add_argument("id", help="Card ID")
    card_move_p.add_argument("--column", dest="column", required=True, help="Target column ID")
    card_move_p.add_argument("--position", type=int, help="Position in column (1-indexed, default: last)")
    card_move_p.set_defaults(func=card_move)

    # card with no verb = list
    card_p.set_defaults(func=card_list, column=None)

    # --- column ---
    col_p = nouns.add_parser("column", help="Column operations", parents=[common])
    col_verbs = col_p.add_subparsers(dest="verb")

    col_list_p = col_verbs.add_parser("list", help="List columns", parents=[common])
    col_list_p.set_defaults(func=column_list)

    col_move_p = col_verbs.add_parser("move", help="Move a column", parents=[common])
    col_move_p.add_argument("id", help="Column ID")
    col_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    col_move_p.set_defaults(func=column_move)

    # column with no verb = list
    col_p.set_defaults(func=column_list)

    # --- check ---
    check_p = nouns.add_parser("check", help="Check card and column positions", parents=[common])
    check_p.set_defaults(func=check_positions)

    # --- web ---
    web_p = nouns.add_parser("web", help="Serve board in browser", parents=[common])
    web_p.add_argument("--host", default="localhost", help="Bind address (default: localhost)")
    web_p.add_argument("--port", type=int, default=8617, help="Port (default: 8617)")
    web_p.set_defaults(func=serve_web)

    return parser


def build_tui_parser() -> argparse.ArgumentParser:
    """Parser for TUI mode: ``swimlane [BOARD]``."""
    parser = argparse.ArgumentParser(prog="swimlane", parents=[common_parser()])
    parser.add_argument("board_id", nargs="?", help="Board ID (default: from config)")
    return parser
