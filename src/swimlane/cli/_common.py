"""Shared helpers for CLI command handlers."""

import json
import sys
from typing import Any

from swimlane.config import load_config
from swimlane.model.board import Board, Column
from swimlane.model.card import find_card_column
from swimlane.model.loader import load_board
from swimlane.sync import PersistenceFailure, SyncClient


def load_config_or_die(args) -> dict[str, Any]:
    """Read the config file, then apply --url and --board on top. Exit 1 on a bad file."""
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        error(f"could not read config: {e}", args.json)
    if getattr(args, "url", None):
        config["api_url"] = args.url
    if getattr(args, "board", None):
        config["board"] = args.board
    return config


def build_client(config: dict[str, Any]) -> SyncClient:
    """Client for the configured server."""
    return SyncClient.from_config(config)


def board_id_or_die(config: dict[str, Any], json_mode: bool) -> Any:
    board_id = config.get("board")
    if board_id is None:
        error("no board given; pass --board or set 'board' in the config file", json_mode)
    return board_id


async def fetch_board_or_die(client: SyncClient, board_id: Any, json_mode: bool) -> Board:
    """Fetch and normalize a board. Exit 1 with message on failure."""
    try:
        return await client.fetch_board(board_id)
    except PersistenceFailure as e:
        error(f"could not fetch board {board_id}: {e}", json_mode)
    except (KeyError, ValueError) as e:
        error(f"board {board_id}: malformed response ({e})", json_mode)


def find_column(board: Board, col_id: int, json_mode: bool) -> Column:
    """Lookup column by ID. Exit 1 listing available columns if not found."""
    col = board.column(col_id)
    if col is not None:
        return col
    available = [f"  {c.id}  {c.name}" for c in board.columns]
    msg = f"Column '{col_id}' not found. Available:\n" + "\n".join(available)
    error(msg, json_mode)


def find_card_or_die(board: Board, card_id, json_mode: bool) -> Column:
    """Lookup the column holding a card. Exit 1 if not found."""
    col = find_card_column(board, card_id)
    if col is not None:
        return col
    error(f"Card '{card_id}' not found.", json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def build_column_summaries(board: Board) -> list[dict]:
    """Build column summary dicts from board."""
    return [{"id": col.id, "name": col.name, "position": col.position, "cards": len(col.cards)} for col in board.columns]


def format_column_line(c: dict, indent: str = "") -> str:
    """Format a column summary dict as a text line."""
    cards = "card" if c["cards"] == 1 else "cards"
    return f"{indent}{c['position']}. {c['id']}  {c['name']:<16} {c['cards']} {cards}"
