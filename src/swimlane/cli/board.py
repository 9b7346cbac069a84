"""Handlers for 'swimlane board' commands."""

import asyncio

from swimlane.cli._common import (
    board_id_or_die,
    build_client,
    build_column_summaries,
    fetch_board_or_die,
    format_column_line,
    load_config_or_die,
    output_json,
)
from swimlane.model.writer import board_to_dict


async def _fetch(args):
    config = load_config_or_die(args)
    board_id = board_id_or_die(config, args.json)
    async with build_client(config) as client:
        return await fetch_board_or_die(client, board_id, args.json)


def board_summary(args) -> int:
    """Show board summary: name, columns, card counts."""
    board = asyncio.run(_fetch(args))
    columns = build_column_summaries(board)

    if args.json:
        output_json({"id": board.id, "name": board.name, "archived": board.archived, "columns": columns})
    else:
        archived = "  (archived)" if board.archived else ""
        print(f"{board.name}{archived}")
        for c in columns:
            print(format_column_line(c, indent="  "))

    return 0


def board_get(args) -> int:
    """Dump the whole board as JSON."""
    board = asyncio.run(_fetch(args))
    output_json(board_to_dict(board))
    return 0
