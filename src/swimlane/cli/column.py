"""Handlers for 'swimlane column' commands."""

import asyncio

from swimlane.cli._common import (
    board_id_or_die,
    build_client,
    build_column_summaries,
    error,
    fetch_board_or_die,
    find_column,
    format_column_line,
    load_config_or_die,
    output_json,
    output_result,
)
from swimlane.ids import normalize_id
from swimlane.moves import calculate_column_move
from swimlane.sync import PersistenceFailure


async def _column_list(args) -> int:
    config = load_config_or_die(args)
    board_id = board_id_or_die(config, args.json)
    async with build_client(config) as client:
        board = await fetch_board_or_die(client, board_id, args.json)

    items = build_column_summaries(board)
    if args.json:
        output_json(items)
    else:
        for c in items:
            print(format_column_line(c))

    return 0


def column_list(args) -> int:
    """List all columns in position order."""
    return asyncio.run(_column_list(args))


async def _column_move(args) -> int:
    column_id = normalize_id(args.id)
    config = load_config_or_die(args)
    board_id = board_id_or_die(config, args.json)

    async with build_client(config) as client:
        board = await fetch_board_or_die(client, board_id, args.json)
        col = find_column(board, column_id, args.json)

        updates = calculate_column_move(col.id, args.position, board)
        if updates is None:
            error(f"Column '{column_id}' cannot be moved.", args.json)
        if not updates:
            output_result(
                {"id": col.id, "position": col.position, "updated": 0},
                f"Column {col.name} is already at position {col.position}",
                args.json,
            )
            return 0

        try:
            result = await client.reorder_columns(updates)
        except PersistenceFailure as e:
            error(f"move not saved: {e}", args.json)

    moved = next((u for u in updates if u.id == col.id), col)
    output_result(
        {
            "id": col.id,
            "position": moved.position,
            "updated": result.updated_count,
            "updates": [u.to_payload() for u in updates],
        },
        f"Moved column {col.name} to position {moved.position} ({result.updated_count} updated)",
        args.json,
    )
    return 0


def column_move(args) -> int:
    """Move a column to a 1-based position."""
    return asyncio.run(_column_move(args))
