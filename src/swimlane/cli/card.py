"""Handlers for 'swimlane card' commands."""

import asyncio

from swimlane.cli._common import (
    board_id_or_die,
    build_client,
    error,
    fetch_board_or_die,
    find_card_or_die,
    find_column,
    load_config_or_die,
    output_json,
    output_result,
)
from swimlane.ids import normalize_id
from swimlane.model.card import find_card
from swimlane.model.positions import sort_by_position
from swimlane.moves import calculate_card_move
from swimlane.sync import PersistenceFailure


async def _card_list(args) -> int:
    config = load_config_or_die(args)
    board_id = board_id_or_die(config, args.json)
    async with build_client(config) as client:
        board = await fetch_board_or_die(client, board_id, args.json)

    columns = board.columns
    if args.column is not None:
        columns = [find_column(board, normalize_id(args.column), args.json)]

    if args.json:
        items = [
            {
                "id": card.id,
                "title": card.title,
                "position": card.position,
                "priority": card.priority,
                "column": {"id": col.id, "name": col.name},
            }
            for col in columns
            for card in sort_by_position(col.cards)
        ]
        output_json(items)
    else:
        for col in columns:
            print(f"{col.id}  {col.name}")
            for card in sort_by_position(col.cards):
                print(f"  {card.position}. {card.id}  {card.title}")

    return 0


def card_list(args) -> int:
    """List cards grouped by column, in position order."""
    return asyncio.run(_card_list(args))


async def _card_move(args) -> int:
    card_id = normalize_id(args.id)
    config = load_config_or_die(args)
    board_id = board_id_or_die(config, args.json)

    async with build_client(config) as client:
        board = await fetch_board_or_die(client, board_id, args.json)
        find_card_or_die(board, card_id, args.json)
        card = find_card(board, card_id)
        target = find_column(board, normalize_id(args.column), args.json)

        position = args.position
        if position is None:
            position = max((c.position for c in target.cards), default=0) + 1

        updates = calculate_card_move(card_id, target.id, position, board)
        if updates is None:
            error(f"Card '{card_id}' cannot move to column '{target.id}'.", args.json)
        if not updates:
            output_result(
                {"id": card_id, "column": {"id": target.id, "name": target.name}, "updated": 0},
                f"Card {card_id} is already there",
                args.json,
            )
            return 0

        try:
            result = await client.reorder_cards(updates)
        except PersistenceFailure as e:
            error(f"move not saved: {e}", args.json)

    # a gap elsewhere in the column can leave the card itself untouched
    moved = next((u for u in updates if u.id == card_id), card)
    output_result(
        {
            "id": card_id,
            "column": {"id": target.id, "name": target.name},
            "position": moved.position,
            "updated": result.updated_count,
            "updates": [u.to_payload() for u in updates],
        },
        f"Moved card {card_id} to {target.name} at position {moved.position} ({result.updated_count} updated)",
        args.json,
    )
    return 0


def card_move(args) -> int:
    """Move a card to a column, optionally at a 1-based position."""
    return asyncio.run(_card_move(args))
