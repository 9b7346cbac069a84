"""Handler for 'swimlane check'."""

import asyncio

from swimlane.cli._common import board_id_or_die, build_client, fetch_board_or_die, load_config_or_die, output_json
from swimlane.model.positions import position_violations


async def _check(args) -> int:
    config = load_config_or_die(args)
    board_id = board_id_or_die(config, args.json)
    async with build_client(config) as client:
        board = await fetch_board_or_die(client, board_id, args.json)

    problems = position_violations(board)
    if args.json:
        output_json({"board": board.id, "ok": not problems, "violations": problems})
    elif problems:
        for problem in problems:
            print(problem)
    else:
        print(f"{board.name}: positions ok")

    return 1 if problems else 0


def check_positions(args) -> int:
    """Report columns and cards whose positions are not dense 1..N."""
    return asyncio.run(_check(args))
