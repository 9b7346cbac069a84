"""Handlers for 'swimlane web' command."""

import shlex
import shutil
import sys

from textual_serve.server import Server

from swimlane.cli._common import board_id_or_die, load_config_or_die


def serve_web(args) -> int:
    config = load_config_or_die(args)
    board_id = board_id_or_die(config, args.json)

    swimlane = shutil.which("swimlane")
    if swimlane is None:
        print("error: swimlane not found on PATH", file=sys.stderr)
        return 1

    parts = [swimlane, str(board_id), "--url", config["api_url"]]
    if args.config:
        parts += ["--config", args.config]
    command = shlex.join(parts)
    server = Server(command, host=args.host, port=args.port, title="swimlane")

    print(f"serving board {board_id} at http://{args.host}:{args.port}")
    server.serve()
    return 0
