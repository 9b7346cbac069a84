"""Handler for 'swimlane init'."""

from pathlib import Path

from swimlane.cli._common import error, output_json
from swimlane.config import DEFAULTS, config_path, load_config, write_config


def init_config(args) -> int:
    """Write a config file pointing at a server and board."""
    path = Path(args.config) if args.config else config_path()

    if path.exists() and not args.force:
        if args.json:
            output_json({"path": str(path), "created": False})
        else:
            print(f"Config already exists at {path}")
        return 0

    values = {
        "api_url": args.url or DEFAULTS["api-url"],
        "board": args.board,
        "token": args.token,
        "timeout": args.timeout if args.timeout is not None else DEFAULTS["timeout"],
    }
    try:
        write_config(path, values)
        written = load_config(path)
    except (OSError, ValueError) as e:
        error(f"could not write config: {e}", args.json)

    if args.json:
        output_json({"path": str(path), "created": True, "api_url": written["api_url"], "board": written["board"]})
    else:
        print(f"Wrote {path}")
        print(f"Server: {written['api_url']}")
        if written["board"] is not None:
            print(f"Board: {written['board']}")

    return 0
