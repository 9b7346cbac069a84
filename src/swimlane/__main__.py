"""Entry point for swimlane CLI."""

import logging
import sys

NOUNS = {"init", "board", "card", "column", "check", "web"}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
    )


def run_tui(argv: list[str]) -> int:
    from swimlane.cli import build_tui_parser
    from swimlane.cli._common import board_id_or_die, load_config_or_die
    from swimlane.ui import SwimlaneApp

    args = build_tui_parser().parse_args(argv)
    if args.board_id is not None:
        args.board = args.board_id
    config = load_config_or_die(args)
    board_id = board_id_or_die(config, args.json)

    app = SwimlaneApp(config, board_id)
    app.run()
    return app.return_code or 0


def main():
    # No subcommand or non-noun argument = TUI mode
    if len(sys.argv) < 2 or (sys.argv[1] not in NOUNS and not sys.argv[1].startswith("-")):
        sys.exit(run_tui(sys.argv[1:]))

    from swimlane.cli import build_parser

    parser = build_parser()
    args = parser.parse_args()
    _configure_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
