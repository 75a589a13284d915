from __future__ import annotations

import argparse
import logging
import os
import sys

from rich.console import Console

from almanac.core.config import PARTS, Config, ConfigError, get_user_config_path, load_config_file
from almanac.core.parse import AlmanacError, load_almanac
from almanac.core.solve import build_pipeline, solve
from almanac.report import print_solution, trace_table


def _resolve_config(path: str | None) -> Config:
    if path is not None:
        return load_config_file(path)
    user = get_user_config_path()
    if user.is_file():
        return load_config_file(user)
    return Config()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="almanac", description="Lowest location for almanac seeds and seed ranges"
    )
    parser.add_argument("path", help="Path to almanac text file")
    parser.add_argument("--part", choices=PARTS, default=None, help="Which answer to report")
    parser.add_argument("--workers", type=int, default=None, help="Threads for mapping seeds")
    parser.add_argument("--config", default=None, help="YAML settings file")
    parser.add_argument(
        "--compact", action="store_true", default=None, help="Merge pieces between stages"
    )
    parser.add_argument(
        "--trace", type=int, nargs="+", metavar="SEED", help="Show the category walk of seeds"
    )
    parser.add_argument("--tui", action="store_true", help="Open the interactive viewer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not os.path.exists(args.path):
        print(f"almanac: file not found: {args.path}", file=sys.stderr)
        return 2
    if args.workers is not None and args.workers < 1:
        print("almanac: --workers must be >= 1", file=sys.stderr)
        return 2

    try:
        config = _resolve_config(args.config).with_overrides(
            part=args.part, workers=args.workers, compact=args.compact
        )
        parsed = load_almanac(args.path, chain=config.chain)
    except FileNotFoundError as e:
        print(f"almanac: {e}", file=sys.stderr)
        return 2
    except (ConfigError, AlmanacError) as e:
        for err in e.errors:
            print(f"almanac: {err}", file=sys.stderr)
        return 2

    if args.tui:
        from almanac.app import AlmanacApp

        AlmanacApp(args.path, parsed, config).run()
        return 0

    console = Console()
    try:
        if args.trace:
            pipeline = build_pipeline(parsed, config)
            console.print(trace_table(pipeline, args.trace, config.chain))
        sol = solve(parsed, config)
    except AlmanacError as e:
        for err in e.errors:
            print(f"almanac: {err}", file=sys.stderr)
        return 2

    print_solution(console, sol, config.part)
    if sol.part_two_error is not None:
        print(f"almanac: {sol.part_two_error}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
