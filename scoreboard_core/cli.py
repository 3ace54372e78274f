"""
Scoreboard interpreter: command-line entry point.
=================================================
Reads contest commands one per line, applies them in order and prints each
command's result lines to stdout. Diagnostics go to stderr via logging.

Usage:
    scoreboard-core < commands.txt
    python -m scoreboard_core --input commands.txt --log-level INFO
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, TextIO, get_args

from .config import LogLevel, get_settings
from .contest import Contest, execute_line

logger = logging.getLogger(__name__)


def run(lines: Iterable[str], out: TextIO, contest: Contest | None = None) -> Contest:
    """Feed `lines` through a contest, writing results to `out`.

    Malformed lines are logged and skipped. END prints its message and reading
    continues until the input is exhausted.
    """
    contest = contest or Contest()
    for lineno, line in enumerate(lines, start=1):
        try:
            outcome = execute_line(contest, line)
        except ValueError as exc:
            logger.warning(f"line {lineno} skipped: {exc}")
            continue
        if outcome is None:
            continue
        for text in outcome.lines:
            out.write(text + "\n")
    return contest


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="ICPC scoreboard event interpreter")
    parser.add_argument(
        "--input", type=str, default=None,
        help="Command file (default: read stdin)",
    )
    parser.add_argument(
        "--log-level", type=str.upper, choices=get_args(LogLevel), default=settings.log_level,
        help=f"Logging level for stderr diagnostics (default: {settings.log_level})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.input is None:
        run(sys.stdin, sys.stdout, Contest(settings))
    else:
        with open(args.input, "r", encoding="utf-8") as f:
            run(f, sys.stdout, Contest(settings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
