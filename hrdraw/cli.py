"""Command line entry point.

Examples
--------
  hrdraw --file staff.csv roster
  hrdraw --names "Ann, Bob, Cid" --demo draw --count 3
  hrdraw --file staff.csv --dedupe group --size 4 --output groups.csv
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence, TextIO

from sqlalchemy.orm import Session

from .config import Settings
from .db.engine import open_session
from .entities import Participant
from .errors import HrDrawError
from .export import write_groups_csv
from .lottery import DrawAnimation, LotteryEngine
from .roster import RosterManager
from .workflows import build_roster, generate_groups, reset_session, run_draws

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level_name: str) -> None:
    """Configure root logging to stderr so stdout only carries results."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def _int_at_least(minimum: int, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}")
    if value < minimum:
        raise argparse.ArgumentTypeError(f"must be at least {minimum}, got {value}")
    return value


def _positive_int(raw: str) -> int:
    return _int_at_least(1, raw)


def _non_negative_int(raw: str) -> int:
    return _int_at_least(0, raw)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hrdraw",
        description="Lucky draws and random grouping for a list of names.",
    )
    parser.add_argument(
        "--names",
        action="append",
        default=[],
        metavar="TEXT",
        help="Names separated by commas or newlines (repeatable)",
    )
    parser.add_argument(
        "--file",
        action="append",
        default=[],
        metavar="PATH",
        help="UTF-8 or Big5 file, one name per line, first CSV column used (repeatable)",
    )
    parser.add_argument("--demo", action="store_true", help="Add the sample roster")
    parser.add_argument(
        "--dedupe", action="store_true", help="Drop repeated names, keeping the first"
    )
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("roster", help="List the loaded participants")

    draw = sub.add_parser("draw", help="Draw winners one at a time")
    draw.add_argument("--count", type=_positive_int, default=1, help="Number of winners to draw")
    draw.add_argument(
        "--allow-repeats", action="store_true", help="Previous winners stay eligible"
    )
    draw.add_argument(
        "--no-animation", action="store_true", help="Skip the spinning names"
    )
    draw.add_argument("--ticks", type=_non_negative_int, default=None, help="Frames per draw")
    draw.add_argument(
        "--interval-ms", type=_non_negative_int, default=None, help="Milliseconds between frames"
    )

    group = sub.add_parser("group", help="Split the roster into random groups")
    group.add_argument("--size", required=True, help="Members per group")
    group.add_argument(
        "--output", default=None, metavar="PATH", help="Write the groups as CSV"
    )
    return parser


def _print_roster(session: Session, out: TextIO) -> None:
    roster = RosterManager(session)
    participants = roster.participants()
    if not participants:
        print("The roster is empty.", file=out)
        return
    counts = roster.name_counts()
    for index, p in enumerate(participants, start=1):
        marker = " (duplicate)" if counts[p.name] > 1 else ""
        print(f"{index:>4}. {p.name}{marker}", file=out)
    print(f"{len(participants)} participants, {len(counts)} distinct names", file=out)
    duplicates = roster.duplicate_names()
    if duplicates:
        print("Repeated names: " + ", ".join(duplicates), file=out)


def _animation_for(args: argparse.Namespace, settings: Settings) -> DrawAnimation:
    if args.no_animation:
        return DrawAnimation(ticks=0, interval=0.0)
    ticks = settings.animation_ticks if args.ticks is None else args.ticks
    interval_ms = (
        settings.animation_interval_ms if args.interval_ms is None else args.interval_ms
    )
    return DrawAnimation(ticks=ticks, interval=interval_ms / 1000.0)


def _run_draw(session: Session, args: argparse.Namespace, settings: Settings, out: TextIO) -> None:
    animation = _animation_for(args, settings)
    interactive = animation.ticks > 0 and out.isatty()

    def on_tick(p: Participant) -> None:
        if interactive:
            out.write(f"\r  ... {p.name:<20}")
            out.flush()

    def on_winner(round_no: int, p: Participant) -> None:
        if interactive:
            out.write("\r" + " " * 28 + "\r")
        print(f"Winner #{round_no}: {p.name}", file=out)

    lottery = LotteryEngine(session, allow_repeats=args.allow_repeats, animation=animation)
    winners = asyncio.run(
        run_draws(
            session,
            args.count,
            on_tick=on_tick,
            on_winner=on_winner,
            engine=lottery,
        )
    )
    if len(winners) < args.count:
        print("Everyone in the list has already been drawn.", file=out)
    remaining = len(lottery.remaining_pool())
    total = len(RosterManager(session, settings=settings))
    print(f"Remaining: {remaining} / {total}", file=out)


def _run_group(session: Session, args: argparse.Namespace, out: TextIO) -> None:
    groups = generate_groups(session, args.size)
    if not groups:
        print("The roster is empty.", file=out)
        return
    for group in groups:
        names = ", ".join(member.name for member in group.members)
        print(f"Group {group.id} ({len(group)}): {names}", file=out)
    if args.output:
        target = write_groups_csv(groups, args.output)
        print(f"Saved {target}", file=out)


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    setup_logging(args.log_level or settings.log_level)

    session = open_session(settings.database_url)
    try:
        reset_session(session)
        build_roster(
            session,
            texts=args.names,
            files=args.file,
            demo=args.demo,
            dedupe=args.dedupe,
            settings=settings,
        )
        if args.command == "roster":
            _print_roster(session, out)
        elif args.command == "draw":
            _run_draw(session, args, settings, out)
        elif args.command == "group":
            _run_group(session, args, out)
        session.commit()
    except (HrDrawError, OSError) as exc:
        session.rollback()
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        bind = session.get_bind()
        session.close()
        bind.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
