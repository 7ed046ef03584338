"""
CLI (Command Line Interface).

A plain-text stand-in for the presentation layer:

    tvschedule today
    tvschedule today --date 2026-10-19 --refs
    tvschedule detail <ref>

Note:
- Errors are printed as one line, exit code 1
- -v enables debug logging of every request
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from tvschedule.errors import TvScheduleError
from tvschedule.guide import TvGuide
from tvschedule.model import ListingDetail, Schedule


def _fmt_time(entry_time) -> str:
    return entry_time.strftime("%H:%M") if entry_time else "     "


def _print_schedule(schedule: Schedule, show_refs: bool) -> None:
    """
    Print one line per broadcast, sorted by start time.
    """
    if not schedule.entries:
        print("No broadcasts found.")

    width = max((len(e.channel_name) for e in schedule.entries), default=0)

    for e in schedule.entries:
        extras = [x for x in (e.genre, str(e.year) if e.year else None) if x]
        suffix = f" ({', '.join(extras)})" if extras else ""
        print(f"{_fmt_time(e.start_time)}-{_fmt_time(e.end_time)}  {e.channel_name:<{width}}  {e.title}{suffix}")
        if show_refs:
            print(f"{'':13}{e.detail_ref}")

    if schedule.skipped:
        print(f"... {schedule.skipped_count} broadcasts could not be read")


def _print_detail(detail: ListingDetail) -> None:
    print(detail.title or "(no title)")
    if detail.channel_name:
        print(f"Channel : {detail.channel_name}")
    if detail.year:
        print(f"Year    : {detail.year}")
    if detail.genre:
        print(f"Genre   : {detail.genre}")
    if detail.country:
        print(f"Country : {detail.country}")
    if detail.original_title:
        print(f"Original: {detail.original_title}")
    print()
    print(detail.description or "No description available.")


def _cmd_today(args: argparse.Namespace, guide: TvGuide) -> int:
    schedule = guide.get_schedule(args.date)
    _print_schedule(schedule, show_refs=args.refs)
    return 0


def _cmd_detail(args: argparse.Namespace, guide: TvGuide) -> int:
    ref = (args.ref or "").strip()
    if not ref:
        print("Please provide a detail reference (URL).")
        return 1

    _print_detail(guide.get_detail(ref))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="tvschedule", description="Today's TV evening program")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_today = sub.add_parser("today", help="Show the evening program")
    p_today.add_argument("--date", type=date.fromisoformat, default=None, help="Day to show (YYYY-MM-DD)")
    p_today.add_argument("--refs", action="store_true", help="Also print each broadcast's detail URL")

    p_detail = sub.add_parser("detail", help="Show details for one broadcast")
    p_detail.add_argument("ref", type=str, help="Detail URL as printed by 'today --refs'")

    return parser


def main(argv: list[str] | None = None, guide: TvGuide | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {"today": _cmd_today, "detail": _cmd_detail}
    handler = commands.get(args.command)
    if handler is None:
        raise SystemExit(2)

    own_guide = guide is None
    guide = guide or TvGuide()
    try:
        code = handler(args, guide)
    except TvScheduleError as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 1
    finally:
        if own_guide:
            guide.close()

    raise SystemExit(code)
