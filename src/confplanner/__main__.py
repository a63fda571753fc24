import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from confplanner.data_loader import ConferenceData, DEFAULT_DATA_PATH
from confplanner.errors import ConferenceDataError

console = Console()


def _add_filter_args(parser: argparse.ArgumentParser):
    parser.add_argument("--day", type=int, default=0, help="day index into the schedule")
    parser.add_argument("--query", default="", help="words to match in session names")
    parser.add_argument(
        "--exclude-track", action="append", default=[], dest="exclude_tracks",
        help="hide sessions whose only tracks are excluded (repeatable)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="confplanner", description="Browse a conference schedule.")
    parser.add_argument("--data", default=str(DEFAULT_DATA_PATH), help="path or URL of the data.json document")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("tui", help="launch the terminal UI")
    _add_filter_args(sub.add_parser("timeline", help="print the filtered timeline of a day"))
    sub.add_parser("speakers", help="list speakers by last name")
    sub.add_parser("tracks", help="list tracks")
    sub.add_parser("map", help="list map pins")

    export = sub.add_parser("export", help="export visible sessions of a day to iCal")
    export.add_argument("output", type=Path)
    _add_filter_args(export)
    return parser


async def print_timeline(data: ConferenceData, args: argparse.Namespace):
    day = await data.get_timeline(args.day, args.query, args.exclude_tracks)
    table = Table(title=f"{day.date} ({day.shown_sessions} shown)")
    for column in ("Time", "Session", "Speakers", "Tracks", "Location"):
        table.add_column(column)
    for group in day.groups:
        if group.hide:
            continue
        for session in group.sessions:
            if session.hide:
                continue
            table.add_row(
                group.time,
                session.name,
                ", ".join(sp.name for sp in session.speakers),
                ", ".join(session.tracks),
                session.location,
            )
    console.print(table)


async def print_speakers(data: ConferenceData, args: argparse.Namespace):
    table = Table(title="Speakers")
    for column in ("Name", "Twitter", "Sessions"):
        table.add_column(column)
    for speaker in await data.get_speakers():
        table.add_row(speaker.name, speaker.twitter, str(len(speaker.sessions)))
    console.print(table)


async def print_tracks(data: ConferenceData, args: argparse.Namespace):
    for track in await data.get_tracks():
        console.print(track)


async def print_map(data: ConferenceData, args: argparse.Namespace):
    table = Table(title="Map")
    for column in ("Name", "Lat", "Long", "Centre"):
        table.add_column(column)
    for pin in await data.get_map():
        table.add_row(pin.name, str(pin.lat), str(pin.long), "yes" if pin.centre else "")
    console.print(table)


async def run_export(data: ConferenceData, args: argparse.Namespace):
    from confplanner.export import export_ical, visible_entries

    day = await data.get_timeline(args.day, args.query, args.exclude_tracks)
    count = export_ical(visible_entries(day), args.output)
    console.print(f"Exported {count} sessions to {args.output}")


COMMANDS = {
    "timeline": print_timeline,
    "speakers": print_speakers,
    "tracks": print_tracks,
    "map": print_map,
    "export": run_export,
}


def run_app(source: str):
    """Launch the TUI application."""
    from confplanner.app import ConferenceApp
    app = ConferenceApp(source)
    app.run()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    command = COMMANDS.get(args.command)
    if command is None:
        run_app(args.data)
        return 0

    data = ConferenceData(args.data)
    try:
        asyncio.run(command(data, args))
    except ConferenceDataError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
