import logging
import re
from datetime import timedelta
from pathlib import Path
from typing import Iterable

from icalendar import Calendar, Event

from confplanner.day_utils import parse_day_date, parse_time
from confplanner.models import Day, Session

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_PATH = Path.home() / "Downloads" / "confplanner.ics"


def _uid(day: Day, session: Session) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", session.name.lower()).strip("-")
    return f"{day.date}-{slug}@confplanner"


def build_calendar(entries: Iterable[tuple[Day, Session]]) -> Calendar:
    """Build an iCal calendar with one event per (day, session) pair.

    Sessions whose day or start time cannot be parsed are skipped.
    """
    cal = Calendar()
    cal.add("prodid", "-//confplanner//Conference Schedule//EN")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("x-wr-calname", "Conference Schedule")

    for day, session in entries:
        base_date = parse_day_date(day.date)
        if not base_date:
            logger.warning("Skipping %r: unparseable day %r", session.name, day.date)
            continue
        start = parse_time(session.time_start, base_date)
        if not start:
            logger.warning("Skipping %r: unparseable start time %r", session.name, session.time_start)
            continue
        end = parse_time(session.time_end, base_date)
        if not end or end <= start:
            end = start + timedelta(hours=1)

        event = Event()
        event.add("summary", session.name)
        event.add("dtstart", start)
        event.add("dtend", end)
        if session.location:
            event.add("location", session.location)
        description_parts = []
        if session.speakers:
            description_parts.append(f"Speakers: {', '.join(sp.name for sp in session.speakers)}")
        if session.tracks:
            description_parts.append(f"Tracks: {', '.join(session.tracks)}")
        if session.description:
            description_parts.append(f"\n{session.description}")
        event.add("description", "\n".join(description_parts))
        event.add("uid", _uid(day, session))
        cal.add_component(event)

    return cal


def export_ical(entries: Iterable[tuple[Day, Session]], output_path: Path) -> int:
    """Write sessions to an iCal file. Returns the number of events written."""
    cal = build_calendar(entries)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wb") as f:
        f.write(cal.to_ical())
    count = len(cal.walk("VEVENT"))
    logger.info("Exported %d sessions to %s", count, output_path)
    return count


def visible_entries(day: Day) -> list[tuple[Day, Session]]:
    """Pair each session left visible by the last filter pass with its day."""
    return [(day, s) for s in day.visible_sessions()]
