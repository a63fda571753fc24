import logging
import re
from datetime import datetime

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_CLOCK = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([ap])?\.?m?\.?\s*$", re.IGNORECASE)


def parse_day_date(date_str: str) -> datetime | None:
    """Parse a schedule day label into a datetime date.

    Handles formats like:
    - "2047-05-17"
    - "Wednesday (2047-05-17)"
    - "May 17, 2047"
    """
    iso_match = _ISO_DATE.search(date_str)
    if iso_match:
        year, month, day = (int(part) for part in iso_match.groups())
        try:
            return datetime(year, month, day)
        except ValueError:
            return None
    for fmt in ("%B %d, %Y", "%b %d, %Y", "%d %B %Y"):
        try:
            return datetime.strptime(date_str.strip(), fmt)
        except ValueError:
            continue
    logger.warning("Unrecognized day format: %r", date_str)
    return None


def parse_clock(time_str: str) -> tuple[int, int] | None:
    """Parse '8:00 am', '1:30 pm' or '13:30' into (hour, minute)."""
    match = _CLOCK.match(time_str or "")
    if not match:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    meridiem = (match.group(3) or "").lower()
    if meridiem:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12 + (12 if meridiem == "p" else 0)
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def parse_time(time_str: str, base_date: datetime) -> datetime | None:
    """Combine a clock label with a day into a datetime."""
    clock = parse_clock(time_str)
    if clock is None:
        return None
    return base_date.replace(hour=clock[0], minute=clock[1], second=0)


def time_sort_key(time_str: str) -> str:
    """Zero-padded 24h key for sorting clock labels; unknown formats sort last."""
    clock = parse_clock(time_str)
    if clock is None:
        return f"99:99 {time_str}"
    return f"{clock[0]:02d}:{clock[1]:02d}"


def format_time_range(start: str, end: str, separator: str = "-") -> str:
    """Format a start/end time pair into a display string."""
    if end:
        return f"{start}{separator}{end}"
    return start


def make_tab_label(date_str: str) -> str:
    """Short tab label such as 'Wed 17 May'."""
    date = parse_day_date(date_str)
    if date:
        return date.strftime("%a %d %b")
    return date_str[:15]
