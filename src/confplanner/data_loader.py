import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable

import httpx
from pyuca import Collator

from confplanner.errors import LoadError, RangeError
from confplanner.favorites import Favorites, FavoritesStore
from confplanner.models import Day, Document, Group, MapPin, Segment, Session, Speaker
from confplanner.timeline import filter_day

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "assets"
DEFAULT_DATA_PATH = DATA_DIR / "data.json"

REQUIRED_SECTIONS = ("schedule", "speakers", "map")

Fetcher = Callable[[], Awaitable[dict]]


def _is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


async def fetch_document(source: str | Path = DEFAULT_DATA_PATH) -> dict:
    """Read the raw conference document from a local path or an http(s) URL."""
    try:
        if _is_url(source):
            async with httpx.AsyncClient(follow_redirects=True) as client:
                response = await client.get(str(source))
                response.raise_for_status()
                raw = response.json()
        else:
            raw = await asyncio.to_thread(_read_json, Path(source))
    except (OSError, ValueError, httpx.HTTPError) as exc:
        raise LoadError(f"Could not fetch conference data from {source}: {exc}") from exc
    if not isinstance(raw, dict):
        raise LoadError(f"Conference data at {source} is not a JSON object")
    return raw


def _str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"expected a list of strings, got {type(value).__name__}")
    return [str(v) for v in value]


def _name(entry: dict) -> str:
    name = entry["name"]
    if not isinstance(name, str):
        raise TypeError(f"expected a string name, got {type(name).__name__}")
    return name


def _parse_session(s: dict) -> Session:
    return Session(
        name=_name(s),
        description=s.get("description", ""),
        speaker_names=_str_list(s.get("speakerNames")),
        time_start=s.get("timeStart", ""),
        time_end=s.get("timeEnd", ""),
        location=s.get("location", ""),
        tracks=_str_list(s.get("tracks")),
    )


def _parse_day(d: dict) -> Day:
    return Day(
        date=d.get("date", ""),
        groups=[
            Group(time=g.get("time", ""), sessions=[_parse_session(s) for s in g.get("sessions") or []])
            for g in d["groups"]
        ],
    )


def _parse_speaker(s: dict) -> Speaker:
    return Speaker(
        name=_name(s),
        profile_pic=s.get("profilePic", ""),
        twitter=s.get("twitter", ""),
        about=s.get("about", ""),
        location=s.get("location", ""),
        email=s.get("email", ""),
        phone=s.get("phone", ""),
    )


def _parse_pin(p: dict) -> MapPin:
    lng = p["long"] if "long" in p else p["lng"]
    return MapPin(
        name=p.get("name", ""),
        lat=float(p["lat"]),
        long=float(lng),
        centre=bool(p.get("centre", p.get("center", False))),
    )


def parse_document(raw: dict) -> Document:
    """Build typed models from the raw JSON document.

    Raises LoadError when a required section or key is missing or has the
    wrong shape.
    """
    missing = [key for key in REQUIRED_SECTIONS if not isinstance(raw.get(key), list)]
    if missing:
        raise LoadError(f"Conference data is missing sections: {', '.join(missing)}")
    try:
        return Document(
            schedule=[_parse_day(d) for d in raw["schedule"]],
            speakers=[_parse_speaker(s) for s in raw["speakers"]],
            map=[_parse_pin(p) for p in raw["map"]],
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise LoadError(f"Malformed conference data: {exc!r}") from exc


def normalize(document: Document) -> Document:
    """Link speakers and sessions both ways and collect the track list.

    Derived fields are reset first, so running this twice on the same
    document leaves the same links.
    """
    by_name: dict[str, Speaker] = {}
    for speaker in document.speakers:
        speaker.sessions = []
        if speaker.name in by_name:
            logger.warning("Duplicate speaker name %r, keeping the first entry", speaker.name)
            continue
        by_name[speaker.name] = speaker

    document.clear_tracks()
    for day in document.schedule:
        for group in day.groups:
            for session in group.sessions:
                session.speakers = []
                for speaker_name in session.speaker_names:
                    speaker = by_name.get(speaker_name)
                    if speaker is None:
                        logger.debug("Session %r lists unknown speaker %r", session.name, speaker_name)
                        continue
                    session.speakers.append(speaker)
                    speaker.sessions.append(session)
                for track in session.tracks:
                    document.add_track(track)
    return document


_collator = Collator()


def speaker_sort_key(speaker: Speaker) -> tuple:
    """Unicode collation key of the last name, so "Éclair" sorts with the E's."""
    return _collator.sort_key(speaker.last_name)


class ConferenceData:
    """Lazily loaded, cached conference dataset with timeline filtering."""

    def __init__(
        self,
        source: str | Path = DEFAULT_DATA_PATH,
        favorites: FavoritesStore | None = None,
        fetcher: Fetcher | None = None,
    ):
        self.source = source
        self.favorites: FavoritesStore = favorites if favorites is not None else Favorites()
        self._fetcher: Fetcher = fetcher or (lambda: fetch_document(self.source))
        self._data: Document | None = None
        self._pending: asyncio.Task | None = None

    @property
    def loaded(self) -> bool:
        return self._data is not None

    @property
    def source_name(self) -> str:
        if _is_url(self.source):
            return str(self.source)
        return Path(self.source).name

    async def load(self) -> Document:
        """Return the normalized document, fetching it on first use.

        Callers arriving while the first fetch is running wait on that same
        fetch.
        """
        if self._data is not None:
            logger.debug("Using cached conference data")
            return self._data
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._fetch_and_normalize())
        pending = self._pending
        try:
            return await asyncio.shield(pending)
        finally:
            if self._pending is pending and pending.done():
                self._pending = None

    async def _fetch_and_normalize(self) -> Document:
        try:
            raw = await self._fetcher()
        except (OSError, ValueError, httpx.HTTPError) as exc:
            raise LoadError(f"Could not fetch conference data from {self.source_name}: {exc}") from exc
        if not isinstance(raw, dict):
            raise LoadError(f"Conference data from {self.source_name} is not a JSON object")
        document = normalize(parse_document(raw))
        self._data = document
        logger.info(
            "Loaded conference data from %s: %d days, %d speakers, %d tracks",
            self.source_name, len(document.schedule), len(document.speakers), len(document.tracks),
        )
        return document

    async def get_timeline(
        self,
        day_index: int,
        query_text: str = "",
        exclude_tracks: Iterable[str] = (),
        segment: Segment | str = Segment.ALL,
    ) -> Day:
        """Filter one day of the schedule and return it with hide flags set."""
        data = await self.load()
        if not 0 <= day_index < len(data.schedule):
            raise RangeError(f"Day index {day_index} out of range (schedule has {len(data.schedule)} days)")
        return filter_day(data.schedule[day_index], query_text, exclude_tracks, segment, self.favorites)

    async def get_speakers(self) -> list[Speaker]:
        """All speakers sorted by last name."""
        data = await self.load()
        return sorted(data.speakers, key=speaker_sort_key)

    async def get_tracks(self) -> list[str]:
        data = await self.load()
        return sorted(data.tracks)

    async def get_map(self) -> list[MapPin]:
        data = await self.load()
        return data.map

    async def center_pin(self) -> MapPin | None:
        """The pin flagged as map centre, else the first pin."""
        pins = await self.get_map()
        for pin in pins:
            if pin.centre:
                return pin
        return pins[0] if pins else None

    async def get_session(self, name: str) -> Session | None:
        data = await self.load()
        for day in data.schedule:
            for session in day.iter_sessions():
                if session.name == name:
                    return session
        return None

    async def get_speaker(self, name: str) -> Speaker | None:
        data = await self.load()
        for speaker in data.speakers:
            if speaker.name == name:
                return speaker
        return None
