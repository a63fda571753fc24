from dataclasses import dataclass, field
from enum import Enum


@dataclass
class Speaker:
    """A conference speaker."""

    name: str
    profile_pic: str = ""
    twitter: str = ""
    about: str = ""
    location: str = ""
    email: str = ""
    phone: str = ""
    sessions: list["Session"] = field(default_factory=list, repr=False, compare=False)

    @property
    def last_name(self) -> str:
        """Last whitespace-separated token of the name."""
        parts = self.name.split()
        return parts[-1] if parts else ""


@dataclass
class Session:
    """A conference session."""

    name: str
    description: str = ""
    speaker_names: list[str] = field(default_factory=list)
    time_start: str = ""
    time_end: str = ""
    location: str = ""
    tracks: list[str] = field(default_factory=list)
    speakers: list[Speaker] = field(default_factory=list, repr=False, compare=False)
    hide: bool = field(default=False, compare=False)


@dataclass
class Group:
    """Time-slot bucket of sessions."""

    time: str
    sessions: list[Session] = field(default_factory=list)
    hide: bool = field(default=False, compare=False)


@dataclass
class Day:
    date: str
    groups: list[Group] = field(default_factory=list)
    shown_sessions: int = field(default=0, compare=False)

    def iter_sessions(self):
        for group in self.groups:
            yield from group.sessions

    def visible_sessions(self) -> list[Session]:
        """Sessions left visible by the last filter pass."""
        return [s for s in self.iter_sessions() if not s.hide]


@dataclass
class MapPin:
    """A point of interest on the venue map."""

    name: str
    lat: float
    long: float
    centre: bool = False


@dataclass
class Document:
    """Parsed conference dataset plus derived cross-references."""

    schedule: list[Day] = field(default_factory=list)
    speakers: list[Speaker] = field(default_factory=list)
    tracks: list[str] = field(default_factory=list)
    map: list[MapPin] = field(default_factory=list)
    _track_set: set[str] = field(default_factory=set, repr=False, compare=False)

    def add_track(self, track: str) -> bool:
        """Append a track if unseen. Returns True if it was added."""
        if track in self._track_set:
            return False
        self._track_set.add(track)
        self.tracks.append(track)
        return True

    def clear_tracks(self):
        self.tracks.clear()
        self._track_set.clear()


class Segment(str, Enum):
    """Timeline view mode."""

    ALL = "all"
    FAVORITES = "favorites"
