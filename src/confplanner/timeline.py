import re
from typing import Iterable

from confplanner.favorites import FavoritesStore
from confplanner.models import Day, Segment, Session

_SEPARATORS = re.compile(r"[,.\-]")


def query_words(query_text: str) -> list[str]:
    """Split search text into lowercase words.

    Commas, periods and hyphens count as word separators, so
    "Angular, Ionic" and "angular-ionic" both yield ["angular", "ionic"].
    """
    return _SEPARATORS.sub(" ", query_text.lower()).split()


def matches_query(session: Session, words: list[str]) -> bool:
    if not words:
        return True
    name = session.name.lower()
    return any(word in name for word in words)


def matches_tracks(session: Session, exclude_tracks: set[str]) -> bool:
    """True if at least one of the session's tracks is not excluded.

    A session without tracks never matches.
    """
    return any(track not in exclude_tracks for track in session.tracks)


def matches_segment(session: Session, segment: Segment, favorites: FavoritesStore | None) -> bool:
    if segment is Segment.FAVORITES:
        return favorites is not None and favorites.has_favorite(session.name)
    return True


def filter_day(
    day: Day,
    query_text: str = "",
    exclude_tracks: Iterable[str] = (),
    segment: Segment | str = Segment.ALL,
    favorites: FavoritesStore | None = None,
) -> Day:
    """Recompute hide flags for every group and session of a day.

    Mutates and returns the same Day. shown_sessions ends up as the number of
    sessions left visible.
    """
    segment = Segment(segment)
    words = query_words(query_text)
    excluded = set(exclude_tracks)

    day.shown_sessions = 0
    for group in day.groups:
        group.hide = True
        for session in group.sessions:
            session.hide = not (
                matches_query(session, words)
                and matches_tracks(session, excluded)
                and matches_segment(session, segment, favorites)
            )
            if not session.hide:
                group.hide = False
                day.shown_sessions += 1
    return day
