import logging
from typing import Iterable, Protocol

from confplanner.models import Session

logger = logging.getLogger(__name__)


class FavoritesStore(Protocol):
    def has_favorite(self, session_name: str) -> bool: ...


class Favorites:
    """In-memory set of favorited session names."""

    def __init__(self, names: Iterable[str] = ()):
        self._names: set[str] = set(names)

    def add_favorite(self, session_name: str):
        """Mark a session as favorite."""
        self._names.add(session_name)
        logger.debug("Added favorite %r", session_name)

    def remove_favorite(self, session_name: str):
        """Unmark a session. Unknown names are ignored."""
        self._names.discard(session_name)
        logger.debug("Removed favorite %r", session_name)

    def toggle(self, session_name: str) -> bool:
        """Toggle a session. Returns True if now a favorite."""
        if session_name in self._names:
            self.remove_favorite(session_name)
            return False
        self.add_favorite(session_name)
        return True

    def has_favorite(self, session_name: str) -> bool:
        return session_name in self._names

    @property
    def favorites(self) -> set[str]:
        return set(self._names)

    def get_favorite_sessions(self, sessions: Iterable[Session]) -> list[Session]:
        """Keep only the sessions that are favorites, in input order."""
        return [s for s in sessions if s.name in self._names]

    def __len__(self) -> int:
        return len(self._names)
