from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Header, Footer, Static
from textual.containers import VerticalScroll
from textual.binding import Binding

from confplanner.day_utils import format_time_range
from confplanner.models import Session


class SessionDetailScreen(Screen):
    """Detailed view of a single session."""

    BINDINGS = [
        Binding("a", "toggle_favorite", "Favorite", show=True),
        Binding("escape", "go_back", "Back", show=True),
    ]

    def __init__(self, session: Session):
        super().__init__()
        self.session = session
        self._favorite_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(id="detail-container")
        yield Footer()

    def on_mount(self) -> None:
        self._populate()

    def _favorite_text(self) -> str:
        if self.app.favorites.has_favorite(self.session.name):
            return "[bold yellow]★ In your favorites[/]"
        return "[dim]Not in your favorites[/dim]"

    def _populate(self):
        """Fill the detail view with session data."""
        container = self.query_one("#detail-container", VerticalScroll)
        session = self.session

        container.mount(Static(f"[bold]{session.name}[/bold]"))

        meta_parts = []
        if session.time_start:
            time_str = format_time_range(session.time_start, session.time_end, separator=" - ")
            meta_parts.append(f"[bold]Time:[/bold] {time_str}")
        if session.location:
            meta_parts.append(f"[bold]Location:[/bold] {session.location}")
        if session.tracks:
            meta_parts.append(f"[bold]Tracks:[/bold] {', '.join(session.tracks)}")
        if meta_parts:
            container.mount(Static("\n".join(meta_parts)))

        self._favorite_widget = Static(self._favorite_text())
        container.mount(self._favorite_widget)

        if session.description:
            container.mount(Static(f"\n{session.description}"))

        for speaker in session.speakers:
            lines = [f"\n[bold]{speaker.name}[/bold]"]
            if speaker.twitter:
                lines.append(f"Twitter: @{speaker.twitter.lstrip('@')}")
            if speaker.location:
                lines.append(f"Location: {speaker.location}")
            if speaker.about:
                lines.append(speaker.about)
            container.mount(Static("\n".join(lines)))

    def action_toggle_favorite(self) -> None:
        self.app.favorites.toggle(self.session.name)
        if self._favorite_widget is not None:
            self._favorite_widget.update(self._favorite_text())

    def action_go_back(self) -> None:
        self.app.pop_screen()
