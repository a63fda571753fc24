from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Header, Footer, DataTable, Input, Label, Static, TabbedContent, TabPane
from textual.containers import Horizontal, Vertical
from textual.binding import Binding
from rich.text import Text

from confplanner.day_utils import format_time_range, make_tab_label
from confplanner.errors import ConferenceDataError
from confplanner.export import DEFAULT_EXPORT_PATH, export_ical
from confplanner.models import Day, Segment, Session


class ScheduleScreen(Screen):
    """Main schedule browsing screen."""

    BINDINGS = [
        Binding("slash", "focus_search", "Search", show=True),
        Binding("a", "toggle_favorite", "Favorite", show=True),
        Binding("t", "cycle_track", "Filter Track", show=True),
        Binding("f", "toggle_segment", "All/Favorites", show=True),
        Binding("e", "export_ical", "Export iCal", show=True),
        Binding("enter", "view_detail", "Details", show=True),
        Binding("escape", "clear_search", "Clear", show=False),
    ]

    def __init__(self):
        super().__init__()
        self._days: list[Day] = []
        self._tracks: list[str] = []
        self._current_track_idx: int = -1
        self._search_text: str = ""
        self._segment: Segment = Segment.ALL
        self._row_sessions: dict[str, Session] = {}

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="schedule-content"):
            with Horizontal(id="search-bar"):
                yield Label("Search:")
                yield Input(placeholder="Filter by session name...", id="search-input")
                yield Static("All Tracks", id="track-filter")
                yield Static("All", id="segment-filter")
            yield Static("", id="shown-count")
            yield TabbedContent(id="day-tabs")
        yield Footer()

    async def on_mount(self) -> None:
        await self._load_data()

    async def _load_data(self):
        """Build one tab per schedule day."""
        data = self.app.conference_data
        try:
            document = await data.load()
            self._tracks = await data.get_tracks()
        except ConferenceDataError as exc:
            self.notify(str(exc), severity="error")
            return
        self._days = document.schedule

        tabs = self.query_one("#day-tabs", TabbedContent)
        for index, day in enumerate(self._days):
            await tabs.add_pane(TabPane(make_tab_label(day.date), id=f"day-{index}"))

        if self._days:
            tabs.active = "day-0"
            self.call_later(self._populate_active_tab)

    def on_tabbed_content_tab_activated(self, event: TabbedContent.TabActivated) -> None:
        self.call_later(self._populate_active_tab)

    def _active_day_index(self) -> int | None:
        active_id = self.query_one("#day-tabs", TabbedContent).active
        if not active_id:
            return None
        return int(active_id.replace("day-", ""))

    def _excluded_tracks(self) -> set[str]:
        """Every track but the selected one, or none when showing all tracks."""
        if self._current_track_idx < 0:
            return set()
        keep = self._tracks[self._current_track_idx]
        return {t for t in self._tracks if t != keep}

    def _build_session_row(self, session: Session) -> tuple:
        """Row fields for a session: (fav, time, name, speakers, tracks, location)."""
        fav_mark = Text("★", style="bold yellow") if self.app.favorites.has_favorite(session.name) else Text("")
        time_str = format_time_range(session.time_start, session.time_end)
        speakers = ", ".join(sp.name for sp in session.speakers)
        return (fav_mark, time_str, session.name, speakers, ", ".join(session.tracks), session.location)

    async def _populate_active_tab(self):
        """Run the timeline filter for the active day and fill its table."""
        day_index = self._active_day_index()
        if day_index is None:
            return
        try:
            day = await self.app.conference_data.get_timeline(
                day_index, self._search_text, self._excluded_tracks(), self._segment,
            )
        except ConferenceDataError as exc:
            self.notify(str(exc), severity="error")
            return

        pane = self.query_one("#day-tabs", TabbedContent).query_one(f"#day-{day_index}", TabPane)
        existing = pane.query("DataTable")
        if existing:
            table = existing.first()
        else:
            table = DataTable(id=f"table-{day_index}")
            await pane.mount(table)
            table.add_columns("Fav", "Time", "Session", "Speakers", "Tracks", "Location")
            table.cursor_type = "row"

        table.clear()
        self._row_sessions.clear()
        for group_idx, group in enumerate(day.groups):
            if group.hide:
                continue
            for session_idx, session in enumerate(group.sessions):
                if session.hide:
                    continue
                key = f"{day_index}-{group_idx}-{session_idx}"
                self._row_sessions[key] = session
                table.add_row(*self._build_session_row(session), key=key)

        self.query_one("#shown-count", Static).update(
            f"{day.shown_sessions} session{'s' if day.shown_sessions != 1 else ''} shown"
        )

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self._search_text = event.value
            self.call_later(self._populate_active_tab)

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_clear_search(self) -> None:
        inp = self.query_one("#search-input", Input)
        inp.value = ""
        self._search_text = ""
        self.call_later(self._populate_active_tab)

    def action_cycle_track(self) -> None:
        if not self._tracks:
            return
        self._current_track_idx += 1
        if self._current_track_idx >= len(self._tracks):
            self._current_track_idx = -1

        label = self.query_one("#track-filter", Static)
        if self._current_track_idx < 0:
            label.update("All Tracks")
        else:
            label.update(self._tracks[self._current_track_idx])
        self.call_later(self._populate_active_tab)

    def action_toggle_segment(self) -> None:
        self._segment = Segment.ALL if self._segment is Segment.FAVORITES else Segment.FAVORITES
        self.query_one("#segment-filter", Static).update(
            "Favorites" if self._segment is Segment.FAVORITES else "All"
        )
        self.call_later(self._populate_active_tab)

    def _selected_session(self) -> Session | None:
        table = self._get_active_table()
        if not table or table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return self._row_sessions.get(row_key.value)

    def action_toggle_favorite(self) -> None:
        session = self._selected_session()
        if session is None:
            return
        if self.app.favorites.toggle(session.name):
            self.notify(f"Added {session.name} to favorites", severity="information")
        else:
            self.notify(f"Removed {session.name} from favorites", severity="information")
        self.call_later(self._populate_active_tab)

    def action_export_ical(self) -> None:
        favorites = self.app.favorites
        entries = [(day, s) for day in self._days for s in favorites.get_favorite_sessions(day.iter_sessions())]
        if not entries:
            self.notify("No favorites to export", severity="warning")
            return
        count = export_ical(entries, DEFAULT_EXPORT_PATH)
        self.notify(f"Exported {count} sessions to {DEFAULT_EXPORT_PATH}", severity="information")

    def action_view_detail(self) -> None:
        session = self._selected_session()
        if session is None:
            return
        from confplanner.screens.session_detail import SessionDetailScreen
        self.app.push_screen(SessionDetailScreen(session))

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        session = self._row_sessions.get(event.row_key.value)
        if session is None:
            return
        from confplanner.screens.session_detail import SessionDetailScreen
        self.app.push_screen(SessionDetailScreen(session))

    def on_screen_resume(self) -> None:
        self.call_later(self._populate_active_tab)

    def _get_active_table(self) -> DataTable | None:
        day_index = self._active_day_index()
        if day_index is None:
            return None
        pane = self.query_one("#day-tabs", TabbedContent).query_one(f"#day-{day_index}", TabPane)
        tables = pane.query("DataTable")
        return tables.first() if tables else None
