from pathlib import Path

from textual.app import App
from textual.binding import Binding

from confplanner.data_loader import ConferenceData, DEFAULT_DATA_PATH
from confplanner.errors import LoadError
from confplanner.favorites import Favorites


CSS_PATH = Path(__file__).parent / "styles" / "app.tcss"


class ConferenceApp(App):
    """Conference schedule browser."""

    TITLE = "Conference"
    SUB_TITLE = "Schedule"
    CSS_PATH = CSS_PATH

    BINDINGS = [
        Binding("1", "show_schedule", "Schedule", show=True, priority=True),
        Binding("2", "show_speakers", "Speakers", show=True, priority=True),
        Binding("3", "show_map", "Map", show=True, priority=True),
        Binding("q", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(self, source: str | Path = DEFAULT_DATA_PATH):
        super().__init__()
        self.favorites: Favorites = Favorites()
        self.conference_data: ConferenceData = ConferenceData(source, favorites=self.favorites)

    async def on_mount(self) -> None:
        from confplanner.screens.schedule import ScheduleScreen
        self.install_screen(ScheduleScreen(), "schedule")

        try:
            data = await self.conference_data.load()
        except LoadError as exc:
            self.notify(str(exc), severity="error", timeout=10)
        else:
            count = sum(len(list(day.iter_sessions())) for day in data.schedule)
            self.notify(
                f"Loaded {count} sessions from {self.conference_data.source_name}",
                severity="information",
            )
        self.push_screen("schedule")

    def action_show_schedule(self) -> None:
        self.switch_screen("schedule")

    def action_show_speakers(self) -> None:
        from confplanner.screens.speakers import SpeakersScreen
        self.push_screen(SpeakersScreen())

    def action_show_map(self) -> None:
        from confplanner.screens.map import MapScreen
        self.push_screen(MapScreen())

    def action_quit(self) -> None:
        self.exit()
