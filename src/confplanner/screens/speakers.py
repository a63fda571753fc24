from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Header, Footer, DataTable
from textual.binding import Binding

from confplanner.errors import ConferenceDataError


class SpeakersScreen(Screen):
    """Speakers sorted by last name, with the sessions they give."""

    BINDINGS = [
        Binding("escape", "go_back", "Back", show=True),
    ]

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="speakers-table")
        yield Footer()

    async def on_mount(self) -> None:
        table = self.query_one("#speakers-table", DataTable)
        table.add_columns("Name", "Twitter", "Location", "Sessions")
        table.cursor_type = "row"
        try:
            speakers = await self.app.conference_data.get_speakers()
        except ConferenceDataError as exc:
            self.notify(str(exc), severity="error")
            return
        for index, speaker in enumerate(speakers):
            table.add_row(
                speaker.name,
                speaker.twitter,
                speaker.location,
                ", ".join(s.name for s in speaker.sessions),
                key=str(index),
            )

    def action_go_back(self) -> None:
        self.app.pop_screen()
