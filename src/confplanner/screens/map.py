from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Header, Footer, DataTable
from textual.binding import Binding
from rich.text import Text

from confplanner.errors import ConferenceDataError


class MapScreen(Screen):
    """Venue map pins in document order."""

    BINDINGS = [
        Binding("escape", "go_back", "Back", show=True),
    ]

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="map-table")
        yield Footer()

    async def on_mount(self) -> None:
        table = self.query_one("#map-table", DataTable)
        table.add_columns("", "Name", "Latitude", "Longitude")
        table.cursor_type = "row"
        try:
            pins = await self.app.conference_data.get_map()
        except ConferenceDataError as exc:
            self.notify(str(exc), severity="error")
            return
        for pin in pins:
            centre = Text("◎", style="bold green") if pin.centre else Text("")
            table.add_row(centre, pin.name, f"{pin.lat:.6f}", f"{pin.long:.6f}")

    def action_go_back(self) -> None:
        self.app.pop_screen()
