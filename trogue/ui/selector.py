"""Interactive filter-as-you-type game picker."""

from typing import ClassVar

from typing_extensions import override

from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.containers import Container
from textual.widgets import DataTable, Footer, Input, Static

import structlog

from ..models import Game
from .display import filter_games

log = structlog.stdlib.get_logger()


class GameSelectorApp(App[Game | None]):
    """Pick one game from a list by typing part of its name.

    Enter in the search box picks the first match, selecting a table row
    picks that game, and Escape exits without a choice. The app's return
    value is the chosen game or None.
    """

    CSS: ClassVar[str] = """
    #selector-container {
        width: 100%;
        height: 100%;
        padding: 0 1;
    }

    #selector-title {
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }

    #selector-count {
        color: $text-muted;
    }

    #games-table {
        height: 1fr;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("escape", "cancel", "Cancel", show=True, priority=True),
    ]

    _all_games: list[Game]
    _filtered_games: list[Game]

    def __init__(self, games: list[Game]) -> None:
        super().__init__()
        self._all_games = list(games)
        self._filtered_games = list(games)

    @property
    def filtered_games(self) -> list[Game]:
        """Games matching the current search text, in input order."""
        return list(self._filtered_games)

    @override
    def compose(self) -> ComposeResult:
        with Container(id="selector-container"):
            yield Static("Select a game", id="selector-title")
            yield Input(placeholder="Type to filter games...", id="search-input")
            yield Static("", id="selector-count")
            yield DataTable(id="games-table")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#games-table", DataTable)
        _ = table.add_columns("ID", "Name")
        table.cursor_type = "row"
        self._refresh_table()
        _ = self.query_one("#search-input", Input).focus()

    def _apply_filter(self, query: str) -> None:
        self._filtered_games = filter_games(self._all_games, query.strip())
        self._refresh_table()

    def _refresh_table(self) -> None:
        table = self.query_one("#games-table", DataTable)
        _ = table.clear()
        for game in self._filtered_games:
            _ = table.add_row(str(game.app_id), game.name, key=str(game.app_id))
        self.query_one("#selector-count", Static).update(
            f"{len(self._filtered_games)} of {len(self._all_games)} games"
        )

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self._apply_filter(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "search-input":
            return
        if not self._filtered_games:
            self.bell()
            return
        self._choose(self._filtered_games[0])

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        app_id = str(event.row_key.value)
        for game in self._filtered_games:
            if str(game.app_id) == app_id:
                self._choose(game)
                return
        log.warning("Selected game not found", app_id=app_id)

    def _choose(self, game: Game) -> None:
        log.debug("Game selected", app_id=game.app_id, name=game.name)
        self.exit(game)

    def action_cancel(self) -> None:
        log.debug("Game selection cancelled")
        self.exit(None)
