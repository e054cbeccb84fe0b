"""The ``list`` command: owned games rendered through a pattern."""

import argparse
from typing import TextIO

from typing_extensions import override

import structlog

from ..constants import DEFAULT_GAME_PATTERN
from ..ui.display import filter_games, format_game
from .base import ArgKind, ArgSpec, CommandDescriptor, Plugin, PluginContext
from .common import fetch_games

log = structlog.stdlib.get_logger()

PATTERN_HELP = (
    "Specifies the output format for the list command. It can be used only with --filter. "
    "By default, the game id and name are displayed.\n"
    "Possible tokens are:\n"
    "    n - game name\n"
    "    i - game id\n"
    'E.g.: -p "i: n"'
)


class ListGamesPlugin(Plugin):
    """Lists the account's games, optionally filtered by name."""

    @override
    def command(self) -> CommandDescriptor:
        return CommandDescriptor(
            name="list",
            summary="Displays a list of all games on account set in environment variables",
            args=(
                ArgSpec(
                    id="filter",
                    kind=ArgKind.VALUED,
                    short="f",
                    long="filter",
                    value_name="filter",
                    optional_value=True,
                    help="Displays only games whose name contains the given text (case-insensitive)",
                ),
                ArgSpec(
                    id="pattern",
                    kind=ArgKind.VALUED,
                    short="p",
                    long="pattern",
                    value_name="pattern",
                    depends_on=frozenset({"filter"}),
                    help=PATTERN_HELP,
                ),
            ),
        )

    @override
    async def execute(
        self,
        context: PluginContext,
        args: argparse.Namespace,
        out: TextIO,
        err: TextIO,
    ) -> None:
        name_filter: str | None = args.filter
        pattern: str = args.pattern or DEFAULT_GAME_PATTERN

        games = await fetch_games(context, err, component="list")

        if name_filter is not None:
            print(f"Displaying games filtered by: {name_filter}", file=out)
            games = filter_games(games, name_filter)
        else:
            print("Displaying all games:", file=out)

        log.debug("Listing games", count=len(games), name_filter=name_filter, pattern=pattern)
        for game in games:
            print(format_game(pattern, game), file=out)
