"""The ``select`` command: pick a game interactively and print it."""

import argparse
from typing import TextIO

from typing_extensions import override

import structlog

from ..constants import DEFAULT_GAME_PATTERN
from ..ui.display import format_game
from ..ui.selector import GameSelectorApp
from .base import ArgKind, ArgSpec, CommandDescriptor, Plugin, PluginContext
from .common import fetch_games

log = structlog.stdlib.get_logger()


class SelectGamePlugin(Plugin):
    """Opens a filter-as-you-type picker over the account's games."""

    @override
    def command(self) -> CommandDescriptor:
        return CommandDescriptor(
            name="select",
            summary="Interactively pick a game and print it",
            long_help=(
                "Opens an interactive picker over all games on the account. Type to filter by name, "
                "press Enter to pick the first match or select a row, Escape to cancel.\n"
                "The chosen game is printed through the pattern, so the output can be fed to other "
                'commands, e.g.: trogue progress "$(trogue select -p i)"'
            ),
            args=(
                ArgSpec(
                    id="pattern",
                    kind=ArgKind.VALUED,
                    short="p",
                    long="pattern",
                    value_name="pattern",
                    help="Output format of the chosen game (tokens: n - game name, i - game id)",
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
        games = await fetch_games(context, err, component="select")
        if not games:
            return

        game = await GameSelectorApp(games).run_async()
        if game is None:
            log.info("No game selected")
            return
        print(format_game(args.pattern or DEFAULT_GAME_PATTERN, game), file=out)
