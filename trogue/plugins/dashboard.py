"""The ``dashboard`` command: progress of the most recently played games."""

import argparse
from typing import TextIO

from typing_extensions import override

import structlog

from ..ui.display import render_banner
from .base import CommandDescriptor, Plugin, PluginContext
from .common import fetch_games
from .show_progress import show_game_progress

log = structlog.stdlib.get_logger()

DASHBOARD_TITLE = "Recently Played Games Dashboard"
RECENT_GAMES_LIMIT = 10


class DashboardPlugin(Plugin):
    """Shows achievement progress for the ten most recently played games."""

    @override
    def command(self) -> CommandDescriptor:
        return CommandDescriptor(
            name="dashboard",
            summary="Displays a dashboard with 10 last played games and their achievement progress",
        )

    @override
    async def execute(
        self,
        context: PluginContext,
        args: argparse.Namespace,
        out: TextIO,
        err: TextIO,
    ) -> None:
        games = await fetch_games(context, err, component="dashboard")

        # sorted() is stable, so ties keep the order Steam returned
        recent_games = sorted(games, key=lambda game: game.last_played, reverse=True)[:RECENT_GAMES_LIMIT]

        for line in render_banner(DASHBOARD_TITLE, context.terminal_width // 2):
            print(line, file=out)

        log.debug("Rendering dashboard", games=len(recent_games))
        for game in recent_games:
            await show_game_progress(context, game.app_id, out, err, component="dashboard")
