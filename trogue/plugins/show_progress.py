"""The ``progress`` command: a game's achievement completion bar."""

import argparse
from typing import TextIO

from typing_extensions import override

import structlog

from ..services.errors import ValidationError
from ..ui.display import render_progress_bar
from .base import ArgKind, ArgSpec, CommandDescriptor, Plugin, PluginContext, parse_game_id
from .common import fetch_achievements, report_invalid_input

log = structlog.stdlib.get_logger()

NO_ACHIEVEMENTS_MESSAGE = "No achievements found for this game"


async def show_game_progress(
    context: PluginContext,
    app_id: int,
    out: TextIO,
    err: TextIO,
    component: str = "progress",
) -> None:
    """Print a game's name followed by its completion bar.

    Games without achievements (or whose fetch failed) get a fixed message
    instead of a bar.
    """
    game_name, achievements = await fetch_achievements(context, app_id, err, component=component)

    print(game_name, file=out)

    if not achievements:
        print(NO_ACHIEVEMENTS_MESSAGE, file=out)
        return

    total = len(achievements)
    completed = sum(1 for achievement in achievements if achievement.unlocked)
    bar_width = context.terminal_width // 2

    log.debug("Rendering progress", app_id=app_id, completed=completed, total=total)
    print(render_progress_bar(completed, total, bar_width), file=out)


class ShowProgressPlugin(Plugin):
    """Shows how many of a game's achievements are unlocked."""

    @override
    def command(self) -> CommandDescriptor:
        return CommandDescriptor(
            name="progress",
            summary="Displays game achievements progress.",
            args=(
                ArgSpec(
                    id="game_id",
                    kind=ArgKind.POSITIONAL,
                    required=True,
                    value_name="game_id",
                    help="The ID of the game to show progress for",
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
        try:
            game_id = parse_game_id(args.game_id)
        except ValidationError as e:
            report_invalid_input(err, e, "parse_game_id", "progress")
            return

        await show_game_progress(context, game_id, out, err)
