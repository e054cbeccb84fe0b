"""The ``achievements`` command: a game's achievements, one per line or as cards."""

import argparse
from typing import TextIO

from typing_extensions import override

import structlog

from ..models import Achievement
from ..services.errors import ValidationError
from ..ui.display import format_achievement, format_percent, render_card
from .base import ArgKind, ArgSpec, CommandDescriptor, Plugin, PluginContext, parse_game_id
from .common import fetch_achievements, fetch_global_rates, report_invalid_input

log = structlog.stdlib.get_logger()

UNLOCKED_PATTERN = "n - s (t)"
LOCKED_PATTERN = "n"


def achievement_line(achievement: Achievement, global_rates: dict[str, float] | None) -> str:
    """Render one achievement line, with the global rate suffix when rates were requested."""
    pattern = UNLOCKED_PATTERN if achievement.unlocked else LOCKED_PATTERN
    line = format_achievement(pattern, achievement)
    if global_rates is not None:
        line += f" {format_percent(global_rates.get(achievement.api_name, 0.0))}%"
    return line


class ListAchievementsPlugin(Plugin):
    """Lists a game's achievements with unlock state and optional global rates."""

    @override
    def command(self) -> CommandDescriptor:
        return CommandDescriptor(
            name="achievements",
            summary="Displays achievements for a specific game. Game id should be provided as an argument",
            args=(
                ArgSpec(
                    id="game_id",
                    kind=ArgKind.POSITIONAL,
                    required=True,
                    value_name="game_id",
                    help="The ID of the game to list achievements for",
                ),
                ArgSpec(
                    id="global",
                    kind=ArgKind.FLAG,
                    short="g",
                    long="global",
                    help="Adds global achievement percentages for the output of game achievements.",
                ),
                ArgSpec(
                    id="remaining",
                    kind=ArgKind.FLAG,
                    short="r",
                    long="remaining",
                    help="Displays only remaining locked achievements.",
                ),
                ArgSpec(
                    id="cards",
                    kind=ArgKind.FLAG,
                    short="c",
                    long="cards",
                    help="Displays each achievement as a card with name, state and unlock date.",
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
            report_invalid_input(err, e, "parse_game_id", "achievements")
            return

        _, achievements = await fetch_achievements(context, game_id, err, component="achievements")

        global_rates: dict[str, float] | None = None
        if args.global_:
            global_rates = await fetch_global_rates(context, game_id, err, component="achievements")

        if args.remaining:
            achievements = [a for a in achievements if not a.unlocked]

        log.debug("Listing achievements", game_id=game_id, count=len(achievements))
        for achievement in achievements:
            if args.cards:
                out.write(render_card(achievement))
                if global_rates is not None:
                    print(f"Global: {format_percent(global_rates.get(achievement.api_name, 0.0))}%", file=out)
            else:
                print(achievement_line(achievement, global_rates), file=out)
