"""Best-effort fetch helpers and error reporting shared by the plugins.

Each fetch helper returns empty data when the Steam API call fails, after
logging the error and writing one prefixed line to the error sink.
"""

from typing import TextIO

from ..models import Achievement, Game, GlobalAchievementRate
from ..services.errors import AppError, ValidationError, handle_error
from .base import PluginContext

GAMES_ERROR_PREFIX = "Error while trying to get Steam data"
ACHIEVEMENTS_ERROR_PREFIX = "Error while trying to get achievements"
GLOBAL_ACHIEVEMENTS_ERROR_PREFIX = "Error while trying to get global achievements"


def report_error(err: TextIO, prefix: str, error: AppError, operation: str, component: str) -> None:
    handle_error(error, operation=operation, component=component)
    print(f"{prefix}: {error}", file=err)


def report_invalid_input(err: TextIO, error: ValidationError, operation: str, component: str) -> None:
    """Log a rejected argument and write its message to the error sink as is."""
    handle_error(error, operation=operation, component=component)
    print(error.message, file=err)


async def fetch_games(context: PluginContext, err: TextIO, component: str) -> list[Game]:
    try:
        return await context.steam_api.fetch_owned_games()
    except AppError as e:
        report_error(err, GAMES_ERROR_PREFIX, e, "fetch_owned_games", component)
        return []


async def fetch_achievements(
    context: PluginContext,
    app_id: int,
    err: TextIO,
    component: str,
) -> tuple[str, list[Achievement]]:
    try:
        return await context.steam_api.fetch_achievements(app_id)
    except AppError as e:
        report_error(err, ACHIEVEMENTS_ERROR_PREFIX, e, "fetch_achievements", component)
        return "", []


async def fetch_global_rates(
    context: PluginContext,
    app_id: int,
    err: TextIO,
    component: str,
) -> dict[str, float]:
    """Fetch global unlock rates keyed by achievement api name."""
    try:
        rates: list[GlobalAchievementRate] = await context.steam_api.fetch_global_achievement_rates(app_id)
    except AppError as e:
        report_error(err, GLOBAL_ACHIEVEMENTS_ERROR_PREFIX, e, "fetch_global_achievement_rates", component)
        return {}
    return {rate.api_name: rate.percent for rate in rates}
