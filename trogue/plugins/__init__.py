"""Sub-command plugins and the registry that lists them."""

from .base import ArgKind, ArgSpec, CommandDescriptor, Plugin, PluginContext, parse_game_id
from .completions import CompletionsPlugin
from .dashboard import DashboardPlugin
from .list_achievements import ListAchievementsPlugin
from .list_games import ListGamesPlugin
from .select_game import SelectGamePlugin
from .show_progress import ShowProgressPlugin


def get_plugins() -> list[Plugin]:
    """Return one fresh instance of every plugin, in help-listing order."""
    return [
        ListGamesPlugin(),
        DashboardPlugin(),
        ListAchievementsPlugin(),
        ShowProgressPlugin(),
        CompletionsPlugin(),
        SelectGamePlugin(),
    ]


__all__ = [
    "ArgKind",
    "ArgSpec",
    "CommandDescriptor",
    "CompletionsPlugin",
    "DashboardPlugin",
    "ListAchievementsPlugin",
    "ListGamesPlugin",
    "Plugin",
    "PluginContext",
    "SelectGamePlugin",
    "ShowProgressPlugin",
    "get_plugins",
    "parse_game_id",
]
