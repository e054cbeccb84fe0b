"""Terminal rendering, shell completions and the interactive game picker."""

from .completions import Shell, generate
from .display import (
    filter_games,
    format_achievement,
    format_game,
    format_percent,
    render,
    render_banner,
    render_card,
    render_progress_bar,
)
from .selector import GameSelectorApp

__all__ = [
    "GameSelectorApp",
    "Shell",
    "filter_games",
    "format_achievement",
    "format_game",
    "format_percent",
    "generate",
    "render",
    "render_banner",
    "render_card",
    "render_progress_bar",
]
