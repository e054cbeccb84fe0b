"""Text rendering for command output.

This module provides:
- The pattern renderer: single-letter tokens substituted with fields of a
  game or achievement, every other character copied literally
- Progress bars, banners and achievement cards
- Game name filtering shared by the list and select commands
"""

import math
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from ..models import Achievement, Game

UNLOCK_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
BAR_FILL = "█"


def format_unlock_time(epoch: int) -> str:
    """Format a Unix timestamp as ``YYYY-MM-DD HH:MM:SS`` in UTC.

    Timestamps outside the calendar range datetime supports are printed as
    the raw number of seconds.
    """
    try:
        return datetime.fromtimestamp(epoch, tz=timezone.utc).strftime(UNLOCK_TIME_FORMAT)
    except (ValueError, OverflowError, OSError):
        return str(epoch)


GAME_TOKENS: Mapping[str, Callable[[Game], str]] = {
    "n": lambda game: game.name,
    "i": lambda game: str(game.app_id),
}

# 't' renders the epoch date for locked achievements too; callers choose a
# pattern without 't' for those.
ACHIEVEMENT_TOKENS: Mapping[str, Callable[[Achievement], str]] = {
    "i": lambda achievement: achievement.api_name,
    "n": lambda achievement: achievement.name,
    "d": lambda achievement: achievement.description,
    "s": lambda achievement: "Y" if achievement.unlocked else "N",
    "t": lambda achievement: format_unlock_time(achievement.unlock_time),
}


def _substitute(pattern: str, tokens: Mapping[str, Callable[[Any], str]], record: Any) -> str:
    parts = []
    for ch in pattern:
        field = tokens.get(ch)
        parts.append(field(record) if field else ch)
    return "".join(parts)


def format_game(pattern: str, game: Game) -> str:
    """Render a game through a pattern (``n`` name, ``i`` id)."""
    return _substitute(pattern, GAME_TOKENS, game)


def format_achievement(pattern: str, achievement: Achievement) -> str:
    """Render an achievement through a pattern.

    Tokens: ``i`` api name, ``n`` name, ``d`` description, ``s`` Y/N unlock
    state, ``t`` unlock time.
    """
    return _substitute(pattern, ACHIEVEMENT_TOKENS, achievement)


def render(pattern: str, record: Game | Achievement) -> str:
    """Render a game or an achievement through a pattern.

    The input is read one character at a time with no escaping; characters
    that are not tokens of the record's grammar are copied unchanged, so the
    function never fails.
    """
    if isinstance(record, Game):
        return format_game(pattern, record)
    return format_achievement(pattern, record)


def format_percent(value: float) -> str:
    """Format a percentage as plain decimal text without a trailing ``.0``.

    Uses the shortest digits that round-trip the float, never an exponent.
    """
    text = format(Decimal(repr(float(value))), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def completion_percentage(completed: int, total: int) -> float:
    return completed / total * 100.0


def render_progress_bar(completed: int, total: int, width: int) -> str:
    """Render ``[███   ] 50.0% (1/2)`` with a bar ``width`` cells wide.

    ``total`` must be positive.
    """
    percentage = completion_percentage(completed, total)
    # Half-up rounding, not Python's round-half-even
    filled = min(width, math.floor(percentage / 100.0 * width + 0.5))
    empty = width - filled
    return f"[{BAR_FILL * filled}{' ' * empty}] {percentage:.1f}% ({completed}/{total})"


def render_banner(title: str, width: int) -> list[str]:
    """Render a title centred between two ``=`` rules of ``width`` characters."""
    padding = " " * max(0, (width - len(title)) // 2)
    rule = "=" * width
    return [rule, f"{padding}{title}{padding}", rule]


def render_card(achievement: Achievement) -> str:
    """Render an achievement as a box-drawn card with name, state and date."""
    achieved = "Y" if achievement.unlocked else "N"
    unlock_date = format_unlock_time(achievement.unlock_time)

    longest = max(len(achievement.api_name), len(unlock_date))
    horizontal = "─" * (longest + 8)

    lines = [
        f"┌{horizontal}┐",
        f"│ Name: {achievement.api_name:>{longest}} │",
        f"│ Achieved: {achieved:>{longest - 4}} │",
        f"│ Date: {unlock_date:>{longest}} │",
        f"└{horizontal}┘",
    ]
    return "\n".join(lines) + "\n"


def filter_games(games: list[Game], name_filter: str | None) -> list[Game]:
    """Keep games whose name contains ``name_filter``, ignoring case.

    Order is preserved; an empty or missing filter keeps every game.
    """
    if not name_filter:
        return list(games)
    needle = name_filter.lower()
    return [game for game in games if needle in game.name.lower()]
