"""Plugin contract for trogue sub-commands.

Every sub-command is a Plugin: a static CommandDescriptor describing its
arguments, plus an async ``execute`` that fetches data through the context,
renders it, and writes to the two sinks it is given. ``execute`` never raises
for fetch or input failures; it reports them on the error sink and carries on
with whatever data it has.
"""

import argparse
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TextIO

from ..models import ArgKind, ArgSpec, CommandDescriptor
from ..services.errors import ValidationError
from ..services.steam_api import SteamApiService

# Game ids are unsigned 32-bit integers
_GAME_ID_RE = re.compile(r"\+?[0-9]+")
_GAME_ID_MAX = 2**32 - 1

__all__ = [
    "ArgKind",
    "ArgSpec",
    "CommandDescriptor",
    "Plugin",
    "PluginContext",
    "parse_game_id",
]


@dataclass
class PluginContext:
    """Collaborators handed to every plugin execution."""
    steam_api: SteamApiService
    terminal_width: int = 80


class Plugin(ABC):
    """A sub-command: describe-self plus execute-self."""

    @abstractmethod
    def command(self) -> CommandDescriptor:
        """Return this plugin's command descriptor. Must be stable across calls."""

    @abstractmethod
    async def execute(
        self,
        context: PluginContext,
        args: argparse.Namespace,
        out: TextIO,
        err: TextIO,
    ) -> None:
        """Run the command once.

        Args:
            context: Shared collaborators (Steam API client, terminal width)
            args: Arguments already validated against ``command()``
            out: Sink for normal output
            err: Sink for diagnostics
        """


def parse_game_id(text: str) -> int:
    """Parse a game id argument.

    Raises:
        ValidationError: If the text is not an unsigned 32-bit decimal integer
    """
    if _GAME_ID_RE.fullmatch(text):
        value = int(text)
        if value <= _GAME_ID_MAX:
            return value
    raise ValidationError(
        f"Invalid game id: {text}",
        field="game_id",
        value=text,
        constraints=[f"the game id is a whole number between 0 and {_GAME_ID_MAX}"],
    )
