"""The ``completions`` command: print a shell completion script."""

import argparse
from typing import TextIO

from typing_extensions import override

from ..ui.completions import Shell, generate
from .base import ArgKind, ArgSpec, CommandDescriptor, Plugin, PluginContext

LONG_HELP = (
    "Generate shell completions for trogue.\n"
    "\n"
    "Installation:\n"
    "  bash:       trogue completions bash > ~/.local/share/bash-completion/completions/trogue\n"
    "  zsh:        trogue completions zsh > \"${fpath[1]}/_trogue\"\n"
    "  fish:       trogue completions fish > ~/.config/fish/completions/trogue.fish\n"
    "  powershell: trogue completions powershell >> $PROFILE"
)


class CompletionsPlugin(Plugin):
    """Writes the completion script for the requested shell to ``out``."""

    @override
    def command(self) -> CommandDescriptor:
        return CommandDescriptor(
            name="completions",
            summary="Generate shell completions",
            long_help=LONG_HELP,
            args=(
                ArgSpec(
                    id="shell",
                    kind=ArgKind.POSITIONAL,
                    help="Shell to generate completions for",
                    required=True,
                    value_name="SHELL",
                    choices=tuple(shell.value for shell in Shell),
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
        # The registry imports this module
        from ..dispatcher import root_command
        from . import get_plugins

        commands = [plugin.command() for plugin in get_plugins()]
        out.write(generate(Shell(args.shell), root_command(), commands))
