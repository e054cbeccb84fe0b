"""Command-line dispatch from argv to a single plugin.

The Dispatcher turns plugin descriptors into an argparse tree, selects the
plugin named by the sub-command, checks argument dependencies argparse has no
notion of, and runs the plugin once.
"""

import argparse
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TextIO

import structlog

from .constants import DESCRIPTION, PROGRAM_NAME, VERSION
from .models import ArgKind, ArgSpec, CommandDescriptor
from .plugins.base import Plugin, PluginContext

log = structlog.stdlib.get_logger()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"

# Stored for an optional-value option given without a value. It counts as
# present for dependency checks and is replaced by None after parsing. argv
# strings cannot hold NUL, so no typed value matches it.
BARE_OPTION = "\0bare"

ROOT_ARGS = (
    ArgSpec(
        id="log_level",
        kind=ArgKind.VALUED,
        long="log-level",
        value_name="LEVEL",
        choices=LOG_LEVELS,
        help=(
            "Log to stderr at this level (default: no console logging; "
            f"--log-dir files use {DEFAULT_LOG_LEVEL})"
        ),
    ),
    ArgSpec(
        id="log_dir",
        kind=ArgKind.VALUED,
        long="log-dir",
        value_name="PATH",
        help="Directory for log files (default: no files)",
    ),
)


class DuplicateCommandError(ValueError):
    """Raised when two plugins declare the same command name."""


def root_command() -> CommandDescriptor:
    """Describe the root program and its global options."""
    return CommandDescriptor(name=PROGRAM_NAME, summary=DESCRIPTION, args=ROOT_ARGS)


class Dispatcher:
    """Routes a command line to the plugin that owns the sub-command."""

    def __init__(self, plugins: Sequence[Plugin]) -> None:
        """Initialize the dispatcher.

        Args:
            plugins: Plugins in help-listing order

        Raises:
            DuplicateCommandError: If two plugins share a command name
        """
        self._plugins: dict[str, Plugin] = {}
        self._descriptors: dict[str, CommandDescriptor] = {}
        for plugin in plugins:
            descriptor = plugin.command()
            if descriptor.name in self._plugins:
                raise DuplicateCommandError(f"Duplicate command name: {descriptor.name}")
            self._plugins[descriptor.name] = plugin
            self._descriptors[descriptor.name] = descriptor

        self._subparsers: dict[str, argparse.ArgumentParser] = {}
        self._parser = self.build_parser()

    @property
    def command_names(self) -> list[str]:
        return list(self._plugins)

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argparse tree for the root program and every plugin."""
        parser = argparse.ArgumentParser(
            prog=PROGRAM_NAME,
            description=DESCRIPTION,
        )

        _ = parser.add_argument(
            "-V",
            "--version",
            action="version",
            version=f"%(prog)s {VERSION}",
        )

        _ = parser.add_argument(
            "--log-level",
            choices=LOG_LEVELS,
            default=None,
            help=ROOT_ARGS[0].help,
        )

        _ = parser.add_argument(
            "--log-dir",
            type=Path,
            default=None,
            help=ROOT_ARGS[1].help,
        )

        subparsers = parser.add_subparsers(dest="command", metavar="<command>", required=True)
        self._subparsers.clear()
        for name, descriptor in self._descriptors.items():
            subparser = subparsers.add_parser(
                name,
                help=descriptor.summary,
                description=descriptor.long_help or descriptor.summary,
                formatter_class=argparse.RawTextHelpFormatter,
            )
            for spec in descriptor.args:
                self._add_argument(subparser, spec)
            self._subparsers[name] = subparser

        return parser

    @staticmethod
    def _add_argument(parser: argparse.ArgumentParser, spec: ArgSpec) -> None:
        kwargs: dict[str, Any] = {"help": spec.help}
        if spec.choices:
            kwargs["choices"] = spec.choices

        if spec.kind is ArgKind.POSITIONAL:
            if spec.value_name:
                kwargs["metavar"] = spec.value_name
            if not spec.required:
                kwargs["nargs"] = "?"
            _ = parser.add_argument(spec.dest, **kwargs)
        elif spec.kind is ArgKind.FLAG:
            _ = parser.add_argument(*spec.option_strings, dest=spec.dest, action="store_true", **kwargs)
        else:
            if spec.value_name:
                kwargs["metavar"] = spec.value_name
            if spec.optional_value:
                kwargs["nargs"] = "?"
                kwargs["const"] = BARE_OPTION
            _ = parser.add_argument(
                *spec.option_strings,
                dest=spec.dest,
                default=None,
                required=spec.required,
                **kwargs,
            )

    def parse(self, argv: Sequence[str] | None = None) -> tuple[Plugin, argparse.Namespace]:
        """Parse a command line and select the plugin it names.

        Exits with status 2 (through argparse) on invalid arguments, an
        unknown sub-command, or an unsatisfied argument dependency.

        Args:
            argv: Arguments without the program name (None for sys.argv)

        Returns:
            The selected plugin and the parsed namespace
        """
        args = self._parser.parse_args(argv)
        descriptor = self._descriptors[args.command]
        self._check_dependencies(descriptor, args)
        _clear_bare_options(descriptor, args)
        return self._plugins[args.command], args

    def _check_dependencies(self, descriptor: CommandDescriptor, args: argparse.Namespace) -> None:
        by_id = {spec.id: spec for spec in descriptor.args}
        for spec in descriptor.args:
            if not spec.depends_on or not _is_present(spec, args):
                continue
            for dependency in sorted(spec.depends_on):
                required = by_id[dependency]
                if not _is_present(required, args):
                    self._subparsers[descriptor.name].error(
                        f"argument {spec.display_name} requires {required.display_name}"
                    )

    async def dispatch(
        self,
        plugin: Plugin,
        context: PluginContext,
        args: argparse.Namespace,
        out: TextIO,
        err: TextIO,
    ) -> None:
        """Execute one plugin against the given sinks."""
        log.debug("Dispatching command", command=args.command)
        await plugin.execute(context, args, out, err)
        log.debug("Command finished", command=args.command)


def _is_present(spec: ArgSpec, args: argparse.Namespace) -> bool:
    value = getattr(args, spec.dest, None)
    if spec.kind is ArgKind.FLAG:
        return bool(value)
    return value is not None


def _clear_bare_options(descriptor: CommandDescriptor, args: argparse.Namespace) -> None:
    for spec in descriptor.args:
        if spec.optional_value and getattr(args, spec.dest, None) == BARE_OPTION:
            setattr(args, spec.dest, None)
