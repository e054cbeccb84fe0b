"""Static descriptions of sub-commands and their arguments."""

import keyword
from dataclasses import dataclass, field
from enum import Enum


class ArgKind(Enum):
    """How an argument appears on the command line."""
    POSITIONAL = "positional"
    FLAG = "flag"
    VALUED = "valued"


@dataclass(frozen=True)
class ArgSpec:
    """Declaration of one sub-command argument."""
    id: str
    kind: ArgKind
    help: str = ""
    required: bool = False
    depends_on: frozenset[str] = frozenset()
    short: str | None = None
    long: str | None = None
    value_name: str | None = None
    choices: tuple[str, ...] | None = None
    optional_value: bool = False  # VALUED option that may appear without a value

    @property
    def dest(self) -> str:
        """Namespace attribute name; Python keywords get a trailing underscore."""
        return f"{self.id}_" if keyword.iskeyword(self.id) else self.id

    @property
    def option_strings(self) -> list[str]:
        strings = []
        if self.short:
            strings.append(f"-{self.short}")
        if self.long:
            strings.append(f"--{self.long}")
        return strings

    @property
    def display_name(self) -> str:
        if self.kind is ArgKind.POSITIONAL:
            return self.value_name or self.id
        return f"--{self.long}" if self.long else f"-{self.short}"


@dataclass(frozen=True)
class CommandDescriptor:
    """Static description of a sub-command."""
    name: str
    summary: str
    long_help: str | None = None
    args: tuple[ArgSpec, ...] = field(default_factory=tuple)
