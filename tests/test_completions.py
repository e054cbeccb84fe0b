"""Tests for shell completion script generation."""

import pytest

from trogue.dispatcher import root_command
from trogue.models import ArgKind, ArgSpec, CommandDescriptor
from trogue.plugins import get_plugins
from trogue.ui.completions import Shell, generate

COMMANDS = [plugin.command() for plugin in get_plugins()]


@pytest.mark.parametrize("shell", list(Shell))
def test_every_command_and_option_is_offered(shell: Shell) -> None:
    script = generate(shell, root_command(), COMMANDS)

    assert script.endswith("\n")
    for command in COMMANDS:
        assert command.name in script
    for option in ["help", "version", "log-level", "filter", "pattern", "global", "remaining", "cards"]:
        assert option in script
    assert "powershell" in script


def test_shell_accepts_plain_names() -> None:
    assert generate("fish", root_command(), COMMANDS) == generate(Shell.FISH, root_command(), COMMANDS)


def test_bash_script() -> None:
    script = generate(Shell.BASH, root_command(), COMMANDS)

    assert script.startswith("_trogue() {\n")
    assert "            list|dashboard|achievements|progress|completions|select)\n" in script
    assert '-h --help -f --filter -p --pattern" -- "${cur}"' in script
    assert 'COMPREPLY=( $(compgen -W "DEBUG INFO WARNING ERROR CRITICAL" -- "${cur}") )' in script
    assert script.endswith("complete -F _trogue -o bashdefault -o default trogue\n")


def test_zsh_script() -> None:
    script = generate(Shell.ZSH, root_command(), COMMANDS)

    assert script.startswith("#compdef trogue\n")
    assert "'(-g --global)'{-g,--global}'[Adds global achievement percentages" in script
    # list --filter takes an optional value
    assert "{-f+,--filter=}'[Displays only games whose name contains the given text (case-insensitive)]::filter: '" in script
    assert "':SHELL:(bash zsh fish powershell)'" in script
    assert "_describe -t commands 'trogue commands' commands" in script


def test_zsh_escapes_descriptions() -> None:
    command = CommandDescriptor(
        name="odd",
        summary="It's [odd]: really",
        args=(ArgSpec(id="flag", kind=ArgKind.FLAG, long="flag", help="Say 'hi'\nsecond line"),),
    )

    script = generate(Shell.ZSH, CommandDescriptor(name="prog", summary="p"), [command])

    assert "'odd:It'\\''s \\[odd\\]\\: really'" in script
    assert "'--flag[Say '\\''hi'\\'']'" in script
    assert "second line" not in script


def test_fish_script() -> None:
    script = generate(Shell.FISH, root_command(), COMMANDS)
    lines = script.splitlines()

    assert 'complete -c trogue -n "__fish_use_subcommand" -s V -l version -d \'Print version\'' in lines
    assert any(line.startswith('complete -c trogue -n "__fish_use_subcommand" -f -a "dashboard"') for line in lines)
    assert any(
        line.startswith('complete -c trogue -n "__fish_seen_subcommand_from achievements" -s r -l remaining')
        for line in lines
    )
    assert 'complete -c trogue -n "__fish_seen_subcommand_from completions" -f -a "bash zsh fish powershell"' in lines


def test_powershell_script() -> None:
    script = generate(Shell.POWERSHELL, root_command(), COMMANDS)

    assert "Register-ArgumentCompleter -Native -CommandName 'trogue' -ScriptBlock {" in script
    assert "        'trogue;achievements' {" in script
    assert "[CompletionResult]::new('--cards', 'cards', [CompletionResultType]::ParameterName," in script
    assert "[CompletionResult]::new('zsh', 'zsh', [CompletionResultType]::ParameterValue, 'zsh')" in script


def test_powershell_doubles_quotes() -> None:
    command = CommandDescriptor(name="odd", summary="It's odd")

    script = generate(Shell.POWERSHELL, CommandDescriptor(name="prog", summary="p"), [command])

    assert "'It''s odd'" in script
