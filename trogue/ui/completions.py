"""Shell completion script generation from command descriptors."""

import re
from enum import Enum

from ..models import ArgKind, ArgSpec, CommandDescriptor

HELP_OPTION = ArgSpec(id="help", kind=ArgKind.FLAG, short="h", long="help", help="Print help")
VERSION_OPTION = ArgSpec(id="version", kind=ArgKind.FLAG, short="V", long="version", help="Print version")


class Shell(str, Enum):
    """Shells a completion script can be generated for."""
    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    POWERSHELL = "powershell"


def generate(shell: Shell, root: CommandDescriptor, commands: list[CommandDescriptor]) -> str:
    """Generate the completion script for ``root`` and its sub-commands.

    Args:
        shell: Target shell
        root: Descriptor of the program itself (name and global options)
        commands: Sub-command descriptors in registry order

    Returns:
        The script text, ending with a newline
    """
    generators = {
        Shell.BASH: _bash,
        Shell.ZSH: _zsh,
        Shell.FISH: _fish,
        Shell.POWERSHELL: _powershell,
    }
    return generators[Shell(shell)](root, commands)


def _summary(text: str) -> str:
    return text.strip().splitlines()[0] if text.strip() else ""


def _options(spec_args: tuple[ArgSpec, ...]) -> list[ArgSpec]:
    return [arg for arg in spec_args if arg.kind is not ArgKind.POSITIONAL]


def _positionals(spec_args: tuple[ArgSpec, ...]) -> list[ArgSpec]:
    return [arg for arg in spec_args if arg.kind is ArgKind.POSITIONAL]


def _function_name(program: str) -> str:
    return "_" + re.sub(r"\W", "_", program)


# bash

def _bash_words(options: list[ArgSpec], extra: list[str]) -> str:
    words = []
    for option in options:
        words.extend(option.option_strings)
    words.extend(extra)
    return " ".join(words)


def _bash_value_cases(options: list[ArgSpec], indent: str) -> list[str]:
    valued = [option for option in options if option.kind is ArgKind.VALUED]
    if not valued:
        return []
    lines = [f'{indent}case "${{prev}}" in']
    for option in valued:
        values = " ".join(option.choices) if option.choices else ""
        lines += [
            f"{indent}    {'|'.join(option.option_strings)})",
            f'{indent}        COMPREPLY=( $(compgen -W "{values}" -- "${{cur}}") )',
            f"{indent}        return 0",
            f"{indent}        ;;",
        ]
    lines.append(f"{indent}esac")
    return lines


def _bash(root: CommandDescriptor, commands: list[CommandDescriptor]) -> str:
    program = root.name
    function = _function_name(program)
    names = [command.name for command in commands]
    root_options = [HELP_OPTION, VERSION_OPTION] + _options(root.args)

    lines = [
        f"{function}() {{",
        "    local cur prev cmd i",
        "    COMPREPLY=()",
        '    cur="${COMP_WORDS[COMP_CWORD]}"',
        '    prev="${COMP_WORDS[COMP_CWORD-1]}"',
        '    cmd=""',
        "",
        "    for ((i = 1; i < COMP_CWORD; i++)); do",
        '        case "${COMP_WORDS[i]}" in',
        f"            {'|'.join(names)})",
        '                cmd="${COMP_WORDS[i]}"',
        "                break",
        "                ;;",
        "        esac",
        "    done",
        "",
        '    case "${cmd}" in',
        '        "")',
    ]
    lines += _bash_value_cases(root_options, " " * 12)
    lines += [
        f'            COMPREPLY=( $(compgen -W "{_bash_words(root_options, names)}" -- "${{cur}}") )',
        "            return 0",
        "            ;;",
    ]

    for command in commands:
        options = [HELP_OPTION] + _options(command.args)
        choices = [choice for arg in _positionals(command.args) for choice in (arg.choices or ())]
        lines.append(f"        {command.name})")
        lines += _bash_value_cases(options, " " * 12)
        lines += [
            f'            COMPREPLY=( $(compgen -W "{_bash_words(options, choices)}" -- "${{cur}}") )',
            "            return 0",
            "            ;;",
        ]

    lines += [
        "    esac",
        "}",
        "",
        f"complete -F {function} -o bashdefault -o default {program}",
    ]
    return "\n".join(lines) + "\n"


# zsh

def _zsh_escape(text: str) -> str:
    text = _summary(text)
    text = text.replace("\\", "\\\\").replace("'", "'\\''")
    for ch in "[]:":
        text = text.replace(ch, "\\" + ch)
    return text


def _zsh_option_spec(option: ArgSpec) -> str:
    description = _zsh_escape(option.help)
    if option.kind is ArgKind.FLAG:
        forms = option.option_strings
        value = ""
    else:
        forms = []
        if option.short:
            forms.append(f"-{option.short}+")
        if option.long:
            forms.append(f"--{option.long}=")
        action = f"({' '.join(option.choices)})" if option.choices else " "
        separator = "::" if option.optional_value else ":"
        value = f"{separator}{option.value_name or option.id}:{action}"

    if len(forms) > 1:
        exclusion = " ".join(option.option_strings)
        return f"'({exclusion})'{{{','.join(forms)}}}'[{description}]{value}'"
    return f"'{forms[0]}[{description}]{value}'"


def _zsh_positional_spec(arg: ArgSpec) -> str:
    action = f"({' '.join(arg.choices)})" if arg.choices else " "
    prefix = ":" if arg.required else "::"
    return f"'{prefix}{arg.value_name or arg.id}:{action}'"


def _zsh(root: CommandDescriptor, commands: list[CommandDescriptor]) -> str:
    program = root.name
    function = _function_name(program)
    help_spec = "'(- *)'{-h,--help}'[Print help]'"
    version_spec = "'(- *)'{-V,--version}'[Print version]'"

    lines = [
        f"#compdef {program}",
        "",
        f"{function}() {{",
        '    local context curcontext="$curcontext" state line',
        "    typeset -A opt_args",
        "",
        "    _arguments -C \\",
        f"        {help_spec} \\",
        f"        {version_spec} \\",
    ]
    lines += [f"        {_zsh_option_spec(option)} \\" for option in _options(root.args)]
    lines += [
        f"        ':command:{function}_commands' \\",
        "        '*:: :->args'",
        "",
        "    case $state in",
        "        args)",
        "            case $line[1] in",
    ]

    for command in commands:
        specs = [help_spec]
        specs += [_zsh_option_spec(option) for option in _options(command.args)]
        specs += [_zsh_positional_spec(arg) for arg in _positionals(command.args)]
        lines.append(f"                {command.name})")
        lines.append("                    _arguments \\")
        for index, spec in enumerate(specs):
            continuation = " \\" if index < len(specs) - 1 else ""
            lines.append(f"                        {spec}{continuation}")
        lines.append("                    ;;")

    lines += [
        "            esac",
        "            ;;",
        "    esac",
        "}",
        "",
        f"{function}_commands() {{",
        "    local commands; commands=(",
    ]
    lines += [f"        '{command.name}:{_zsh_escape(command.summary)}'" for command in commands]
    lines += [
        "    )",
        f"    _describe -t commands '{program} commands' commands",
        "}",
        "",
        f'if [ "$funcstack[1]" = "{function}" ]; then',
        f'    {function} "$@"',
        "else",
        f"    compdef {function} {program}",
        "fi",
    ]
    return "\n".join(lines) + "\n"


# fish

def _fish_quote(text: str) -> str:
    text = _summary(text).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{text}'"


def _fish_option(program: str, condition: str, option: ArgSpec) -> str:
    parts = [f"complete -c {program} -n \"{condition}\""]
    if option.short:
        parts.append(f"-s {option.short}")
    if option.long:
        parts.append(f"-l {option.long}")
    if option.kind is ArgKind.VALUED:
        parts.append("-r")
        if option.choices:
            parts.append(f"-f -a \"{' '.join(option.choices)}\"")
    if option.help:
        parts.append(f"-d {_fish_quote(option.help)}")
    return " ".join(parts)


def _fish(root: CommandDescriptor, commands: list[CommandDescriptor]) -> str:
    program = root.name
    top = "__fish_use_subcommand"
    lines = [_fish_option(program, top, option) for option in [HELP_OPTION, VERSION_OPTION] + _options(root.args)]
    lines += [
        f"complete -c {program} -n \"{top}\" -f -a \"{command.name}\" -d {_fish_quote(command.summary)}"
        for command in commands
    ]

    for command in commands:
        condition = f"__fish_seen_subcommand_from {command.name}"
        lines += [_fish_option(program, condition, option) for option in [HELP_OPTION] + _options(command.args)]
        for arg in _positionals(command.args):
            if arg.choices:
                lines.append(f"complete -c {program} -n \"{condition}\" -f -a \"{' '.join(arg.choices)}\"")
    return "\n".join(lines) + "\n"


# powershell

def _ps_quote(text: str) -> str:
    return "'" + _summary(text).replace("'", "''") + "'"


def _ps_option_results(option: ArgSpec, indent: str) -> list[str]:
    tooltip = _ps_quote(option.help or option.id)
    return [
        f"{indent}[CompletionResult]::new({_ps_quote(flag)}, {_ps_quote(flag.lstrip('-'))}, "
        f"[CompletionResultType]::ParameterName, {tooltip})"
        for flag in option.option_strings
    ]


def _powershell(root: CommandDescriptor, commands: list[CommandDescriptor]) -> str:
    program = root.name
    indent = " " * 12
    lines = [
        "using namespace System.Management.Automation",
        "using namespace System.Management.Automation.Language",
        "",
        f"Register-ArgumentCompleter -Native -CommandName {_ps_quote(program)} -ScriptBlock {{",
        "    param($wordToComplete, $commandAst, $cursorPosition)",
        "",
        "    $commandElements = $commandAst.CommandElements",
        "    $command = @(",
        f"        {_ps_quote(program)}",
        "        for ($i = 1; $i -lt $commandElements.Count; $i++) {",
        "            $element = $commandElements[$i]",
        "            if ($element -isnot [StringConstantExpressionAst] -or",
        "                $element.StringConstantType -ne [StringConstantType]::BareWord -or",
        "                $element.Value.StartsWith('-') -or",
        "                $element.Value -eq $wordToComplete) {",
        "                break",
        "            }",
        "            $element.Value",
        "        }",
        "    ) -join ';'",
        "",
        "    $completions = @(switch ($command) {",
        f"        {_ps_quote(program)} {{",
    ]
    for option in [HELP_OPTION, VERSION_OPTION] + _options(root.args):
        lines += _ps_option_results(option, indent)
    for command in commands:
        lines.append(
            f"{indent}[CompletionResult]::new({_ps_quote(command.name)}, {_ps_quote(command.name)}, "
            f"[CompletionResultType]::ParameterValue, {_ps_quote(command.summary)})"
        )
    lines += [f"{indent}break", "        }"]

    for command in commands:
        lines.append(f"        {_ps_quote(f'{program};{command.name}')} {{")
        for option in [HELP_OPTION] + _options(command.args):
            lines += _ps_option_results(option, indent)
        for arg in _positionals(command.args):
            for choice in arg.choices or ():
                lines.append(
                    f"{indent}[CompletionResult]::new({_ps_quote(choice)}, {_ps_quote(choice)}, "
                    f"[CompletionResultType]::ParameterValue, {_ps_quote(choice)})"
                )
        lines += [f"{indent}break", "        }"]

    lines += [
        "    })",
        "",
        "    $completions.Where{ $_.CompletionText -like \"$wordToComplete*\" } |",
        "        Sort-Object -Property ListItemText",
        "}",
    ]
    return "\n".join(lines) + "\n"
