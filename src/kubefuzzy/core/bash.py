"""Bash helpers for the command strings handed to the selector.

The selector runs its --preview and execute() strings through ``$SHELL -c``,
so every argv we embed there is quoted here. Going the other way, command
values from the config file are split into argv with bashlex.
"""

from __future__ import annotations

import os

import bashlex
from bashlex.errors import ParsingError

# Characters that never need quoting in a bash word
_PLAIN = frozenset("-_./=@:+%")


def bash_quote(s: str) -> str:
    """Quote one word for bash.

    Plain words pass through unchanged; anything else is single-quoted with
    embedded single quotes written as '"'"'.
    """
    if not s:
        return "''"
    if all(c.isalnum() or c in _PLAIN for c in s):
        return s
    return "'" + s.replace("'", "'\"'\"'") + "'"


def bash_join(argv: list[str]) -> str:
    """Join argv into a single bash command string."""
    return " ".join(bash_quote(word) for word in argv)


def split_command(command: str) -> list[str]:
    """Split a simple command string into argv using bashlex.

    Quotes are removed and a leading ~ is expanded. Pipelines, lists,
    redirects and variable assignments are rejected with ValueError since the
    result is executed directly, not through a shell.
    """
    if not command or not command.strip():
        raise ValueError("empty command")

    try:
        nodes = bashlex.parse(command)
    except (ParsingError, NotImplementedError) as e:
        raise ValueError(f"cannot parse command '{command}': {e}") from None

    if len(nodes) != 1 or nodes[0].kind != "command":
        raise ValueError(f"'{command}' must be a single simple command")

    argv = []
    for part in nodes[0].parts:
        if part.kind != "word":
            raise ValueError(f"'{command}' must not contain {part.kind}s")
        word = part.word
        if word.startswith("~"):
            word = os.path.expanduser(word)
        argv.append(word)
    return argv
