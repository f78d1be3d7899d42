"""
Action names, the default keymap, and the selector --bind string.

Every action key except delete runs ``echo <action> > <action file>`` inside
the selector, which stays open; accepting the selection then runs the last
recorded action. Delete runs ``kubectl delete`` on the highlighted line at
once, ignoring the multi-selection.
"""

from __future__ import annotations

from pathlib import Path

from kubefuzzy.core.bash import bash_join, bash_quote

NONE = "none"
DELETE = "delete"
EDIT = "edit"
DESCRIBE = "describe"
LOGS = "logs"
CONTAINERS = "containers"
DECODE = "decode"

# Binding order in the generated --bind string
ACTIONS = (NONE, DELETE, EDIT, DESCRIBE, LOGS, CONTAINERS, DECODE)

DEFAULT_KEYS = {
    NONE: "ctrl-n",
    DELETE: "ctrl-t",
    EDIT: "ctrl-e",
    DESCRIBE: "ctrl-b",
    LOGS: "ctrl-l",
    CONTAINERS: "ctrl-k",
    DECODE: "ctrl-o",
}

# Always bound so the selector exits normally and temp files get removed
ABORT_BINDING = "ctrl-c:abort"

# Field placeholder for the highlighted line's first column
HIGHLIGHTED_NAME = "{1}"


def check_keymap(keys: dict[str, str]) -> None:
    """Raise ValueError if the keymap is incomplete or reuses a key."""
    missing = [action for action in ACTIONS if not keys.get(action)]
    if missing:
        raise ValueError(f"no key bound for: {', '.join(missing)}")

    seen: dict[str, str] = {"ctrl-c": "abort"}
    for action in ACTIONS:
        key = keys[action]
        if key in seen:
            raise ValueError(f"key '{key}' bound to both '{seen[key]}' and '{action}'")
        seen[key] = action


def record_command(action: str, action_file: Path) -> str:
    """Shell command that writes an action marker to the action file."""
    return f"echo {action} > {bash_quote(str(action_file))}"


def delete_command(kubectl: list[str], resource: str) -> str:
    """Shell command that deletes the highlighted resource."""
    return f"{bash_join(kubectl + ['delete', resource])} {HIGHLIGHTED_NAME}"


def build_bindings(
    keys: dict[str, str], action_file: Path, kubectl: list[str], resource: str
) -> str:
    """Build the comma-separated --bind value for the resource picker."""
    bindings = [ABORT_BINDING]
    for action in ACTIONS:
        if action == DELETE:
            command = delete_command(kubectl, resource)
        else:
            command = record_command(action, action_file)
        bindings.append(f"{keys[action]}:execute({command})")
    return ",".join(bindings)
