"""
Preview pane rendering.

The selector runs this for every highlight change: it shows the last action
marker, describes the highlighted resource into the describe file,
optionally prints the trailing Events section through a highlighter, then
hands the whole file to the pager.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from kubefuzzy.core.bindings import NONE
from kubefuzzy.core.kubectl import Kubectl

EVENTS_HEADER = "Events:"
RULE = "-" * 61


def events_range(text: str) -> tuple[int, int] | None:
    """1-based (first, last) line range of the Events section, or None."""
    lines = text.splitlines()
    for lineno, line in enumerate(lines, 1):
        if EVENTS_HEADER in line:
            return lineno, len(lines)
    return None


def last_action(action_file: Path) -> str:
    try:
        return action_file.read_text().strip() or NONE
    except FileNotFoundError:
        return NONE


def _show_events(path: Path, text: str, span: tuple[int, int], highlighter: list[str]) -> None:
    first, last = span
    if highlighter and shutil.which(highlighter[0]):
        subprocess.run(
            highlighter + [str(path), "--line-range", f"{first}:{last}"], check=False
        )
        return
    # No highlighter installed, print the slice as is
    for line in text.splitlines()[first - 1 : last]:
        print(line)


def _page(pager: list[str], path: Path) -> int:
    if pager and shutil.which(pager[0]):
        return subprocess.run(pager + [str(path)], check=False).returncode
    print(path.read_text(), end="", flush=True)
    return 0


def render_preview(
    kubectl: Kubectl,
    resource: str,
    name: str,
    action_file: Path,
    describe_file: Path,
    events: bool = False,
    pager: list[str] | None = None,
    highlighter: list[str] | None = None,
) -> int:
    """Render the preview for one resource. Returns the pager's exit status."""
    print(f"Last selected action was: {last_action(action_file)} (updates with preview window)")
    print("", flush=True)

    with describe_file.open("w") as f:
        kubectl.describe(resource, [name], stdout=f)
    text = describe_file.read_text()

    if events:
        span = events_range(text)
        if span is not None:
            print(RULE, flush=True)
            _show_events(describe_file, text, span, highlighter or [])
            print(RULE, flush=True)

    return _page(pager or [], describe_file)
