"""
Selector (sk/fzf) wrapper.

The resource picker pipes ``kubectl get <kind>`` into a multi-select selector
with a preview pane and one binding per action. Bindings run inside the
selector process, so the chosen action comes back through a temp file that
the picker reads once the selector has exited; callers only see the
resulting Selection.
"""

from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from kubefuzzy.core.bash import bash_join
from kubefuzzy.core.bindings import DEFAULT_KEYS, HIGHLIGHTED_NAME, NONE, build_bindings
from kubefuzzy.core.config import log_event
from kubefuzzy.core.errors import ToolNotFoundError
from kubefuzzy.core.kubectl import Kubectl

DESCRIBE_PREFIX = "kube_fuzzy."
ACTION_PREFIX = "kube_fuzzy.command."

# Placeholder for the highlighted line in the container picker
HIGHLIGHTED_LINE = "{}"


@dataclass(frozen=True)
class Selection:
    """What the user accepted in the resource picker."""

    lines: list[str] = field(default_factory=list)
    """Selected lines, verbatim."""

    action: str = NONE
    """Last action marker recorded before accepting."""

    @property
    def names(self) -> list[str]:
        """Resource names: the first column of each selected line."""
        return [line.split()[0] for line in self.lines if line.strip()]


def _mktemp(prefix: str) -> Path:
    fd, path = tempfile.mkstemp(prefix=prefix)
    os.close(fd)
    return Path(path)


class Selector:
    """Runs the selector binary."""

    def __init__(self, command: list[str] | None = None, preview: list[str] | None = None):
        self.command = list(command) if command else ["sk"]
        # How the preview pane re-invokes us
        self.preview = list(preview) if preview else [sys.executable, "-m", "kubefuzzy"]

    def _run(self, args: list[str], stdin=None, input: str | None = None) -> str:
        argv = self.command + args
        log_event("run", level="debug", argv=argv)
        try:
            if input is not None:
                proc = subprocess.run(
                    argv, input=input, stdout=subprocess.PIPE, text=True, check=False
                )
            else:
                proc = subprocess.run(
                    argv, stdin=stdin, stdout=subprocess.PIPE, text=True, check=False
                )
        except FileNotFoundError:
            raise ToolNotFoundError(argv[0]) from None
        log_event("selector_exited", level="debug", returncode=proc.returncode)
        return proc.stdout

    def preview_command(
        self, resource: str, events: bool, action_file: Path, describe_file: Path
    ) -> str:
        """Shell command the selector runs for the highlighted line."""
        head = self.preview + ["--preview", resource]
        tail = ["--action-file", str(action_file), "--describe-file", str(describe_file)]
        if events:
            tail.append("--events")
        return f"{bash_join(head)} {HIGHLIGHTED_NAME} {bash_join(tail)}"

    def pick(
        self,
        kubectl: Kubectl,
        resource: str,
        events: bool = False,
        keys: dict[str, str] | None = None,
    ) -> Selection:
        """Run the resource picker. Both temp files are gone when this returns."""
        describe_file = _mktemp(DESCRIBE_PREFIX)
        action_file = _mktemp(ACTION_PREFIX)
        try:
            action_file.write_text(f"{NONE}\n")
            args = [
                "-m",
                "--ansi",
                "--preview",
                self.preview_command(resource, events, action_file, describe_file),
                "--bind",
                build_bindings(keys or DEFAULT_KEYS, action_file, kubectl.command, resource),
            ]
            log_event("picker_started", resource=resource, events=events)
            lister = kubectl.list_resources(resource)
            try:
                output = self._run(args, stdin=lister.stdout)
            finally:
                lister.stdout.close()
                lister.wait()
            action = action_file.read_text().strip() or NONE
        finally:
            describe_file.unlink(missing_ok=True)
            action_file.unlink(missing_ok=True)

        selection = Selection([line for line in output.splitlines() if line.strip()], action)
        log_event("selection", action=selection.action, count=len(selection.lines))
        return selection

    def pick_one(self, items: list[str], preview: str) -> str | None:
        """Single pick over items. Returns None when nothing was chosen."""
        output = self._run(["--ansi", "--preview", preview], input="\n".join(items) + "\n")
        choice = output.strip()
        return choice or None
