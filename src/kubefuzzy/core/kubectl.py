"""
kubectl subprocess wrapper.

Interactive subcommands (edit, describe, logs) inherit the terminal and return
kubectl's exit status. Capture subcommands raise CommandError on failure so
the caller exits with kubectl's status after its stderr is shown.
"""

from __future__ import annotations

import json
import subprocess
from typing import IO

from kubefuzzy.core.config import log_event
from kubefuzzy.core.errors import CommandError, ToolNotFoundError

CONTAINERS_PATH = "{.spec.containers[*].name}"
INIT_CONTAINERS_PATH = "{.spec.initContainers[*].name}"


class Kubectl:
    """Runs kubectl with a fixed command prefix (binary plus global flags)."""

    def __init__(self, command: list[str] | None = None):
        self.command = list(command) if command else ["kubectl"]

    def argv(self, *args: str) -> list[str]:
        return self.command + list(args)

    def run(self, *args: str, stdout: IO[str] | None = None) -> int:
        """Run a subcommand attached to the terminal. Returns the exit status."""
        argv = self.argv(*args)
        log_event("run", level="debug", argv=argv)
        try:
            return subprocess.run(argv, stdout=stdout, check=False).returncode
        except FileNotFoundError:
            raise ToolNotFoundError(argv[0]) from None

    def output(self, *args: str) -> str:
        """Run a subcommand and return its stdout."""
        argv = self.argv(*args)
        log_event("run", level="debug", argv=argv)
        try:
            proc = subprocess.run(argv, capture_output=True, text=True, check=False)
        except FileNotFoundError:
            raise ToolNotFoundError(argv[0]) from None
        if proc.returncode != 0:
            raise CommandError(argv, proc.returncode, proc.stderr)
        return proc.stdout

    def list_resources(self, resource: str) -> subprocess.Popen:
        """Start ``kubectl get <resource>`` with stdout piped, for the selector."""
        argv = self.argv("get", resource)
        log_event("run", level="debug", argv=argv)
        try:
            return subprocess.Popen(argv, stdout=subprocess.PIPE)
        except FileNotFoundError:
            raise ToolNotFoundError(argv[0]) from None

    # === Interactive ===

    def edit(self, resource: str, names: list[str]) -> int:
        return self.run("edit", resource, *names)

    def describe(self, resource: str, names: list[str], stdout: IO[str] | None = None) -> int:
        return self.run("describe", resource, *names, stdout=stdout)

    def logs(self, pod: str, container: str | None = None) -> int:
        if container:
            return self.run("logs", pod, "-c", container)
        return self.run("logs", pod)

    # === Capture ===

    def container_names(self, pod: str) -> list[str]:
        """Names of the pod's containers followed by its init containers."""
        names = []
        for path in (CONTAINERS_PATH, INIT_CONTAINERS_PATH):
            names.extend(self.output("get", "pods", pod, "-o", f"jsonpath={path}").split())
        return names

    def secret_data(self, name: str) -> dict[str, str]:
        """The secret's data map (values still base64 encoded)."""
        secret = json.loads(self.output("get", "secrets", name, "-o", "json"))
        return secret.get("data") or {}
