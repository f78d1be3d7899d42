"""Errors raised by kubefuzzy, each carrying the process exit code."""

from __future__ import annotations


class KubeFuzzyError(Exception):
    """Base error. The entry point prints the message and exits with exit_code."""

    exit_code = 1

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class MissingResourceError(KubeFuzzyError):
    """No resource kind was given."""

    exit_code = 1

    def __init__(self, message: str = "Error: A resource is required"):
        super().__init__(message)


class AbortedError(KubeFuzzyError):
    """The selector was cancelled or returned nothing."""

    exit_code = 4

    def __init__(self, message: str = "Aborted"):
        super().__init__(message)


class UnsupportedActionError(KubeFuzzyError):
    exit_code = 5

    def __init__(self, action: str, resource: str):
        super().__init__(f"Error: Can't execute '{action}' on resource {resource}")
        self.action = action
        self.resource = resource


class MultipleSelectionError(KubeFuzzyError):
    """A single-item action was accepted with more than one item selected."""

    exit_code = 6


class CommandError(KubeFuzzyError):
    """An external command failed; exit_code is its return code."""

    def __init__(self, argv: list[str], returncode: int, stderr: str = ""):
        detail = stderr.strip() or f"'{argv[0]}' exited with status {returncode}"
        super().__init__(detail, exit_code=returncode)
        self.argv = argv
        self.returncode = returncode


class ToolNotFoundError(KubeFuzzyError):
    """A required executable (kubectl, sk, ...) is not on PATH."""

    exit_code = 127

    def __init__(self, name: str):
        super().__init__(f"Error: '{name}' not found")
        self.name = name
