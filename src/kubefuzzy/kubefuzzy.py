"""Fuzzy-find Kubernetes resources with sk and act on the selection.

Lists ``kubectl get <resource>`` in sk (or fzf) with a preview of
``kubectl describe`` for the highlighted line, then runs the last action key
pressed on the accepted selection.

Usage:
    kubefuzzy <resource> [--events|-e]

    kgp     kubefuzzy pods --events
    kgd     kubefuzzy deployments --events
    kgs     kubefuzzy services --events
    kgsec   kubefuzzy secrets

--events also shows the trailing Events section of the describe output,
highlighted with bat when it is installed.

Default keys (rebind with ``bind <action> <key>`` in ~/.kubefuzzy/config):
┌────────┬────────────┬──────────────────────────────────────────────────────┐
│ key    │ action     │ behavior                                             │
├────────┼────────────┼──────────────────────────────────────────────────────┤
│ ctrl-e │ edit       │ kubectl edit the selection after exit                │
│ ctrl-t │ delete     │ kubectl delete the highlighted line now, no prompt   │
│ ctrl-b │ describe   │ kubectl describe the selection after exit            │
│ ctrl-l │ logs       │ logs of the selected pod after exit                  │
│ ctrl-k │ containers │ pick one of the selected pod's containers, show logs │
│ ctrl-o │ decode     │ base64 decode the selected secret's data after exit  │
│ ctrl-n │ none       │ print the selected lines (the default)               │
└────────┴────────────┴──────────────────────────────────────────────────────┘

Exit codes:
- 0: Success, or the status of the kubectl command that was run.
- 1: No resource given, or a broken config file.
- 4: Nothing selected / aborted.
- 5: The action is not supported for the resource kind.
- 6: The action works on a single item and several were selected.
"""

from __future__ import annotations

import sys
from pathlib import Path

from kubefuzzy import __version__
from kubefuzzy.core.config import Config, configure_logging, load_config, log_event
from kubefuzzy.core.dispatch import dispatch
from kubefuzzy.core.errors import KubeFuzzyError, MissingResourceError
from kubefuzzy.core.kubectl import Kubectl
from kubefuzzy.core.picker import Selector
from kubefuzzy.core.preview import render_preview

EVENTS_FLAGS = ("--events", "-e")

# Resource and flags for each console-script alias
ALIASES = {
    "kgp": ["pods", "--events"],
    "kgd": ["deployments", "--events"],
    "kgs": ["services", "--events"],
    "kgsec": ["secrets"],
}


def parse_args(argv: list[str]) -> tuple[str, bool]:
    """Return (resource, events). Only the second argument is checked for --events."""
    resource = argv[0] if argv else ""
    if not resource or resource.startswith("-"):
        raise MissingResourceError()
    events = len(argv) > 1 and argv[1] in EVENTS_FLAGS
    return resource, events


def kube_fuzzy(resource: str, events: bool = False, config: Config | None = None) -> int:
    """Pick resources of one kind and run the chosen action. Returns the exit status."""
    if config is None:
        config = Config()
    kubectl = Kubectl(config.kubectl)
    selector = Selector(config.selector)
    selection = selector.pick(kubectl, resource, events, config.keys)
    return dispatch(selection, resource, kubectl, selector)


def _parse_preview_args(argv: list[str]) -> dict:
    """Parse ``<resource> <name> --action-file P --describe-file P [--events]``."""
    usage = KubeFuzzyError(
        "usage: kubefuzzy --preview <resource> <name> "
        "--action-file <path> --describe-file <path> [--events]",
        exit_code=2,
    )
    if len(argv) < 2:
        raise usage
    opts = {"resource": argv[0], "name": argv[1], "events": False}
    rest = argv[2:]
    i = 0
    while i < len(rest):
        flag = rest[i]
        if flag in EVENTS_FLAGS:
            opts["events"] = True
            i += 1
        elif flag in ("--action-file", "--describe-file") and i + 1 < len(rest):
            opts[flag[2:].replace("-", "_")] = Path(rest[i + 1])
            i += 2
        else:
            raise usage
    if "action_file" not in opts or "describe_file" not in opts:
        raise usage
    return opts


def preview(argv: list[str], config: Config) -> int:
    """Preview mode, run by the selector for the highlighted line."""
    opts = _parse_preview_args(argv)
    return render_preview(
        Kubectl(config.kubectl),
        opts["resource"],
        opts["name"],
        opts["action_file"],
        opts["describe_file"],
        events=opts["events"],
        pager=config.pager,
        highlighter=config.highlighter,
    )


# === Entry point ===


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if argv and argv[0] in ("-h", "--help"):
        print(__doc__.strip())
        return 0
    if argv and argv[0] == "--version":
        print(f"kubefuzzy {__version__}")
        return 0

    try:
        config = load_config()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    configure_logging(config)

    try:
        if argv and argv[0] == "--preview":
            return preview(argv[1:], config)
        resource, events = parse_args(argv)
        return kube_fuzzy(resource, events, config)
    except KubeFuzzyError as e:
        log_event("exit", exit_code=e.exit_code, error=e.message)
        print(e.message, file=sys.stderr)
        return e.exit_code


def run() -> None:
    sys.exit(main())


def _alias(name: str) -> None:
    sys.exit(main(ALIASES[name] + sys.argv[1:]))


def kgp() -> None:
    _alias("kgp")


def kgd() -> None:
    _alias("kgd")


def kgs() -> None:
    _alias("kgs")


def kgsec() -> None:
    _alias("kgsec")


if __name__ == "__main__":
    run()
