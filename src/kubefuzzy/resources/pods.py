"""
Pod actions: logs, and container logs picked from a second selector.

Both act on a single pod only.
"""

from __future__ import annotations

from kubefuzzy.core.bash import bash_join
from kubefuzzy.core.bindings import CONTAINERS, LOGS
from kubefuzzy.core.picker import HIGHLIGHTED_LINE
from kubefuzzy.resources import ActionContext

RESOURCES = ["pods", "pod", "po"]


def logs(ctx: ActionContext) -> int:
    """Print the logs of the selected pod."""
    pod = ctx.single("Can't currently log multiple pods")
    return ctx.kubectl.logs(pod)


def containers(ctx: ActionContext) -> int:
    """Pick one of the pod's containers (init containers included) and print its logs."""
    pod = ctx.single("Can't currently handle multiple pods' containers")
    print("Fetching containers...", flush=True)
    names = ctx.kubectl.container_names(pod)

    preview = f"{bash_join(ctx.kubectl.argv('logs', pod, '-c'))} {HIGHLIGHTED_LINE}"
    container = ctx.selector.pick_one(names, preview)
    if container is None:
        return 0
    return ctx.kubectl.logs(pod, container)


ACTIONS = {
    LOGS: logs,
    CONTAINERS: containers,
}
