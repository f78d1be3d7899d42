"""
Action dispatcher.

Runs the action recorded in a Selection once the picker has exited:
edit and describe for any resource kind, everything else through the
resource handler modules. Unknown (action, kind) pairs are errors.
"""

from __future__ import annotations

from kubefuzzy.core.bindings import DESCRIBE, EDIT, NONE
from kubefuzzy.core.config import log_event
from kubefuzzy.core.errors import AbortedError, UnsupportedActionError
from kubefuzzy.core.kubectl import Kubectl
from kubefuzzy.core.picker import Selection, Selector
from kubefuzzy.resources import ActionContext, get_action


def dispatch(selection: Selection, resource: str, kubectl: Kubectl, selector: Selector) -> int:
    """Run the selection's action. Returns the exit status."""
    if not selection.lines:
        raise AbortedError()

    if selection.action == NONE:
        print("\n".join(selection.lines))
        return 0

    action = selection.action
    names = selection.names
    log_event("dispatch", action=action, resource=resource, names=names)

    # Global actions
    if action == EDIT:
        return kubectl.edit(resource, names)
    if action == DESCRIBE:
        return kubectl.describe(resource, names)

    handler = get_action(resource, action)
    if handler is None:
        log_event("unsupported", level="warning", action=action, resource=resource)
        raise UnsupportedActionError(action, resource)
    return handler(ActionContext(resource, names, kubectl, selector))
