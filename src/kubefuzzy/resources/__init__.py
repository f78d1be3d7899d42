"""
Resource-specific action handlers for kubefuzzy.

Each handler module exports:
- RESOURCES: list[str] - resource kinds (as typed on the command line) it handles
- ACTIONS: dict[str, Callable[[ActionContext], int]] - action name -> handler

edit and describe work for every kind and are handled by the dispatcher;
everything else must be listed by the module for the resource kind.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Protocol

from kubefuzzy.core.errors import MultipleSelectionError
from kubefuzzy.core.kubectl import Kubectl
from kubefuzzy.core.picker import Selector


@dataclass(frozen=True)
class ActionContext:
    """Context passed to action handlers."""

    resource: str
    names: list[str]
    kubectl: Kubectl
    selector: Selector

    def single(self, message: str) -> str:
        """The one selected name. Raises MultipleSelectionError with message otherwise."""
        if len(self.names) != 1:
            raise MultipleSelectionError(message)
        return self.names[0]


ActionHandler = Callable[[ActionContext], int]


class ResourceHandler(Protocol):
    """Protocol for resource handler modules."""

    RESOURCES: list[str]
    ACTIONS: dict[str, ActionHandler]


def _discover_handlers() -> dict[str, str]:
    """Discover handler modules and build resource kind -> module mapping."""
    handlers = {}
    resources_dir = Path(__file__).parent
    for file in sorted(resources_dir.glob("*.py")):
        if file.name.startswith("_"):
            continue
        module_name = file.stem
        module = importlib.import_module(f".{module_name}", package=__name__)
        for kind in getattr(module, "RESOURCES", []):
            handlers[kind] = module_name
    return handlers


# Build handler mapping at import time
KNOWN_HANDLERS = _discover_handlers()


def get_handler(resource: str) -> Optional[ResourceHandler]:
    """
    Get the handler module for a resource kind.

    Returns None if no handler exists for the kind.
    """
    module_name = KNOWN_HANDLERS.get(resource)
    if not module_name:
        return None
    return _load_handler(module_name)


@lru_cache(maxsize=32)
def _load_handler(module_name: str) -> Optional[ResourceHandler]:
    return importlib.import_module(f".{module_name}", package=__name__)


def get_action(resource: str, action: str) -> Optional[ActionHandler]:
    """Handler for action on resource kind, or None if unsupported."""
    handler = get_handler(resource)
    if handler is None:
        return None
    return getattr(handler, "ACTIONS", {}).get(action)
