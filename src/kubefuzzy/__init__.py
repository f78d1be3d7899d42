"""
kubefuzzy - fuzzy-find Kubernetes resources and act on them.

Lists resources with kubectl, filters them in sk, and runs edit, delete,
describe, logs, container logs or secret decoding on the selection.
"""

from __future__ import annotations

__version__ = "0.1.0"

from kubefuzzy.kubefuzzy import kube_fuzzy, main

__all__ = ["kube_fuzzy", "main", "__version__"]
