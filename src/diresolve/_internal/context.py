from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from diresolve.registry import Registry


@dataclass(frozen=True, slots=True)
class ResolutionContext:
    """Inputs shared by every step of one ``call``/``make`` resolution tree."""

    registry: Registry
    """Registry consulted by name and by class name."""
    named_arguments: Mapping[str, Any]
    """Caller-supplied values, matched by exact parameter name or structurally."""
    in_progress: frozenset[type[Any]] = frozenset()
    """Classes currently being constructed higher up the tree."""

    def entering(self, cls: type[Any]) -> ResolutionContext:
        """Return a context for resolving the constructor of ``cls``.

        Args:
            cls: Class about to be constructed.

        """
        return replace(self, in_progress=self.in_progress | {cls})
