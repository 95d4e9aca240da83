from __future__ import annotations

import inspect
import types
from typing import Any, TypeGuard

from typing_extensions import is_protocol

_BUILTIN_MODULES = frozenset(
    {
        "builtins",
        "collections.abc",
        "types",
        "typing",
        "typing_extensions",
    },
)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_builtin_class(candidate: type[Any]) -> bool:
    """Return true for scalar, container and callable-like primitive classes.

    Args:
        candidate: Runtime class being classified.

    """
    return candidate.__module__ in _BUILTIN_MODULES


def is_abstract_class(candidate: type[Any]) -> bool:
    """Return true for abstract classes and protocols, which cannot be instantiated.

    Args:
        candidate: Runtime class being classified.

    """
    return inspect.isabstract(candidate) or is_protocol(candidate)


def supports_instance_checks(candidate: type[Any]) -> bool:
    """Return false for protocols that are not runtime checkable.

    ``isinstance`` raises ``TypeError`` for them.

    Args:
        candidate: Runtime class being classified.

    """
    return not is_protocol(candidate) or bool(getattr(candidate, "_is_runtime_protocol", False))


__all__ = [
    "is_abstract_class",
    "is_builtin_class",
    "is_runtime_class",
    "supports_instance_checks",
]
