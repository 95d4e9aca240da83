"""Registry capability consulted during resolution.

A registry is any object exposing ``has(key)`` and ``get(key)``. Keys are
fully qualified class names (see :func:`class_name`) for class-typed
parameters, and parameter names for untyped or builtin-typed parameters.
The resolver only reads from it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from typing_extensions import Self

from diresolve._internal.locator import class_name


@runtime_checkable
class Registry(Protocol):
    """Read-only keyed lookup of ready-made values."""

    def has(self, key: str) -> bool:
        """Return whether a value is registered under ``key``.

        Args:
            key: Class name or parameter name.

        """
        ...

    def get(self, key: str) -> Any:
        """Return the value registered under ``key``.

        Only called after ``has(key)`` returned true.

        Args:
            key: Class name or parameter name.

        """
        ...


class EmptyRegistry:
    """Registry that never has anything. Used when no registry is supplied."""

    def has(self, key: str) -> bool:  # noqa: ARG002
        return False

    def get(self, key: str) -> Any:
        raise KeyError(key)


class DictRegistry:
    """Mapping-backed registry.

    Classes used as keys are converted to their dotted names, so
    ``DictRegistry({Database: db})`` and ``DictRegistry({"app.db.Database": db})``
    are equivalent.
    """

    def __init__(self, items: Mapping[str | type[Any], Any] | None = None) -> None:
        self._items: dict[str, Any] = {}
        for key, value in (items or {}).items():
            self.set(key, value)

    def set(self, key: str | type[Any], value: Any) -> Self:
        self._items[_registry_key(key)] = value
        return self

    def has(self, key: str) -> bool:
        return key in self._items

    def get(self, key: str) -> Any:
        return self._items[key]

    def __len__(self) -> int:
        return len(self._items)


def _registry_key(key: str | type[Any]) -> str:
    return key if isinstance(key, str) else class_name(key)


__all__ = ["DictRegistry", "EmptyRegistry", "Registry", "class_name"]
