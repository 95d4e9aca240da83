from __future__ import annotations

import builtins
import importlib
from typing import Any

_BUILTINS_MODULE_NAME = "builtins"


def class_name(cls: type[Any]) -> str:
    """Return the fully qualified dotted name used as the registry key for a class.

    Args:
        cls: Class whose key is requested.

    """
    return f"{cls.__module__}.{cls.__qualname__}"


def locate(dotted_name: str) -> Any:
    """Return the object a dotted name refers to.

    ``"package.module.Class"`` and ``"package.module.Outer.Inner"`` import the
    longest importable module prefix and walk the remaining attributes. Names
    without a dot are looked up in ``builtins``.

    Args:
        dotted_name: Name of a class or function, for example ``"pathlib.Path"``.

    Raises:
        LookupError: If nothing with that name exists.

    """
    parts = dotted_name.split(".")
    if not all(part.isidentifier() for part in parts):
        msg = f"'{dotted_name}' is not a valid dotted name."
        raise LookupError(msg)

    if len(parts) == 1:
        return _walk_attributes(builtins, parts, dotted_name)

    for split_at in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split_at])
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as error:
            # A missing import inside an existing module is a real error.
            if error.name is None or not _is_prefix_of(error.name, module_name):
                raise
            continue
        return _walk_attributes(module, parts[split_at:], dotted_name)

    msg = f"No module found for '{dotted_name}'."
    raise LookupError(msg)


def _walk_attributes(owner: Any, attribute_names: list[str], dotted_name: str) -> Any:
    current = owner
    for attribute_name in attribute_names:
        try:
            current = getattr(current, attribute_name)
        except AttributeError as error:
            msg = f"'{dotted_name}' does not exist."
            raise LookupError(msg) from error
    return current


def _is_prefix_of(missing_module: str, module_name: str) -> bool:
    return module_name == missing_module or module_name.startswith(f"{missing_module}.")


__all__ = ["class_name", "locate"]
