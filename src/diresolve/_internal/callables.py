from __future__ import annotations

import functools
import inspect
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

from diresolve._internal.locator import locate
from diresolve._internal.type_checks import is_runtime_class
from diresolve.exceptions import CallableResolutionError, ParameterResolutionError
from diresolve.types import Invokable as InvokableProtocol

if TYPE_CHECKING:
    from diresolve._internal.context import ResolutionContext
    from diresolve._internal.instances import InstanceMaker

logger = logging.getLogger(__name__)

_MISSING: Any = object()
_CLASS_METHOD_PATTERN = re.compile(r"^(?P<class_name>.+)@(?P<method_name>.+)$")
_PAIR_LENGTH = 2


@dataclass(frozen=True, slots=True)
class BoundMethod:
    """A method looked up on an instance."""

    instance: Any
    method_name: str

    @property
    def entry_point(self) -> Callable[..., Any]:
        return getattr(self.instance, self.method_name)


@dataclass(frozen=True, slots=True)
class StaticMethod:
    """A ``staticmethod`` or ``classmethod`` looked up on a class."""

    cls: type[Any]
    method_name: str

    @property
    def entry_point(self) -> Callable[..., Any]:
        return getattr(self.cls, self.method_name)


@dataclass(frozen=True, slots=True)
class Invokable:
    """An object whose single entry point is ``__call__``."""

    instance: Any

    @property
    def entry_point(self) -> Callable[..., Any]:
        return self.instance.__call__


@dataclass(frozen=True, slots=True)
class FreeFunction:
    """A plain function, builtin, or ``functools.partial``."""

    function: Callable[..., Any]

    @property
    def entry_point(self) -> Callable[..., Any]:
        return self.function


CallableSpec: TypeAlias = BoundMethod | StaticMethod | Invokable | FreeFunction


def classify_callable(target: Any) -> CallableSpec:
    """Return the callable shape of ``target``.

    Accepted shapes are functions, bound methods, ``(instance, "method")`` and
    ``(cls, "static_or_class_method")`` pairs, and non-class objects defining
    ``__call__``. Classes are rejected: construct them with ``Resolve.make``.

    Args:
        target: Value to classify.

    Raises:
        ParameterResolutionError: If the value has an unsupported callable shape.

    """
    if _is_method_pair(target):
        return _classify_pair(target[0], target[1])
    if is_runtime_class(target):
        msg = (
            f"Unsupported callable shape: {target!r} is a class. "
            "Use make() to construct classes."
        )
        raise ParameterResolutionError(msg)
    if inspect.ismethod(target):
        owner = target.__self__
        if is_runtime_class(owner):
            return StaticMethod(owner, target.__name__)
        return BoundMethod(owner, target.__name__)
    if inspect.isroutine(target) or isinstance(target, functools.partial):
        return FreeFunction(target)
    if isinstance(target, InvokableProtocol):
        return Invokable(target)

    msg = f"Unsupported callable shape: {target!r}."
    raise ParameterResolutionError(msg)


def is_invocable(target: Any) -> bool:
    """Return true when ``target`` already has one of the accepted callable shapes.

    Args:
        target: Value to check.

    """
    try:
        classify_callable(target)
    except ParameterResolutionError:
        return False
    return True


def _is_method_pair(target: Any) -> bool:
    return isinstance(target, tuple) and len(target) == _PAIR_LENGTH and isinstance(target[1], str)


def _classify_pair(owner: Any, method_name: str) -> CallableSpec:
    if is_runtime_class(owner):
        attribute = inspect.getattr_static(owner, method_name, _MISSING)
        if isinstance(attribute, staticmethod | classmethod):
            return StaticMethod(owner, method_name)
        msg = (
            f"Unsupported callable shape: '{method_name}' is not a static or class "
            f"method of {owner.__qualname__}."
        )
        raise ParameterResolutionError(msg)

    if not callable(getattr(owner, method_name, None)):
        msg = (
            f"Unsupported callable shape: {type(owner).__qualname__} has no method "
            f"'{method_name}'."
        )
        raise ParameterResolutionError(msg)
    return BoundMethod(owner, method_name)


class CallableMaterializer:
    """Turn callables and string specifications into invocable values."""

    def __init__(self, instance_maker: InstanceMaker) -> None:
        self._instance_maker = instance_maker

    def materialize(self, target: Any, context: ResolutionContext) -> Any:
        """Return an invocable form of ``target``.

        Already invocable values are returned unchanged. Strings are accepted as
        ``"module.Class@method"`` (the class is made and the bound method
        returned), ``"module.Class"`` naming an invokable class (the instance
        is returned), or ``"module.function"`` naming a function.

        Args:
            target: Value to materialize.
            context: Registry and named arguments used when a class must be made.

        Raises:
            CallableResolutionError: If no invocable form exists.

        """
        if is_invocable(target):
            return target

        if isinstance(target, str):
            match = _CLASS_METHOD_PATTERN.match(target)
            if match is not None:
                method = self._bind_method(
                    match["class_name"],
                    match["method_name"],
                    context,
                )
            else:
                method = self._from_name(target, context)
            if method is not _MISSING:
                return method

        msg = f"Cannot make {target!r} callable."
        raise CallableResolutionError(msg, target=target)

    def _bind_method(
        self,
        class_name: str,
        method_name: str,
        context: ResolutionContext,
    ) -> Any:
        if not context.registry.has(class_name) and not is_runtime_class(
            _locate_or_missing(class_name),
        ):
            return _MISSING

        instance = self._instance_maker.make(class_name, context)
        method = getattr(instance, method_name, None)
        if not callable(method):
            return _MISSING
        logger.debug("Materialized '%s@%s' as a bound method", class_name, method_name)
        return method

    def _from_name(self, name: str, context: ResolutionContext) -> Any:
        located = _locate_or_missing(name)
        if is_runtime_class(located):
            instance = self._instance_maker.make(located, context)
            if is_invocable(instance) and not is_runtime_class(instance):
                return instance
            return _MISSING
        if inspect.isroutine(located):
            return located
        return _MISSING


def _locate_or_missing(name: str) -> Any:
    try:
        return locate(name)
    except LookupError:
        return _MISSING


__all__ = [
    "BoundMethod",
    "CallableMaterializer",
    "CallableSpec",
    "FreeFunction",
    "Invokable",
    "StaticMethod",
    "classify_callable",
    "is_invocable",
]
