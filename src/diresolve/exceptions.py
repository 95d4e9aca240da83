from __future__ import annotations

from typing import Any


class DIResolveError(Exception):
    """Represent a base class for all diresolve-specific failures.

    Catch this type when you want to handle any resolution error path without
    matching each concrete exception class individually.
    """


class ParameterResolutionError(DIResolveError):
    """Signal that a formal parameter could not be bound to a value.

    Raised by ``Resolve.call`` and ``Resolve.make`` when no strategy (named
    arguments, registry, structural match, recursive construction, default
    value, nullability) produced a value, when a parameter annotation has a
    shape that cannot be resolved in principle (for example a ``ParamSpec`` or
    a non-type object), or when the callable itself has an unsupported shape.

    Typical fixes include passing the value by name, registering it in the
    registry, or giving the parameter a default.
    """

    def __init__(self, message: str, *, parameter_name: str | None = None) -> None:
        super().__init__(message)
        self.parameter_name = parameter_name


class ClassResolutionError(DIResolveError):
    """Signal that a class cannot be located or instantiated.

    Raised by ``Resolve.make`` when the dotted class name does not exist, names
    something that is not a class, names an abstract class or protocol, or when
    a class is requested again while it is still being constructed (circular
    dependency).
    """

    def __init__(self, message: str, *, class_name: str | None = None) -> None:
        super().__init__(message)
        self.class_name = class_name


class CallableResolutionError(DIResolveError):
    """Signal that a value could not be normalized into an invocable form.

    Raised by ``Resolve.make_callable`` (and ``Resolve.call`` for string
    targets) when the input is neither callable nor a string naming an
    invokable class, a ``"module.Class@method"`` pair, or a module-level
    function.
    """

    def __init__(self, message: str, *, target: Any = None) -> None:
        super().__init__(message)
        self.target = target
