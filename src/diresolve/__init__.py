from diresolve._internal.autowiring import AutowirePolicy
from diresolve.exceptions import (
    CallableResolutionError,
    ClassResolutionError,
    DIResolveError,
    ParameterResolutionError,
)
from diresolve.registry import DictRegistry, EmptyRegistry, Registry, class_name
from diresolve.resolve import Resolve
from diresolve.types import Invokable

__all__ = [
    "AutowirePolicy",
    "CallableResolutionError",
    "ClassResolutionError",
    "DIResolveError",
    "DictRegistry",
    "EmptyRegistry",
    "Invokable",
    "ParameterResolutionError",
    "Registry",
    "Resolve",
    "class_name",
]
