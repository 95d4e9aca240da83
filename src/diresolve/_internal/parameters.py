from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from diresolve._internal.autowiring import AutowirePolicy
from diresolve._internal.context import ResolutionContext
from diresolve._internal.descriptors import (
    BuiltinTypeSpec,
    NamedTypeSpec,
    ParameterDescriptor,
    UnionTypeSpec,
    UnresolvedTypeSpec,
    UnsupportedTypeSpec,
)
from diresolve._internal.locator import class_name
from diresolve._internal.type_checks import supports_instance_checks
from diresolve.exceptions import ParameterResolutionError

logger = logging.getLogger(__name__)

_MISSING: Any = object()

InstanceFactory = Callable[[type[Any], ResolutionContext], Any]
"""Builds an instance of a class within a resolution context (the Instance Maker)."""


class ParameterResolver:
    """Turn parameter descriptors into concrete values.

    Strategies for a single concrete type, in order: exact name (and, for
    classes, exact runtime type) in the named arguments, registry by parameter
    name (builtin or untyped), registry by class name, first structurally
    matching named argument, recursive instantiation, declared default, and
    ``None`` for nullable parameters.

    Union-typed parameters run the matching strategies across every
    alternative before attempting recursive instantiation of any alternative,
    then fall back to the default or ``None`` once.
    """

    def __init__(
        self,
        *,
        make_instance: InstanceFactory,
        autowire: bool = True,
        autowire_policy: AutowirePolicy | None = None,
    ) -> None:
        self._make_instance = make_instance
        self._autowire = autowire
        self._autowire_policy = autowire_policy or AutowirePolicy()

    def resolve_parameters(
        self,
        descriptors: Sequence[ParameterDescriptor],
        context: ResolutionContext,
    ) -> list[Any]:
        """Resolve every descriptor independently, keeping declaration order.

        Args:
            descriptors: Parameter descriptors of one entry point.
            context: Registry, named arguments and classes under construction.

        Raises:
            ParameterResolutionError: If any parameter cannot be resolved.

        """
        return [self.resolve_parameter(descriptor, context) for descriptor in descriptors]

    def resolve_parameter(self, descriptor: ParameterDescriptor, context: ResolutionContext) -> Any:
        """Resolve one parameter by dispatching on its declared type shape.

        Args:
            descriptor: Parameter to resolve.
            context: Registry, named arguments and classes under construction.

        """
        type_spec = descriptor.type_spec
        if isinstance(type_spec, UnsupportedTypeSpec):
            msg = (
                f"Cannot resolve parameter '{descriptor.name}' annotated as "
                f"{type_spec.annotation!r}: {type_spec.reason}."
            )
            raise ParameterResolutionError(msg, parameter_name=descriptor.name)
        if isinstance(type_spec, UnionTypeSpec):
            return self._resolve_union(descriptor, type_spec, context)
        return self._resolve_single(descriptor, type_spec, context)

    def _resolve_single(
        self,
        descriptor: ParameterDescriptor,
        type_spec: BuiltinTypeSpec | NamedTypeSpec | UnresolvedTypeSpec | None,
        context: ResolutionContext,
    ) -> Any:
        value = self._match(descriptor.name, type_spec, context)
        if value is not _MISSING:
            return value

        failures: list[Exception] = []
        value = self._construct(descriptor.name, type_spec, context, failures)
        if value is not _MISSING:
            return value

        return self._fallback(descriptor, failures)

    def _resolve_union(
        self,
        descriptor: ParameterDescriptor,
        type_spec: UnionTypeSpec,
        context: ResolutionContext,
    ) -> Any:
        for alternative in type_spec.alternatives:
            value = self._match(descriptor.name, alternative, context)
            if value is not _MISSING:
                return value

        failures: list[Exception] = []
        for alternative in type_spec.alternatives:
            value = self._construct(descriptor.name, alternative, context, failures)
            if value is not _MISSING:
                return value

        return self._fallback(descriptor, failures)

    def _match(
        self,
        name: str,
        type_spec: BuiltinTypeSpec | NamedTypeSpec | UnresolvedTypeSpec | None,
        context: ResolutionContext,
    ) -> Any:
        named_arguments = context.named_arguments
        registry = context.registry

        if not isinstance(type_spec, NamedTypeSpec):
            if name in named_arguments:
                logger.debug("Parameter '%s' resolved from named arguments", name)
                return named_arguments[name]
            if registry.has(name):
                logger.debug("Parameter '%s' resolved from registry by name", name)
                return registry.get(name)
            return _MISSING

        cls = type_spec.cls
        if name in named_arguments and type(named_arguments[name]) is cls:
            logger.debug("Parameter '%s' resolved from named arguments", name)
            return named_arguments[name]

        key = class_name(cls)
        if registry.has(key):
            logger.debug("Parameter '%s' resolved from registry by type '%s'", name, key)
            return registry.get(key)

        if not supports_instance_checks(cls):
            return _MISSING
        for argument_name, value in named_arguments.items():
            if isinstance(value, cls):
                logger.debug(
                    "Parameter '%s' resolved from named argument '%s' by type",
                    name,
                    argument_name,
                )
                return value
        return _MISSING

    def _construct(
        self,
        name: str,
        type_spec: BuiltinTypeSpec | NamedTypeSpec | UnresolvedTypeSpec | None,
        context: ResolutionContext,
        failures: list[Exception],
    ) -> Any:
        if not isinstance(type_spec, NamedTypeSpec) or not self._autowire:
            return _MISSING
        cls = type_spec.cls
        if not self._autowire_policy.is_eligible(cls):
            return _MISSING

        try:
            instance = self._make_instance(cls, context)
        except Exception as error:  # noqa: BLE001
            logger.debug(
                "Could not construct %s for parameter '%s': %s",
                cls.__qualname__,
                name,
                error,
            )
            failures.append(error)
            return _MISSING

        logger.debug("Parameter '%s' resolved by constructing %s", name, cls.__qualname__)
        return instance

    def _fallback(self, descriptor: ParameterDescriptor, failures: list[Exception]) -> Any:
        if descriptor.has_default:
            return descriptor.default
        if descriptor.nullable:
            return None

        msg = f"Cannot resolve parameter '{descriptor.name}'."
        if isinstance(descriptor.type_spec, UnresolvedTypeSpec):
            msg += f" Its annotation '{descriptor.type_spec.annotation}' could not be evaluated."
        cause = failures[-1] if failures else None
        raise ParameterResolutionError(msg, parameter_name=descriptor.name) from cause


def split_arguments(
    descriptors: Sequence[ParameterDescriptor],
    values: Sequence[Any],
) -> tuple[list[Any], dict[str, Any]]:
    """Split resolved values into positional and keyword-only arguments.

    Args:
        descriptors: Descriptors the values were resolved for.
        values: Resolved values in declaration order.

    """
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    for descriptor, value in zip(descriptors, values, strict=True):
        if descriptor.keyword_only:
            kwargs[descriptor.name] = value
        else:
            args.append(value)
    return args, kwargs


__all__ = ["InstanceFactory", "ParameterResolver", "split_arguments"]
