from __future__ import annotations

import functools
import inspect
import logging
import types
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from typing import (
    Annotated,
    Any,
    ForwardRef,
    Literal,
    TypeAlias,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from diresolve._internal.callables import CallableSpec, classify_callable
from diresolve._internal.type_checks import is_builtin_class, is_runtime_class
from diresolve.exceptions import ParameterResolutionError

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)
_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class BuiltinTypeSpec:
    """A scalar, container, or callable-like primitive annotation."""

    annotation: Any


@dataclass(frozen=True, slots=True)
class NamedTypeSpec:
    """A concrete class, abstract class, or protocol annotation."""

    cls: type[Any]


@dataclass(frozen=True, slots=True)
class UnresolvedTypeSpec:
    """A forward reference that could not be evaluated.

    The parameter is still bound by its name (named arguments or registry)
    or by its default.
    """

    annotation: str


@dataclass(frozen=True, slots=True)
class UnionTypeSpec:
    """A union of two or more alternatives, kept in declaration order."""

    alternatives: tuple[BuiltinTypeSpec | NamedTypeSpec | UnresolvedTypeSpec, ...]


@dataclass(frozen=True, slots=True)
class UnsupportedTypeSpec:
    """An annotation that cannot be resolved in principle."""

    annotation: Any
    reason: str


TypeSpec: TypeAlias = (
    BuiltinTypeSpec | NamedTypeSpec | UnresolvedTypeSpec | UnionTypeSpec | UnsupportedTypeSpec
)
AlternativeSpec: TypeAlias = (
    BuiltinTypeSpec | NamedTypeSpec | UnresolvedTypeSpec | UnsupportedTypeSpec
)


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """The declared shape of one formal parameter."""

    name: str
    type_spec: TypeSpec | None
    """Declared type, or ``None`` when the parameter is not annotated."""
    has_default: bool
    default: Any
    nullable: bool
    """True for ``X | None``, ``Optional[X]``, ``Any`` and untyped parameters."""
    keyword_only: bool = False


class ParameterDescriptorExtractor:
    """Read parameter descriptors from callable signatures and constructors."""

    def extract_from_callable(self, target: CallableSpec | Any) -> list[ParameterDescriptor]:
        """Extract descriptors for the single entry point of a callable.

        Args:
            target: A ``CallableSpec`` or any value ``classify_callable`` accepts.

        Raises:
            ParameterResolutionError: If the value has an unsupported callable shape.

        """
        spec = target if isinstance(target, _CALLABLE_SPEC_TYPES) else classify_callable(target)
        entry_point = spec.entry_point
        return self._extract(
            signature_target=entry_point,
            hints_target=entry_point,
            provider_name=_callable_name(entry_point),
        )

    def extract_from_constructor(self, cls: type[Any]) -> list[ParameterDescriptor] | None:
        """Extract constructor descriptors, or ``None`` when the class declares no constructor.

        Args:
            cls: Class being constructed.

        """
        has_init = cls.__init__ is not object.__init__
        if not has_init and cls.__new__ is object.__new__:
            return None
        return self._extract(
            signature_target=cls,
            hints_target=cls.__init__ if has_init else cls.__new__,
            provider_name=cls.__qualname__,
        )

    def describe_annotation(self, annotation: Any) -> tuple[TypeSpec | None, bool]:
        """Return the type spec of an annotation and whether it admits ``None``.

        Args:
            annotation: Resolved annotation, or ``Parameter.empty``.

        """
        if annotation is Parameter.empty:
            return None, True
        annotation = self._unwrap(annotation)
        if annotation is Any:
            return BuiltinTypeSpec(annotation), True
        if annotation is None or annotation is _NONE_TYPE:
            return BuiltinTypeSpec(_NONE_TYPE), True

        if get_origin(annotation) not in (Union, types.UnionType):
            return self._describe_alternative(annotation), False

        members = get_args(annotation)
        nullable = _NONE_TYPE in members
        alternatives = [
            self._describe_alternative(self._unwrap(member))
            for member in members
            if member is not _NONE_TYPE
        ]
        if len(alternatives) == 1:
            return alternatives[0], nullable

        for alternative in alternatives:
            if isinstance(alternative, UnsupportedTypeSpec):
                reason = f"union alternative {alternative.annotation!r}: {alternative.reason}"
                return UnsupportedTypeSpec(annotation, reason), nullable
        return UnionTypeSpec(tuple(alternatives)), nullable  # type: ignore[arg-type]

    def _extract(
        self,
        *,
        signature_target: Callable[..., Any],
        hints_target: Callable[..., Any],
        provider_name: str,
    ) -> list[ParameterDescriptor]:
        try:
            signature = inspect.signature(signature_target)
        except (TypeError, ValueError) as error:
            msg = f"Cannot inspect the signature of '{provider_name}'."
            raise ParameterResolutionError(msg) from error

        annotations = self._resolved_type_hints(hints_target)
        descriptors: list[ParameterDescriptor] = []
        for parameter in signature.parameters.values():
            if parameter.kind in _VARIADIC_KINDS:
                continue
            annotation = annotations.get(parameter.name, parameter.annotation)
            type_spec, nullable = self.describe_annotation(annotation)
            has_default = parameter.default is not Parameter.empty
            descriptors.append(
                ParameterDescriptor(
                    name=parameter.name,
                    type_spec=type_spec,
                    has_default=has_default,
                    default=parameter.default if has_default else None,
                    nullable=nullable,
                    keyword_only=parameter.kind is Parameter.KEYWORD_ONLY,
                ),
            )
        return descriptors

    def _resolved_type_hints(self, target: Callable[..., Any]) -> dict[str, Any]:
        while isinstance(target, functools.partial):
            target = target.func
        try:
            return get_type_hints(target, include_extras=True)
        except (AttributeError, NameError, TypeError) as error:
            logger.debug(
                "Evaluating annotations of %s one by one: %s",
                _callable_name(target),
                error,
            )
        return self._resolve_each_annotation(target)

    def _resolve_each_annotation(self, target: Callable[..., Any]) -> dict[str, Any]:
        """Evaluate annotations separately so one bad hint only affects its parameter."""
        function = inspect.unwrap(getattr(target, "__func__", target))
        raw_annotations = getattr(function, "__annotations__", None) or {}
        global_namespace = getattr(function, "__globals__", {})

        resolved: dict[str, Any] = {}
        for name, annotation in raw_annotations.items():
            holder = types.SimpleNamespace(__annotations__={name: annotation})
            try:
                hints = get_type_hints(holder, global_namespace, include_extras=True)
            except (AttributeError, NameError, TypeError):
                continue
            resolved[name] = hints[name]
        return resolved

    def _describe_alternative(self, annotation: Any) -> AlternativeSpec:
        if isinstance(annotation, str):
            return UnresolvedTypeSpec(annotation)
        if isinstance(annotation, ForwardRef):
            return UnresolvedTypeSpec(annotation.__forward_arg__)
        if annotation is Any:
            return BuiltinTypeSpec(annotation)

        supertype = getattr(annotation, "__supertype__", None)
        if supertype is not None:
            return self._describe_alternative(supertype)

        if is_runtime_class(annotation):
            if is_builtin_class(annotation):
                return BuiltinTypeSpec(annotation)
            return NamedTypeSpec(annotation)

        origin = get_origin(annotation)
        if origin is Literal:
            return BuiltinTypeSpec(annotation)
        if is_runtime_class(origin):
            # Parameterized generics keep the kind of their origin class.
            if is_builtin_class(origin):
                return BuiltinTypeSpec(annotation)
            return NamedTypeSpec(origin)
        return UnsupportedTypeSpec(annotation, "unsupported annotation")

    def _unwrap(self, annotation: Any) -> Any:
        """Recursively unwrap Annotated[T, ...] into T and a type variable into its bound."""
        if isinstance(annotation, TypeVar):
            bound = annotation.__bound__
            return Any if bound is None else self._unwrap(bound)
        if get_origin(annotation) is not Annotated:
            return annotation
        return self._unwrap(get_args(annotation)[0])


_CALLABLE_SPEC_TYPES: tuple[type[Any], ...] = tuple(get_args(CallableSpec))


def _callable_name(provider: Callable[..., Any]) -> str:
    return getattr(provider, "__qualname__", repr(provider))


__all__ = [
    "BuiltinTypeSpec",
    "NamedTypeSpec",
    "ParameterDescriptor",
    "ParameterDescriptorExtractor",
    "TypeSpec",
    "UnionTypeSpec",
    "UnresolvedTypeSpec",
    "UnsupportedTypeSpec",
]
