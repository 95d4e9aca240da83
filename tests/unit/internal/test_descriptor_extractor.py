import functools
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from inspect import Parameter
from typing import (
    Annotated,
    Any,
    Generic,
    Literal,
    NamedTuple,
    NewType,
    Optional,
    ParamSpec,
    TypeVar,
    Union,
)

import pytest

from diresolve._internal.callables import FreeFunction
from diresolve._internal.descriptors import (
    BuiltinTypeSpec,
    NamedTypeSpec,
    ParameterDescriptor,
    ParameterDescriptorExtractor,
    UnionTypeSpec,
    UnresolvedTypeSpec,
    UnsupportedTypeSpec,
)
from diresolve.exceptions import ParameterResolutionError
from tests.fixtures import (
    ConstructorClass,
    InvokableClass,
    Logger,
    Mailer,
    NonConstructorClass,
    StaticMethodClass,
    get_event,
)
from tests.postponed_fixtures import deliver, greet

T = TypeVar("T")
BoundT = TypeVar("BoundT", bound=Logger)
P = ParamSpec("P")
UserId = NewType("UserId", int)


class Box(Generic[T]):
    pass


def _assert_event_descriptors(descriptors: list[ParameterDescriptor]) -> None:
    assert [descriptor.name for descriptor in descriptors] == ["name", "start_at"]
    assert [descriptor.type_spec for descriptor in descriptors] == [
        BuiltinTypeSpec(str),
        NamedTypeSpec(datetime),
    ]
    assert not any(descriptor.nullable for descriptor in descriptors)
    assert not any(descriptor.has_default for descriptor in descriptors)


@pytest.mark.parametrize(
    "target",
    [
        pytest.param((NonConstructorClass(), "get_event"), id="instance-method-pair"),
        pytest.param(NonConstructorClass().get_event, id="bound-method"),
        pytest.param(InvokableClass(), id="invokable"),
        pytest.param(get_event, id="function"),
        pytest.param((StaticMethodClass, "get_event"), id="static-method-pair"),
        pytest.param((NonConstructorClass, "get_static_event"), id="static-method-on-class"),
        pytest.param(FreeFunction(get_event), id="callable-spec"),
    ],
)
def test_extracts_descriptors_from_supported_callable_shapes(
    extractor: ParameterDescriptorExtractor,
    target: Any,
) -> None:
    _assert_event_descriptors(extractor.extract_from_callable(target))


def test_extracts_descriptors_from_class_method_pair(
    extractor: ParameterDescriptorExtractor,
) -> None:
    descriptors = extractor.extract_from_callable((StaticMethodClass, "describe"))

    assert [descriptor.name for descriptor in descriptors] == ["name"]


@pytest.mark.parametrize(
    ("target", "message"),
    [
        pytest.param((NonConstructorClass, "get_event"), "not a static or class method", id="pair"),
        pytest.param((NonConstructorClass(), "missing"), "has no method 'missing'", id="missing"),
        pytest.param(NonConstructorClass, "is a class", id="class"),
        pytest.param(42, "Unsupported callable shape", id="int"),
        pytest.param("get_event", "Unsupported callable shape", id="string"),
    ],
)
def test_rejects_unsupported_callable_shapes(
    extractor: ParameterDescriptorExtractor,
    target: Any,
    message: str,
) -> None:
    with pytest.raises(ParameterResolutionError, match=message):
        extractor.extract_from_callable(target)


def test_describes_optional_untyped_any_annotated_and_keyword_only_parameters(
    extractor: ParameterDescriptorExtractor,
) -> None:
    def handler(  # type: ignore[no-untyped-def]
        first: int | None,
        second: Optional[str],  # noqa: UP045
        third,
        fourth: Any,
        fifth: Annotated[Logger, "marker"],
        *args: int,
        sixth: int = 3,
        **kwargs: str,
    ) -> None:
        pass

    descriptors = {
        descriptor.name: descriptor for descriptor in extractor.extract_from_callable(handler)
    }

    assert list(descriptors) == ["first", "second", "third", "fourth", "fifth", "sixth"]
    assert descriptors["first"].type_spec == BuiltinTypeSpec(int)
    assert descriptors["first"].nullable is True
    assert descriptors["second"].type_spec == BuiltinTypeSpec(str)
    assert descriptors["second"].nullable is True
    assert descriptors["third"].type_spec is None
    assert descriptors["third"].nullable is True
    assert descriptors["fourth"].type_spec == BuiltinTypeSpec(Any)
    assert descriptors["fourth"].nullable is True
    assert descriptors["fifth"].type_spec == NamedTypeSpec(Logger)
    assert descriptors["fifth"].nullable is False
    assert descriptors["sixth"].keyword_only is True
    assert descriptors["sixth"].has_default is True
    assert descriptors["sixth"].default == 3


def test_default_of_none_is_recorded_as_a_default(extractor: ParameterDescriptorExtractor) -> None:
    def handler(value: Logger = None) -> None:  # type: ignore[assignment]
        pass

    (descriptor,) = extractor.extract_from_callable(handler)

    assert descriptor.has_default is True
    assert descriptor.default is None


def test_union_keeps_declaration_order(extractor: ParameterDescriptorExtractor) -> None:
    def handler(value: Mailer | Logger | None) -> None:
        pass

    (descriptor,) = extractor.extract_from_callable(handler)

    assert descriptor.type_spec == UnionTypeSpec((NamedTypeSpec(Mailer), NamedTypeSpec(Logger)))
    assert descriptor.nullable is True


def test_union_of_builtin_and_class(extractor: ParameterDescriptorExtractor) -> None:
    def handler(value: Union[int, Logger]) -> None:  # noqa: UP007
        pass

    (descriptor,) = extractor.extract_from_callable(handler)

    assert descriptor.type_spec == UnionTypeSpec((BuiltinTypeSpec(int), NamedTypeSpec(Logger)))
    assert descriptor.nullable is False


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        pytest.param(list[int], BuiltinTypeSpec(list[int]), id="builtin-generic"),
        pytest.param(Callable[[int], str], BuiltinTypeSpec(Callable[[int], str]), id="callable"),
        pytest.param(Box[int], NamedTypeSpec(Box), id="user-generic"),
        pytest.param(UserId, BuiltinTypeSpec(int), id="new-type"),
        pytest.param(datetime, NamedTypeSpec(datetime), id="stdlib-class"),
        pytest.param(dict, BuiltinTypeSpec(dict), id="builtin-class"),
        pytest.param(Literal["a", "b"], BuiltinTypeSpec(Literal["a", "b"]), id="literal"),
        pytest.param(BoundT, NamedTypeSpec(Logger), id="bound-type-var"),
        pytest.param("Missing", UnresolvedTypeSpec("Missing"), id="forward-reference"),
    ],
)
def test_classifies_annotations(
    extractor: ParameterDescriptorExtractor,
    annotation: Any,
    expected: Any,
) -> None:
    type_spec, nullable = extractor.describe_annotation(annotation)

    assert type_spec == expected
    assert nullable is False


@pytest.mark.parametrize(
    ("annotation", "reason"),
    [
        pytest.param(P, "unsupported annotation", id="param-spec"),
        pytest.param(42, "unsupported annotation", id="non-type"),
        pytest.param(Union[int, P], "union alternative", id="union"),  # noqa: UP007
    ],
)
def test_marks_unresolvable_annotations_as_unsupported(
    extractor: ParameterDescriptorExtractor,
    annotation: Any,
    reason: str,
) -> None:
    type_spec, _nullable = extractor.describe_annotation(annotation)

    assert isinstance(type_spec, UnsupportedTypeSpec)
    assert reason in type_spec.reason


def test_unbound_type_variable_is_untyped(extractor: ParameterDescriptorExtractor) -> None:
    assert extractor.describe_annotation(T) == (BuiltinTypeSpec(Any), True)


def test_unresolvable_forward_reference_falls_back_to_raw_annotation(
    extractor: ParameterDescriptorExtractor,
) -> None:
    def handler(value: "MissingService") -> None:  # type: ignore[name-defined]  # noqa: F821
        pass

    (descriptor,) = extractor.extract_from_callable(handler)

    assert descriptor.type_spec == UnresolvedTypeSpec("MissingService")
    assert descriptor.nullable is False


def test_unresolvable_postponed_annotation_only_affects_its_parameter(
    extractor: ParameterDescriptorExtractor,
) -> None:
    name, mailer = extractor.extract_from_callable(greet)

    assert name.type_spec == BuiltinTypeSpec(str)
    assert mailer.type_spec == UnresolvedTypeSpec("Mailer | None")
    assert mailer.has_default is True
    assert mailer.default is None

    logger, _mailer = extractor.extract_from_callable(deliver)
    assert logger.type_spec == NamedTypeSpec(Logger)


def test_empty_annotation_means_untyped(extractor: ParameterDescriptorExtractor) -> None:
    assert extractor.describe_annotation(Parameter.empty) == (None, True)


def test_partial_uses_signature_of_wrapped_function(
    extractor: ParameterDescriptorExtractor,
) -> None:
    descriptors = extractor.extract_from_callable(functools.partial(get_event, name="Partial"))

    assert [descriptor.name for descriptor in descriptors] == ["name", "start_at"]
    assert descriptors[0].default == "Partial"
    assert descriptors[1].type_spec == NamedTypeSpec(datetime)


class TestConstructorExtraction:
    def test_class_without_constructor(self, extractor: ParameterDescriptorExtractor) -> None:
        assert extractor.extract_from_constructor(NonConstructorClass) is None

    def test_skips_self(self, extractor: ParameterDescriptorExtractor) -> None:
        descriptors = extractor.extract_from_constructor(ConstructorClass)

        assert descriptors is not None
        _assert_event_descriptors(descriptors)

    def test_dataclass(self, extractor: ParameterDescriptorExtractor) -> None:
        @dataclass
        class Settings:
            dsn: str
            logger: Logger
            retries: int = 3

        descriptors = extractor.extract_from_constructor(Settings)

        assert descriptors is not None
        assert [descriptor.name for descriptor in descriptors] == ["dsn", "logger", "retries"]
        assert descriptors[1].type_spec == NamedTypeSpec(Logger)
        assert descriptors[2].default == 3

    def test_namedtuple(self, extractor: ParameterDescriptorExtractor) -> None:
        class Pair(NamedTuple):
            left: Logger
            right: Mailer

        descriptors = extractor.extract_from_constructor(Pair)

        assert descriptors is not None
        assert [descriptor.type_spec for descriptor in descriptors] == [
            NamedTypeSpec(Logger),
            NamedTypeSpec(Mailer),
        ]
