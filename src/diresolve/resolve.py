from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar, overload

from diresolve._internal.autowiring import AutowirePolicy
from diresolve._internal.callables import CallableMaterializer, classify_callable
from diresolve._internal.context import ResolutionContext
from diresolve._internal.descriptors import ParameterDescriptorExtractor
from diresolve._internal.instances import InstanceMaker
from diresolve._internal.parameters import split_arguments
from diresolve.registry import EmptyRegistry, Registry

T = TypeVar("T")


class Resolve:
    """Call functions and construct classes with automatically resolved arguments.

    Every formal parameter is bound by trying, in order: a named argument with
    the parameter's name, the registry (by parameter name for builtin or
    untyped parameters, by fully qualified class name for class-typed ones),
    any named argument that is an instance of the declared class, recursive
    construction of the declared class, the declared default, and finally
    ``None`` when the annotation admits it.

    Resolution is synchronous and stateless: nothing is cached between calls
    and the registry is only read.

    Examples:
        .. code-block:: python

            resolve = Resolve(DictRegistry({Database: database}))
            service = resolve.make(UserService)
            user = resolve.call(service.get_user, {"user_id": 42})

    """

    def __init__(
        self,
        registry: Registry | None = None,
        *,
        autowire: bool = True,
        autowire_policy: AutowirePolicy | None = None,
    ) -> None:
        """Initialize a resolver.

        Args:
            registry: Optional source of ready-made values. Defaults to an
                empty registry.
            autowire: Construct class-typed parameters recursively when nothing
                else matched. Disable for strict mode.
            autowire_policy: Decides which classes may be constructed
                recursively. Defaults to ``AutowirePolicy()``.

        """
        self._registry: Registry = registry if registry is not None else EmptyRegistry()
        self._extractor = ParameterDescriptorExtractor()
        self._instance_maker = InstanceMaker(
            extractor=self._extractor,
            autowire=autowire,
            autowire_policy=autowire_policy,
        )
        self._materializer = CallableMaterializer(self._instance_maker)

    @property
    def registry(self) -> Registry:
        return self._registry

    def call(self, target: Any, named_arguments: Mapping[str, Any] | None = None) -> Any:
        """Invoke a callable with resolved arguments and return its result.

        Args:
            target: A function, bound method, ``(instance, "method")`` or
                ``(cls, "static_method")`` pair, invokable object, or any string
                accepted by ``make_callable``.
            named_arguments: Values matched to parameters by name or by type.

        Raises:
            CallableResolutionError: If a string target cannot be made callable.
            ParameterResolutionError: If a parameter cannot be resolved or the
                target has an unsupported shape.
            ClassResolutionError: If a class named by the target cannot be made.

        """
        context = self._context(named_arguments)
        invocable = self._materializer.materialize(target, context)
        spec = classify_callable(invocable)
        descriptors = self._extractor.extract_from_callable(spec)
        values = self._instance_maker.parameter_resolver.resolve_parameters(descriptors, context)
        args, kwargs = split_arguments(descriptors, values)
        return spec.entry_point(*args, **kwargs)

    @overload
    def make(self, cls: type[T], named_arguments: Mapping[str, Any] | None = None) -> T: ...

    @overload
    def make(self, cls: str, named_arguments: Mapping[str, Any] | None = None) -> Any: ...

    def make(self, cls: type[Any] | str, named_arguments: Mapping[str, Any] | None = None) -> Any:
        """Return an instance of a class, or the registry's entry for it.

        Args:
            cls: Class object or fully qualified dotted class name.
            named_arguments: Values matched to constructor parameters by name or by type.

        Raises:
            ClassResolutionError: If the class is missing, abstract, or circular.
            ParameterResolutionError: If a constructor parameter cannot be resolved.

        """
        return self._instance_maker.make(cls, self._context(named_arguments))

    def make_callable(self, target: Any) -> Any:
        """Return an invocable form of ``target``.

        Callables are returned unchanged. ``"module.Class@method"`` returns the
        bound method of a made instance, ``"module.Class"`` returns a made
        invokable instance, and ``"module.function"`` returns the function.
        Class objects are not treated as callables here even though Python can
        call them: passing one raises ``CallableResolutionError``. Use ``make``
        to construct classes.

        Args:
            target: Callable or string specification.

        Raises:
            CallableResolutionError: If no invocable form exists.
            ClassResolutionError: If the named class cannot be made.
            ParameterResolutionError: If a constructor parameter cannot be resolved.

        """
        return self._materializer.materialize(target, self._context(None))

    def _context(self, named_arguments: Mapping[str, Any] | None) -> ResolutionContext:
        return ResolutionContext(
            registry=self._registry,
            named_arguments=named_arguments if named_arguments is not None else {},
        )
