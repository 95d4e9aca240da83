from __future__ import annotations

import logging
from typing import Any

from diresolve._internal.autowiring import AutowirePolicy
from diresolve._internal.context import ResolutionContext
from diresolve._internal.descriptors import ParameterDescriptorExtractor
from diresolve._internal.locator import class_name, locate
from diresolve._internal.parameters import ParameterResolver, split_arguments
from diresolve._internal.type_checks import is_abstract_class, is_runtime_class
from diresolve.exceptions import ClassResolutionError

logger = logging.getLogger(__name__)


class InstanceMaker:
    """Construct classes by resolving their constructor parameters."""

    def __init__(
        self,
        *,
        extractor: ParameterDescriptorExtractor,
        autowire: bool = True,
        autowire_policy: AutowirePolicy | None = None,
    ) -> None:
        self._extractor = extractor
        self._parameter_resolver = ParameterResolver(
            make_instance=self.make,
            autowire=autowire,
            autowire_policy=autowire_policy,
        )

    @property
    def parameter_resolver(self) -> ParameterResolver:
        return self._parameter_resolver

    def make(self, cls_or_name: type[Any] | str, context: ResolutionContext) -> Any:
        """Return an instance of a class.

        A registry entry under the class name is returned as is. Otherwise the
        class is located, checked to be concrete, and built with resolved
        constructor arguments.

        Args:
            cls_or_name: Class object or fully qualified dotted class name.
            context: Registry, named arguments and classes under construction.

        Raises:
            ClassResolutionError: If the class cannot be found, is abstract, or
                is already under construction.
            ParameterResolutionError: If a constructor parameter cannot be resolved.

        """
        if not isinstance(cls_or_name, str) and not is_runtime_class(cls_or_name):
            msg = f"{cls_or_name!r} is not a class."
            raise ClassResolutionError(msg, class_name=repr(cls_or_name))

        key = cls_or_name if isinstance(cls_or_name, str) else class_name(cls_or_name)
        if context.registry.has(key):
            logger.debug("Using registry entry for '%s'", key)
            return context.registry.get(key)

        cls = self._locate_class(cls_or_name)
        if is_abstract_class(cls):
            msg = f"Cannot make an instance of abstract class or protocol '{key}'."
            raise ClassResolutionError(msg, class_name=key)
        if cls in context.in_progress:
            msg = f"Circular dependency detected while making '{key}'."
            raise ClassResolutionError(msg, class_name=key)

        descriptors = self._extractor.extract_from_constructor(cls)
        if descriptors is None:
            return cls()

        values = self._parameter_resolver.resolve_parameters(descriptors, context.entering(cls))
        args, kwargs = split_arguments(descriptors, values)
        return cls(*args, **kwargs)

    def _locate_class(self, cls_or_name: type[Any] | str) -> type[Any]:
        if not isinstance(cls_or_name, str):
            return cls_or_name

        try:
            located = locate(cls_or_name)
        except LookupError as error:
            msg = f"Class '{cls_or_name}' not found."
            raise ClassResolutionError(msg, class_name=cls_or_name) from error
        if not is_runtime_class(located):
            msg = f"'{cls_or_name}' is not a class."
            raise ClassResolutionError(msg, class_name=cls_or_name)
        return located


__all__ = ["InstanceMaker"]
