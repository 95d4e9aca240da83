from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Invokable(Protocol):
    """Capability of objects that are called directly through ``__call__``.

    Classes implementing it can be passed to ``Resolve.call`` as instances or
    named by their dotted path in ``Resolve.make_callable``.
    """

    def __call__(self, *args: Any, **kwargs: Any) -> Any: ...  # noqa: D102


__all__ = ["Invokable"]
