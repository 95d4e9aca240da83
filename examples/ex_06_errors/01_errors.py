"""Errors raised when something cannot be resolved.

``ParameterResolutionError`` for unbound parameters, ``ClassResolutionError``
for classes that cannot be made, and ``CallableResolutionError`` for values
with no invocable form. All of them derive from ``DIResolveError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from diresolve import (
    CallableResolutionError,
    ClassResolutionError,
    DIResolveError,
    ParameterResolutionError,
    Resolve,
)


class Service(ABC):
    @abstractmethod
    def run(self) -> None: ...


class Node:
    def __init__(self, parent: Node) -> None:
        self.parent = parent


def needs_port(port: int) -> int:
    return port


def main() -> None:
    resolve = Resolve()

    try:
        resolve.call(needs_port)
    except ParameterResolutionError as error:
        print(f"{type(error).__name__}: {error}")  # => ParameterResolutionError: Cannot resolve parameter 'port'.

    try:
        resolve.make("acme_missing_package.Service")
    except ClassResolutionError as error:
        print(f"{type(error).__name__}: {error}")  # => ClassResolutionError: Class 'acme_missing_package.Service' not found.

    try:
        resolve.make(Service)
    except ClassResolutionError as error:
        print(f"{type(error).__name__}: {error}")  # => ClassResolutionError: Cannot make an instance of abstract class or protocol '__main__.Service'.

    try:
        resolve.make_callable("not callable")
    except CallableResolutionError as error:
        print(f"{type(error).__name__}: {error}")  # => CallableResolutionError: Cannot make 'not callable' callable.

    try:
        resolve.make(Node)
    except DIResolveError as error:
        print(f"{type(error).__name__}: {error}")  # => ParameterResolutionError: Cannot resolve parameter 'parent'.
        print(f"cause={error.__cause__}")  # => cause=Circular dependency detected while making '__main__.Node'.


if __name__ == "__main__":
    main()
