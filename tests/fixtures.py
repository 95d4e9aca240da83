"""Module-level classes and functions shared by the test suite.

They live at module level so that they can be located by dotted name, for
example ``"tests.fixtures.ConstructorClass"``.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Protocol


class NonConstructorClass:
    def get_event(self, name: str, start_at: datetime) -> dict[str, Any]:
        return {"name": name, "start_at": start_at}

    @staticmethod
    def get_static_event(name: str, start_at: datetime) -> dict[str, Any]:
        return {"name": name, "start_at": start_at}


class ConstructorClass:
    def __init__(self, name: str, start_at: datetime) -> None:
        self.name = name
        self.start_at = start_at

    def get_event(self) -> dict[str, Any]:
        return {"name": self.name, "start_at": self.start_at}


class InvokableClass:
    def __call__(self, name: str, start_at: datetime) -> dict[str, Any]:
        return {"name": name, "start_at": start_at}


class StaticMethodClass:
    @staticmethod
    def get_event(name: str, start_at: datetime) -> dict[str, Any]:
        return {"name": name, "start_at": start_at}

    @classmethod
    def describe(cls, name: str) -> str:
        return f"{cls.__name__}:{name}"


class AbstractService(ABC):
    @abstractmethod
    def run(self) -> str: ...


class ConcreteService(AbstractService):
    def run(self) -> str:
        return "concrete"


class ServiceProtocol(Protocol):
    def run(self) -> str: ...


class Logger:
    pass


class FileLogger(Logger):
    pass


class Mailer:
    def __init__(self, logger: Logger) -> None:
        self.logger = logger


class SelfDependent:
    def __init__(self, other: "SelfDependent") -> None:
        self.other = other


class Chicken:
    def __init__(self, egg: "Egg") -> None:
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken) -> None:
        self.chicken = chicken


class TreeNode:
    def __init__(self, parent: "TreeNode | None" = None) -> None:
        self.parent = parent


class Outer:
    class Inner:
        pass


def get_event(name: str, start_at: datetime) -> dict[str, Any]:
    return {"name": name, "start_at": start_at}
