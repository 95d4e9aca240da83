"""Callable shapes accepted by ``call`` and ``make_callable``.

Functions, ``(instance, "method")`` and ``(cls, "static_method")`` pairs,
invokable objects, and strings naming a class method or an invokable class.
"""

from __future__ import annotations

from diresolve import Resolve, class_name


class Greeter:
    def greet(self, name: str) -> str:
        return f"hello {name}"

    @staticmethod
    def shout(name: str) -> str:
        return f"HELLO {name.upper()}"


class GreetCommand:
    def __init__(self, greeter: Greeter) -> None:
        self.greeter = greeter

    def __call__(self, name: str) -> str:
        return self.greeter.greet(name)


def farewell(name: str) -> str:
    return f"bye {name}"


def main() -> None:
    resolve = Resolve()
    arguments = {"name": "ada"}

    print(resolve.call((Greeter(), "greet"), arguments))  # => hello ada
    print(resolve.call((Greeter, "shout"), arguments))  # => HELLO ADA
    print(resolve.call(farewell, arguments))  # => bye ada
    print(resolve.call(f"{class_name(Greeter)}@greet", arguments))  # => hello ada
    print(resolve.call(class_name(GreetCommand), arguments))  # => hello ada

    command = resolve.make_callable(class_name(GreetCommand))
    print(f"made={type(command).__name__}")  # => made=GreetCommand


if __name__ == "__main__":
    main()
