"""Resolution order for a single parameter.

Each parameter tries, in order: a named argument with the same name, the
registry, any named argument of a matching type, recursive construction,
the declared default, and ``None`` for optional annotations.
"""

from __future__ import annotations

from diresolve import DictRegistry, Resolve


class Clock:
    pass


class SystemClock(Clock):
    pass


def render(title: str, clock: Clock, pages: int = 1, footer: str | None = None) -> str:
    return f"{title}|{type(clock).__name__}|{pages}|{footer}"


def main() -> None:
    resolve = Resolve(DictRegistry({"title": "From registry"}))

    print(resolve.call(render))  # => From registry|Clock|1|None

    by_name = {"title": "From arguments", "pages": 3, "footer": "end"}
    print(resolve.call(render, by_name))  # => From arguments|Clock|3|end

    by_type = {"system": SystemClock()}
    print(resolve.call(render, by_type))  # => From registry|SystemClock|1|None


if __name__ == "__main__":
    main()
