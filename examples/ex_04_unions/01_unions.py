"""Union-typed parameters.

Every alternative is matched against named arguments and the registry before
any alternative is constructed. Construction then follows declaration order.
"""

from __future__ import annotations

from diresolve import DictRegistry, Resolve


class EmailSender:
    pass


class SmsSender:
    pass


def notify(sender: EmailSender | SmsSender) -> str:
    return type(sender).__name__


def main() -> None:
    resolve = Resolve()

    print(f"constructed={resolve.call(notify)}")  # => constructed=EmailSender

    matched = resolve.call(notify, {"backup": SmsSender()})
    print(f"matched={matched}")  # => matched=SmsSender

    registered = Resolve(DictRegistry({SmsSender: SmsSender()})).call(notify)
    print(f"registered={registered}")  # => registered=SmsSender


if __name__ == "__main__":
    main()
