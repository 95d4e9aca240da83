"""Strict mode and autowire policies.

``autowire=False`` disables recursive construction of parameters, so every
class-typed dependency must come from named arguments or the registry. An
``AutowirePolicy`` keeps autowiring on but skips chosen base types.
"""

from __future__ import annotations

from datetime import datetime

from diresolve import AutowirePolicy, DictRegistry, ParameterResolutionError, Resolve


class Logger:
    pass


class Mailer:
    def __init__(self, logger: Logger) -> None:
        self.logger = logger


def schedule(when: datetime | None = None) -> str:
    return f"when={when}"


def main() -> None:
    strict = Resolve(autowire=False)
    try:
        strict.make(Mailer)
    except ParameterResolutionError as error:
        print(f"strict: {error}")  # => strict: Cannot resolve parameter 'logger'.

    wired = Resolve(DictRegistry({Logger: Logger()}), autowire=False)
    print(f"registered={type(wired.make(Mailer).logger).__name__}")  # => registered=Logger

    policy = AutowirePolicy(ignored_base_types=(Logger,))
    try:
        Resolve(autowire_policy=policy).make(Mailer)
    except ParameterResolutionError as error:
        print(f"policy: {error}")  # => policy: Cannot resolve parameter 'logger'.

    print(Resolve().call(schedule))  # => when=None


if __name__ == "__main__":
    main()
