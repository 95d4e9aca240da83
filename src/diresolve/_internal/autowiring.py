from __future__ import annotations

import datetime
import decimal
import pathlib
import uuid
from dataclasses import dataclass
from typing import Any, TypeGuard

from diresolve._internal.type_checks import is_abstract_class, is_builtin_class, is_runtime_class


@dataclass(frozen=True, slots=True)
class AutowirePolicy:
    """Decide which classes may be constructed speculatively while resolving a parameter.

    Value types listed in ``ignored_base_types`` are skipped because building
    them without arguments is either impossible or meaningless. An explicit
    ``Resolve.make`` call is not affected by this policy.
    """

    ignored_base_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
    )

    def is_eligible(self, candidate: object) -> TypeGuard[type[Any]]:
        """Return true when a candidate can be built by recursive instantiation.

        Args:
            candidate: Value being checked for eligibility or runtime type constraints.

        """
        if not is_runtime_class(candidate):
            return False
        if is_builtin_class(candidate):
            return False
        if is_abstract_class(candidate):
            return False
        if issubclass(candidate, type):
            return False
        return not issubclass(candidate, self.ignored_base_types)


__all__ = ["AutowirePolicy"]
