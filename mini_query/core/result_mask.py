"""Query result mask flags and their validation."""

from __future__ import annotations

from enum import Enum, IntFlag
from typing import Any

from .errors import InvalidMaskError


class QueryResultMask(IntFlag):
    """Bit set describing how many rows a caller expects.

    `ANY` is the default used when no mask is supplied. Setting `ONE` and
    `MANY` together is contradictory and rejected by `validate_mask`.
    """

    ONE = 1
    MANY = 2
    NONE = 4

    ONE_OR_NONE = ONE | NONE
    MANY_OR_NONE = MANY | NONE
    ANY = MANY | NONE


class SpecialQuery(Enum):
    """Query variants whose result bypasses shaping."""

    RESULT = "result"


_CONTRADICTORY = QueryResultMask.ONE | QueryResultMask.MANY


def validate_mask(mask: Any) -> QueryResultMask:
    """Validate an explicit mask, or return `ANY` when none is given.

    Raises:
        InvalidMaskError: The value is not an integer, sets both `ONE` and
            `MANY`, or falls outside `1..6`.
    """

    if mask is None:
        return QueryResultMask.ANY
    if isinstance(mask, bool) or not isinstance(mask, int):
        raise InvalidMaskError()
    value = int(mask)
    if value & _CONTRADICTORY == _CONTRADICTORY or value < 1 or value > 6:
        raise InvalidMaskError()
    return QueryResultMask(value)
