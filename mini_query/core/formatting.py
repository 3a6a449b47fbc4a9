"""Default parameter formatter.

Substitutes values into query text as SQL literals. Variables use the
`$1`/`$2` form for sequence values and `${name}`/`$(name)` for mapping
values. A filter may follow the variable, inside the brackets for named
variables (`$1:csv`, `${name~}`):

- `^` or `:raw`: insert the value text unescaped.
- `~` or `:name`: insert the value as a quoted identifier.
- `:json`: insert the value as a quoted JSON literal.
- `:csv`: insert a sequence as comma-separated literals.
"""

from __future__ import annotations

import json
import math
import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Mapping, Sequence
from uuid import UUID

from .errors import FormattingError

_FILTER = r"(\^|~|:raw|:name|:json|:csv)?"
_NAME = r"([A-Za-z_][\w.]*)"
_POSITIONAL = re.compile(r"\$(\d+)" + _FILTER)
_NAMED = re.compile(
    r"\$(?:\{\s*" + _NAME + r"\s*" + _FILTER + r"\s*\}"
    r"|\(\s*" + _NAME + r"\s*" + _FILTER + r"\s*\))"
)
_FUNC_NAME = re.compile(r"^[A-Za-z_][\w$]*(\.[A-Za-z_][\w$]*)*$")


class QueryFormatter:
    """Formats values into query text and function calls."""

    def format_query(self, text: str, values: Any = None) -> str:
        """Replace query variables with formatted values.

        Raises:
            FormattingError: A variable is out of range, a property is missing,
                or a value cannot be formatted.
        """

        if values is None:
            return text
        if isinstance(values, Mapping):
            return _NAMED.sub(lambda m: self._named(m, values), text)
        if isinstance(values, (list, tuple)):
            return _POSITIONAL.sub(lambda m: self._positional(m, values), text)
        return _POSITIONAL.sub(lambda m: self._positional(m, [values]), text)

    def format_function(self, name: str, values: Any = None, capitalize: bool = False) -> str:
        """Render `select * from name(values...)`.

        Raises:
            FormattingError: The function name or a value is invalid.
        """

        if not isinstance(name, str) or not _FUNC_NAME.match(name):
            raise FormattingError(f"Invalid function name: {name!r}")
        if values is None:
            args = ""
        elif isinstance(values, (list, tuple)):
            args = self.as_csv(values)
        else:
            args = self.as_value(values)
        prefix = "SELECT * FROM" if capitalize else "select * from"
        return f"{prefix} {name}({args})"

    def as_value(self, value: Any) -> str:
        """Format one Python value as a SQL literal."""

        if callable(value):
            return self.as_value(value())
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if math.isnan(value):
                return "'NaN'"
            if math.isinf(value):
                return "'+Infinity'" if value > 0 else "'-Infinity'"
            return repr(value)
        if isinstance(value, Decimal):
            return str(value)
        if isinstance(value, str):
            return _quote(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return "'\\x" + bytes(value).hex() + "'"
        if isinstance(value, (datetime, date, time)):
            return _quote(value.isoformat())
        if isinstance(value, UUID):
            return _quote(str(value))
        if isinstance(value, (list, tuple)):
            return f"array[{self.as_csv(value)}]"
        if isinstance(value, Mapping):
            return self.as_json(value)
        raise FormattingError(f"Cannot format value of type {type(value).__name__}.")

    def as_csv(self, values: Any) -> str:
        if isinstance(values, (list, tuple)):
            return ",".join(self.as_value(v) for v in values)
        return self.as_value(values)

    def as_json(self, value: Any) -> str:
        try:
            return _quote(json.dumps(value, default=str))
        except (TypeError, ValueError) as exc:
            raise FormattingError(f"Cannot format value as JSON: {exc}") from exc

    def as_raw(self, value: Any) -> str:
        if callable(value):
            value = value()
        return "" if value is None else str(value)

    def as_name(self, value: Any) -> str:
        if not isinstance(value, str) or not value:
            raise FormattingError("An SQL name must be a non-empty text string.")
        if value == "*":
            return value
        return '"' + value.replace('"', '""') + '"'

    def _positional(self, match: re.Match[str], values: Sequence[Any]) -> str:
        index = int(match.group(1))
        if index < 1 or index > len(values):
            raise FormattingError(
                f"Variable ${index} out of range. Parameters array length: {len(values)}"
            )
        return self._apply_filter(values[index - 1], match.group(2))

    def _named(self, match: re.Match[str], values: Mapping[str, Any]) -> str:
        path = match.group(1) or match.group(3)
        flt = match.group(2) or match.group(4)
        return self._apply_filter(_lookup(values, path), flt)

    def _apply_filter(self, value: Any, flt: str | None) -> str:
        method: Callable[[Any], str] = getattr(self, _FILTERS.get(flt or "", "as_value"))
        return method(value)


_FILTERS = {
    "^": "as_raw",
    ":raw": "as_raw",
    "~": "as_name",
    ":name": "as_name",
    ":json": "as_json",
    ":csv": "as_csv",
}


def _lookup(values: Mapping[str, Any], path: str) -> Any:
    current: Any = values
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            raise FormattingError(f"Property '{path}' doesn't exist.")
        current = current[part]
    return current


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


default_formatter = QueryFormatter()
