"""Query descriptor variants accepted by the engine.

Each call carries exactly one descriptor. `coerce_descriptor` turns the loose
inputs callers usually pass (plain strings, `QueryFile` objects, mappings)
into one of these variants.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Union

from .contracts import PreparedFilePort
from .errors import InvalidQueryError, StatementError
from .query_file import QueryFile


@dataclass(frozen=True)
class RawText:
    """Literal SQL text."""

    text: str


@dataclass(frozen=True)
class PreparedFile:
    """SQL loaded from a prepared file handle such as `QueryFile`."""

    handle: PreparedFilePort


@dataclass(frozen=True)
class FunctionCall:
    """Database function or procedure invocation."""

    name: Any
    values: Any = None


@dataclass(frozen=True)
class ParsedStatement:
    """Output of `ExternalQuery.parse()`."""

    text: str
    values: Any = None
    name: Optional[str] = None


class ExternalQuery:
    """Base for query objects formatted natively by the execution primitive.

    Subclasses are frozen dataclasses declaring `text` and `values` fields.
    """

    text: Union[str, QueryFile, None]
    values: Any

    def with_values(self, values: Any) -> ExternalQuery:
        """Return a copy carrying `values` unless values are already present."""

        if values is None or self.values is not None:
            return self
        return replace(self, values=values)

    def parse(self) -> ParsedStatement:
        """Validate the object and resolve its text.

        Raises:
            StatementError: The object is malformed.
            QueryFileError: The text comes from a file that failed to load.
        """

        return ParsedStatement(text=self._resolve_text(), values=self._checked_values())

    def _resolve_text(self) -> str:
        text = self.text
        if isinstance(text, QueryFile):
            text.prepare()
            if text.error is not None:
                raise text.error
            text = text.query
        if not isinstance(text, str) or not text.strip():
            raise StatementError("Property 'text' must be a non-empty text string.")
        return text

    def _checked_values(self) -> Any:
        values = self.values
        if values is None:
            return None
        if isinstance(values, tuple):
            return list(values)
        if not isinstance(values, (list, Mapping)):
            raise StatementError("Property 'values' must be a list, a mapping or None.")
        return values


@dataclass(frozen=True)
class ParameterizedText(ExternalQuery):
    """SQL text with parameters bound by the execution primitive."""

    text: Union[str, QueryFile, None] = None
    values: Any = None


@dataclass(frozen=True)
class NamedPreparedStatement(ExternalQuery):
    """Named prepared statement; its values are bound by the execution primitive."""

    name: Any = None
    text: Union[str, QueryFile, None] = None
    values: Any = None

    def parse(self) -> ParsedStatement:
        if not isinstance(self.name, str) or not self.name.strip():
            raise StatementError("Property 'name' must be a non-empty text string.")
        return ParsedStatement(
            text=self._resolve_text(),
            values=self._checked_values(),
            name=self.name,
        )


QueryDescriptor = Union[RawText, PreparedFile, NamedPreparedStatement, ParameterizedText, FunctionCall]

_DESCRIPTOR_TYPES = (RawText, PreparedFile, NamedPreparedStatement, ParameterizedText, FunctionCall)


def coerce_descriptor(query: Any) -> QueryDescriptor:
    """Convert a loose query input into a descriptor.

    Raises:
        InvalidQueryError: The input is empty or of an unrecognized shape.
    """

    if isinstance(query, _DESCRIPTOR_TYPES):
        return query
    if not query:
        raise InvalidQueryError()
    if isinstance(query, str):
        return RawText(query)
    if isinstance(query, QueryFile):
        return PreparedFile(query)
    if isinstance(query, Mapping):
        if "func_name" in query:
            return FunctionCall(query["func_name"], query.get("values"))
        if "name" in query:
            return NamedPreparedStatement(
                name=query["name"],
                text=query.get("text"),
                values=query.get("values"),
            )
        if "text" in query:
            return ParameterizedText(text=query["text"], values=query.get("values"))
    raise InvalidQueryError()
