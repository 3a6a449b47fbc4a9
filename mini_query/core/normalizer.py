"""Query normalization and parameter formatting stages.

Both stages record the first error on the returned `NormalizedQuery` instead
of raising, so the engine can report it with the best diagnostic text known
at that point.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Optional

from .descriptors import (
    ExternalQuery,
    FunctionCall,
    PreparedFile,
    RawText,
    coerce_descriptor,
)
from .errors import FormattingError, InvalidFunctionError, InvalidQueryError, QueryEngineError
from .types import QueryParams

if TYPE_CHECKING:
    from .context import EngineOptions


@dataclass(frozen=True)
class NormalizedQuery:
    """Executable form of a query descriptor.

    Attributes:
        text: Query text, or the best display text when `error` is set.
        params: Parameters sent to the execution primitive.
        native: Parameter binding is left to the execution primitive.
        is_func: The query is a function call.
        values: Caller values used by the formatting stage.
        statement_name: Name of a prepared statement, if any.
        error: First error detected; later stages skip work when set.
    """

    text: Any
    params: QueryParams = None
    native: bool = False
    is_func: bool = False
    values: Any = None
    statement_name: Optional[str] = None
    error: Optional[Exception] = None


def normalize_query(query: Any, values: Any, options: EngineOptions) -> NormalizedQuery:
    """Resolve a query input into text and parameters."""

    native = options.native_formatting
    base = NormalizedQuery(
        text=query,
        params=values if native else None,
        native=native,
        values=values,
    )
    try:
        descriptor = coerce_descriptor(query)
    except InvalidQueryError as exc:
        return replace(base, error=exc)

    if isinstance(descriptor, RawText):
        return _check_text(replace(base, text=descriptor.text))

    if isinstance(descriptor, PreparedFile):
        handle = descriptor.handle
        handle.prepare()
        if handle.error is not None:
            return replace(base, text=handle.file, error=handle.error)
        return _check_text(replace(base, text=handle.query))

    if isinstance(descriptor, FunctionCall):
        return _check_text(
            replace(
                base,
                text=descriptor.name,
                native=False,
                is_func=True,
                values=values if values is not None else descriptor.values,
            )
        )

    return _parse_external(base, descriptor.with_values(values))


def _parse_external(base: NormalizedQuery, query: ExternalQuery) -> NormalizedQuery:
    try:
        parsed = query.parse()
    except QueryEngineError as exc:
        return replace(base, text=query, native=True, error=exc)
    return replace(
        base,
        text=parsed.text,
        params=parsed.values,
        native=True,
        values=parsed.values,
        statement_name=parsed.name,
    )


def _check_text(normalized: NormalizedQuery) -> NormalizedQuery:
    text = normalized.text
    if isinstance(text, str) and text:
        return normalized
    if normalized.is_func:
        return replace(normalized, error=InvalidFunctionError())
    return replace(normalized, error=InvalidQueryError())


def apply_formatting(normalized: NormalizedQuery, options: EngineOptions) -> NormalizedQuery:
    """Substitute values into the text unless the primitive binds them."""

    if normalized.error is not None or (normalized.native and not normalized.is_func):
        return normalized
    formatter = options.formatter
    try:
        if normalized.is_func:
            text = formatter.format_function(
                normalized.text, normalized.values, options.capitalize_sql
            )
        else:
            text = formatter.format_query(normalized.text, normalized.values)
        if not isinstance(text, str):
            raise FormattingError(f"Formatter returned {type(text).__name__}, expected text.")
    except Exception as exc:
        if normalized.is_func:
            prefix = "SELECT * FROM" if options.capitalize_sql else "select * from"
            return replace(
                normalized,
                text=f"{prefix} {normalized.text}(...)",
                params=None,
                error=exc,
            )
        return replace(normalized, params=normalized.values, error=exc)
    if normalized.is_func:
        return replace(normalized, text=text, params=None)
    return replace(normalized, text=text)
