"""Engine options, caller context, and the per-hook execution context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .contracts import ExecutionPrimitivePort, FormatterPort
from .events import QueryEvents
from .formatting import default_formatter
from .types import QueryParams


@dataclass(frozen=True)
class EngineOptions:
    """Engine configuration.

    Attributes:
        capitalize_sql: Render generated SQL (function calls) in upper case.
        native_formatting: Pass plain query text and values to the execution
            primitive unformatted, leaving parameter binding to the driver.
        events: Lifecycle hooks.
        formatter: Parameter formatter used when native formatting is off.
    """

    capitalize_sql: bool = False
    native_formatting: bool = False
    events: QueryEvents = field(default_factory=QueryEvents)
    formatter: FormatterPort = default_formatter


@dataclass
class CallContext:
    """Caller-supplied state for query calls.

    `client` is set to `None` once the underlying connection is released;
    queries settling afterwards fail with `LooseQueryError`.
    """

    client: Optional[ExecutionPrimitivePort]
    options: EngineOptions = field(default_factory=EngineOptions)
    tag: Any = None
    correlation_id: Any = None


@dataclass(frozen=True)
class ExecutionContext:
    """Snapshot handed to event hooks."""

    client: Optional[ExecutionPrimitivePort]
    query: Any
    params: QueryParams
    tag: Any = None
    correlation_id: Any = None


def build_context(call: CallContext, query: Any, params: QueryParams) -> ExecutionContext:
    """Build the hook context from the call's current state."""

    return ExecutionContext(
        client=call.client,
        query=query,
        params=params,
        tag=call.tag,
        correlation_id=call.correlation_id,
    )
