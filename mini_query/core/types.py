"""Shared core type aliases used across contracts, engine, and ports."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence, Union

NamedParams = Dict[str, Any]
PositionalParams = List[Any]
QueryParams = Union[NamedParams, PositionalParams, Sequence[Any], None]

RowMapping = Mapping[str, Any]
