"""Prepared SQL file handle.

A `QueryFile` reads its SQL once on first use and caches the outcome. Read
failures are stored on `error` rather than raised, so the engine can report
them through its regular error path.
"""

from __future__ import annotations

import os
import re
from typing import Optional

from .errors import QueryFileError

# Quoted literals and identifiers, with doubled-quote escapes, or a run of
# whitespace and comments. Unterminated tokens run to the end of the text.
_MINIFY_TOKEN = re.compile(
    r"'(?:[^']|'')*'?"
    r'|"(?:[^"]|"")*"?'
    r"|(?:\s+|--[^\n]*|/\*.*?(?:\*/|\Z))+",
    re.DOTALL,
)


class QueryFile:
    """Lazily loaded SQL file.

    Args:
        path: Path to the SQL file; also used as its display name.
        encoding: File encoding.
        debug: Re-read the file whenever its modification time changes.
        minify: Remove `--` and `/* */` comments and collapse whitespace outside
            quoted literals.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        encoding: str = "utf-8",
        debug: bool = False,
        minify: bool = False,
    ):
        self._path = os.fspath(path)
        self._encoding = encoding
        self._debug = debug
        self._minify = minify
        self._prepared = False
        self._mtime: Optional[float] = None
        self.query: Optional[str] = None
        self.error: Optional[QueryFileError] = None

    @property
    def file(self) -> str:
        """Display name of the file."""

        return self._path

    def prepare(self) -> None:
        """Read and cache the file; idempotent unless `debug` detects a change."""

        if self._prepared and not self._debug:
            return
        try:
            mtime = os.path.getmtime(self._path)
        except OSError as exc:
            self._fail(f"Cannot access file {self._path!r}: {exc.strerror or exc}")
            return
        if self._prepared and mtime == self._mtime:
            return
        try:
            with open(self._path, encoding=self._encoding) as fh:
                text = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            self._fail(f"Cannot read file {self._path!r}: {exc}")
            return
        if self._minify:
            text = _minify(text)
        text = text.strip()
        self._prepared = True
        self._mtime = mtime
        if not text:
            self.query = None
            self.error = QueryFileError(f"File {self._path!r} is empty.", self._path)
            return
        self.query = text
        self.error = None

    def _fail(self, message: str) -> None:
        self._prepared = True
        self._mtime = None
        self.query = None
        self.error = QueryFileError(message, self._path)

    def __repr__(self) -> str:
        return f"QueryFile({self._path!r})"


def _minify(sql: str) -> str:
    """Strip comments and collapse whitespace outside quoted text."""

    def replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token[0] in "'\"":
            return token
        return " "

    return _MINIFY_TOKEN.sub(replace, sql)
