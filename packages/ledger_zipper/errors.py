"""Error taxonomy for ``ledger_zipper``.

Every failure aborts the whole merge; nothing is retried and no partial output
reaches the destination. The CLI catches :class:`ZipperError` and reports the
message, so each subclass builds a message that stands on its own.
"""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Transaction


class ZipperError(Exception):
    """Base class for all errors raised by ``ledger_zipper``."""


class ConfigError(ZipperError):
    """Invalid configuration (environment or CLI overrides)."""


class FileAccessError(ZipperError):
    """An input could not be read or the destination could not be created."""

    def __init__(self, path: str | PathLike[str], reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"cannot access {self.path}: {reason}")


class LedgerParseError(ZipperError):
    """Malformed ledger text."""

    def __init__(self, source: str, line: int, message: str) -> None:
        self.source = source
        self.line = line
        self.message = message
        super().__init__(f"{source}:{line}: {message}")


class NoSyncPointError(ZipperError):
    """The master log has no transaction matching the source's first code."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(
            f"No sync point found: no master transaction has code {code!r}, "
            "the first code of the source file."
        )


class UnorderableTransactionsError(ZipperError):
    """Two same-date transactions could not be ordered deterministically."""

    def __init__(self, a: Transaction, b: Transaction, keys: Sequence[str]) -> None:
        self.a = a
        self.b = b
        self.keys = tuple(keys)
        super().__init__(
            "Could not order some transactions: "
            f"master {a.label()!r} and source {b.label()!r} share a date and "
            f"none of the keys {', '.join(self.keys)} tells them apart. "
            "Ensure all transactions have ID and RID keys as appropriate "
            "(or FITID for imported data)."
        )


class WriteError(ZipperError):
    """The merged ledger could not be serialized or written."""

    def __init__(self, path: str | PathLike[str], reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"failed to write {self.path}: {reason}")


__all__ = [
    "ZipperError",
    "ConfigError",
    "FileAccessError",
    "LedgerParseError",
    "NoSyncPointError",
    "UnorderableTransactionsError",
    "WriteError",
]
