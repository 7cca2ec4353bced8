"""File helpers: load a ledger from disk and write the merged result.

Atomicity: the destination is written to a ``.tmp`` sibling first and then
``os.replace``d into place, so a failed merge or write never leaves a partial
(or any) destination file behind.
"""

from __future__ import annotations

import contextlib
import os
from os import PathLike
from pathlib import Path

from .errors import FileAccessError, LedgerParseError, WriteError
from .logging_setup import get_logger
from .models import Ledger
from .parse import parse_ledger
from .writer import format_ledger

_logger = get_logger("ledger_zipper.io")


def load_ledger(path: str | PathLike[str], *, encoding: str = "utf-8") -> Ledger:
    """Read and parse the ledger at ``path``.

    ``OSError`` is reported as :class:`FileAccessError`; undecodable bytes as
    :class:`LedgerParseError` (line 0, the position is not known).
    """

    p = Path(path)
    try:
        text = p.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise LedgerParseError(os.fspath(p), 0, f"cannot decode as {encoding}: {exc}") from exc
    except OSError as exc:
        raise FileAccessError(p, exc.strerror or str(exc)) from exc

    ledger = parse_ledger(text, source=os.fspath(p))
    _logger.debug(
        "loaded %s: %d transaction(s), %d directive(s)",
        os.fspath(p),
        len(ledger.transactions),
        len(ledger.directives),
    )
    return ledger


def write_ledger_file(
    path: str | PathLike[str], ledger: Ledger, *, encoding: str = "utf-8"
) -> None:
    """Serialize ``ledger`` to ``path`` atomically."""

    dest = Path(path)
    tmp = dest.with_name(dest.name + ".tmp")

    try:
        text = format_ledger(ledger)
        data = text.encode(encoding)
    except (UnicodeEncodeError, LookupError) as exc:
        raise WriteError(dest, f"cannot encode as {encoding}: {exc}") from exc

    try:
        tmp.write_bytes(data)
    except OSError as exc:
        with contextlib.suppress(FileNotFoundError):
            tmp.unlink()
        raise FileAccessError(dest, exc.strerror or str(exc)) from exc

    try:
        os.replace(tmp, dest)
    except OSError as exc:
        with contextlib.suppress(FileNotFoundError):
            tmp.unlink()
        raise WriteError(dest, exc.strerror or str(exc)) from exc


__all__ = ["load_ledger", "write_ledger_file"]
