"""Public API for the ``ledger_zipper`` package.

- :func:`zip_ledgers` merges two in-memory ledgers (no I/O).
- :func:`zip_files` is the thin file layer around it used by the CLI: load
  both inputs, merge, then write the destination atomically. The destination
  is only created once the whole merge has succeeded.
"""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike

from .config import ZipperSettings, load_settings
from .directives import merge_directives
from .io import load_ledger, write_ledger_file
from .logging_setup import get_logger
from .models import Ledger
from .tiebreak import DEFAULT_TIE_BREAKERS, TieBreaker
from .zipper import merge_transactions

_logger = get_logger("ledger_zipper.api")


def zip_ledgers(
    master: Ledger,
    source: Ledger,
    *,
    tie_breakers: Sequence[TieBreaker] = DEFAULT_TIE_BREAKERS,
) -> Ledger:
    """Merge ``source`` into ``master``.

    Directives are merged first (master order, duplicates from ``source``
    dropped, provenance reset), then transactions are synchronized and
    zippered. Raises :class:`~ledger_zipper.errors.NoSyncPointError` or
    :class:`~ledger_zipper.errors.UnorderableTransactionsError` when the
    inputs cannot be merged deterministically.
    """

    directives = merge_directives(master.directives, source.directives)
    transactions = merge_transactions(
        master.transactions, source.transactions, tie_breakers=tie_breakers
    )
    return Ledger(transactions=transactions, directives=directives)


def zip_files(
    dest: str | PathLike[str],
    master_path: str | PathLike[str],
    source_path: str | PathLike[str],
    *,
    settings: ZipperSettings | None = None,
) -> Ledger:
    """Merge the ledger files at ``master_path`` and ``source_path`` into ``dest``.

    Returns the merged ledger. Any :class:`~ledger_zipper.errors.ZipperError`
    propagates unchanged and leaves ``dest`` untouched.
    """

    settings = settings or load_settings()

    master = load_ledger(master_path, encoding=settings.encoding)
    source = load_ledger(source_path, encoding=settings.encoding)
    merged = zip_ledgers(master, source, tie_breakers=settings.tie_breakers())
    write_ledger_file(dest, merged, encoding=settings.encoding)

    _logger.info(
        "wrote %d transaction(s) and %d directive(s) to %s "
        "(master %d, source %d, %d shared)",
        len(merged.transactions),
        len(merged.directives),
        dest,
        len(master.transactions),
        len(source.transactions),
        len(master.transactions) + len(source.transactions) - len(merged.transactions),
    )
    return merged


__all__ = ["zip_ledgers", "zip_files"]
