"""Public interface for the ``ledger_zipper`` package.

This module re-exports the package's API functions, models and errors as the
stable import surface. There is no runtime logic here, only symbol
re-exports.
"""

from .api import zip_files, zip_ledgers
from .config import ZipperSettings, load_settings
from .directives import merge_directives
from .errors import (
    ConfigError,
    FileAccessError,
    LedgerParseError,
    NoSyncPointError,
    UnorderableTransactionsError,
    WriteError,
    ZipperError,
)
from .models import Directive, Ledger, Posting, Side, SyncResult, Transaction
from .parse import parse_ledger
from .sync import find_sync_point, synchronize, walk_common_region
from .tiebreak import DEFAULT_TIE_BREAKERS, TieBreaker, choose_side, tie_breakers_for
from .writer import format_ledger, write_ledger
from .zipper import merge_transactions, zip_tails

__all__ = [
    # API
    "zip_ledgers",
    "zip_files",
    "merge_directives",
    "merge_transactions",
    "synchronize",
    "find_sync_point",
    "walk_common_region",
    "zip_tails",
    "choose_side",
    "tie_breakers_for",
    "TieBreaker",
    "DEFAULT_TIE_BREAKERS",
    "parse_ledger",
    "format_ledger",
    "write_ledger",
    # Config
    "ZipperSettings",
    "load_settings",
    # Models
    "Transaction",
    "Posting",
    "Directive",
    "Ledger",
    "Side",
    "SyncResult",
    # Errors
    "ZipperError",
    "ConfigError",
    "FileAccessError",
    "LedgerParseError",
    "NoSyncPointError",
    "UnorderableTransactionsError",
    "WriteError",
]
