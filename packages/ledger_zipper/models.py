"""Data models for ``ledger_zipper``.

Records are frozen, slotted dataclasses: the merge only selects and reorders
them, it never mutates a field. The one field that changes during a merge,
``Directive.found_before``, is reset by building a copy
(:meth:`Directive.without_provenance`) rather than in place.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import NamedTuple

# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Posting:
    """A single posting line. Opaque to the merge; carried for serialization."""

    account: str
    amount: str | None = None
    note: str | None = None


@dataclass(frozen=True, slots=True)
class Transaction:
    """A dated ledger entry.

    ``code`` is the opaque identifier used to find the overlap between two
    logs; it is typically assigned by a human or an importer and is not
    guaranteed to be unique. ``kv_pairs`` carries identity annotations (``ID``,
    ``RID``, ``FITID``) plus anything else the file declares; the zipper only
    reads the identity keys when two transactions fall on the same date.
    """

    date: date
    description: str
    code: str = ""
    status: str = ""
    kv_pairs: Mapping[str, str] = field(default_factory=dict)
    notes: tuple[str, ...] = ()
    postings: tuple[Posting, ...] = ()
    # Informational only (1-based source line); never used for matching.
    line: int = field(default=0, compare=False)

    def label(self) -> str:
        """Short human-readable identification used in error messages."""

        code = f" ({self.code})" if self.code else ""
        return f"{self.date.isoformat()}{code} {self.description}".rstrip()


@dataclass(frozen=True, slots=True)
class Directive:
    """A metadata declaration such as ``account`` or ``commodity``.

    ``found_before`` records the 1-based line the directive was parsed from.
    ``0`` is the unset sentinel; merged output always carries ``0`` because
    the original position means nothing in the merged file.
    """

    kind: str
    argument: str = ""
    body: tuple[str, ...] = ()
    found_before: int = 0

    def compare(self, other: Directive) -> bool:
        """Structural equality ignoring provenance.

        Symmetric and transitive, so the directive merge does not depend on
        which side the predicate is invoked from.
        """

        return (self.kind, self.argument, self.body) == (
            other.kind,
            other.argument,
            other.body,
        )

    def without_provenance(self) -> Directive:
        if self.found_before == 0:
            return self
        return dataclasses.replace(self, found_before=0)


class Ledger(NamedTuple):
    """A parsed ledger: transactions in file order plus its directives."""

    transactions: tuple[Transaction, ...]
    directives: tuple[Directive, ...]


# ---------------------------------------------------------------------------
# Merge bookkeeping
# ---------------------------------------------------------------------------


class Side(Enum):
    """Verdict of a tie-break comparator for a same-date pair."""

    A = "a"
    B = "b"
    NEITHER = "neither"


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of the synchronization phase.

    ``prefix`` holds the master's transactions through the sync point plus the
    extended common region. ``i1``/``i2`` point at the first un-merged element
    of the master and source sequences. ``common`` is the number of source
    transactions absorbed by the overlap (sync point included); the merged
    length is always ``len(a) + len(b) - common``.
    """

    prefix: tuple[Transaction, ...]
    i1: int
    i2: int
    sync_point: int | None
    common: int


__all__ = [
    "Posting",
    "Transaction",
    "Directive",
    "Ledger",
    "Side",
    "SyncResult",
]
