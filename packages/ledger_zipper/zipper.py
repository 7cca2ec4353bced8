"""Tail interleave ("zipper") and the full transaction merge.

After :func:`ledger_zipper.sync.synchronize` has consumed the shared history,
the remaining tails of master and source are interleaved one transaction at a
time:

1. if one side is exhausted, take the other;
2. otherwise the strictly earlier date goes first;
3. on equal dates, the tie-break cascade decides;
4. if the cascade is inconclusive, the merge fails. There is no fallback
   ordering: a silent choice would make the output depend on which file was
   named master.
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import UnorderableTransactionsError
from .logging_setup import get_logger
from .models import Side, Transaction
from .sync import synchronize
from .tiebreak import DEFAULT_TIE_BREAKERS, TieBreaker, resolve

_logger = get_logger("ledger_zipper.zipper")


def zip_tails(
    a: Sequence[Transaction],
    b: Sequence[Transaction],
    i1: int,
    i2: int,
    *,
    tie_breakers: Sequence[TieBreaker] = DEFAULT_TIE_BREAKERS,
) -> list[Transaction]:
    """Interleave ``a[i1:]`` and ``b[i2:]`` deterministically.

    Raises :class:`UnorderableTransactionsError` when two same-date
    transactions cannot be ordered by any tier of ``tie_breakers``.
    """

    out: list[Transaction] = []
    while i1 < len(a) or i2 < len(b):
        if i1 >= len(a):
            out.append(b[i2])
            i2 += 1
            continue
        if i2 >= len(b):
            out.append(a[i1])
            i1 += 1
            continue

        ta, tb = a[i1], b[i2]
        if ta.date < tb.date:
            side = Side.A
        elif tb.date < ta.date:
            side = Side.B
        else:
            side = resolve(tie_breakers, ta, tb)
            if side is Side.NEITHER:
                raise UnorderableTransactionsError(ta, tb, [t.key for t in tie_breakers])

        if side is Side.A:
            out.append(ta)
            i1 += 1
        else:
            out.append(tb)
            i2 += 1

    return out


def merge_transactions(
    a: Sequence[Transaction],
    b: Sequence[Transaction],
    *,
    tie_breakers: Sequence[TieBreaker] = DEFAULT_TIE_BREAKERS,
) -> tuple[Transaction, ...]:
    """Merge master ``a`` and source ``b`` into one transaction sequence.

    The result is the master prefix through the sync point, the common region
    (master copies), then the zippered tails. Its length is always
    ``len(a) + len(b) - common``.
    """

    sync = synchronize(a, b)
    tail = zip_tails(a, b, sync.i1, sync.i2, tie_breakers=tie_breakers)
    _logger.debug(
        "zipped tails: %d master + %d source transaction(s) after the common region",
        len(a) - sync.i1,
        len(b) - sync.i2,
    )
    return sync.prefix + tuple(tail)


__all__ = ["zip_tails", "merge_transactions"]
