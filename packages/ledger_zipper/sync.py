"""Synchronization phase of the transaction merge.

The master (``a``) is treated as the authoritative, longer-lived history and
the source (``b``) as a tail that resumes somewhere inside or at the end of
it. Synchronizing means:

1. find the last master transaction whose ``code`` equals the code of the
   source's first transaction (the sync point), scanning backward;
2. walk both sequences forward from there while their codes agree, keeping the
   master's copy of each shared transaction.

Everything past that region is left for :mod:`ledger_zipper.zipper`.
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import NoSyncPointError
from .logging_setup import get_logger
from .models import SyncResult, Transaction

_logger = get_logger("ledger_zipper.sync")


def find_sync_point(a: Sequence[Transaction], b_head_code: str) -> int:
    """Return the index of the last transaction in ``a`` with ``b_head_code``.

    Raises :class:`NoSyncPointError` when no transaction matches (including
    when ``a`` is empty). Any other alignment would be a guess.
    """

    for idx in range(len(a) - 1, -1, -1):
        if a[idx].code == b_head_code:
            return idx
    raise NoSyncPointError(b_head_code)


def walk_common_region(
    a: Sequence[Transaction], b: Sequence[Transaction], sync_point: int
) -> SyncResult:
    """Extend the overlap past ``sync_point`` while both sides agree on codes.

    ``b[0]`` is the source's copy of ``a[sync_point]``. The walk compares
    ``a[sync_point + 1:]`` with ``b[1:]`` pairwise and stops at the first code
    mismatch or when either side runs out. Only master copies are kept.
    """

    if not 0 <= sync_point < len(a):
        raise IndexError(f"sync point {sync_point} out of range for {len(a)} transactions")

    i1, i2 = sync_point + 1, 1
    while i1 < len(a) and i2 < len(b) and a[i1].code == b[i2].code:
        i1 += 1
        i2 += 1

    return SyncResult(
        prefix=tuple(a[:i1]),
        i1=i1,
        i2=i2,
        sync_point=sync_point,
        common=i2,
    )


def synchronize(a: Sequence[Transaction], b: Sequence[Transaction]) -> SyncResult:
    """Locate the sync point and the common region of ``a`` and ``b``.

    Degenerate inputs:
    - empty ``b``: nothing to merge, the result is all of ``a``;
    - empty ``a`` with a non-empty ``b``: a zero-length sync prefix, so the
      zipper emits all of ``b`` in order.
    """

    if not b:
        _logger.debug("source has no transactions; keeping master as is")
        return SyncResult(prefix=tuple(a), i1=len(a), i2=0, sync_point=None, common=0)
    if not a:
        _logger.debug("master has no transactions; taking source from the start")
        return SyncResult(prefix=(), i1=0, i2=0, sync_point=None, common=0)

    sync_point = find_sync_point(a, b[0].code)
    result = walk_common_region(a, b, sync_point)
    _logger.debug(
        "sync point at master index %d (code %r); common region of %d transaction(s)",
        sync_point,
        b[0].code,
        result.common,
    )
    return result


__all__ = ["find_sync_point", "walk_common_region", "synchronize"]
