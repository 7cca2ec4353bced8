"""Directive merge: union of two declaration lists under ``Directive.compare``."""

from __future__ import annotations

from collections.abc import Sequence

from .logging_setup import get_logger
from .models import Directive

_logger = get_logger("ledger_zipper.directives")


def merge_directives(a: Sequence[Directive], b: Sequence[Directive]) -> tuple[Directive, ...]:
    """Return ``a`` followed by the directives of ``b`` not already in ``a``.

    Duplicates are detected with ``d_b.compare(d_a)`` against every directive
    of ``a``; neither input is checked for duplicates within itself. Every
    returned directive has its provenance reset, since source positions have
    no meaning in the merged file.

    Pairwise comparison is quadratic, which is fine for declaration lists.
    """

    merged: list[Directive] = list(a)
    skipped = 0
    for d_b in b:
        if any(d_b.compare(d_a) for d_a in a):
            skipped += 1
            continue
        merged.append(d_b)

    _logger.debug(
        "merged directives: %d from master, %d new from source, %d duplicates skipped",
        len(a),
        len(merged) - len(a),
        skipped,
    )
    return tuple(d.without_provenance() for d in merged)


__all__ = ["merge_directives"]
