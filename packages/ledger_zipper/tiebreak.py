"""Tie-break cascade for same-date transactions.

When the zipper meets a master and a source transaction on the same date it
asks each tier of the cascade, in order, which side goes first. A tier is a
``(key, comparator)`` pair; the first tier returning :attr:`Side.A` or
:attr:`Side.B` decides. The default cascade looks at ``ID``, then ``RID``
(revision IDs, present in edits), then ``FITID`` (financial institution IDs,
present in imported data).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import NamedTuple, TypeAlias

from .models import Side, Transaction

Comparator: TypeAlias = Callable[[Mapping[str, str], Mapping[str, str], str], Side]

DEFAULT_TIE_BREAK_KEYS: tuple[str, ...] = ("ID", "RID", "FITID")


def choose_side(a: Mapping[str, str], b: Mapping[str, str], key: str) -> Side:
    """Pick the side whose ``key`` orders first.

    - Only one side has the key: that side (an explicit identity beats none).
    - Neither side has it, or both carry the same value: inconclusive.
    - Both differ: the side with the lexically smaller value.
    """

    has_a = key in a
    has_b = key in b
    if has_a and not has_b:
        return Side.A
    if has_b and not has_a:
        return Side.B
    if not has_a and not has_b:
        return Side.NEITHER

    va, vb = a[key], b[key]
    if va == vb:
        return Side.NEITHER
    return Side.A if va < vb else Side.B


class TieBreaker(NamedTuple):
    key: str
    comparator: Comparator = choose_side

    def __call__(self, a: Transaction, b: Transaction) -> Side:
        return self.comparator(a.kv_pairs, b.kv_pairs, self.key)


def tie_breakers_for(keys: Iterable[str]) -> tuple[TieBreaker, ...]:
    """Build a cascade that applies :func:`choose_side` to each key in order."""

    cascade = tuple(TieBreaker(k) for k in keys)
    if not cascade:
        raise ValueError("tie-break cascade requires at least one key")
    return cascade


DEFAULT_TIE_BREAKERS: tuple[TieBreaker, ...] = tie_breakers_for(DEFAULT_TIE_BREAK_KEYS)


def resolve(cascade: Sequence[TieBreaker], a: Transaction, b: Transaction) -> Side:
    """Run ``cascade`` over the pair; :attr:`Side.NEITHER` if all tiers abstain."""

    for tier in cascade:
        side = tier(a, b)
        if side is not Side.NEITHER:
            return side
    return Side.NEITHER


__all__ = [
    "Comparator",
    "DEFAULT_TIE_BREAK_KEYS",
    "DEFAULT_TIE_BREAKERS",
    "TieBreaker",
    "choose_side",
    "resolve",
    "tie_breakers_for",
]
