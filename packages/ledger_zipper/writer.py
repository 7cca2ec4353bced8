""":class:`~ledger_zipper.models.Ledger` → ledger text.

Layout: every directive first (body lines indented), then one blank line, then
the transactions separated by blank lines. Within a transaction the order is
header, ``; Key: Value`` lines (insertion order), ``; note`` lines, postings.
Amounts start at a fixed column so that diffs between merged files stay
readable. Formatting is a pure function of the input, so writing the same
ledger twice produces identical bytes.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import IO

from .models import Directive, Ledger, Posting, Transaction

INDENT = "    "
# Width reserved for the account name before the amount column.
ACCOUNT_WIDTH = 40


def _format_directive(d: Directive) -> Iterator[str]:
    yield f"{d.kind} {d.argument}".rstrip()
    for line in d.body:
        yield INDENT + line


def _format_posting(p: Posting) -> str:
    text = INDENT + p.account
    if p.amount:
        width = max(ACCOUNT_WIDTH, len(p.account) + 2)
        text = f"{INDENT}{p.account:<{width}}{p.amount}"
    if p.note is not None:
        text = f"{text}  ; {p.note}".rstrip()
    return text


def _format_transaction(tx: Transaction) -> Iterator[str]:
    header = tx.date.strftime("%Y/%m/%d")
    if tx.status:
        header += f" {tx.status}"
    if tx.code:
        header += f" ({tx.code})"
    if tx.description:
        header += f" {tx.description}"
    yield header

    for key, value in tx.kv_pairs.items():
        yield f"{INDENT}; {key}: {value}".rstrip()
    for note in tx.notes:
        yield f"{INDENT}; {note}".rstrip()
    for posting in tx.postings:
        yield _format_posting(posting)


def format_ledger(ledger: Ledger) -> str:
    """Render ``ledger`` as text; empty ledgers render as an empty string."""

    blocks: list[str] = []
    if ledger.directives:
        blocks.append(
            "\n".join(line for d in ledger.directives for line in _format_directive(d))
        )
    blocks.extend("\n".join(_format_transaction(tx)) for tx in ledger.transactions)
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"


def write_ledger(ledger: Ledger, stream: IO[str]) -> None:
    stream.write(format_ledger(ledger))


__all__ = ["format_ledger", "write_ledger"]
