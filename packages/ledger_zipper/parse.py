"""Ledger text → :class:`~ledger_zipper.models.Ledger`.

Line-oriented parser for the plain-text ledger format. Only the structure the
merge needs is interpreted; postings are kept as opaque text.

Recognized records
------------------
- Transaction header (non-indented, starts with a date)::

      YYYY/MM/DD[=AUX] [*|!] [(CODE)] DESCRIPTION

  ``YYYY-MM-DD`` is accepted too. The auxiliary date is dropped.
- Transaction body (indented lines under a header):

  - ``; Key: Value`` → ``kv_pairs`` (key is one token, no spaces);
  - any other ``; text`` → ``notes``;
  - anything else → a posting ``ACCOUNT[  AMOUNT][ ; note]`` where the account
    and amount are separated by a tab or at least two spaces.
- Directive: any other non-indented line. The first word is the kind, the rest
  the argument, and indented lines below it form its body.

Blank lines and top-level comment lines (``;``, ``#``, ``%``, ``|``, ``*``)
end the current record and are not preserved.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date

from .errors import LedgerParseError
from .models import Directive, Ledger, Posting, Transaction

_TOP_LEVEL_COMMENT_CHARS = frozenset(";#%|*")

_DATE = r"\d{4}[/-]\d{1,2}[/-]\d{1,2}"
_HEADER_RE = re.compile(
    rf"^(?P<date>{_DATE})"
    rf"(?:=(?P<aux>{_DATE}))?"
    r"(?:\s+(?P<status>[*!]))?"
    r"(?:\s+\((?P<code>[^)]*)\))?"
    r"(?:\s+(?P<desc>.*?))?\s*$"
)
_KV_RE = re.compile(r"^;\s*(?P<key>[^\s:;]+):(?:\s+(?P<value>.*?))?\s*$")
_AMOUNT_SEP_RE = re.compile(r"\t|\s{2,}")


def _parse_date(raw: str, *, source: str, line: int) -> date:
    parts = re.split(r"[/-]", raw)
    try:
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError as exc:
        raise LedgerParseError(source, line, f"invalid date {raw!r}: {exc}") from exc


@dataclass(slots=True)
class _PendingTransaction:
    line: int
    date: date
    description: str
    code: str
    status: str
    kv_pairs: dict[str, str] = field(default_factory=dict)
    notes: list[str] = field(default_factory=list)
    postings: list[Posting] = field(default_factory=list)

    def add(self, text: str, *, source: str, line: int) -> None:
        if text.startswith(";"):
            m = _KV_RE.match(text)
            if m is None:
                self.notes.append(text[1:].strip())
                return
            key = m.group("key")
            if key in self.kv_pairs:
                raise LedgerParseError(source, line, f"duplicate key {key!r} in transaction")
            self.kv_pairs[key] = m.group("value") or ""
            return

        body, sep, note = text.partition(";")
        parts = _AMOUNT_SEP_RE.split(body.strip(), maxsplit=1)
        account = parts[0].strip()
        if not account:
            raise LedgerParseError(source, line, "posting has no account")
        amount = parts[1].strip() if len(parts) > 1 and parts[1].strip() else None
        self.postings.append(
            Posting(account=account, amount=amount, note=note.strip() if sep else None)
        )

    def build(self) -> Transaction:
        return Transaction(
            date=self.date,
            description=self.description,
            code=self.code,
            status=self.status,
            kv_pairs=dict(self.kv_pairs),
            notes=tuple(self.notes),
            postings=tuple(self.postings),
            line=self.line,
        )


@dataclass(slots=True)
class _PendingDirective:
    line: int
    kind: str
    argument: str
    body: list[str] = field(default_factory=list)

    def add(self, text: str, *, source: str, line: int) -> None:
        self.body.append(text)

    def build(self) -> Directive:
        return Directive(
            kind=self.kind,
            argument=self.argument,
            body=tuple(self.body),
            found_before=self.line,
        )


def parse_ledger(text: str, *, source: str = "<string>") -> Ledger:
    """Parse ledger ``text`` into transactions (file order) and directives.

    ``source`` only labels error messages. Raises :class:`LedgerParseError`
    on malformed input.
    """

    transactions: list[Transaction] = []
    directives: list[Directive] = []
    pending: _PendingTransaction | _PendingDirective | None = None

    def flush() -> None:
        nonlocal pending
        if isinstance(pending, _PendingTransaction):
            transactions.append(pending.build())
        elif isinstance(pending, _PendingDirective):
            directives.append(pending.build())
        pending = None

    for lineno, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped:
            flush()
            continue

        if raw[0] in " \t":
            if pending is None:
                if stripped.startswith(";"):
                    # Indented comment outside any record
                    continue
                raise LedgerParseError(source, lineno, "indented line outside of a record")
            pending.add(stripped, source=source, line=lineno)
            continue

        flush()
        if raw[0] in _TOP_LEVEL_COMMENT_CHARS:
            continue

        if raw[0].isdigit():
            m = _HEADER_RE.match(stripped)
            if m is None:
                raise LedgerParseError(source, lineno, f"invalid transaction header {stripped!r}")
            pending = _PendingTransaction(
                line=lineno,
                date=_parse_date(m.group("date"), source=source, line=lineno),
                description=m.group("desc") or "",
                code=(m.group("code") or "").strip(),
                status=m.group("status") or "",
            )
            if m.group("aux"):
                # Validate but do not keep: merge resolution is by day.
                _parse_date(m.group("aux"), source=source, line=lineno)
            continue

        kind, *rest = stripped.split(None, 1)
        pending = _PendingDirective(
            line=lineno, kind=kind, argument=rest[0].strip() if rest else ""
        )

    flush()
    return Ledger(transactions=tuple(transactions), directives=tuple(directives))


__all__ = ["parse_ledger"]
