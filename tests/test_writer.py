import io
import textwrap
from datetime import date

from ledger_zipper import Directive, Ledger, Posting, Transaction, format_ledger, parse_ledger
from ledger_zipper.writer import write_ledger


def test_format_places_directives_first():
    ledger = Ledger(
        transactions=(
            Transaction(
                date=date(2021, 1, 2),
                description="Grocery Store",
                code="1001",
                status="*",
                kv_pairs={"ID": "9f3c"},
                notes=("debit card",),
                postings=(
                    Posting(account="Expenses:Food", amount="$25.00"),
                    Posting(account="Assets:Checking", note="cleared"),
                ),
            ),
            Transaction(date=date(2021, 1, 3), description="Cash"),
        ),
        directives=(
            Directive(kind="account", argument="Assets:Checking", body=("note Main",)),
            Directive(kind="commodity", argument="$"),
        ),
    )

    expected = textwrap.dedent(
        """\
        account Assets:Checking
            note Main
        commodity $

        2021/01/02 * (1001) Grocery Store
            ; ID: 9f3c
            ; debit card
            Expenses:Food                           $25.00
            Assets:Checking  ; cleared

        2021/01/03 Cash
        """
    )
    assert format_ledger(ledger) == expected


def test_long_account_names_keep_two_space_separator():
    name = "Expenses:" + "X" * 40
    ledger = Ledger(
        transactions=(
            Transaction(
                date=date(2021, 1, 1),
                description="Long",
                postings=(Posting(account=name, amount="$1"),),
            ),
        ),
        directives=(),
    )

    assert f"    {name}  $1\n" in format_ledger(ledger)


def test_empty_ledger_formats_as_empty_string():
    assert format_ledger(Ledger(transactions=(), directives=())) == ""


def test_parse_format_parse_is_stable():
    text = textwrap.dedent(
        """\
        account Assets:Checking
            note Main checking account

        2021/01/02 * (1001) Grocery Store
            ; ID: 9f3c
            ; paid with debit card
            Expenses:Food    $25.00
            Assets:Checking

        2021/01/03 ! Landlord
            ; FITID: 20210103001
            Expenses:Rent	$900.00 ; January
            Assets:Checking
        """
    )

    first = parse_ledger(text)
    rendered = format_ledger(first)
    second = parse_ledger(rendered)

    assert second.transactions == first.transactions
    assert [d.compare(o) for d, o in zip(second.directives, first.directives, strict=True)] == [True]
    assert format_ledger(second) == rendered


def test_write_ledger_to_stream():
    buf = io.StringIO()
    write_ledger(Ledger(transactions=(), directives=(Directive(kind="tag", argument="trip"),)), buf)

    assert buf.getvalue() == "tag trip\n"
