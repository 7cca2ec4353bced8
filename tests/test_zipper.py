import pytest

from ledger_zipper import UnorderableTransactionsError, merge_transactions, zip_tails
from ledger_zipper.tiebreak import tie_breakers_for

from tests.helpers.ledgers import codes, tx


def test_end_to_end_example():
    a = [tx("A", "2021-01-01"), tx("B", "2021-01-02")]
    b = [tx("B", "2021-01-02"), tx("C", "2021-01-03")]

    merged = merge_transactions(a, b)

    assert codes(merged) == ["A", "B", "C"]
    # The shared transaction is the master's copy
    assert merged[1] is a[1]
    assert merged[2] is b[1]


def test_earlier_date_goes_first():
    a = [tx("S", "2021-01-01"), tx("a1", "2021-01-05"), tx("a2", "2021-01-09")]
    b = [tx("S", "2021-01-01"), tx("b1", "2021-01-03"), tx("b2", "2021-01-07")]

    assert codes(merge_transactions(a, b)) == ["S", "b1", "a1", "b2", "a2"]


def test_same_date_lexically_smaller_id_first():
    a = [tx("S", "2021-01-01"), tx("a1", "2021-02-01", ID="x1")]
    b = [tx("S", "2021-01-01"), tx("b1", "2021-02-01", ID="x2")]

    assert codes(merge_transactions(a, b)) == ["S", "a1", "b1"]


def test_presence_beats_absence():
    a = [tx("S", "2021-01-01"), tx("a1", "2021-02-01")]
    b = [tx("S", "2021-01-01"), tx("b1", "2021-02-01", ID="z")]

    assert codes(merge_transactions(a, b)) == ["S", "b1", "a1"]


def test_unorderable_same_date_pair_raises():
    a = [tx("S", "2021-01-01"), tx("a1", "2021-02-01")]
    b = [tx("S", "2021-01-01"), tx("b1", "2021-02-01")]

    with pytest.raises(UnorderableTransactionsError) as excinfo:
        merge_transactions(a, b)

    err = excinfo.value
    assert err.a is a[1]
    assert err.b is b[1]
    assert err.keys == ("ID", "RID", "FITID")
    assert "ID and RID" in str(err)


def test_identical_identity_keys_are_unorderable():
    a = [tx("S", "2021-01-01"), tx("a1", "2021-02-01", ID="dup")]
    b = [tx("S", "2021-01-01"), tx("b1", "2021-02-01", ID="dup")]

    with pytest.raises(UnorderableTransactionsError):
        merge_transactions(a, b)


def test_exhausted_side_drains_the_other():
    a = [tx("a1", "2021-05-01"), tx("a2", "2021-01-01")]

    assert codes(zip_tails(a, [], 0, 0)) == ["a1", "a2"]
    assert codes(zip_tails([], a, 0, 0)) == ["a1", "a2"]


def test_tails_keep_internal_order_even_when_dates_regress():
    # Each side is emitted in its own order; dates only decide between heads.
    a = [tx("S", "2021-01-01"), tx("a1", "2021-03-01"), tx("a2", "2021-01-15")]
    b = [tx("S", "2021-01-01"), tx("b1", "2021-02-01")]

    assert codes(merge_transactions(a, b)) == ["S", "b1", "a1", "a2"]


def test_conservation_counts():
    a = [
        tx("A", "2021-01-01"),
        tx("B", "2021-01-02"),
        tx("C", "2021-01-03"),
        tx("D", "2021-01-04", ID="d"),
    ]
    b = [
        tx("B", "2021-01-02"),
        tx("C", "2021-01-03"),
        tx("E", "2021-01-04", ID="e"),
        tx("F", "2021-01-06"),
    ]

    merged = merge_transactions(a, b)

    common = 2
    assert len(merged) == len(a) + len(b) - common
    assert codes(merged) == ["A", "B", "C", "D", "E", "F"]
    ids = [id(t) for t in merged]
    assert len(set(ids)) == len(ids)
    for t in a:
        assert any(m is t for m in merged)
    for t in b[common:]:
        assert any(m is t for m in merged)


def test_sync_point_inside_master_history():
    # Source resumes from an older point; master's later history is zippered.
    a = [tx("A", "2021-01-01"), tx("B", "2021-01-02"), tx("C", "2021-01-05", ID="c")]
    b = [tx("A", "2021-01-01"), tx("X", "2021-01-03"), tx("Y", "2021-01-05", ID="y")]

    assert codes(merge_transactions(a, b)) == ["A", "B", "X", "C", "Y"]


def test_empty_master_takes_source_in_order():
    b = [tx("A", "2021-01-02"), tx("B", "2021-01-01")]

    assert codes(merge_transactions([], b)) == ["A", "B"]


def test_empty_source_keeps_master():
    a = [tx("A", "2021-01-01"), tx("B", "2021-01-02")]

    assert codes(merge_transactions(a, [])) == ["A", "B"]


def test_deterministic_across_runs():
    a = [tx("S", "2021-01-01"), tx("a1", "2021-02-01", ID="m"), tx("a2", "2021-02-02")]
    b = [tx("S", "2021-01-01"), tx("b1", "2021-02-01", ID="k"), tx("b2", "2021-02-03")]

    first = merge_transactions(a, b)
    second = merge_transactions(a, b)

    assert first == second
    assert codes(first) == ["S", "b1", "a1", "a2", "b2"]


def test_tail_order_does_not_depend_on_which_side_is_master():
    a = [tx("S", "2021-01-01"), tx("a1", "2021-02-01", ID="m"), tx("a2", "2021-02-02")]
    b = [tx("S", "2021-01-01"), tx("b1", "2021-02-01", ID="k"), tx("b2", "2021-02-03")]

    assert codes(merge_transactions(a, b))[1:] == codes(merge_transactions(b, a))[1:]


def test_custom_cascade_is_honoured():
    a = [tx("S", "2021-01-01"), tx("a1", "2021-02-01", ID="a", FITID="2")]
    b = [tx("S", "2021-01-01"), tx("b1", "2021-02-01", ID="b", FITID="1")]

    merged = merge_transactions(a, b, tie_breakers=tie_breakers_for(["FITID"]))

    assert codes(merged) == ["S", "b1", "a1"]
