import datetime as dt

from filter_engine.changes import filters_equal, has_changed, sorting_equal
from filter_engine.specs import ColumnFilter, Conditioned, DateCondition, ExactValue, SortKey, ValueSet

FILTERS = [
    ColumnFilter("plant", ExactValue("A")),
    ColumnFilter("type", ValueSet(("PO", "PR"))),
    ColumnFilter("orderDate", DateCondition("lessThan", dt.date(2024, 5, 15))),
]
SORT = [SortKey("orderDate", "desc"), SortKey("plant", "asc")]


def test_reflexive():
    assert has_changed(FILTERS, SORT, FILTERS, SORT) is False
    assert has_changed([], [], [], []) is False


def test_equal_copies_are_unchanged():
    copy = [ColumnFilter(f.column_id, f.predicate) for f in FILTERS]
    assert has_changed(FILTERS, SORT, copy, list(SORT)) is False


def test_reordered_filters_are_unchanged():
    assert has_changed(FILTERS, SORT, list(reversed(FILTERS)), SORT) is False


def test_changed_filter_value():
    edited = [ColumnFilter("plant", ExactValue("B"))] + FILTERS[1:]
    assert has_changed(FILTERS, SORT, edited, SORT) is True


def test_changed_predicate_kind():
    edited = [ColumnFilter("plant", Conditioned("isNot", ("A",)))] + FILTERS[1:]
    assert has_changed(FILTERS, SORT, edited, SORT) is True


def test_added_and_removed_filters():
    added = FILTERS + [ColumnFilter("supplier", ExactValue("Acme"))]
    assert has_changed(FILTERS, SORT, added, SORT) is True
    assert has_changed(FILTERS, SORT, FILTERS[:-1], SORT) is True


def test_filter_moved_to_other_column():
    moved = [ColumnFilter("site", ExactValue("A"))] + FILTERS[1:]
    assert has_changed(FILTERS, SORT, moved, SORT) is True


def test_reordered_sort_is_changed():
    assert has_changed(FILTERS, SORT, FILTERS, list(reversed(SORT))) is True


def test_sort_direction_change_is_changed():
    flipped = [SortKey("orderDate", "asc"), SortKey("plant", "asc")]
    assert has_changed(FILTERS, SORT, FILTERS, flipped) is True


def test_value_types_are_distinguished():
    assert filters_equal([ColumnFilter("qty", ExactValue(1))], [ColumnFilter("qty", ExactValue(True))]) is False
    assert filters_equal([ColumnFilter("qty", ExactValue(1))], [ColumnFilter("qty", ExactValue("1"))]) is False


def test_int_and_float_of_same_number_are_equal():
    assert filters_equal([ColumnFilter("qty", ExactValue(1))], [ColumnFilter("qty", ExactValue(1.0))]) is True


def test_value_set_order_matters_inside_predicate():
    left = [ColumnFilter("type", ValueSet(("PO", "PR")))]
    right = [ColumnFilter("type", ValueSet(("PR", "PO")))]
    assert filters_equal(left, right) is False


def test_duplicate_filters_on_one_column():
    a = [ColumnFilter("type", ExactValue("PO")), ColumnFilter("type", ExactValue("PR"))]
    b = [ColumnFilter("type", ExactValue("PR")), ColumnFilter("type", ExactValue("PO"))]
    c = [ColumnFilter("type", ExactValue("PO")), ColumnFilter("type", ExactValue("PO"))]
    assert filters_equal(a, b) is True
    assert filters_equal(a, c) is False


def test_sorting_equal():
    assert sorting_equal([], []) is True
    assert sorting_equal(SORT, SORT[:1]) is False
