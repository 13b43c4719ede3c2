from __future__ import annotations

from collections import Counter
from typing import Dict, Hashable, Sequence, Tuple

from filter_engine.specs import ColumnFilter, Predicate, SortKey


def _typed(value: object) -> Tuple[str, object]:
    # Keep True apart from 1; 1 and 1.0 are the same number and compare equal.
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, str):
        return ("str", value)
    try:
        hash(value)
    except TypeError:
        return ("repr", repr(value))
    return ("value", value)


def _predicate_key(predicate: Predicate) -> Hashable:
    values = getattr(predicate, "values", None)
    if values is not None:
        return (predicate.kind, getattr(predicate, "condition", None), tuple(_typed(v) for v in values))
    if hasattr(predicate, "value"):
        return (predicate.kind, None, _typed(predicate.value))
    return (predicate.kind, predicate.condition, predicate.date)


def _by_column(filters: Sequence[ColumnFilter]) -> Dict[str, Counter]:
    grouped: Dict[str, Counter] = {}
    for f in filters:
        grouped.setdefault(f.column_id, Counter())[_predicate_key(f.predicate)] += 1
    return grouped


def filters_equal(left: Sequence[ColumnFilter], right: Sequence[ColumnFilter]) -> bool:
    """Same filters regardless of order; predicates compared structurally per column."""
    if len(left) != len(right):
        return False
    return _by_column(left) == _by_column(right)


def sorting_equal(left: Sequence[SortKey], right: Sequence[SortKey]) -> bool:
    return list(left) == list(right)


def has_changed(
    initial_filters: Sequence[ColumnFilter],
    initial_sort: Sequence[SortKey],
    current_filters: Sequence[ColumnFilter],
    current_sort: Sequence[SortKey],
) -> bool:
    return not filters_equal(initial_filters, current_filters) or not sorting_equal(initial_sort, current_sort)
