from __future__ import annotations

import math
import numbers
import operator
from typing import Any, Callable, Dict, Iterable, Optional

import numpy as np

from filter_engine.dates import parse_cell_date
from filter_engine.specs import (
    CONTAINS,
    DEFAULT_DATE_CONDITION,
    EQUALS,
    GREATER_THAN,
    GREATER_THAN_OR_EQUAL,
    IS,
    IS_NOT,
    LESS_THAN,
    LESS_THAN_OR_EQUAL,
    NOT_CONTAINS,
    NOT_EQUALS,
    Conditioned,
    DateCondition,
    ExactValue,
    Predicate,
    ValueSet,
)

_ORDERING: Dict[str, Callable[[Any, Any], bool]] = {
    GREATER_THAN: operator.gt,
    LESS_THAN: operator.lt,
    GREATER_THAN_OR_EQUAL: operator.ge,
    LESS_THAN_OR_EQUAL: operator.le,
}


def _is_bool(value: object) -> bool:
    return isinstance(value, (bool, np.bool_))


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def same_value(cell: object, value: object) -> bool:
    # True must not match 1, even though Python says they are equal.
    if _is_bool(cell) != _is_bool(value):
        return False
    try:
        return bool(cell == value)
    except (TypeError, ValueError):
        return False


def _in_values(cell: object, values: Iterable[object]) -> bool:
    return any(same_value(cell, v) for v in values)


def _as_text(value: object) -> str:
    return "" if _is_missing(value) else str(value)


def _contains_any(cell: object, values: Iterable[object]) -> bool:
    text = _as_text(cell)
    return any(_as_text(v) in text for v in values if not _is_missing(v))


def _to_number(value: object) -> Optional[float]:
    if _is_bool(value) or _is_missing(value):
        return None
    if isinstance(value, numbers.Number):
        try:
            out = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        return None if math.isnan(out) else out
    if isinstance(value, str):
        try:
            out = float(value.strip())
        except ValueError:
            return None
        return None if math.isnan(out) else out
    return None


def _compare_ordered(condition: str, cell: object, bound: object) -> bool:
    op = _ORDERING[condition]
    left, right = _to_number(cell), _to_number(bound)
    if left is not None and right is not None:
        return op(left, right)
    left_date, right_date = parse_cell_date(cell), parse_cell_date(bound)
    if left_date is not None and right_date is not None:
        return op(left_date, right_date)
    return False


def _match_conditioned(cell: object, predicate: Conditioned) -> bool:
    values = predicate.values
    if not values:
        return True
    condition = predicate.condition
    if condition in (IS, EQUALS):
        return _in_values(cell, values)
    if condition in (IS_NOT, NOT_EQUALS):
        return not _in_values(cell, values)
    if condition == CONTAINS:
        return _contains_any(cell, values)
    if condition == NOT_CONTAINS:
        return not _contains_any(cell, values)
    if condition in _ORDERING:
        # Ordering uses the first value only.
        return _compare_ordered(condition, cell, values[0])
    return _in_values(cell, values)


def _match_date(cell: object, predicate: DateCondition) -> bool:
    cell_date = parse_cell_date(cell)
    if cell_date is None:
        return False
    condition = predicate.condition
    if condition in (IS, EQUALS):
        return cell_date == predicate.date
    if condition in (IS_NOT, NOT_EQUALS):
        return cell_date != predicate.date
    op = _ORDERING.get(condition, _ORDERING[DEFAULT_DATE_CONDITION])
    return op(cell_date, predicate.date)


def match(cell: object, predicate: Optional[Predicate]) -> bool:
    """Return True when one cell value satisfies one predicate.

    A missing predicate, an exact match on None and an empty value list
    all mean "no constraint".
    """
    if predicate is None:
        return True
    if isinstance(predicate, ExactValue):
        if predicate.value is None:
            return True
        return same_value(cell, predicate.value)
    if isinstance(predicate, ValueSet):
        if not predicate.values:
            return True
        return _in_values(cell, predicate.values)
    if isinstance(predicate, Conditioned):
        return _match_conditioned(cell, predicate)
    if isinstance(predicate, DateCondition):
        return _match_date(cell, predicate)
    return True
