from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, List, Optional, Sequence, Union

from filter_engine.dates import as_date, resolve_date_expression
from filter_engine.specs import (
    DEFAULT_DATE_CONDITION,
    IS,
    ColumnFilter,
    Conditioned,
    DateCondition,
    ExactValue,
    FilterSpec,
    Predicate,
    ValueSet,
    filter_specs_from_dicts,
)

logger = logging.getLogger(__name__)

SpecLike = Union[FilterSpec, dict]


def _predicate_for(spec: FilterSpec, anchor: dt.date) -> Optional[Predicate]:
    if spec.date_expression:
        resolved = resolve_date_expression(spec.date_expression, anchor)
        if resolved is None:
            logger.debug("Unresolvable date expression %r on column %r; filter skipped", spec.date_expression, spec.column_id)
            return None
        return DateCondition(spec.condition or DEFAULT_DATE_CONDITION, resolved)

    if spec.condition and spec.condition != IS:
        return Conditioned(spec.condition, tuple(spec.values))

    if len(spec.values) == 1:
        return ExactValue(spec.values[0])
    return ValueSet(tuple(spec.values))


def normalize_filters(specs: Optional[Iterable[SpecLike]], *, anchor: object = None) -> List[ColumnFilter]:
    """Turn author-time filter specs into evaluatable column filters.

    Every date expression in one call is resolved against the same anchor
    (today when not given; a date, datetime or ISO date string otherwise), so
    the result is a frozen snapshot. Specs that
    cannot be resolved contribute nothing.
    """
    base = as_date(anchor) or dt.date.today()
    out: List[ColumnFilter] = []
    for spec in filter_specs_from_dicts(specs):
        predicate = _predicate_for(spec, base)
        if predicate is not None:
            out.append(ColumnFilter(column_id=spec.column_id, predicate=predicate))
    return out


def scope_filters(specs: Optional[Iterable[SpecLike]], *, anchor: object = None) -> List[ColumnFilter]:
    """Normalize a scope's filters, ignoring entries with nothing selected."""
    kept = [s for s in filter_specs_from_dicts(specs) if s.values or s.date_expression]
    return normalize_filters(kept, anchor=anchor)


def combine_filter_sets(*filter_sets: Sequence[ColumnFilter]) -> List[ColumnFilter]:
    combined: List[ColumnFilter] = []
    for filter_set in filter_sets:
        combined.extend(filter_set or [])
    return combined
