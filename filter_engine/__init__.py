"""Filter/date-rule engine for routine and scope previews (UI-agnostic).

This package contains:
- relative date resolution ("3 weeks ago" -> absolute date)
- filter spec normalization into tagged predicates
- predicate and filter-set evaluation over rows (lists or pandas frames)
- change detection between a template snapshot and live edits
"""

from filter_engine.changes import filters_equal, has_changed, sorting_equal
from filter_engine.dates import parse_cell_date, resolve_date_expression
from filter_engine.evaluate import count_matches, filter_frame, filtered_rows, matches_all
from filter_engine.filters import combine_filter_sets, normalize_filters, scope_filters
from filter_engine.predicates import match
from filter_engine.preview import PreviewSession
from filter_engine.specs import (
    ColumnFilter,
    Conditioned,
    DateCondition,
    ExactValue,
    FilterSpec,
    SortKey,
    ValueSet,
)

__all__ = [
    "ColumnFilter",
    "Conditioned",
    "DateCondition",
    "ExactValue",
    "FilterSpec",
    "PreviewSession",
    "SortKey",
    "ValueSet",
    "combine_filter_sets",
    "count_matches",
    "filter_frame",
    "filtered_rows",
    "filters_equal",
    "has_changed",
    "match",
    "matches_all",
    "normalize_filters",
    "parse_cell_date",
    "resolve_date_expression",
    "scope_filters",
    "sorting_equal",
]
