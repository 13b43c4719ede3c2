from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Sequence

from filter_engine.changes import has_changed
from filter_engine.dates import as_date
from filter_engine.evaluate import count_matches, filtered_rows
from filter_engine.filters import SpecLike, combine_filter_sets, normalize_filters, scope_filters
from filter_engine.specs import ColumnFilter, SortKey, sort_keys_from_dicts

logger = logging.getLogger(__name__)

APPLY_TEMPLATE = "apply_template"
SAVE_CUSTOM = "save_custom"


@dataclass
class PreviewSession:
    """One open preview of a routine template or scope.

    The initial snapshot is normalized once when the session opens; edits only
    touch ``filters`` and ``sorting``. Scope filters always apply but are not
    part of change detection.
    """

    anchor: dt.date
    initial_filters: List[ColumnFilter] = field(default_factory=list)
    initial_sorting: List[SortKey] = field(default_factory=list)
    scope_filters: List[ColumnFilter] = field(default_factory=list)
    filters: List[ColumnFilter] = field(default_factory=list)
    sorting: List[SortKey] = field(default_factory=list)

    @classmethod
    def open(
        cls,
        specs: Optional[Iterable[SpecLike]],
        *,
        sorting: Optional[Iterable[object]] = None,
        scope_specs: Optional[Iterable[SpecLike]] = None,
        anchor: object = None,
    ) -> "PreviewSession":
        base = as_date(anchor) or dt.date.today()
        initial = normalize_filters(specs, anchor=base)
        initial_sorting = sort_keys_from_dicts(sorting)
        session = cls(
            anchor=base,
            initial_filters=initial,
            initial_sorting=initial_sorting,
            scope_filters=scope_filters(scope_specs, anchor=base),
            filters=list(initial),
            sorting=list(initial_sorting),
        )
        logger.debug(
            "Opened preview anchored at %s with %d filters (%d scope)",
            base.isoformat(),
            len(session.initial_filters),
            len(session.scope_filters),
        )
        return session

    def update(
        self,
        *,
        filters: Optional[Sequence[ColumnFilter]] = None,
        sorting: Optional[Sequence[SortKey]] = None,
    ) -> None:
        if filters is not None:
            self.filters = list(filters)
        if sorting is not None:
            self.sorting = list(sorting)

    def reset(self) -> None:
        self.filters = list(self.initial_filters)
        self.sorting = list(self.initial_sorting)

    @property
    def active_filters(self) -> List[ColumnFilter]:
        return combine_filter_sets(self.filters, self.scope_filters)

    def rows(self, dataset: Sequence[Mapping]) -> Sequence[Mapping]:
        return filtered_rows(dataset, self.active_filters)

    def count(self, dataset: Sequence[Mapping]) -> int:
        return count_matches(dataset, self.active_filters)

    def has_changed(self) -> bool:
        return has_changed(self.initial_filters, self.initial_sorting, self.filters, self.sorting)

    def resolve_outcome(self) -> str:
        return SAVE_CUSTOM if self.has_changed() else APPLY_TEMPLATE
