from __future__ import annotations

from typing import List, Mapping, Sequence, TypeVar

import pandas as pd

from filter_engine.data import frame_to_rows
from filter_engine.predicates import match
from filter_engine.specs import ColumnFilter

R = TypeVar("R", bound=Mapping)


def matches_all(row: Mapping, filter_set: Sequence[ColumnFilter]) -> bool:
    # AND across filters, including several filters on one column.
    return all(match(row.get(f.column_id), f.predicate) for f in filter_set)


def filtered_rows(dataset: Sequence[R], filter_set: Sequence[ColumnFilter]) -> Sequence[R]:
    """Rows that satisfy every filter. An empty filter set returns ``dataset`` itself."""
    if not filter_set:
        return dataset
    return [row for row in dataset if matches_all(row, filter_set)]


def count_matches(dataset: Sequence[Mapping], filter_set: Sequence[ColumnFilter]) -> int:
    if not filter_set:
        return len(dataset)
    return sum(1 for row in dataset if matches_all(row, filter_set))


def filter_frame(df: pd.DataFrame, filter_set: Sequence[ColumnFilter]) -> pd.DataFrame:
    if not filter_set or df.empty:
        return df
    mask: List[bool] = [matches_all(row, filter_set) for row in frame_to_rows(df)]
    return df[pd.Series(mask, index=df.index, dtype=bool)]
