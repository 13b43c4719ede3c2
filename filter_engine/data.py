from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

import numpy as np
import pandas as pd

Row = Mapping[str, Any]


def clean_cell(value: object) -> object:
    """Map pandas/numpy cell values onto plain Python scalars (missing -> None)."""
    if value is None or value is pd.NaT or value is pd.NA:
        return None
    if isinstance(value, pd.Timestamp):
        return value
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and np.isnan(value):
        return None
    return value


def frame_to_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    if df is None or df.empty:
        return []
    columns = [str(c) for c in df.columns]
    return [
        {col: clean_cell(val) for col, val in zip(columns, values)}
        for values in df.itertuples(index=False, name=None)
    ]


def rows_to_frame(rows: Iterable[Row]) -> pd.DataFrame:
    rows = list(rows or [])
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame([dict(r) for r in rows])
