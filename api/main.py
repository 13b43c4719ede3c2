from __future__ import annotations

import logging
import math
import os
from typing import List

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import (
    ChangesRequest,
    ColumnFilterModel,
    FilterSpecModel,
    NormalizeRequest,
    PreviewRequest,
    ResolveDateRequest,
    SortKeyModel,
    ValidateRequest,
)
from filter_engine.changes import has_changed
from filter_engine.data import rows_to_frame
from filter_engine.dates import resolve_date_expression
from filter_engine.filters import normalize_filters
from filter_engine.preview import APPLY_TEMPLATE, SAVE_CUSTOM, PreviewSession
from filter_engine.specs import (
    CONDITIONS,
    DEFAULT_DATE_CONDITION,
    ORDERING_CONDITIONS,
    ColumnFilter,
    SortKey,
    column_filter_to_dict,
    column_filters_from_dicts,
    sort_keys_from_dicts,
)
from filter_engine.validation import validate_filter_specs

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"

app = FastAPI(title="Routine Filter Engine API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.environ.get("FILTER_ENGINE_CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _specs_from_models(models: List[FilterSpecModel]) -> List[dict]:
    return [m.model_dump(by_alias=True) for m in models]


def _sorting_from_models(models: List[SortKeyModel]) -> List[SortKey]:
    return sort_keys_from_dicts(m.model_dump(by_alias=True) for m in models)


def _column_filters_from_models(models: List[ColumnFilterModel]) -> List[ColumnFilter]:
    return column_filters_from_dicts(m.model_dump(by_alias=True, mode="json") for m in models)


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _open_preview(request: PreviewRequest) -> PreviewSession:
    return PreviewSession.open(
        _specs_from_models(request.filters),
        sorting=[m.model_dump(by_alias=True) for m in request.sorting],
        scope_specs=_specs_from_models(request.scope_filters),
        anchor=request.anchor,
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/meta/conditions")
def meta_conditions():
    return _json(
        {
            "conditions": sorted(CONDITIONS),
            "ordering": sorted(ORDERING_CONDITIONS),
            "defaultDateCondition": DEFAULT_DATE_CONDITION,
        }
    )


@app.post("/dates/resolve")
def resolve_date(request: ResolveDateRequest):
    try:
        resolved = resolve_date_expression(request.expression, request.anchor)
        return _json({"date": resolved.isoformat() if resolved else None})
    except Exception as exc:
        logger.exception("resolve_date failed")
        return _error(exc)


@app.post("/filters/normalize")
def normalize(request: NormalizeRequest):
    try:
        column_filters = normalize_filters(_specs_from_models(request.filters), anchor=request.anchor)
        return _json({"columnFilters": [column_filter_to_dict(f) for f in column_filters]})
    except Exception as exc:
        logger.exception("normalize failed")
        return _error(exc)


@app.post("/filters/validate")
def validate(request: ValidateRequest):
    try:
        result = validate_filter_specs(request.filters, anchor=request.anchor)
        return _json({"isValid": result.is_valid, "errors": result.errors, "warnings": result.warnings})
    except Exception as exc:
        logger.exception("validate failed")
        return _error(exc)


@app.post("/preview")
def preview(request: PreviewRequest):
    try:
        session = _open_preview(request)
        rows = session.rows(request.rows)
        return _json(
            {
                "columnFilters": [column_filter_to_dict(f) for f in session.initial_filters],
                "scopeFilters": [column_filter_to_dict(f) for f in session.scope_filters],
                "anchor": session.anchor.isoformat(),
                "rowCount": len(rows),
                "totalRows": len(request.rows),
                "rows": list(rows),
            }
        )
    except Exception as exc:
        logger.exception("preview failed")
        return _error(exc)


@app.post("/changes")
def changes(request: ChangesRequest):
    try:
        changed = has_changed(
            _column_filters_from_models(request.initial_filters),
            _sorting_from_models(request.initial_sorting),
            _column_filters_from_models(request.current_filters),
            _sorting_from_models(request.current_sorting),
        )
        return _json({"changed": changed, "outcome": SAVE_CUSTOM if changed else APPLY_TEMPLATE})
    except Exception as exc:
        logger.exception("changes failed")
        return _error(exc)


@app.post("/export/preview")
def export_preview(request: PreviewRequest):
    session = _open_preview(request)
    export_df = rows_to_frame(session.rows(request.rows))
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": "attachment; filename=preview.csv"})
