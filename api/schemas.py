from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Scalar = Union[bool, int, float, str, None]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class FilterSpecModel(_CamelModel):
    column_id: str = Field(alias="columnId")
    condition: Optional[str] = None
    values: List[Scalar] = Field(default_factory=list)
    date_expression: Optional[str] = Field(default=None, alias="dateExpression")


class SortKeyModel(_CamelModel):
    column_id: str = Field(alias="columnId")
    direction: Literal["asc", "desc"] = "asc"


class PredicateModel(_CamelModel):
    kind: Literal["exact", "set", "conditioned", "date"]
    value: Scalar = None
    values: List[Scalar] = Field(default_factory=list)
    condition: Optional[str] = None
    date: Optional[dt.date] = None


class ColumnFilterModel(_CamelModel):
    column_id: str = Field(alias="columnId")
    predicate: PredicateModel


class ResolveDateRequest(_CamelModel):
    expression: str
    anchor: Optional[dt.date] = None


class NormalizeRequest(_CamelModel):
    filters: List[FilterSpecModel] = Field(default_factory=list)
    anchor: Optional[dt.date] = None


class ValidateRequest(_CamelModel):
    # Raw dicts so malformed authoring input reaches the validator instead of a 422.
    filters: List[Dict[str, Any]] = Field(default_factory=list)
    anchor: Optional[dt.date] = None


class PreviewRequest(_CamelModel):
    filters: List[FilterSpecModel] = Field(default_factory=list)
    scope_filters: List[FilterSpecModel] = Field(default_factory=list, alias="scopeFilters")
    sorting: List[SortKeyModel] = Field(default_factory=list)
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    anchor: Optional[dt.date] = None


class ChangesRequest(_CamelModel):
    initial_filters: List[ColumnFilterModel] = Field(default_factory=list, alias="initialFilters")
    initial_sorting: List[SortKeyModel] = Field(default_factory=list, alias="initialSorting")
    current_filters: List[ColumnFilterModel] = Field(default_factory=list, alias="currentFilters")
    current_sorting: List[SortKeyModel] = Field(default_factory=list, alias="currentSorting")
