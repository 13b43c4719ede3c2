from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

Scalar = Union[str, int, float, bool, None]

IS = "is"
IS_NOT = "isNot"
EQUALS = "equals"
NOT_EQUALS = "notEquals"
CONTAINS = "contains"
NOT_CONTAINS = "notContains"
GREATER_THAN = "greaterThan"
LESS_THAN = "lessThan"
GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
LESS_THAN_OR_EQUAL = "lessThanOrEqual"

ORDERING_CONDITIONS = frozenset({GREATER_THAN, LESS_THAN, GREATER_THAN_OR_EQUAL, LESS_THAN_OR_EQUAL})
CONDITIONS = frozenset({IS, IS_NOT, EQUALS, NOT_EQUALS, CONTAINS, NOT_CONTAINS}) | ORDERING_CONDITIONS

DEFAULT_DATE_CONDITION = LESS_THAN

SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class FilterSpec:
    column_id: str
    values: Tuple[Scalar, ...] = ()
    condition: Optional[str] = None
    date_expression: Optional[str] = None


# ---------------- Predicates ----------------
@dataclass(frozen=True)
class ExactValue:
    value: Scalar
    kind: str = field(default="exact", init=False)


@dataclass(frozen=True)
class ValueSet:
    values: Tuple[Scalar, ...] = ()
    kind: str = field(default="set", init=False)


@dataclass(frozen=True)
class Conditioned:
    condition: str
    values: Tuple[Scalar, ...] = ()
    kind: str = field(default="conditioned", init=False)


@dataclass(frozen=True)
class DateCondition:
    condition: str
    date: dt.date
    kind: str = field(default="date", init=False)


Predicate = Union[ExactValue, ValueSet, Conditioned, DateCondition]


@dataclass(frozen=True)
class ColumnFilter:
    column_id: str
    predicate: Predicate


@dataclass(frozen=True)
class SortKey:
    column_id: str
    direction: str = "asc"


# ---------------- Raw coercion ----------------
def _as_values(raw: object) -> Tuple[Scalar, ...]:
    if raw is None:
        return ()
    if isinstance(raw, (list, tuple)):
        return tuple(raw)
    return (raw,)


def _first_key(raw: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def filter_spec_from_dict(raw: Dict[str, Any]) -> Optional[FilterSpec]:
    """Build a FilterSpec from catalog JSON (``columnId``) or python-style keys.

    Returns None when the entry has no usable column id.
    """
    if not isinstance(raw, dict):
        return None
    column_id = _first_key(raw, "columnId", "column_id", "filterId", "id")
    if column_id is None or str(column_id).strip() == "":
        return None

    condition = raw.get("condition") or None
    date_expression = _first_key(raw, "dateExpression", "date_expression") or None
    return FilterSpec(
        column_id=str(column_id),
        values=_as_values(raw.get("values")),
        condition=str(condition) if condition is not None else None,
        date_expression=str(date_expression) if date_expression is not None else None,
    )


def filter_specs_from_dicts(raw_specs: Optional[Iterable[object]]) -> List[FilterSpec]:
    if not raw_specs:
        return []
    out: List[FilterSpec] = []
    for raw in raw_specs:
        if isinstance(raw, FilterSpec):
            out.append(raw)
            continue
        spec = filter_spec_from_dict(raw)  # type: ignore[arg-type]
        if spec is None:
            logger.debug("Skipping filter entry without a column id: %r", raw)
            continue
        out.append(spec)
    return out


def sort_key_from_dict(raw: Dict[str, Any]) -> Optional[SortKey]:
    if isinstance(raw, SortKey):
        return raw
    if not isinstance(raw, dict):
        return None
    column_id = _first_key(raw, "columnId", "column_id", "id")
    if column_id is None:
        return None
    if "direction" in raw:
        direction = str(raw.get("direction") or "asc").lower()
    else:
        direction = "desc" if raw.get("desc") else "asc"
    if direction not in SORT_DIRECTIONS:
        direction = "asc"
    return SortKey(column_id=str(column_id), direction=direction)


def sort_keys_from_dicts(raw_keys: Optional[Iterable[object]]) -> List[SortKey]:
    if not raw_keys:
        return []
    out: List[SortKey] = []
    for raw in raw_keys:
        key = sort_key_from_dict(raw)  # type: ignore[arg-type]
        if key is not None:
            out.append(key)
    return out


# ---------------- Serialization ----------------
def predicate_to_dict(predicate: Predicate) -> Dict[str, Any]:
    if isinstance(predicate, ExactValue):
        return {"kind": predicate.kind, "value": predicate.value}
    if isinstance(predicate, ValueSet):
        return {"kind": predicate.kind, "values": list(predicate.values)}
    if isinstance(predicate, Conditioned):
        return {"kind": predicate.kind, "condition": predicate.condition, "values": list(predicate.values)}
    return {"kind": predicate.kind, "condition": predicate.condition, "date": predicate.date.isoformat()}


def predicate_from_dict(raw: Dict[str, Any]) -> Optional[Predicate]:
    if not isinstance(raw, dict):
        return None
    kind = raw.get("kind")
    if kind == "exact":
        return ExactValue(raw.get("value"))
    if kind == "set":
        return ValueSet(_as_values(raw.get("values")))
    if kind == "conditioned" and raw.get("condition"):
        return Conditioned(str(raw["condition"]), _as_values(raw.get("values")))
    if kind == "date":
        try:
            date = dt.date.fromisoformat(str(raw.get("date")))
        except ValueError:
            return None
        return DateCondition(str(raw.get("condition") or DEFAULT_DATE_CONDITION), date)
    return None


def column_filter_to_dict(column_filter: ColumnFilter) -> Dict[str, Any]:
    return {"columnId": column_filter.column_id, "predicate": predicate_to_dict(column_filter.predicate)}


def column_filter_from_dict(raw: Dict[str, Any]) -> Optional[ColumnFilter]:
    if isinstance(raw, ColumnFilter):
        return raw
    if not isinstance(raw, dict):
        return None
    column_id = _first_key(raw, "columnId", "column_id", "id")
    predicate = predicate_from_dict(raw.get("predicate"))
    if column_id is None or predicate is None:
        return None
    return ColumnFilter(column_id=str(column_id), predicate=predicate)


def column_filters_from_dicts(raw_filters: Optional[Iterable[object]]) -> List[ColumnFilter]:
    if not raw_filters:
        return []
    out: List[ColumnFilter] = []
    for raw in raw_filters:
        column_filter = column_filter_from_dict(raw)  # type: ignore[arg-type]
        if column_filter is None:
            logger.debug("Dropping unrecognized column filter: %r", raw)
            continue
        out.append(column_filter)
    return out
