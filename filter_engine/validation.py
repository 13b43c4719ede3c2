"""Authoring-time checks for routine and scope filter specs.

Previews never call this: a bad spec there is silently skipped. These checks
let an editor surface the same problems while the routine or scope is being
written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from filter_engine.dates import resolve_date_expression
from filter_engine.specs import CONDITIONS, ORDERING_CONDITIONS, FilterSpec, filter_spec_from_dict


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def validate_filter_spec(spec: Union[FilterSpec, dict], *, anchor: object = None) -> ValidationResult:
    errors: List[str] = []
    warnings: List[str] = []

    parsed: Optional[FilterSpec] = spec if isinstance(spec, FilterSpec) else filter_spec_from_dict(spec)
    if parsed is None or not parsed.column_id.strip():
        return ValidationResult(is_valid=False, errors=["Column id is required"])

    if parsed.condition is not None and parsed.condition not in CONDITIONS:
        errors.append(f"Unknown condition {parsed.condition!r}")

    if parsed.date_expression:
        if resolve_date_expression(parsed.date_expression, anchor) is None:
            warnings.append(f"Date expression {parsed.date_expression!r} cannot be resolved; the filter will be skipped")
    elif not parsed.values:
        errors.append("Filter must have at least one value")
    elif parsed.condition in ORDERING_CONDITIONS and len(parsed.values) > 1:
        warnings.append(f"Condition {parsed.condition!r} only uses the first value; {len(parsed.values) - 1} ignored")

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)


def validate_filter_specs(specs: Optional[Iterable[Union[FilterSpec, dict]]], *, anchor: object = None) -> ValidationResult:
    errors: List[str] = []
    warnings: List[str] = []
    for idx, spec in enumerate(specs or []):
        result = validate_filter_spec(spec, anchor=anchor)
        errors.extend(f"filters[{idx}]: {msg}" for msg in result.errors)
        warnings.extend(f"filters[{idx}]: {msg}" for msg in result.warnings)
    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)
