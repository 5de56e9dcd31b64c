"""
bylawcheck Record Normalizer

Turns a loosely-typed tabular row (CSV row, form post, JSON body) into a
canonical ProjectRecord. Column names are matched against a priority-ordered
alias list per field; values that cannot be parsed fall back to zero or the
empty string instead of rejecting the row.
"""

from typing import Any, Dict, Mapping, Optional, Tuple, Union
import math
import re

from bylawcheck.core.models import ProjectRecord


# Canonical field -> aliases in priority order (first present alias wins).
FIELD_ALIASES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("project_name", ("project_name", "name", "project")),
    ("plot_area_sqm", ("plot_area_sqm", "plot_area", "site_area")),
    ("built_area_sqm", ("built_area_sqm", "built_area", "builtup_area", "built_up_area")),
    ("height_m", ("height_m", "height", "building_height")),
    ("floors", ("floors", "floor_count", "num_floors", "storeys")),
    ("front_setback_m", ("front_setback_m", "front_setback")),
    ("rear_setback_m", ("rear_setback_m", "rear_setback")),
    ("side_setback_m", ("side_setback_m", "side_setback")),
    ("parking_spots", ("parking_spots", "parking", "parking_spaces")),
    ("far_utilized", ("far_utilized", "far", "floor_area_ratio")),
    ("building_type", ("building_type", "type", "use")),
    ("location", ("location", "address", "zone")),
)

TEXT_FIELDS = ("project_name", "building_type", "location")
INTEGER_FIELDS = ("floors", "parking_spots")

_WHITESPACE = re.compile(r"\s+")


def normalize_key(key: Any) -> str:
    """Lower-case a column name and fold whitespace runs to underscores."""
    return _WHITESPACE.sub("_", str(key).strip().lower())


def coerce_number(value: Any) -> float:
    """
    Parse a numeric cell.

    Empty, non-numeric, non-finite and negative values all become 0.0.
    Thousands separators ("1,200") are accepted.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _lookup(row: Dict[str, Any], aliases: Tuple[str, ...]) -> Optional[Any]:
    for alias in aliases:
        if alias in row:
            return row[alias]
    return None


def normalize(raw_row: Union[Mapping[str, Any], ProjectRecord]) -> ProjectRecord:
    """
    Canonicalize a raw row into a ProjectRecord.

    Never fails on bad cell values: missing or unparsable numbers default to
    zero and missing text to "". Checking that required text fields are
    present is left to the caller.

    Args:
        raw_row: String-keyed mapping, or an already-normalized record

    Returns:
        Complete ProjectRecord
    """
    if isinstance(raw_row, ProjectRecord):
        return raw_row

    # Earlier keys win if two raw keys fold to the same name.
    row: Dict[str, Any] = {}
    for key, value in raw_row.items():
        row.setdefault(normalize_key(key), value)

    values: Dict[str, Any] = {}
    for field, aliases in FIELD_ALIASES:
        raw_value = _lookup(row, aliases)
        if field in TEXT_FIELDS:
            values[field] = coerce_text(raw_value)
        elif field in INTEGER_FIELDS:
            values[field] = int(coerce_number(raw_value))
        else:
            values[field] = coerce_number(raw_value)

    return ProjectRecord(**values)
