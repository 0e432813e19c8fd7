"""
Catalog normalization: turn the two accepted definition shapes into Features.

Accepted shapes:
- sequence form: [{"id"?, "name", "baseline"? | "status"?, "description"?}, ...]
- keyed form:    {"<id>": {"name"?, "baseline"? | "status"?, "description"?}, ...}

Anything else normalizes to an empty list.
"""

import re
from typing import Any, List, Mapping, Optional

from catalog.model import Feature

_WHITESPACE_RE = re.compile(r"\s+")


def derive_id(name: Any) -> Optional[str]:
    """Lowercase the name and collapse whitespace runs to hyphens."""
    if not isinstance(name, str):
        return None
    return _WHITESPACE_RE.sub("-", name.lower())


def resolve_baseline(record: Mapping[str, Any]) -> Any:
    """
    Pick the baseline status: `baseline`, else the legacy `status`, else False.

    A web-features style status object ({"baseline": "high", ...}) contributes
    its inner baseline value; other status values pass through unchanged.
    """
    baseline = record.get("baseline")
    if baseline is not None:
        return baseline
    status = record.get("status")
    if status is None:
        return False
    if isinstance(status, Mapping) and "baseline" in status:
        inner = status["baseline"]
        return False if inner is None else inner
    return status


def resolve_description(record: Mapping[str, Any]) -> str:
    description = record.get("description")
    if description is None:
        return ""
    return str(description)


def _from_sequence(raw: List[Any]) -> List[Feature]:
    features: List[Feature] = []
    for record in raw:
        if not isinstance(record, Mapping):
            continue
        name = record.get("name")
        feature_id = record.get("id")
        if feature_id is None:
            feature_id = derive_id(name)
        features.append(
            Feature(
                id=feature_id,
                name=name,
                baseline=resolve_baseline(record),
                description=resolve_description(record),
            )
        )
    return features


def _from_mapping(raw: Mapping[Any, Any]) -> List[Feature]:
    features: List[Feature] = []
    for key, record in raw.items():
        if not isinstance(record, Mapping):
            record = {}
        name = record.get("name")
        features.append(
            Feature(
                id=str(key),
                name=name if name is not None else str(key),
                baseline=resolve_baseline(record),
                description=resolve_description(record),
            )
        )
    return features


def normalize_features(raw: Any) -> List[Feature]:
    """Normalize raw feature definitions into an ordered list of Features."""
    if not raw:
        return []
    if isinstance(raw, Mapping):
        return _from_mapping(raw)
    if isinstance(raw, (list, tuple)):
        return _from_sequence(list(raw))
    return []
