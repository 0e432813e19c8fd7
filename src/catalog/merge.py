"""
Catalog merging: bundled catalog + local overrides - ignore set -> FeatureCatalog.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from catalog.model import Feature, FeatureCatalog
from catalog.normalize import normalize_features, resolve_baseline, resolve_description
from core.utils import casefold, debug


def normalize_overrides(overrides: Any) -> List[Feature]:
    """
    Normalize a local override mapping (name -> {baseline, description}).

    Override ids are always the case-folded name.
    """
    if not isinstance(overrides, Mapping):
        return []
    features: List[Feature] = []
    for name, record in overrides.items():
        if not isinstance(record, Mapping):
            record = {}
        name = str(name)
        features.append(
            Feature(
                id=name.casefold(),
                name=name,
                baseline=resolve_baseline(record),
                description=resolve_description(record),
            )
        )
    return features


def normalize_ignore(tokens: Optional[Iterable[str]]) -> frozenset:
    if not tokens:
        return frozenset()
    folded = (casefold(t.strip()) for t in tokens if isinstance(t, str))
    return frozenset(t for t in folded if t)


def is_ignored(feature: Feature, ignore: frozenset) -> bool:
    return casefold(feature.name) in ignore or casefold(feature.id) in ignore


def merge_catalog(
    bundled: Any,
    overrides: Any = None,
    ignore: Optional[Iterable[str]] = None,
) -> FeatureCatalog:
    """
    Build the run's lookup table.

    Bundled features are inserted first, local overrides second, keyed by
    case-folded name, so an override replaces a bundled feature of the same
    name. Features whose case-folded name or id is ignored are skipped.
    Features without a usable name cannot be matched and are dropped.
    """
    ignore_set = normalize_ignore(ignore)
    bundled_features = normalize_features(bundled)
    local_features = normalize_overrides(overrides)

    table: Dict[str, Feature] = {}
    for feature in bundled_features + local_features:
        key = casefold(feature.name)
        if key is None:
            continue
        if is_ignored(feature, ignore_set):
            continue
        table[key] = feature

    debug(
        f"Catalog merged: {len(bundled_features)} bundled, {len(local_features)} local, "
        f"{len(ignore_set)} ignored token(s) -> {len(table)} features"
    )
    return FeatureCatalog(table)
