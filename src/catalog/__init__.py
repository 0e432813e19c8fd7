"""
Feature catalog: normalization, merging and source loading.
"""

from catalog.model import Feature, FeatureCatalog
from catalog.normalize import normalize_features
from catalog.merge import merge_catalog, normalize_overrides
from catalog.sources import (
    build_catalog,
    load_bundled_catalog,
    load_local_overrides,
    load_ignore_set,
)

__all__ = [
    "Feature",
    "FeatureCatalog",
    "normalize_features",
    "merge_catalog",
    "normalize_overrides",
    "build_catalog",
    "load_bundled_catalog",
    "load_local_overrides",
    "load_ignore_set",
]
