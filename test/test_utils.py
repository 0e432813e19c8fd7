"""Shared test utilities."""
import textwrap
from typing import Any, List

from catalog.merge import merge_catalog
from catalog.model import Feature, FeatureCatalog

__all__ = ["make_catalog", "dedent", "ids"]


def make_catalog(*names: str, baseline: Any = False, **baselines: Any) -> FeatureCatalog:
    """Catalog from names (all sharing `baseline`) plus name=baseline keywords.

    Keyword names use '_' for '-', e.g. focus_visible=True -> "focus-visible".
    """
    records = [{"name": n, "baseline": baseline} for n in names]
    records += [{"name": k.replace("_", "-"), "baseline": v} for k, v in baselines.items()]
    return merge_catalog(records)


def dedent(source: str) -> str:
    return textwrap.dedent(source).strip() + "\n"


def ids(features: List[Feature]) -> List[str]:
    return [f.id for f in features]
