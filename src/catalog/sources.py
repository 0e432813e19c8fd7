"""
Catalog sources: bundled feature data, baseline.json overrides, .baselineignore.

Every loader degrades to an empty value when its source is missing or
malformed; catalog problems never abort a scan.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Set

from catalog.merge import merge_catalog
from catalog.model import FeatureCatalog
from core.utils import debug

# Top-level keys of a web-features package dump besides "features"
WEB_FEATURES_DUMP_KEYS = frozenset({"browsers", "groups", "snapshots"})

BUNDLED_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "features.json"
OVERRIDES_FILENAME = "baseline.json"
IGNORE_FILENAME = ".baselineignore"


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        debug(f"No catalog source at {path}")
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        debug(f"Ignoring unreadable catalog source {path}: {e}")
        return None


def _is_wrapped(raw: Any) -> bool:
    if not isinstance(raw, dict):
        return False
    features = raw.get("features")
    if isinstance(features, list):
        return True
    return isinstance(features, dict) and not WEB_FEATURES_DUMP_KEYS.isdisjoint(raw)


def load_bundled_catalog(path: Optional[str] = None) -> Any:
    """
    Load raw bundled feature definitions (either accepted shape).

    A web-features package dump ({"features": {...}, "groups": ...}) or a
    {"features": [...]} wrapper is unwrapped. A keyed catalog that merely has
    a feature called "features" is returned as is.
    """
    raw = _read_json(Path(path) if path else BUNDLED_CATALOG_PATH)
    if _is_wrapped(raw):
        return raw["features"]
    return raw


def load_local_overrides(cwd: str) -> Dict[str, Any]:
    """Load baseline.json from the scan root; anything but a JSON object is empty."""
    raw = _read_json(Path(cwd) / OVERRIDES_FILENAME)
    if not isinstance(raw, dict):
        return {}
    return raw


def parse_ignore_lines(content: str) -> Set[str]:
    return {line.strip().casefold() for line in content.splitlines() if line.strip()}


def load_ignore_set(cwd: str) -> Set[str]:
    """Load .baselineignore from the scan root: one name or id per line."""
    path = Path(cwd) / IGNORE_FILENAME
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return set()
    except (OSError, UnicodeDecodeError) as e:
        debug(f"Ignoring unreadable {path}: {e}")
        return set()
    return parse_ignore_lines(content)


def build_catalog(cwd: str, catalog_path: Optional[str] = None) -> FeatureCatalog:
    """Materialize the run's catalog from all sources under `cwd`."""
    return merge_catalog(
        load_bundled_catalog(catalog_path),
        load_local_overrides(cwd),
        load_ignore_set(cwd),
    )
