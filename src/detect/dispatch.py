"""
Route a discovered file to the detector for its grammar.
"""

from pathlib import PurePath
from typing import List, Optional

from catalog.model import Feature, FeatureCatalog
from detect.parse import SCRIPT, STYLE
from detect.script import detect_script_features
from detect.style import detect_style_features

# .html goes through the script grammar; markup that is not valid JSX
# simply parses with errors and contributes nothing.
SCRIPT_EXTENSIONS = frozenset({".js", ".mjs", ".cjs", ".jsx", ".ts", ".mts", ".cts", ".tsx", ".html"})
STYLE_EXTENSIONS = frozenset({".css"})


def classify_file(path: str) -> Optional[str]:
    suffix = PurePath(path).suffix.lower()
    if suffix in SCRIPT_EXTENSIONS:
        return SCRIPT
    if suffix in STYLE_EXTENSIONS:
        return STYLE
    return None


def detect_features(path: str, source_code: str, catalog: FeatureCatalog) -> List[Feature]:
    """Run the matching detector; files of unknown type yield nothing."""
    kind = classify_file(path)
    if kind == SCRIPT:
        return detect_script_features(source_code, catalog, path)
    if kind == STYLE:
        return detect_style_features(source_code, catalog, path)
    return []
