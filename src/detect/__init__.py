"""
Feature usage detection over tree-sitter syntax trees.
"""

from detect.dispatch import classify_file, detect_features
from detect.script import detect_script_features
from detect.style import StyleParseError, detect_style_features

__all__ = [
    "classify_file",
    "detect_features",
    "detect_script_features",
    "detect_style_features",
    "StyleParseError",
]
