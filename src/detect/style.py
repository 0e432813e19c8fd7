"""
Style detector: finds catalog names used as pseudo-classes and pseudo-elements
in stylesheet selectors.
"""

from typing import Dict, List, Optional

from catalog.model import Feature, FeatureCatalog
from core.utils import debug
from detect.parse import find_error_nodes, iter_nodes, node_text, parse_style

PSEUDO_NODE_TYPES = frozenset({"pseudo_class_selector", "pseudo_element_selector"})
COLON_TOKENS = frozenset({":", "::"})


class StyleParseError(Exception):
    """Stylesheet text could not be parsed into rules and selectors."""

    def __init__(self, message: str, path: str = "", line: int = 0, column: int = 0):
        self.path = path
        self.line = line
        self.column = column
        location = f"{path or '<text>'}:{line}:{column}"
        super().__init__(f"{location}: {message}")


def pseudo_name(node) -> Optional[str]:
    """Name token of a pseudo selector, without its leading colons."""
    seen_colon = False
    for child in node.children:
        if child.type in COLON_TOKENS:
            seen_colon = True
            continue
        if seen_colon:
            return node_text(child).lstrip(":")
    return None


def _in_declaration_block(node) -> bool:
    """True when the nearest enclosing block is the declaration block of a rule."""
    parent = node.parent
    while parent is not None:
        if parent.type == "block":
            return parent.parent is not None and parent.parent.type == "rule_set"
        parent = parent.parent
    return False


def _is_tolerated(node) -> bool:
    # Declaration hacks such as `*zoom: 1;` leave the selectors intact
    return node.type == "ERROR" and not node.is_missing and _in_declaration_block(node)


def _check_parse_errors(root, path: str) -> None:
    errors = find_error_nodes(root)
    if not errors:
        raise StyleParseError("stylesheet does not parse cleanly", path)
    fatal = [(node, snippet) for node, snippet in errors if not _is_tolerated(node)]
    if not fatal:
        debug(f"{path or '<text>'}: ignoring {len(errors)} malformed declaration(s)")
        return
    node, snippet = fatal[0]
    row, column = node.start_point
    kind = f"missing '{node.type}'" if node.is_missing else f"unexpected {snippet!r}"
    raise StyleParseError(kind, path, row + 1, column + 1)


def detect_style_features(source_code: str, catalog: FeatureCatalog, path: str = "") -> List[Feature]:
    """
    Return the distinct catalog features used as pseudo selectors, in source order.

    Raises StyleParseError for malformed stylesheets; the caller decides
    whether that skips the file or aborts the run. Unparsable declarations
    inside an otherwise well-formed rule (property hacks) are skipped.
    """
    root = parse_style(source_code)
    if root.has_error:
        _check_parse_errors(root, path)

    used: Dict[Feature, None] = {}
    for rule in iter_nodes(root):
        if rule.type != "rule_set":
            continue
        for selectors in rule.children:
            if selectors.type != "selectors":
                continue
            for node in iter_nodes(selectors):
                if node.type not in PSEUDO_NODE_TYPES:
                    continue
                name = pseudo_name(node)
                if not name:
                    continue
                feature = catalog.lookup(name.casefold())
                if feature is not None and feature not in used:
                    used[feature] = None
    return list(used)
