"""
Script detector: finds catalog names referenced in JS/TS/JSX source.

Matching is purely by name. There is no scope or binding resolution, so a
local variable that shares a catalog name is reported like the platform
global it shadows.
"""

from typing import Dict, Iterator, List, Optional

from catalog.model import Feature, FeatureCatalog
from core.utils import debug
from detect.parse import node_text, parse_script

NAME_NODE_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "statement_identifier",
        "type_identifier",
    }
)

# Tag names (plain, dotted or namespaced) live in the `name` field
JSX_ELEMENT_TYPES = frozenset(
    {
        "jsx_opening_element",
        "jsx_closing_element",
        "jsx_self_closing_element",
    }
)


def _member_object_name(node) -> Optional[str]:
    obj = node.child_by_field_name("object")
    if obj is None or obj.type != "identifier":
        return None
    return node_text(obj)


def _markup_children(node) -> List:
    """Children of a JSX element or attribute, minus the tag or attribute name."""
    if node.type == "jsx_attribute":
        # Name first, then an optional `=` and value
        return node.children[1:]
    name = node.child_by_field_name("name")
    if name is None:
        return node.children
    return [child for child in node.children if child != name]


def _reference_nodes(root) -> Iterator:
    """Pre-order walk that skips JSX tag and attribute names."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if node.type in JSX_ELEMENT_TYPES or node.type == "jsx_attribute":
            children = _markup_children(node)
        else:
            children = node.children
        stack.extend(reversed(children))


def detect_script_features(source_code: str, catalog: FeatureCatalog, path: str = "") -> List[Feature]:
    """
    Return the distinct catalog features referenced in a script, in source order.

    Unparsable text yields an empty list; parse errors never escape.
    """
    try:
        root = parse_script(source_code)
    except (ValueError, RuntimeError) as e:
        debug(f"Script parser raised on {path or '<text>'}: {e}")
        return []
    if root.has_error:
        debug(f"Skipping {path or '<text>'}: script does not parse cleanly")
        return []

    used: Dict[Feature, None] = {}

    def probe(name: Optional[str]) -> None:
        if not name:
            return
        feature = catalog.lookup(name.casefold())
        if feature is not None and feature not in used:
            used[feature] = None

    for node in _reference_nodes(root):
        if node.type in NAME_NODE_TYPES:
            # Private names (#field) probe without their sigil
            probe(node_text(node).lstrip("#"))
        elif node.type == "member_expression":
            probe(_member_object_name(node))

    return list(used)
