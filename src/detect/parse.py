"""
Syntax-tree backends for the detectors.

Script-like files are parsed with the tree-sitter TSX grammar (TypeScript
plus JSX markup), stylesheets with the tree-sitter CSS grammar. tree-sitter
recovers from malformed input instead of raising, so a parse "fails" when
the resulting tree contains ERROR or MISSING nodes.
"""

import sys
import threading
from functools import lru_cache
from typing import Iterator, List, Tuple

from core.utils import error

try:
    from tree_sitter import Language, Node, Parser
    import tree_sitter_css
    import tree_sitter_typescript
except ImportError:
    error("tree-sitter grammars not installed. Run: pip install -e .")
    sys.exit(1)

SCRIPT = "script"
STYLE = "style"

# Parsers are not safe to share between threads
_local = threading.local()


@lru_cache(maxsize=None)
def _language(kind: str) -> Language:
    if kind == SCRIPT:
        return Language(tree_sitter_typescript.language_tsx())
    if kind == STYLE:
        return Language(tree_sitter_css.language())
    raise ValueError(f"Unknown grammar: {kind}")


def _parser(kind: str) -> Parser:
    parsers = getattr(_local, "parsers", None)
    if parsers is None:
        parsers = _local.parsers = {}
    parser = parsers.get(kind)
    if parser is None:
        parser = parsers[kind] = Parser(_language(kind))
    return parser


def parse_source(source_code: str, kind: str) -> Node:
    """Parse source text with the grammar for `kind` and return the root node."""
    tree = _parser(kind).parse(source_code.encode("utf-8"))
    return tree.root_node


def parse_script(source_code: str) -> Node:
    return parse_source(source_code, SCRIPT)


def parse_style(source_code: str) -> Node:
    return parse_source(source_code, STYLE)


def iter_nodes(root: Node) -> Iterator[Node]:
    """Pre-order walk over every node without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def node_text(node: Node) -> str:
    text = node.text
    if text is None:
        return ""
    return text.decode("utf-8", errors="replace")


def find_error_nodes(root: Node) -> List[Tuple[Node, str]]:
    """Collect ERROR and MISSING nodes with a short text snippet each."""
    found: List[Tuple[Node, str]] = []
    if not root.has_error:
        return found
    for node in iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            text = node_text(node)
            if len(text) > 100:
                text = text[:100] + "..."
            found.append((node, text))
    return found
