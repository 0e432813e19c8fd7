"""
Debug and development CLI commands: AST dump, parser check, catalog listing.
"""

from typing import List

from catalog.model import FeatureCatalog
from cli.helpers import read_source_file
from core.utils import error
from detect.dispatch import classify_file
from detect.parse import find_error_nodes, node_text, parse_source


def dump_ast_tree(root, max_depth: int = 10) -> None:
    """Print the tree-sitter AST structure for debugging."""

    def print_node(node, depth: int = 0):
        if depth > max_depth:
            return

        indent = "  " * depth
        text = node_text(node)

        if len(text) > 60:
            text = text[:60] + "..."
        text = text.replace("\n", "\\n")

        print(f"{indent}{node.type} [{node.start_byte}:{node.end_byte}] {repr(text)}")

        for child in node.children:
            print_node(child, depth + 1)

    print_node(root)


def dump_ast_impl(cwd: str, source_files: List[str]) -> None:
    """Dump AST for all source files."""
    for source_file in source_files:
        kind = classify_file(source_file)
        source_code = read_source_file(cwd, source_file)
        if kind is None or source_code is None:
            continue
        root = parse_source(source_code, kind)
        print(f"\n=== AST for {source_file} ({kind}) ===")
        dump_ast_tree(root)
        print("=== End AST ===\n")


def check_parser_errors(input_file: str, root) -> bool:
    """Check for parser errors in AST. Returns True if errors found."""
    errors = find_error_nodes(root)
    if not errors:
        return False
    error(f"PARSER ERRORS FOUND in {input_file}: {len(errors)} ERROR node(s)")
    for err_node, err_text in errors:
        row, column = err_node.start_point
        label = "MISSING" if err_node.is_missing else "ERROR"
        error(f"  {label} {row + 1}:{column + 1} {repr(err_text)}")
    return True


def check_parser_impl(cwd: str, source_files: List[str]) -> int:
    """Validate all files parse correctly (no ERROR nodes)."""
    print("Parser check mode: Validating parse trees...")
    has_errors = False
    for source_file in source_files:
        kind = classify_file(source_file)
        if kind is None:
            continue
        source_code = read_source_file(cwd, source_file)
        if source_code is None:
            has_errors = True
            continue
        root = parse_source(source_code, kind)
        if check_parser_errors(source_file, root):
            has_errors = True
    if has_errors:
        error("Parser validation FAILED: ERROR nodes found in AST")
        return 1
    print("✓ Parser validation PASSED: No ERROR nodes found")
    return 0


def list_features(catalog: FeatureCatalog) -> None:
    """Print the merged catalog, one feature per line."""
    print(f"Catalog ({len(catalog)} features):\n")
    for key in sorted(catalog.keys()):
        feature = catalog.lookup(key)
        print(f"  {key:<28} id={feature.id}  baseline={feature.baseline!r}")
