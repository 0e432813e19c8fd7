"""
CLI utilities: file discovery, GitHub Actions I/O, debug commands.
"""

from cli.helpers import (
    collect_source_files,
    expand_braces,
    read_source_file,
)
from cli.actions import get_input, set_output
from cli.debug import (
    dump_ast_tree,
    dump_ast_impl,
    check_parser_impl,
    list_features,
)

__all__ = [
    "collect_source_files",
    "expand_braces",
    "read_source_file",
    "get_input",
    "set_output",
    "dump_ast_tree",
    "dump_ast_impl",
    "check_parser_impl",
    "list_features",
]
