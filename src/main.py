"""
Main entry point: scan a source tree and gate on baseline status.
"""

import sys
import argparse
from typing import List, Optional

from dotenv import load_dotenv

from catalog.sources import build_catalog
from cli.actions import set_output
from cli.debug import check_parser_impl, dump_ast_impl, list_features
from cli.helpers import collect_source_files
from core.config import RunOptions
from core.utils import debug, error, info
from detect.style import StyleParseError
from pipeline import run
from reporter import OutputMode, report_scan


def main(
    options: RunOptions,
    output_mode: OutputMode = OutputMode.SHORT,
    output_path: Optional[str] = None,
    dump_ast: bool = False,
    check_parser: bool = False,
    show_features: bool = False,
) -> int:
    """Main entry point for a scan. Returns the process exit code."""
    # Step 1: Materialize the catalog before any detection
    catalog = build_catalog(options.cwd, options.catalog_path)
    if show_features:
        list_features(catalog)
        return 0

    if dump_ast or check_parser:
        source_files = collect_source_files(options.cwd, options.patterns)
        if check_parser:
            return check_parser_impl(options.cwd, source_files)
        dump_ast_impl(options.cwd, source_files)
        return 0

    if output_mode != OutputMode.JSON:
        info(f"🔎 Scanning {', '.join(options.patterns)} — {len(catalog)} features loaded")

    # Step 2: Detect, aggregate, evaluate
    try:
        result = run(options, catalog=catalog)
    except StyleParseError as e:
        error(f"Stylesheet parse error (strict mode): {e}")
        return 2
    debug(f"Scanned {result.files_scanned} file(s), skipped {len(result.skipped)}")

    # Step 3: CI outputs
    set_output("ok", result.ok)
    set_output("details", result.details)
    set_output("critical-detected", result.critical_detected)

    # Step 4: Report
    output_file = None
    if output_path:
        output_file = open(output_path, "w", encoding="utf-8")
        debug(f"Writing results to: {output_path}")
    try:
        report_scan(result, output_mode, output_file)
    finally:
        if output_file:
            output_file.close()

    if not result.ok:
        error("❌ One or more unsafe or critical features detected.")
        return 1
    if output_mode != OutputMode.JSON:
        info("✅ Scan completed: no unsafe or critical features found.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check web-platform feature usage against Baseline")
    parser.add_argument("cwd", nargs="?", default=None, help="Project root to scan (default: current directory)")
    parser.add_argument(
        "-p",
        "--patterns",
        metavar="GLOBS",
        help="Comma-separated glob patterns (default: **/*.{js,ts,jsx,tsx,css,html})",
    )
    parser.add_argument(
        "--critical",
        metavar="IDS",
        help="Comma-separated feature ids that always fail the check",
    )
    gate = parser.add_mutually_exclusive_group()
    gate.add_argument(
        "--fail-on-limited",
        dest="fail_on_limited",
        action="store_const",
        const=True,
        default=None,
        help="Fail when non-Baseline or critical features are found (default)",
    )
    gate.add_argument(
        "--no-fail-on-limited",
        dest="fail_on_limited",
        action="store_const",
        const=False,
        help="Report only; always exit 0 when the scan completes",
    )
    parser.add_argument("--catalog", metavar="PATH", help="Alternate feature catalog JSON (e.g. web-features data.json)")
    parser.add_argument("-j", "--jobs", type=int, default=None, help="Scan files with N worker threads")
    parser.add_argument("--strict", action="store_true", default=None, help="Abort on stylesheet parse errors")
    parser.add_argument(
        "-o", "--output", choices=["short", "full", "json"], default="short", help="Output verbosity"
    )
    parser.add_argument("-O", "--output-file", metavar="PATH", help="Also write the report to PATH")
    parser.add_argument("-da", "--dump-ast", action="store_true", help="Dump tree-sitter AST of discovered files")
    parser.add_argument(
        "-cp", "--check-parser", action="store_true", help="Check parser: report files with ERROR nodes"
    )
    parser.add_argument("--list-features", action="store_true", help="Print the merged feature catalog")
    return parser


def cli(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    if args.jobs is not None and args.jobs < 1:
        error("--jobs must be at least 1")
        return 2

    options = RunOptions.from_env(
        cwd=args.cwd,
        patterns=args.patterns,
        critical_features=args.critical,
        fail_on_limited=args.fail_on_limited,
        catalog_path=args.catalog,
        jobs=args.jobs,
        strict=args.strict,
    )

    try:
        return main(
            options,
            output_mode=OutputMode(args.output),
            output_path=args.output_file,
            dump_ast=args.dump_ast,
            check_parser=args.check_parser,
            show_features=args.list_features,
        )
    except Exception as e:
        error(f"Unexpected error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(cli())
