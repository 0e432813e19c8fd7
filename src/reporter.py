import json
import os
from enum import Enum
from typing import Any, List, Optional, TextIO

from pipeline import ScanResult
from report.aggregate import ReportEntry


_USE_COLOR = not os.environ.get("BASELINE_NO_COLORS")


class _C:
    """ANSI color codes."""

    RESET = "\033[0m" if _USE_COLOR else ""
    BOLD = "\033[1m" if _USE_COLOR else ""
    DIM = "\033[2m" if _USE_COLOR else ""
    RED = "\033[31m" if _USE_COLOR else ""
    GREEN = "\033[32m" if _USE_COLOR else ""
    YELLOW = "\033[33m" if _USE_COLOR else ""
    BRIGHT_RED = "\033[91m" if _USE_COLOR else ""


# Files listed per feature in SHORT mode
MAX_FILES_SHOWN = 5


class OutputMode(Enum):
    """Report output verbosity modes."""

    SHORT = "short"  # Feature line + first few files
    FULL = "full"  # + description, every file, unsafe/critical markers
    JSON = "json"  # Machine-readable JSON output


def format_baseline(value: Any) -> str:
    """Render a baseline value the way it appears in the catalog JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _baseline_color(value: Any) -> str:
    if value is False:
        return _C.RED
    if value is True or value == "high":
        return _C.GREEN
    return _C.YELLOW


def report_scan(
    result: ScanResult,
    output_mode: OutputMode = OutputMode.SHORT,
    output_file: Optional[TextIO] = None,
) -> int:
    """
    Print the scan report.

    Args:
        result: Finished scan
        output_mode: SHORT (default), FULL, or JSON
        output_file: Optional file handle to write output to (in addition to stdout)

    Returns: Number of features detected
    """
    if output_mode == OutputMode.JSON:
        return report_scan_json(result, output_file)

    def _print(msg: str = ""):
        print(msg)
        if output_file:
            print(msg, file=output_file)

    if not result.entries:
        _print("✅ No matches found.")
        return 0

    critical_ids = {e.id for e in result.verdict.critical_entries}

    _print("🚨 Detected feature usages:")
    for entry in result.entries:
        _report_single_feature(entry, output_mode, entry.id in critical_ids, _print)

    if critical_ids:
        names = ", ".join(str(r["id"]) for r in result.critical_detected)
        _print(f"{_C.BOLD}{_C.BRIGHT_RED}⚠️ Critical features detected: {names}{_C.RESET}")

    return len(result.entries)


def _report_single_feature(
    entry: ReportEntry,
    output_mode: OutputMode,
    critical: bool,
    _print,
) -> None:
    feature = entry.feature
    files: List[str] = list(entry.files)
    color = _baseline_color(feature.baseline)
    line = (
        f"- {_C.BOLD}{feature.id}{_C.RESET} ({feature.name}) — "
        f"baseline: {color}{format_baseline(feature.baseline)}{_C.RESET} — used in {len(files)} file(s)"
    )
    if output_mode == OutputMode.FULL and critical:
        line += f" {_C.BRIGHT_RED}[critical]{_C.RESET}"
    _print(line)

    if output_mode == OutputMode.FULL:
        if feature.description:
            _print(f"   {_C.DIM}{feature.description}{_C.RESET}")
        shown = files
    else:
        shown = files[:MAX_FILES_SHOWN]
    for path in shown:
        _print(f"   • {path}")
    if len(shown) < len(files):
        _print(f"   {_C.DIM}...and {len(files) - len(shown)} more file(s){_C.RESET}")


def report_scan_json(result: ScanResult, output_file: Optional[TextIO] = None) -> int:
    """Report the scan in JSON format."""
    json_str = json.dumps(result.to_dict(), indent=2)
    print(json_str)
    if output_file:
        print(json_str, file=output_file)
    return len(result.entries)
