"""
Render the scan results as a Markdown pull-request comment.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader

_TEMPLATE_DIR = Path(__file__).parent

COMMENT_HEADER = "## 🔎 Baseline Feature Check Report"
MDN_API_URL = "https://developer.mozilla.org/en-US/docs/Web/API/"
MAX_FILES_SHOWN = 5

FAIL = "fail"
WARNING = "warning"


def mdn_link(feature_id: Any) -> str:
    if not feature_id:
        return ""
    return f"[MDN]({MDN_API_URL}{feature_id})"


def severity_label(severity: str) -> str:
    return "❌ Fail" if severity == FAIL else "⚠️ Warning"


def file_cell(files: List[str], more: int) -> str:
    cell = "<br>".join(f"`{path}`" for path in files)
    if more > 0:
        cell += f"<br>...and {more} more file(s)"
    return cell


_env = Environment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=False,  # Markdown, not HTML
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["mdn_link"] = mdn_link
_env.filters["severity_label"] = severity_label
_env.filters["file_cell"] = file_cell


def _row(record: Dict[str, Any], critical_ids: set) -> Dict[str, Any]:
    # Deduplicate while keeping order
    files = list(dict.fromkeys(record.get("files") or []))
    feature_id = record.get("id")
    critical = bool(record.get("critical")) or (
        isinstance(feature_id, str) and feature_id.casefold() in critical_ids
    )
    return {
        "id": feature_id,
        "name": record.get("name"),
        "severity": FAIL if critical else WARNING,
        "files": files[:MAX_FILES_SHOWN],
        "more": max(len(files) - MAX_FILES_SHOWN, 0),
    }


def render_comment(scan_results: Dict[str, Any], critical_features: Optional[Iterable[str]] = None) -> str:
    """
    Build the comment body for a scan result ({ok, details, criticalDetected}).

    Only features whose baseline is exactly false get a table row. Features
    listed in criticalDetected (or `critical_features`) are marked as failing.
    """
    details = scan_results.get("details") or []
    critical_ids = {
        r["id"].casefold()
        for r in scan_results.get("criticalDetected") or []
        if isinstance(r, dict) and isinstance(r.get("id"), str)
    }
    critical_ids.update(c.casefold() for c in critical_features or [])

    non_baseline = [r for r in details if isinstance(r, dict) and r.get("baseline") is False]
    rows = [] if scan_results.get("ok") else [_row(r, critical_ids) for r in non_baseline]

    template = _env.get_template("report.md.j2")
    return template.render(header=COMMENT_HEADER, rows=rows)
