"""
CLI helper functions: source file discovery and reading.
"""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

from core.utils import debug, warn

SKIP_DIRS = frozenset({"node_modules", ".git"})

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> List[str]:
    """Expand shell-style brace alternatives: '*.{js,ts}' -> ['*.js', '*.ts']."""
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: List[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def _is_skipped(relative: Path) -> bool:
    return any(part in SKIP_DIRS for part in relative.parts[:-1])


def collect_source_files(cwd: str, patterns: Union[str, Iterable[str]]) -> List[str]:
    """
    Collect files under `cwd` matching any glob pattern.

    Returns sorted, de-duplicated POSIX paths relative to `cwd`. Hidden files
    are included; node_modules/ and .git/ are not.
    """
    root = Path(cwd)
    if not root.is_dir():
        return []
    if isinstance(patterns, str):
        patterns = [p.strip() for p in patterns.split(",")]

    found = set()
    for pattern in patterns:
        if not pattern:
            continue
        for expanded in expand_braces(pattern):
            for file_path in root.glob(expanded):
                if not file_path.is_file():
                    continue
                relative = file_path.relative_to(root)
                if _is_skipped(relative):
                    continue
                found.add(relative.as_posix())

    files = sorted(found)
    debug(f"Discovered {len(files)} file(s) under {root}")
    return files


def read_source_file(cwd: str, relative_path: str) -> Optional[str]:
    """Read a discovered file as UTF-8; None if it cannot be read."""
    path = Path(cwd) / relative_path
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        warn(f"Skipping unreadable file {relative_path}: {e}")
        return None
