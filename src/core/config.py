"""
Run configuration: scan root, discovery patterns, policy inputs.

Values come from defaults, then GitHub Actions inputs (INPUT_* env vars),
then explicit CLI flags.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional, Union

DEFAULT_PATTERNS = ["**/*.{js,ts,jsx,tsx,css,html}"]


def split_list(value: Union[str, List[str], None]) -> List[str]:
    """Split a comma-separated input into trimmed, non-empty items."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [item.strip() for item in value if item and item.strip()]


def parse_fail_on_limited(value: Optional[str]) -> bool:
    """Anything but the literal string 'false' keeps the gate enabled."""
    return value != "false"


@dataclass
class RunOptions:
    """Options for one scan run."""

    cwd: str = field(default_factory=os.getcwd)
    patterns: List[str] = field(default_factory=lambda: list(DEFAULT_PATTERNS))
    fail_on_limited: bool = True
    critical_features: List[str] = field(default_factory=list)
    catalog_path: Optional[str] = None
    jobs: int = 1
    # Abort on stylesheet parse errors instead of skipping the file
    strict: bool = False

    @classmethod
    def from_env(cls, **overrides) -> "RunOptions":
        """
        Build options from GitHub Actions inputs, then apply overrides.

        Overrides whose value is None are ignored so unset CLI flags
        do not clobber action inputs.
        """
        from cli.actions import get_input

        options = cls()
        patterns = get_input("patterns")
        if patterns:
            options.patterns = split_list(patterns)
        options.fail_on_limited = parse_fail_on_limited(get_input("fail-on-limited"))
        options.critical_features = split_list(get_input("critical-features"))

        for key, value in overrides.items():
            if value is None:
                continue
            if not hasattr(options, key):
                raise TypeError(f"Unknown run option: {key}")
            if key in ("patterns", "critical_features"):
                value = split_list(value)
            setattr(options, key, value)
        return options
