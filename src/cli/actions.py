"""
GitHub Actions integration: reading inputs and writing step outputs.
"""

import json
import os
import uuid
from typing import Any

from core.utils import debug


def get_input(name: str) -> str:
    """Read an action input the way the Actions runner exposes it (INPUT_<NAME>)."""
    key = "INPUT_" + name.replace(" ", "_").upper()
    return os.environ.get(key, "").strip()


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return json.dumps(value)


def set_output(name: str, value: Any) -> bool:
    """
    Append a step output to the GITHUB_OUTPUT file.

    Returns False (and does nothing) when not running inside GitHub Actions.
    """
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        debug(f"GITHUB_OUTPUT not set, skipping output '{name}'")
        return False

    text = _format_value(value)
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_path, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
    return True
