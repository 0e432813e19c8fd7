import os
import sys
from typing import Optional

_DEBUG_ENABLED = bool(os.getenv("BASELINE_DEBUG"))
_USE_COLOR = not os.getenv("BASELINE_NO_COLORS")


def _prefix(code: str, label: str) -> str:
    if _USE_COLOR:
        return f"\033[{code}m[{label}]\033[0m"
    return f"[{label}]"


def debug(*args, **kwargs):
    if _DEBUG_ENABLED:
        print(_prefix("1", "DEBUG"), *args, file=sys.stderr, **kwargs)


def info(*args, **kwargs):
    print(_prefix("1;34", "INFO"), *args, file=sys.stderr, **kwargs)


def warn(*args, **kwargs):
    print(_prefix("1;33", "WARNING"), *args, file=sys.stderr, **kwargs)


def error(*args, **kwargs):
    print(_prefix("1;31", "ERROR"), *args, file=sys.stderr, **kwargs)


def casefold(token) -> Optional[str]:
    """Case-fold a matching token; None for missing or non-string values."""
    if not isinstance(token, str):
        return None
    return token.casefold()
