from core.utils import debug, info, warn, error, casefold
from core.config import RunOptions, DEFAULT_PATTERNS

__all__ = [
    "debug",
    "info",
    "warn",
    "error",
    "casefold",
    "RunOptions",
    "DEFAULT_PATTERNS",
]
