"""Central logging setup for the project."""
from __future__ import annotations
import logging
import re
import sys

_SECRET_PATTERNS = (
    re.compile(r"(Bearer\s+)[^\s'\"]+", re.IGNORECASE),
    re.compile(r"\bsk-[A-Za-z0-9_\-]{4,}"),
)
_MASK = "**********"


def redact(text: str) -> str:
    """Mask bearer tokens and ``sk-`` style API keys in ``text``."""
    text = _SECRET_PATTERNS[0].sub(lambda m: m.group(1) + _MASK, text)
    return _SECRET_PATTERNS[1].sub(_MASK, text)


class RedactingFilter(logging.Filter):
    """Rewrites records so API keys never reach a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Leave malformed records for the handler's own error reporting.
            return True
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure root logger with sane defaults.

    Args:
        level: Logging level.
    """
    handler = logging.StreamHandler(sys.stdout)
    fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(RedactingFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
