"""
Logging utilities for the broker and its operator scripts.

Provides a consistent format and keeps OAuth credentials out of log output.
"""

import logging
import re
import sys

_SECRET_PATTERNS = (
    re.compile(r"(Bearer|Basic)\s+[A-Za-z0-9._~+/=-]+", re.IGNORECASE),
    re.compile(r"""(["']?(?:access_token|refresh_token)["']?\s*[:=]\s*["']?)[^"',&\s}]+"""),
)


class TokenRedactingFilter(logging.Filter):
    """Mask bearer/basic credentials and token fields in formatted messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _SECRET_PATTERNS[0].sub(r"\1 [redacted]", message)
        redacted = _SECRET_PATTERNS[1].sub(r"\1[redacted]", redacted)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a sensible default format."""
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(TokenRedactingFilter())
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[handler],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


__all__ = ["TokenRedactingFilter", "configure_logging"]
