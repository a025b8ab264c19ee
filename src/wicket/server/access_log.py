"""Access log — one line per request, after the reply is written.

Format: ``<timestamp> <METHOD>: <path> <status>``
"""

import logging
from datetime import UTC, datetime

logger = logging.getLogger("wicket.access")


def format_access_line(method: str, path: str, status: int, when: datetime | None = None) -> str:
    """Build one access line. *when* defaults to now, in UTC."""
    stamp = (when or datetime.now(UTC)).isoformat(timespec="seconds")
    return f"{stamp} {method.upper()}: {path} {status}"


def log_access(method: str, path: str, status: int) -> None:
    logger.info("%s", format_access_line(method, path, status))
