from __future__ import annotations

from datetime import datetime, timezone
from email.utils import formatdate


def http_date(timestamp: float) -> str:
    """Format a POSIX timestamp as an RFC 7231 HTTP date (``Last-Modified``)."""
    return formatdate(timestamp, usegmt=True)


def timestamp_to_utc_iso(timestamp: float) -> str:
    """Return an RFC 3339/ISO timestamp in UTC with seconds precision."""
    return datetime.fromtimestamp(timestamp, timezone.utc).replace(microsecond=0).isoformat()
