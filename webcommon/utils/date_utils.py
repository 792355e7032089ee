from datetime import datetime
from typing import Optional

from webcommon.core.exceptions import DateParseError

YYYY_MM_DD = "%Y-%m-%d"
YYYY_MM_DD_HH_MM_SS = "%Y-%m-%d %H:%M:%S"

# Tried in order; the first one that matches wins
PARSE_PATTERNS = (
    "%Y-%m-%d", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m",
    "%Y/%m/%d", "%Y/%m/%d %H:%M:%S", "%Y/%m/%d %H:%M", "%Y/%m",
    "%Y.%m.%d", "%Y.%m.%d %H:%M:%S", "%Y.%m.%d %H:%M", "%Y.%m",
)


def parse_date(text: Optional[str]) -> Optional[datetime]:
    """
    Read request text as a datetime.

    The fixed patterns in PARSE_PATTERNS are tried first, then ISO-8601
    (a trailing ``Z`` is read as UTC).

    Args:
        text: Raw text, typically a query parameter

    Returns:
        The parsed datetime, or None when text is None or blank

    Raises:
        DateParseError: When text matches no accepted format
    """
    if text is None:
        return None
    s = text.strip()
    if not s:
        return None

    for pattern in PARSE_PATTERNS:
        try:
            return datetime.strptime(s, pattern)
        except ValueError:
            continue

    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError as e:
        raise DateParseError(text) from e


def format_date(value: datetime, pattern: str = YYYY_MM_DD_HH_MM_SS) -> str:
    return value.strftime(pattern)
