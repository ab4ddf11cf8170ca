"""Format predicates for registry fields.

Both checks return a boolean and never raise: malformed input is a
negative result, not an error.
"""

import re
from datetime import datetime
from typing import Any
from urllib.parse import urlparse

TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def is_valid_timestamp(value: Any) -> bool:
    """Check that value is a real calendar date-time in YYYY-MM-DD HH:mm:ss form.

    The lexical pattern is checked first, then the value is parsed so that
    e.g. month 13 or day 32 are rejected.
    """
    if not isinstance(value, str) or not TIMESTAMP_PATTERN.match(value):
        return False
    try:
        datetime.strptime(value.replace(" ", "T"), TIMESTAMP_FORMAT)
    except ValueError:
        return False
    return True


def is_valid_url(value: Any) -> bool:
    """Check that value is an absolute URL with a scheme and a non-empty host."""
    if not isinstance(value, str) or not value or value != value.strip():
        return False
    try:
        parsed = urlparse(value)
        # Accessing port validates it (raises ValueError when out of range)
        parsed.port  # noqa: B018
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.hostname) and " " not in parsed.netloc
