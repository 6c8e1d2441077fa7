"""Clock and timestamp utilities."""

import re
import time
from datetime import datetime

# Trailing "_<digits>" token appended to temporary file stems
TIMESTAMP_SUFFIX_PATTERN = re.compile(r"_\d+$")


def now_millis() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def now() -> str:
    """Current local time formatted for directory names (e.g. "20251114_123456")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def strip_timestamp_suffix(stem: str) -> str:
    """
    Remove a trailing "_<timestamp>" token from a file stem.

    Args:
        stem: File stem, possibly ending in an underscore and a run of digits

    Returns:
        Stem without the timestamp token, or the original stem if stripping
        would leave nothing

    Examples:
        strip_timestamp_suffix("Intro_1712345678901")
        # "Intro"

        strip_timestamp_suffix("temp_quarto_1712345678901")
        # "temp_quarto"
    """
    stripped = TIMESTAMP_SUFFIX_PATTERN.sub("", stem)
    return stripped or stem
