"""Unix epoch timestamp extraction."""

import re
from datetime import datetime, timezone
from typing import Optional

from .base import EpochParseError, TimestampExtractor, TimestampStrategy


class EpochParser(TimestampExtractor):
    """Interpret the leading integer of the date field as seconds since the epoch (UTC)."""

    strategy = TimestampStrategy.EPOCH

    LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")

    def extract(self, text: str) -> Optional[datetime]:
        match = self.LEADING_INTEGER.match(text)

        if not match:
            raise EpochParseError(f"Not a Unix timestamp: '{text}'", text=text)

        try:
            return datetime.fromtimestamp(int(match.group(1)), tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise EpochParseError(f"Timestamp out of range: '{text}' ({e})", text=text)
