"""Free-form date parsing backed by dateutil."""

from datetime import datetime
from typing import Optional

from dateutil import parser as date_parser

from .base import DateParseError, TimestampExtractor, TimestampStrategy


def parse_date(text: str) -> datetime:
    """
    Parse a human readable date string into an aware datetime.

    Naive results are taken to be local time.

    Raises:
        DateParseError: If the text is not a recognisable date
    """
    try:
        value = date_parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise DateParseError(f"Unable to parse date: '{text}' ({e})", text=text)

    return value.astimezone() if value.tzinfo is None else value


class RawDateParser(TimestampExtractor):
    """Delegate the whole date field to the free-form parser."""

    strategy = TimestampStrategy.RAW

    def extract(self, text: str) -> Optional[datetime]:
        return parse_date(text)
