"""Record splitting utilities."""

import re
from functools import lru_cache


@lru_cache(maxsize=16)
def _delimiter_pattern(delimiter: str) -> "re.Pattern[str]":
    return re.compile(f"(?:{re.escape(delimiter)})+", re.IGNORECASE)


def split_fields(line: str, delimiter: str) -> list[str]:
    """
    Split a record into fields on runs of the delimiter.

    Args:
        line: Record text
        delimiter: Field separator (non-empty)

    Returns:
        List of fields. Consecutive delimiters count as one, a leading
        delimiter yields an empty first field, trailing empty fields are dropped.

    Raises:
        ValueError: If delimiter is empty

    Examples:
        >>> split_fields("a  b c", " ")
        ['a', 'b', 'c']
        >>> split_fields("a,b,,", ",")
        ['a', 'b']
    """
    if not delimiter:
        raise ValueError("Cannot use zero-length string as a delimiter")

    fields = _delimiter_pattern(delimiter).split(line)

    while fields and fields[-1] == "":
        fields.pop()

    return fields
