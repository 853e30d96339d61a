"""Cut-style field selection for locating the date portion of a record."""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from loggap.errors import ConfigError
from loggap.models.record import Record


class FieldExpressionError(ConfigError):
    """Raised when a field expression token is not one of N, M-, -N, M-N."""

    pass


class FieldRangeOrderError(FieldExpressionError):
    """Raised when a bounded range M-N has M greater than N."""

    pass


@dataclass(frozen=True)
class FieldRange:
    """
    One comma-separated token of a field expression.

    ``start`` of None means "from the first field", ``end`` of None means
    "through the last field". A single index has start == end.
    """

    start: Optional[int]
    end: Optional[int]

    def expand(self, field_count: int) -> range:
        """1-based indices covered by this range for a record of field_count fields."""
        first = 1 if self.start is None else self.start
        last = field_count if self.end is None else self.end
        return range(first, last + 1)


class FieldSelection:
    """Parsed, immutable field expression."""

    TOKEN_PATTERN = re.compile(r"^(\d*)(-?)(\d*)$")

    def __init__(self, expression: str, ranges: Sequence[FieldRange]):
        self.expression = expression
        self.ranges = tuple(ranges)

    @classmethod
    def parse(cls, expression: str) -> "FieldSelection":
        """
        Parse a comma-separated field expression.

        Args:
            expression: Tokens of the form N, M-, -N or M-N

        Returns:
            FieldSelection

        Raises:
            FieldRangeOrderError: If a bounded range is reversed
            FieldExpressionError: If a token has any other shape
        """
        ranges = []

        for token in expression.split(","):
            ranges.append(cls._parse_token(token.strip(), expression))

        return cls(expression, ranges)

    @classmethod
    def _parse_token(cls, token: str, expression: str) -> FieldRange:
        match = cls.TOKEN_PATTERN.match(token)

        if not match or not (match.group(1) or match.group(3)):
            raise FieldExpressionError(f"Invalid field or field range specified: '{token}' in '{expression}'")

        start, dash, end = match.groups()

        if not dash:
            return FieldRange(int(start), int(start))

        if not end:
            return FieldRange(int(start), None)

        if not start:
            return FieldRange(None, int(end))

        if int(start) > int(end):
            raise FieldRangeOrderError(
                f"Invalid field range '{token}', first field must be less than or equal to second field in range"
            )

        return FieldRange(int(start), int(end))

    def resolve(self, field_count: int) -> list[int]:
        """
        Resolve into 1-based field indices for a record with field_count fields.

        Only the open-ended ``M-`` form consults field_count; other forms are
        not clamped. The result is deduplicated and sorted ascending.
        """
        indices = set()

        for field_range in self.ranges:
            indices.update(field_range.expand(field_count))

        return sorted(indices)

    def __repr__(self) -> str:
        return f"FieldSelection({self.expression!r})"


class FieldSelector:
    """Extract the date field text from records."""

    def __init__(self, expression: Optional[str] = None, join_separator: str = " "):
        """
        Initialize selector.

        Args:
            expression: Optional field expression; None selects the whole line
            join_separator: Separator placed between selected fields

        Raises:
            FieldExpressionError: If expression is malformed
        """
        self.selection = FieldSelection.parse(expression) if expression is not None else None
        self.join_separator = join_separator

    @staticmethod
    def resolve(expression: str, field_count: int) -> list[int]:
        """Parse expression and resolve it against field_count."""
        return FieldSelection.parse(expression).resolve(field_count)

    @staticmethod
    def apply(fields: Sequence[str], indices: Sequence[int], join_separator: str = " ") -> Optional[str]:
        """
        Join the selected fields.

        Args:
            fields: Delimiter-split record
            indices: Ascending 1-based indices
            join_separator: Separator between selected fields

        Returns:
            Composite field text, or None if no index falls inside fields
        """
        selected = [fields[index - 1] for index in indices if 1 <= index <= len(fields)]

        if not selected:
            return None

        return join_separator.join(selected)

    def date_field(self, record: Record) -> str:
        """
        Get the text to extract a timestamp from.

        Falls back to the whole line when no expression is configured or
        none of the selected fields exist in this record.
        """
        if self.selection is None:
            return record.text

        fields = record.fields
        composite = self.apply(fields, self.selection.resolve(len(fields)), self.join_separator)

        return record.text if composite is None else composite
