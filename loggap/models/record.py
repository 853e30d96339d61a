"""Log record data model."""

from dataclasses import dataclass
from functools import cached_property

from ..utils.text_utils import split_fields


@dataclass(frozen=True)
class Record:
    """
    One line of input.

    Attributes:
        text: Line text without the trailing newline
        delimiter: Field separator used to split the line
        line_number: 1-based position in the input stream
    """

    text: str
    delimiter: str = " "
    line_number: int = 0

    @cached_property
    def fields(self) -> list[str]:
        """Delimiter-split fields, computed once per record."""
        return split_fields(self.text, self.delimiter)
