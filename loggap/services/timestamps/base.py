"""Abstract interface for timestamp extraction strategies."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional

from loggap.errors import ConfigError, ExtractionError


class TimestampStrategy(Enum):
    """Available extraction strategies."""

    RAW = "raw"
    EPOCH = "epoch"
    PATTERN = "pattern"


class PatternConfigError(ConfigError):
    """Raised when a date pattern cannot be compiled."""

    pass


class DateParseError(ExtractionError):
    """Raised when the free-form date parser rejects the text."""

    pass


class EpochParseError(ExtractionError):
    """Raised when the text does not start with an integer."""

    pass


class PatternMismatchError(ExtractionError):
    """Raised when the date field does not match the configured pattern."""

    pass


class UnknownMonthError(ExtractionError):
    """Raised when a matched month abbreviation is not in the month table."""

    pass


class PatternDateError(ExtractionError):
    """Raised when matched components do not form a valid date."""

    pass


class TimestampExtractor(ABC):
    """
    Abstract interface for timestamp extraction.

    Implementations turn the date-field text of a record into a
    timezone-aware datetime.
    """

    strategy: TimestampStrategy

    @abstractmethod
    def extract(self, text: str) -> Optional[datetime]:
        """
        Extract an instant from date-field text.

        Args:
            text: Date-field text selected from the record

        Returns:
            Timezone-aware datetime, or None if the record should be skipped

        Raises:
            ExtractionError: If the text cannot be interpreted
        """
        pass
