"""Exception taxonomy shared by all loggap services."""

from typing import Optional


class GapDetectionError(Exception):
    """Base exception for gap detection errors."""

    pass


class ConfigError(GapDetectionError):
    """Raised when the run configuration is invalid. Fatal before any input is read."""

    pass


class ExtractionError(GapDetectionError):
    """
    Raised when a timestamp cannot be extracted from a record.

    Attributes:
        text: The date-field text that was rejected
    """

    def __init__(self, message: str, text: Optional[str] = None):
        super().__init__(message)
        self.text = text


class InsufficientDataError(GapDetectionError):
    """Raised when input ends before the gap window ever filled up."""

    def __init__(self, window: int, pushed: int):
        super().__init__(
            f"Never reached window size! Either adjust your window "
            f"(currently {window}), or read more data."
        )
        self.window = window
        self.pushed = pushed
