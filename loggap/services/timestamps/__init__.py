"""Timestamp extraction services."""

from .base import (
    DateParseError,
    EpochParseError,
    PatternConfigError,
    PatternDateError,
    PatternMismatchError,
    TimestampExtractor,
    TimestampStrategy,
    UnknownMonthError,
)
from .epoch_parser import EpochParser
from .factory import create_extractor
from .pattern_parser import PatternComponents, PatternParser, compile_pattern
from .raw_parser import RawDateParser, parse_date

__all__ = [
    "DateParseError",
    "EpochParseError",
    "PatternConfigError",
    "PatternDateError",
    "PatternMismatchError",
    "TimestampExtractor",
    "TimestampStrategy",
    "UnknownMonthError",
    "EpochParser",
    "create_extractor",
    "PatternComponents",
    "PatternParser",
    "compile_pattern",
    "RawDateParser",
    "parse_date",
]
