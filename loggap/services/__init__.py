"""Gap detection services"""

from .fields import FieldSelection, FieldSelector
from .reporting import GapFormatter
from .stream import DriverState, StreamDriver
from .timestamps import (
    EpochParser,
    PatternParser,
    RawDateParser,
    TimestampExtractor,
    TimestampStrategy,
    create_extractor,
)
from .window import GapWindow

__all__ = [
    "FieldSelection",
    "FieldSelector",
    "GapFormatter",
    "DriverState",
    "StreamDriver",
    "EpochParser",
    "PatternParser",
    "RawDateParser",
    "TimestampExtractor",
    "TimestampStrategy",
    "create_extractor",
    "GapWindow",
]
