"""Build the configured timestamp extractor."""

from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

from .base import PatternConfigError, TimestampExtractor, TimestampStrategy
from .epoch_parser import EpochParser
from .pattern_parser import PatternParser
from .raw_parser import RawDateParser

if TYPE_CHECKING:
    from loggap.config.gap_config import DetectionConfig


def create_extractor(
    config: "DetectionConfig",
    clock: Optional[Callable[[], datetime]] = None,
) -> TimestampExtractor:
    """
    Create the extractor for config.strategy.

    Args:
        config: Detection configuration
        clock: Optional wall-clock source for the pattern strategy

    Returns:
        TimestampExtractor instance

    Raises:
        PatternConfigError: If the pattern strategy has no usable template
    """
    if config.strategy is TimestampStrategy.PATTERN:
        if not config.pattern:
            raise PatternConfigError("Pattern strategy requires a pattern")

        if clock is None:
            return PatternParser(config.pattern, stop_caring=config.stop_caring)
        return PatternParser(config.pattern, stop_caring=config.stop_caring, clock=clock)

    extractors = {
        TimestampStrategy.RAW: RawDateParser,
        TimestampStrategy.EPOCH: EpochParser,
    }

    return extractors[config.strategy]()
