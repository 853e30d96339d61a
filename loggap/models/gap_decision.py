"""Gap classification data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Verdict(Enum):
    """Outcome of evaluating a gap against the trailing window."""

    WARMING_UP = "warming_up"
    BELOW_MINIMUM = "below_minimum"
    ABOVE_MAXIMUM = "above_maximum"
    NORMAL = "normal"
    ABERRANT = "aberrant"

    @property
    def evaluated(self) -> bool:
        """True if the gap was tested against the statistical band."""
        return self in (Verdict.NORMAL, Verdict.ABERRANT)


@dataclass(frozen=True)
class GapDecision:
    """
    Per-record result handed to the presenter.

    Attributes:
        gap_seconds: Whole seconds since the previous extracted timestamp
        verdict: Classification against the pre-push window
        text: Original record text
        instant: Timestamp extracted from the record
        line_number: 1-based position in the input stream
        emit: Whether the record passes the date range and outlier filters
    """

    gap_seconds: int
    verdict: Verdict
    text: str
    instant: datetime
    line_number: int
    emit: bool = True

    @property
    def is_aberrant(self) -> bool:
        return self.verdict is Verdict.ABERRANT


@dataclass(frozen=True)
class StatsSnapshot:
    """Periodic view of the window statistics."""

    last_instant: datetime
    lines_processed: int
    mean: float
    stddev: float
