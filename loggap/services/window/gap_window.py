"""Trailing window of inter-record gaps."""

import math
from collections import deque
from datetime import datetime
from typing import Deque, Optional

from loggap.models.gap_decision import StatsSnapshot, Verdict


class GapWindow:
    """
    Bounded FIFO of the most recent gaps with population statistics.

    Gaps are whole seconds, so the running sum and sum of squares are kept
    as exact integers and the variance carries no accumulated rounding.
    """

    def __init__(self, capacity: int):
        """
        Initialize window.

        Args:
            capacity: Maximum number of gaps retained (W)

        Raises:
            ValueError: If capacity is not positive
        """
        if capacity < 1:
            raise ValueError("Window capacity must be positive")

        self._capacity = capacity
        self._gaps: Deque[int] = deque()
        self._sum = 0
        self._sum_squares = 0
        self._ever_filled = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        return len(self._gaps)

    @property
    def is_full(self) -> bool:
        return len(self._gaps) == self._capacity

    @property
    def ever_filled(self) -> bool:
        """True once the window has held capacity gaps."""
        return self._ever_filled

    @property
    def mean(self) -> float:
        if not self._gaps:
            return 0.0
        return self._sum / len(self._gaps)

    @property
    def stddev(self) -> float:
        """Population standard deviation (divides by the window length)."""
        n = len(self._gaps)
        if n == 0:
            return 0.0
        return math.sqrt((n * self._sum_squares - self._sum * self._sum) / (n * n))

    def contents(self) -> list[int]:
        """Gaps in insertion order, oldest first."""
        return list(self._gaps)

    def classify(
        self,
        gap: int,
        within: float,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
    ) -> Verdict:
        """
        Classify a gap against the current contents.

        Args:
            gap: Incoming gap in seconds
            within: Standard deviation multiplier (k)
            minimum: Gaps below this are not evaluated
            maximum: Gaps above this are not evaluated

        Returns:
            WARMING_UP until the window is full, BELOW_MINIMUM/ABOVE_MAXIMUM
            for gaps outside the bounds, otherwise NORMAL or ABERRANT
        """
        if not self.is_full:
            return Verdict.WARMING_UP

        if minimum is not None and gap < minimum:
            return Verdict.BELOW_MINIMUM

        if maximum is not None and gap > maximum:
            return Verdict.ABOVE_MAXIMUM

        mean = self.mean
        band = within * self.stddev

        if gap < mean - band or gap > mean + band:
            return Verdict.ABERRANT

        return Verdict.NORMAL

    def push(self, gap: int) -> None:
        """Append a gap, evicting the oldest one first when at capacity."""
        if self.is_full:
            oldest = self._gaps.popleft()
            self._sum -= oldest
            self._sum_squares -= oldest * oldest

        self._gaps.append(gap)
        self._sum += gap
        self._sum_squares += gap * gap

        if self.is_full:
            self._ever_filled = True

    def snapshot(self, last_instant: datetime, lines_processed: int) -> StatsSnapshot:
        return StatsSnapshot(
            last_instant=last_instant,
            lines_processed=lines_processed,
            mean=self.mean,
            stddev=self.stddev,
        )
