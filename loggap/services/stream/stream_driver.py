"""Single-pass orchestration of gap detection over an ordered line stream."""

import time
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Optional

from loggap.errors import InsufficientDataError
from loggap.models.gap_decision import GapDecision, StatsSnapshot, Verdict
from loggap.models.record import Record
from loggap.services.fields.field_selector import FieldSelector
from loggap.services.timestamps.base import TimestampExtractor
from loggap.services.window.gap_window import GapWindow

if TYPE_CHECKING:
    from loggap.config.gap_config import DetectionConfig


@dataclass
class DriverState:
    """Values carried from one record to the next."""

    previous_instant: Optional[datetime] = None
    previous_record: Optional[str] = None
    lines_read: int = 0
    decisions: int = 0
    aberrant: int = 0


class StreamDriver:
    """
    Runs records through field selection, extraction and the gap window.

    Per record the gap is classified against the window as it stands, the
    oldest gap is evicted if the window is full, and only then is the new
    gap appended. The first record has a gap of 0 which is pushed like any
    other gap.
    """

    def __init__(
        self,
        config: "DetectionConfig",
        extractor: TimestampExtractor,
        only_outliers: bool = False,
        running_stats: Optional[int] = None,
        on_snapshot: Optional[Callable[[StatsSnapshot], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize driver.

        Args:
            config: Detection configuration
            extractor: Timestamp extraction strategy
            only_outliers: Emit aberrant decisions only
            running_stats: Seconds between snapshots; None or 0 disables them
            on_snapshot: Receives periodic StatsSnapshot values
            clock: Seconds source used to pace snapshots
        """
        self.config = config
        self.extractor = extractor
        self.selector = FieldSelector(config.field)
        self.window = GapWindow(config.window)
        self.only_outliers = only_outliers
        self.running_stats = running_stats
        self.on_snapshot = on_snapshot
        self.clock = clock
        self.state = DriverState()
        self._last_snapshot: Optional[float] = None

    def process(self, line: str) -> Optional[GapDecision]:
        """
        Process one line.

        Args:
            line: Record text without trailing newline

        Returns:
            GapDecision, or None if the extractor asked to skip the record

        Raises:
            ExtractionError: If the timestamp cannot be extracted
        """
        self.state.lines_read += 1
        record = Record(line, self.config.delimiter, self.state.lines_read)

        instant = self.extractor.extract(self.selector.date_field(record))
        if instant is None:
            return None

        gap = self._gap(instant)
        verdict = self.window.classify(gap, self.config.within, self.config.minimum, self.config.maximum)

        if verdict is not Verdict.WARMING_UP:
            self._maybe_snapshot(instant)

        self.window.push(gap)

        decision = GapDecision(
            gap_seconds=gap,
            verdict=verdict,
            text=line,
            instant=instant,
            line_number=record.line_number,
            emit=self._should_emit(instant, verdict),
        )

        self.state.previous_instant = instant
        self.state.previous_record = line
        self.state.decisions += 1
        if decision.is_aberrant:
            self.state.aberrant += 1

        return decision

    def run(self, lines: Iterable[str]) -> Iterator[GapDecision]:
        """
        Process every line and yield the decisions selected for emission.

        Raises:
            ExtractionError: On the first fatal extraction failure
            InsufficientDataError: At end of input if the window never filled
        """
        for line in lines:
            decision = self.process(line)
            if decision is not None and decision.emit:
                yield decision

        self.finish()

    def finish(self) -> None:
        """
        Validate the completed run.

        Raises:
            InsufficientDataError: If the window never reached its capacity
        """
        if not self.window.ever_filled:
            raise InsufficientDataError(self.window.capacity, self.window.size)

    def _gap(self, instant: datetime) -> int:
        if self.state.previous_instant is None:
            return 0
        return int((instant - self.state.previous_instant).total_seconds())

    def _should_emit(self, instant: datetime, verdict: Verdict) -> bool:
        if self.config.begin is not None and instant < self.config.begin:
            return False

        if self.config.end is not None and instant > self.config.end:
            return False

        if self.only_outliers:
            return verdict is Verdict.ABERRANT

        return True

    def _maybe_snapshot(self, instant: datetime) -> None:
        if not self.running_stats or self.running_stats <= 0 or self.on_snapshot is None:
            return

        now = self.clock()
        if self._last_snapshot is not None and now - self._last_snapshot < self.running_stats:
            return

        self.on_snapshot(self.window.snapshot(instant, self.state.lines_read))
        self._last_snapshot = now
