"""Fixed-template timestamp extraction using strftime-like escapes."""

import calendar
import re
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Callable, Optional

from .base import (
    PatternConfigError,
    PatternDateError,
    PatternMismatchError,
    TimestampExtractor,
    TimestampStrategy,
    UnknownMonthError,
)

MONTH_ABBREVIATIONS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# escape -> (component name, sub-pattern)
ESCAPES = {
    "%Y": ("full_year", r"\d{4}"),
    "%m": ("full_month", r"\d{2}"),
    "%b": ("abbrev_month", "|".join(MONTH_ABBREVIATIONS)),
    "%d": ("full_day_of_month", r"\d{2}"),
    "%H": ("full_hour", r"\d{2}"),
    "%M": ("full_minute", r"\d{2}"),
    "%S": ("full_second", r"\d{2}"),
}

ESCAPE_PATTERN = re.compile("|".join(re.escape(escape) for escape in ESCAPES))


@dataclass(frozen=True)
class PatternComponents:
    """Date components captured by a pattern match. None means not captured."""

    full_year: Optional[str] = None
    full_month: Optional[str] = None
    abbrev_month: Optional[str] = None
    full_day_of_month: Optional[str] = None
    full_hour: Optional[str] = None
    full_minute: Optional[str] = None
    full_second: Optional[str] = None

    @classmethod
    def from_match(cls, match: "re.Match[str]") -> "PatternComponents":
        captured = match.groupdict()
        return cls(**{f.name: captured.get(f.name) or None for f in fields(cls)})

    def month(self, now: datetime) -> int:
        if self.abbrev_month is not None:
            try:
                return MONTH_ABBREVIATIONS[self.abbrev_month.lower()]
            except KeyError:
                raise UnknownMonthError(
                    f"Unknown abbreviated month value: {self.abbrev_month}", text=self.abbrev_month
                )

        if self.full_month is not None:
            return int(self.full_month)

        return now.month

    def day(self, now: datetime, year: int, month: int) -> int:
        if self.full_day_of_month:
            return int(self.full_day_of_month)

        # Today's day may not exist in the resolved month
        if 1 <= month <= 12:
            return min(now.day, calendar.monthrange(year, month)[1])

        return now.day

    def resolve(self, now: datetime) -> datetime:
        """
        Build a naive local datetime, filling uncaptured components from now.

        Raises:
            UnknownMonthError: If abbrev_month is not a known abbreviation
            PatternDateError: If the components do not form a valid date
        """
        resolvers: dict[str, Callable[[dict[str, int]], int]] = {
            "year": lambda values: int(self.full_year) if self.full_year else now.year,
            "month": lambda values: self.month(now),
            "day": lambda values: self.day(now, values["year"], values["month"]),
            "hour": lambda values: int(self.full_hour) if self.full_hour else now.hour,
            "minute": lambda values: int(self.full_minute) if self.full_minute else now.minute,
            "second": lambda values: int(self.full_second) if self.full_second else now.second,
        }

        values: dict[str, int] = {}
        for name, resolve in resolvers.items():
            values[name] = resolve(values)

        try:
            return datetime(**values)
        except ValueError as e:
            raise PatternDateError(f"Matched components do not form a date: {values} ({e})")


def compile_pattern(template: str) -> "re.Pattern[str]":
    """
    Compile a strftime-like template into a case-insensitive regular expression.

    Text between escapes is matched literally. Repeated escapes match the
    same shape but only the first occurrence is captured.

    Raises:
        PatternConfigError: If the template holds no escapes, or both %m and %b
    """
    if "%m" in template and "%b" in template:
        raise PatternConfigError("One or the other: full_month (%m) or abbrev_month (%b)")

    parts = []
    captured = set()
    position = 0

    for match in ESCAPE_PATTERN.finditer(template):
        parts.append(re.escape(template[position : match.start()]))
        name, sub_pattern = ESCAPES[match.group(0)]

        if name in captured:
            parts.append(f"(?:{sub_pattern})")
        else:
            parts.append(f"(?P<{name}>{sub_pattern})")
            captured.add(name)

        position = match.end()

    if not captured:
        raise PatternConfigError(f"Pattern contains no date components: '{template}'")

    parts.append(re.escape(template[position:]))

    return re.compile("".join(parts), re.IGNORECASE)


class PatternParser(TimestampExtractor):
    """Extract timestamps by matching a compiled template."""

    strategy = TimestampStrategy.PATTERN

    def __init__(
        self,
        template: str,
        stop_caring: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize parser.

        Args:
            template: Pattern such as "%Y-%m-%d %H:%M:%S AKST"
            stop_caring: Skip non-matching records instead of failing
            clock: Source of local wall-clock time for uncaptured components

        Raises:
            PatternConfigError: If template cannot be compiled
        """
        self.template = template
        self.stop_caring = stop_caring
        self.clock = clock
        self.regex = compile_pattern(template)

    def extract(self, text: str) -> Optional[datetime]:
        match = self.regex.search(text)

        if not match:
            if self.stop_caring:
                return None
            raise PatternMismatchError(
                f"Specified a pattern, but date field didn't match: '{text}'. Stopping", text=text
            )

        try:
            return PatternComponents.from_match(match).resolve(self.clock()).astimezone()
        except PatternDateError as e:
            e.text = text
            raise
