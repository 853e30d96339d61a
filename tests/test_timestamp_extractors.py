"""Tests for timestamp extraction strategies."""

from datetime import datetime, timezone

import pytest

from loggap.config.gap_config import DetectionConfig
from loggap.errors import ConfigError, ExtractionError
from loggap.services.timestamps import (
    DateParseError,
    EpochParseError,
    EpochParser,
    PatternComponents,
    PatternConfigError,
    PatternDateError,
    PatternMismatchError,
    PatternParser,
    RawDateParser,
    TimestampStrategy,
    UnknownMonthError,
    compile_pattern,
    create_extractor,
)

FROZEN_NOW = datetime(2024, 5, 6, 7, 8, 9)


def frozen_clock():
    return FROZEN_NOW


def local_fields(value: datetime) -> datetime:
    """Wall-clock fields of an aware local datetime."""
    return value.replace(tzinfo=None)


class TestEpochParser:
    """Test Unix timestamp extraction."""

    @pytest.fixture
    def parser(self):
        return EpochParser()

    def test_extract_epoch(self, parser):
        assert parser.extract("1700000000") == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_extract_truncates_fraction(self, parser):
        assert parser.extract("1700000000.987") == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_extract_leading_integer_portion(self, parser):
        assert parser.extract(" 100abc") == datetime(1970, 1, 1, 0, 1, 40, tzinfo=timezone.utc)

    def test_extract_not_a_number(self, parser):
        with pytest.raises(EpochParseError) as exc_info:
            parser.extract("not-a-number")

        assert exc_info.value.text == "not-a-number"
        assert isinstance(exc_info.value, ExtractionError)


class TestRawDateParser:
    """Test free-form date parsing."""

    @pytest.fixture
    def parser(self):
        return RawDateParser()

    def test_extract_iso_with_offset(self, parser):
        result = parser.extract("2010-10-03T20:03:42+00:00")

        assert result == datetime(2010, 10, 3, 20, 3, 42, tzinfo=timezone.utc)

    def test_extract_naive_is_local(self, parser):
        result = parser.extract("Oct 3 2010 20:03:42")

        assert result.tzinfo is not None
        assert local_fields(result) == datetime(2010, 10, 3, 20, 3, 42)

    def test_extract_rejects_garbage(self, parser):
        with pytest.raises(DateParseError) as exc_info:
            parser.extract("definitely not a date")

        assert exc_info.value.text == "definitely not a date"


class TestCompilePattern:
    """Test pattern compilation."""

    def test_named_components(self):
        regex = compile_pattern("%Y-%m-%d %H:%M:%S")

        assert set(regex.groupindex) == {
            "full_year",
            "full_month",
            "full_day_of_month",
            "full_hour",
            "full_minute",
            "full_second",
        }

    def test_literal_text_is_escaped(self):
        regex = compile_pattern("[%H.%M]")

        assert regex.search("[20.03]")
        assert not regex.search("[20x03]")

    def test_month_conflict_rejected(self):
        with pytest.raises(PatternConfigError):
            compile_pattern("%Y %m %b")

    def test_no_components_rejected(self):
        with pytest.raises(PatternConfigError):
            compile_pattern("AKST")

    def test_repeated_component_compiles(self):
        regex = compile_pattern("%H:%M %H")
        match = regex.search("20:03 21")

        assert match.group("full_hour") == "20"

    def test_config_errors_are_config_errors(self):
        with pytest.raises(ConfigError):
            PatternParser("%m/%b")


class TestPatternParser:
    """Test fixed-template extraction."""

    def test_full_pattern_ignores_clock(self):
        parser = PatternParser("%Y-%m-%d %H:%M:%S", clock=frozen_clock)
        result = parser.extract("2010-10-03 20:03:42")

        assert local_fields(result) == datetime(2010, 10, 3, 20, 3, 42)

    def test_time_only_defaults_date_to_now(self):
        parser = PatternParser("%H:%M:%S", clock=frozen_clock)
        result = parser.extract("20:03:42")

        assert local_fields(result) == datetime(2024, 5, 6, 20, 3, 42)

    def test_time_only_with_real_clock_uses_current_date(self):
        parser = PatternParser("%H:%M:%S")
        before = datetime.now().date()
        result = parser.extract("20:03:42")
        after = datetime.now().date()

        assert result.date() in (before, after)
        assert (result.hour, result.minute, result.second) == (20, 3, 42)

    def test_pattern_with_surrounding_text(self):
        parser = PatternParser("%Y-%m-%d %H:%M:%S AKST", clock=frozen_clock)
        result = parser.extract("2010-10-03 20:03:42 AKST")

        assert local_fields(result) == datetime(2010, 10, 3, 20, 3, 42)

    def test_abbreviated_month_case_insensitive(self):
        parser = PatternParser("%b %d %H:%M:%S", clock=frozen_clock)
        result = parser.extract("OCT 03 20:03:42")

        assert local_fields(result) == datetime(2024, 10, 3, 20, 3, 42)

    def test_match_is_search_not_anchored(self):
        parser = PatternParser("%H:%M:%S", clock=frozen_clock)
        result = parser.extract("host1 sshd 20:03:42 accepted")

        assert (result.hour, result.minute, result.second) == (20, 3, 42)

    def test_no_match_is_fatal_by_default(self):
        parser = PatternParser("%Y-%m-%d", clock=frozen_clock)

        with pytest.raises(PatternMismatchError) as exc_info:
            parser.extract("garbage")

        assert exc_info.value.text == "garbage"

    def test_no_match_skips_when_stop_caring(self):
        parser = PatternParser("%Y-%m-%d", stop_caring=True, clock=frozen_clock)

        assert parser.extract("garbage") is None

    def test_invalid_matched_date(self):
        parser = PatternParser("%Y-%m-%d", clock=frozen_clock)

        with pytest.raises(PatternDateError) as exc_info:
            parser.extract("2010-13-01")

        assert exc_info.value.text == "2010-13-01"


class TestPatternComponents:
    """Test component resolution."""

    def test_defaulted_day_clamped_to_month_length(self):
        parser = PatternParser("%m %H:%M:%S", clock=lambda: datetime(2024, 1, 31, 12, 0, 0))
        result = parser.extract("02 10:00:00")

        assert local_fields(result) == datetime(2024, 2, 29, 10, 0, 0)

    def test_defaulted_day_kept_when_it_fits(self):
        components = PatternComponents(full_month="03")

        assert components.resolve(datetime(2023, 1, 31, 1, 2, 3)) == datetime(2023, 3, 31, 1, 2, 3)

    def test_matched_day_is_not_clamped(self):
        components = PatternComponents(full_month="02", full_day_of_month="30")

        with pytest.raises(PatternDateError):
            components.resolve(FROZEN_NOW)

    def test_unknown_abbreviation(self):
        components = PatternComponents(abbrev_month="sept")

        with pytest.raises(UnknownMonthError):
            components.resolve(FROZEN_NOW)

    def test_all_defaults(self):
        assert PatternComponents().resolve(FROZEN_NOW) == FROZEN_NOW

    def test_numeric_month_used_verbatim(self):
        components = PatternComponents(full_year="2010", full_month="01", full_day_of_month="31")

        assert components.resolve(FROZEN_NOW) == datetime(2010, 1, 31, 7, 8, 9)


class TestCreateExtractor:
    """Test extractor factory."""

    def test_default_is_raw(self):
        assert isinstance(create_extractor(DetectionConfig()), RawDateParser)

    def test_epoch(self):
        extractor = create_extractor(DetectionConfig(strategy=TimestampStrategy.EPOCH))

        assert isinstance(extractor, EpochParser)

    def test_pattern(self):
        config = DetectionConfig(strategy="pattern", pattern="%H:%M:%S", stop_caring=True)
        extractor = create_extractor(config, clock=frozen_clock)

        assert isinstance(extractor, PatternParser)
        assert extractor.stop_caring is True
        assert extractor.clock is frozen_clock
