"""Unit tests for UTC date and HHMM helpers."""
import pytest
from datetime import datetime, timedelta, timezone
from lido_briefing.models.flight import FlightTimes
from lido_briefing.timeutils import (
    date_with_hhmm,
    extract_flight_date_utc,
    hhmm_from_utc,
    materialize_times,
    parse_dd_mon_yy_hhmm,
    parse_dmonyy,
    parse_hhmmz,
)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestTimeParsing:
    """Test cases for LIDO date/time token parsing."""

    def test_parse_hhmmz_variants(self):
        """Test HHMM extraction from Z time tokens."""
        test_cases = [
            ('0940Z', '0940'),
            ('0940Z/1140L', '0940'),
            ('OFF BLOCK 2330Z/0130L', '2330'),
            ('9999Z', '9999'),  # not range checked
            ('0940L', None),
            ('', None),
        ]

        for token, expected in test_cases:
            assert parse_hhmmz(token) == expected, f"Failed for token: {token}"

    def test_date_with_hhmm_keeps_calendar_day(self):
        """Test that the base date's day is kept regardless of its time."""
        base = utc(2025, 10, 4, 22, 15)

        assert date_with_hhmm(base, '0130') == utc(2025, 10, 4, 1, 30)
        assert date_with_hhmm(base, '2359') == utc(2025, 10, 4, 23, 59)

    def test_parse_dmonyy(self):
        """Test compact LIDO dates."""
        assert parse_dmonyy('6FEB25') == utc(2025, 2, 6)
        assert parse_dmonyy('26JUN25') == utc(2025, 6, 26)
        assert parse_dmonyy('6XYZ25') is None
        assert parse_dmonyy('6feb25') is None
        assert parse_dmonyy('FEB25') is None

    def test_parse_dd_mon_yy_hhmm(self):
        """Test LIDO DD-MON-YY HHMM timestamps."""
        assert parse_dd_mon_yy_hhmm('01-FEB-26 1130') == utc(2026, 2, 1, 11, 30)
        assert parse_dd_mon_yy_hhmm('28-FEB-26 1430') == utc(2026, 2, 28, 14, 30)
        assert parse_dd_mon_yy_hhmm('1-FEB-26 1130') is None
        assert parse_dd_mon_yy_hhmm('01-FOO-26 1130') is None

    def test_out_of_range_day_does_not_raise(self):
        """Test that an impossible day carries into the next month."""
        assert parse_dmonyy('30FEB25') == utc(2025, 3, 2)

    def test_hhmm_from_utc(self):
        assert hhmm_from_utc(utc(2025, 1, 1, 0, 30)) == '0030'
        assert hhmm_from_utc(utc(2025, 1, 1, 23, 5)) == '2305'


class TestFlightDate:
    """Test cases for flight date extraction."""

    def test_extract_flight_date(self):
        """Test the EY flight header date."""
        text = "OFP 1\nEY 0154/04Oct25/VIE-AUH Reg:A6BLA\n"

        assert extract_flight_date_utc(text) == utc(2025, 10, 4)

    def test_extract_flight_date_missing(self):
        assert extract_flight_date_utc("NO HEADER HERE") is None


class TestMaterializeTimes:
    """Test cases for resolving HHMM times against the flight date."""

    def test_same_day_flight(self):
        base = utc(2025, 10, 4)
        times = FlightTimes(off_block='0940', takeoff='0955', landing='1500', in_='1510')

        result = materialize_times(base, times)

        assert result.off_block_utc == utc(2025, 10, 4, 9, 40)
        assert result.takeoff_utc == utc(2025, 10, 4, 9, 55)
        assert result.landing_utc == utc(2025, 10, 4, 15, 0)
        assert result.in_utc == utc(2025, 10, 4, 15, 10)

    def test_day_rollover(self):
        """Test an overnight flight lands on the next day."""
        base = utc(2025, 10, 4)
        times = FlightTimes(off_block='2330', landing='0130')

        result = materialize_times(base, times)

        assert result.landing_utc == utc(2025, 10, 5, 1, 30)
        assert result.landing_utc - result.off_block_utc == timedelta(hours=2)

    def test_rollover_applies_to_takeoff_and_in(self):
        base = utc(2025, 10, 4)
        times = FlightTimes(off_block='2350', takeoff='0005', landing='0300', in_='0310')

        result = materialize_times(base, times)

        assert result.takeoff_utc.day == 5
        assert result.in_utc.day == 5

    def test_missing_times_stay_none(self):
        result = materialize_times(utc(2025, 10, 4), FlightTimes(landing='0130'))

        assert result.off_block_utc is None
        # No off-block to compare against, so no rollover
        assert result.landing_utc == utc(2025, 10, 4, 1, 30)
        assert result.takeoff_utc is None
