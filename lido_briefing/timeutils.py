"""UTC date and HHMM helpers for LIDO OFP text."""
import re
import logging
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Optional

from lido_briefing.models.flight import FlightTimes, FlightTimesUTC

logger = logging.getLogger(__name__)

MONTHS = MappingProxyType({
    'JAN': 1, 'FEB': 2, 'MAR': 3, 'APR': 4, 'MAY': 5, 'JUN': 6,
    'JUL': 7, 'AUG': 8, 'SEP': 9, 'OCT': 10, 'NOV': 11, 'DEC': 12,
})

HHMMZ_RE = re.compile(r'(\d{4})Z\b')
DMONYY_RE = re.compile(r'^(\d{1,2})([A-Z]{3})(\d{2})$')
DD_MON_YY_HHMM_RE = re.compile(r'^(\d{2})-([A-Z]{3})-(\d{2})\s+(\d{4})$')
# Flight header: "EY 0154/04Oct25/VIE-AUH"
FLIGHT_DATE_RE = re.compile(r'EY\s+\d+/(\d{2})([A-Z][a-z]{2})(\d{2})/')


def add_minutes(value: datetime, minutes: int) -> datetime:
    return value + timedelta(minutes=minutes)


def hhmm_from_utc(value: datetime) -> str:
    """Format the UTC time of day as a zero-padded HHMM string."""
    return f"{value.hour:02d}{value.minute:02d}"


def parse_hhmmz(token: str) -> Optional[str]:
    """
    Extract the first HHMM UTC time from a LIDO time token.

    Examples: "0940Z", "0940Z/1140L". The digits are not range-checked.
    """
    match = HHMMZ_RE.search(token)
    if not match:
        return None
    return match.group(1)


def _utc_date(year: int, month: int, day: int) -> Optional[datetime]:
    """
    Midnight UTC on the given date.

    Days beyond the end of the month are carried into the next month rather
    than rejected, so malformed bulletin dates never raise.
    """
    try:
        first = datetime(year, month, 1, tzinfo=timezone.utc)
        return first + timedelta(days=day - 1)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Could not build date {year}-{month}-{day}: {e}")
        return None


def date_with_hhmm(base_date_utc: datetime, hhmm: str) -> datetime:
    """
    Combine the calendar day of ``base_date_utc`` with an HHMM time.

    No day rollover is applied here; callers handle midnight crossings.
    """
    midnight = datetime(
        base_date_utc.year, base_date_utc.month, base_date_utc.day,
        tzinfo=timezone.utc
    )
    return midnight + timedelta(hours=int(hhmm[0:2]), minutes=int(hhmm[2:4]))


def _two_digit_year(yy: str) -> int:
    # Two-digit years are taken as 20YY.
    return 2000 + int(yy)


def parse_dmonyy(value: str) -> Optional[datetime]:
    """
    Parse a compact LIDO date like "6FEB25" or "26JUN25".

    Returns:
        Midnight UTC of that date, or None if not in DMonYY form
    """
    match = DMONYY_RE.match(value)
    if not match:
        return None
    month = MONTHS.get(match.group(2))
    if month is None:
        return None
    return _utc_date(_two_digit_year(match.group(3)), month, int(match.group(1)))


def parse_dd_mon_yy_hhmm(value: str) -> Optional[datetime]:
    """Parse a LIDO timestamp like "01-FEB-26 1130" into a UTC datetime."""
    match = DD_MON_YY_HHMM_RE.match(value)
    if not match:
        return None
    month = MONTHS.get(match.group(2))
    if month is None:
        return None
    day = _utc_date(_two_digit_year(match.group(3)), month, int(match.group(1)))
    if day is None:
        return None
    return date_with_hhmm(day, match.group(4))


def extract_flight_date_utc(ofp_text: str) -> Optional[datetime]:
    """
    Extract the flight's base date from the OFP header.

    Looks for "EY <flight no>/<DD><Mon><YY>/", e.g. "EY 0154/04Oct25/VIE-AUH".

    Returns:
        Midnight UTC of the flight date, or None if the header is absent
    """
    match = FLIGHT_DATE_RE.search(ofp_text)
    if not match:
        logger.debug("Flight date header not found in OFP text")
        return None
    month = MONTHS.get(match.group(2).upper())
    if month is None:
        return None
    return _utc_date(_two_digit_year(match.group(3)), month, int(match.group(1)))


def materialize_times(base_date_utc: datetime, times: FlightTimes) -> FlightTimesUTC:
    """
    Resolve HHMM flight times to UTC instants on the flight date.

    Takeoff, landing and in times earlier than off-block are moved to the
    next day. Only one midnight crossing is handled.
    """
    def resolve(hhmm: Optional[str]) -> Optional[datetime]:
        return date_with_hhmm(base_date_utc, hhmm) if hhmm else None

    off_block = resolve(times.off_block)
    takeoff = resolve(times.takeoff)
    landing = resolve(times.landing)
    in_time = resolve(times.in_)

    def roll(value: Optional[datetime]) -> Optional[datetime]:
        if off_block and value and value < off_block:
            return add_minutes(value, 24 * 60)
        return value

    return FlightTimesUTC(
        off_block_utc=off_block,
        takeoff_utc=roll(takeoff),
        landing_utc=roll(landing),
        in_utc=roll(in_time),
    )
