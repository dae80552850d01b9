"""Parser module for single LIDO NOTAM bulletin records."""
import re
import logging
from typing import Callable, List, Optional, Tuple

from lido_briefing.models.notam import (
    EndKind, IdType, NotamRecord, Schedule, Validity
)
from lido_briefing.timeutils import parse_dd_mon_yy_hhmm, parse_dmonyy

logger = logging.getLogger(__name__)

# Identifier patterns, in priority order; the first one found decides the type.
ID_PATTERNS: Tuple[Tuple[re.Pattern, IdType], ...] = (
    (re.compile(r'^AIP\s+SUP\s+([A-Z]{1,3}\d{3,5}/\d{2})\b', re.MULTILINE), IdType.AIP_SUP),
    (re.compile(r'^AIC\s+([A-Z]{1,3}\d{3,5}/\d{2})\b', re.MULTILINE), IdType.AIC),
    (re.compile(r'^([A-Z0-9]{1,3}\d{1,5}/\d{2})\b', re.MULTILINE), IdType.NOTAM),
)

# VALIDITY: 6FEB25 TILL UFN
VALIDITY_TILL_RE = re.compile(
    r'^VALIDITY:\s*(\d{1,2}[A-Z]{3}\d{2})\s+TILL\s+(UFN|PERM)\s*$', re.MULTILINE
)
# VALIDITY: 26JUN25 - UFN
VALIDITY_DASH_RE = re.compile(
    r'^VALIDITY:\s*(\d{1,2}[A-Z]{3}\d{2})\s*-\s*(UFN|PERM)\s*$', re.MULTILINE
)
# 01-FEB-26 1130 - 28-FEB-26 1430
VALIDITY_RANGE_RE = re.compile(
    r'(\d{2}-[A-Z]{3}-\d{2}\s+\d{4})\s*-\s*(\d{2}-[A-Z]{3}-\d{2}\s+\d{4})'
)

SCHEDULE_RE = re.compile(r'^(\d{4})\s*-\s*(\d{4})$')


def _parse_id(text: str, warnings: List[str]) -> Tuple[str, IdType]:
    for pattern, id_type in ID_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1), id_type
    warnings.append("Could not detect NOTAM id.")
    return "UNKNOWN", IdType.UNKNOWN


def _open_ended(label: str) -> Callable[[re.Match, List[str]], Validity]:
    def handler(match: re.Match, warnings: List[str]) -> Validity:
        start = parse_dmonyy(match.group(1))
        if start is None:
            warnings.append(f"Could not parse VALIDITY start date ({label}).")
        return Validity(
            start_utc=start,
            end_utc=None,
            end_kind=EndKind(match.group(2)),
            raw=match.group(0).strip(),
        )
    return handler


def _bounded(match: re.Match, warnings: List[str]) -> Validity:
    start = parse_dd_mon_yy_hhmm(match.group(1))
    end = parse_dd_mon_yy_hhmm(match.group(2))
    if start is None or end is None:
        warnings.append("Could not parse DD-MON-YY HHMM validity range.")
    return Validity(
        start_utc=start,
        end_utc=end,
        end_kind=EndKind.UNKNOWN,
        raw=match.group(0).strip(),
    )


# First match wins; later patterns are only tried when earlier ones miss.
VALIDITY_MATCHERS = (
    (VALIDITY_TILL_RE, _open_ended("TILL")),
    (VALIDITY_DASH_RE, _open_ended("dash")),
    (VALIDITY_RANGE_RE, _bounded),
)


def _parse_validity(text: str, warnings: List[str]) -> Validity:
    for pattern, handler in VALIDITY_MATCHERS:
        match = pattern.search(text)
        if match:
            return handler(match, warnings)
    warnings.append("Validity not found in block (kept as unknown).")
    return Validity()


def _valid_hhmm(hhmm: str) -> bool:
    return int(hhmm[:2]) <= 23 and int(hhmm[2:]) <= 59


def _parse_schedule(line: str, warnings: List[str]) -> Optional[Schedule]:
    match = SCHEDULE_RE.match(line)
    if not match:
        return None
    start, end = match.group(1), match.group(2)
    if not (_valid_hhmm(start) and _valid_hhmm(end)):
        warnings.append(f"Schedule '{line}' has an out-of-range time of day.")
    # Both tokens are exactly four digits, so string order equals time order.
    return Schedule(
        start_hhmm=start,
        end_hhmm=end,
        spans_midnight=end < start,
        raw=line,
    )


def parse_notam_block(airport: str, block_text: str) -> NotamRecord:
    """
    Parse one bulletin record into a NotamRecord.

    Args:
        airport: ICAO code of the bulletin section the record belongs to
        block_text: Record text, starting with its identifier line

    Returns:
        NotamRecord; fields that could not be read are described in
        ``parse_warnings`` instead of raising
    """
    warnings: List[str] = []
    text = block_text.strip()

    id_raw, id_type = _parse_id(text, warnings)
    validity = _parse_validity(text, warnings)

    schedules = []
    for line in text.splitlines():
        schedule = _parse_schedule(line.strip(), warnings)
        if schedule:
            schedules.append(schedule)

    if warnings:
        logger.debug(f"{airport} {id_raw}: {'; '.join(warnings)}")

    return NotamRecord(
        airport=airport,
        id_raw=id_raw,
        id_type=id_type,
        text=text,
        validity=validity,
        schedules=tuple(schedules),
        parse_warnings=tuple(warnings),
    )
