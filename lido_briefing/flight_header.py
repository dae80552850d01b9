"""Flight header extraction: route ICAO codes, block times, alternates."""
import re
import logging
from enum import Enum
from typing import List, Optional, Tuple

from lido_briefing.models.flight import FlightTimes
from lido_briefing.timeutils import parse_hhmmz

logger = logging.getLogger(__name__)

# Route header: "LOWW/VIE OMAA/AUH"
DEP_DEST_RE = re.compile(r'\b([A-Z]{4})/[A-Z]{3}\s+([A-Z]{4})/[A-Z]{3}\b')
IN_LINE_RE = re.compile(r'^\s*IN\s+')
ALTN_RE = re.compile(r'\bALTN\s+([A-Z]{4})\b')


class TimeField(Enum):
    """Which flight time a line of the TIMES block carries."""
    OFF_BLOCK = "off_block"
    TAKEOFF = "takeoff"
    LANDING = "landing"
    IN = "in_"


def extract_dep_dest_icao(ofp_text: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Extract departure and destination ICAO codes from the route header.

    The first "XXXX/YYY XXXX/YYY" pair in the document wins; a preamble
    containing such a pair would be picked up instead of the route.

    Returns:
        Tuple of (dep, dest), both None if no pair is found
    """
    match = DEP_DEST_RE.search(ofp_text)
    if not match:
        logger.debug("No ICAO/IATA route pair found")
        return None, None
    return match.group(1), match.group(2)


def classify_time_line(line: str) -> Optional[TimeField]:
    """
    Decide which flight time a line carries.

    Keywords are checked in a fixed order and the first hit wins, so a line
    mentioning both OFF BLOCK and LANDING counts as OFF BLOCK.
    """
    if 'OFF BLOCK' in line:
        return TimeField.OFF_BLOCK
    if 'TAKEOFF' in line:
        return TimeField.TAKEOFF
    if 'LANDING' in line:
        return TimeField.LANDING
    if IN_LINE_RE.match(line):
        return TimeField.IN
    return None


def extract_times_from_ofp(ofp_text: str) -> FlightTimes:
    """
    Read OFF BLOCK / TAKEOFF / LANDING / IN times from the OFP.

    Only the first Z time of each line is used. A later line for the same
    field overrides an earlier one.
    """
    found = {}
    for line in ofp_text.splitlines():
        time_field = classify_time_line(line)
        if time_field is None:
            continue
        hhmm = parse_hhmmz(line)
        if hhmm:
            found[time_field.value] = hhmm
            logger.debug(f"{time_field.name} time {hhmm}Z from line: {line.strip()[:60]}")
    return FlightTimes(**found)


def extract_alternate_icaos(ofp_text: str) -> List[str]:
    """
    Read the flight plan alternate from the first "ALTN XXXX" mention.

    Later ALTN mentions belong to other OFP sections and are ignored.

    Returns:
        A one-element list with the alternate ICAO, or an empty list
    """
    match = ALTN_RE.search(ofp_text)
    if not match:
        logger.debug("No ALTN line in OFP text")
        return []
    return [match.group(1)]
