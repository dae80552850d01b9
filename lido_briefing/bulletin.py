"""LIDO NOTAM bulletin extraction and segmentation."""
import re
import logging
from enum import Enum
from typing import List, Optional, Tuple

from lido_briefing.models.notam import NotamRecord
from lido_briefing.parser import parse_notam_block

logger = logging.getLogger(__name__)

BULLETIN_START_MARKER = "LIDO-NOTAM-BULLETIN"

# Sections that follow the bulletin in the OFP
BULLETIN_STOP_MARKERS = (
    "\nATC FPL",
    "\nATC FLIGHT PLAN",
    "\nFLIGHT DESTINATION LOG",
    "\nEET",
    "\nPERFORMANCE DATA",
    "\nRVSM ALT CHECK",
    "\nFUEL STATISTICS",
)

AIRPORT_HEADER_RE = re.compile(r'^([A-Z]{4})(?:\s|$)')
NOT_AIRPORTS = frozenset({'LIDO', 'VALID', 'VALIDITY'})

# 1A455/26, AIP SUP SX0079/25, AIC AX0002/24
RECORD_START_RES = (
    re.compile(r'^AIP\s+SUP\b'),
    re.compile(r'^AIC\b'),
    re.compile(r'^[A-Z0-9]{1,3}\d{1,5}/\d{2}\b'),
)


class SegmentState(Enum):
    """Whether the segmenter is currently collecting a record."""
    IDLE = "idle"
    IN_RECORD = "in_record"


def extract_lido_notam_bulletin(ofp_text: str) -> Optional[str]:
    """
    Cut the NOTAM bulletin out of the OFP text.

    Returns:
        Text from the bulletin marker up to the next known OFP section
        (or end of text), or None if the OFP has no bulletin
    """
    idx = ofp_text.find(BULLETIN_START_MARKER)
    if idx == -1:
        logger.info("No LIDO NOTAM bulletin in OFP text")
        return None
    sub = ofp_text[idx:]

    end = len(sub)
    for marker in BULLETIN_STOP_MARKERS:
        j = sub.find(marker)
        if j > 0:
            end = min(end, j)

    return sub[:end]


def airport_header(line: str) -> Optional[str]:
    """
    Return the ICAO code if the line is a bulletin airport section header.

    The first word must be four uppercase letters ("OMAA" or
    "OMAA ABU DHABI INTL").
    """
    match = AIRPORT_HEADER_RE.match(line.strip())
    if match and match.group(1) not in NOT_AIRPORTS:
        return match.group(1)
    return None


def is_record_start(line: str) -> bool:
    """Check if a line opens a new NOTAM / AIP SUP / AIC record."""
    token = line.strip()
    return any(pattern.match(token) for pattern in RECORD_START_RES)


def segment_bulletin(bulletin_text: str) -> List[Tuple[str, str]]:
    """
    Split bulletin text into per-record chunks.

    Airport header lines switch the current section and are dropped. Each
    record runs from its start line up to the next start line and keeps the
    airport that was current when it started. Lines outside any record are
    dropped.

    Returns:
        List of (airport, record_text) tuples in bulletin order
    """
    chunks = []
    state = SegmentState.IDLE
    current_airport = None
    buf_airport = None
    buf: List[str] = []

    def flush():
        text = "\n".join(buf).strip()
        if buf_airport and text:
            chunks.append((buf_airport, text))

    for line in bulletin_text.splitlines():
        airport = airport_header(line)
        if airport:
            logger.debug(f"Bulletin section {airport}")
            current_airport = airport
            continue

        if current_airport is None:
            continue

        if is_record_start(line):
            if state is SegmentState.IN_RECORD:
                flush()
            buf_airport = current_airport
            buf = [line]
            state = SegmentState.IN_RECORD
        elif state is SegmentState.IN_RECORD:
            buf.append(line)

    if state is SegmentState.IN_RECORD:
        flush()

    return chunks


def parse_lido_notams(bulletin_text: str) -> List[NotamRecord]:
    """
    Parse a LIDO NOTAM bulletin into records.

    Args:
        bulletin_text: Bulletin text, e.g. from extract_lido_notam_bulletin

    Returns:
        One NotamRecord per record in the bulletin
    """
    records = [parse_notam_block(airport, text) for airport, text in segment_bulletin(bulletin_text)]
    logger.info(f"Parsed {len(records)} bulletin record(s)")
    return records
