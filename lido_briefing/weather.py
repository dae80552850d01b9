"""DEP/ARR/ALTN weather block extraction from LIDO OFP text."""
import re
import logging
from enum import Enum
from typing import List, Optional, Tuple

from lido_briefing.models.weather import WeatherBlock, WeatherKind

logger = logging.getLogger(__name__)

HEADER_PATTERNS: Tuple[Tuple[WeatherKind, re.Pattern], ...] = (
    (WeatherKind.DEP, re.compile(r'^[ \t]*DEPARTURE\s+AIRPORT:[ \t]*$', re.MULTILINE)),
    (WeatherKind.ARR, re.compile(r'^[ \t]*ARRIVAL\s+AIRPORT:[ \t]*$', re.MULTILINE)),
    (WeatherKind.ALTN, re.compile(r'^[ \t]*ALTERNATE\s+AIRPORT:[ \t]*$', re.MULTILINE)),
    # LIDO variants
    (WeatherKind.ALTN, re.compile(r'^[ \t]*ALTN\s+AIRPORT:[ \t]*$', re.MULTILINE)),
    (WeatherKind.ALTN, re.compile(r'^[ \t]*ALTERNATE\(S\)\s+AIRPORT:[ \t]*$', re.MULTILINE)),
)

# Major OFP sections that end a weather block
STOP_MARKERS = (
    "LIDO-NOTAM-BULLETIN",
    "ATC FPL",
    "ATC FLIGHT PLAN",
    "OPERATIONAL FLIGHT PLAN",
    "ROUTE",
    "FUEL",
    "ETOPS",
    "EET",
    "PERFORMANCE",
    "NOTAM",
    "SIGWX",
    "WIND/TEMP",
    "WINDS/TEMPS",
    "RVSM",
)

STATION_LINE_RE = re.compile(r'^([A-Z]{4})/[A-Z0-9]{3}\s*(.*)$')
BARE_STATION_LINE_RE = re.compile(r'^([A-Z]{4})\b\s*(.*)$')

METAR_TOKEN_RE = re.compile(r'\bMETAR\b')
METAR_HINT_RE = re.compile(r'\bAUTO\b|\bQ\d{4}\b')
TAF_HINT_RE = re.compile(r'\bTAF\b|\bBECMG\b|\bTEMPO\b|\bFM\d{4}\b|\bPROB\d{2}\b')
DUPLICATE_LABEL_RE = re.compile(r'\b(METAR|TAF)\s+\1\b')


class WxMode(Enum):
    """Classifier state while walking the lines of a weather block."""
    METAR = "METAR"
    TAF = "TAF"
    OTHER = "OTHER"


def _index_of_any(haystack: str, needles: Tuple[str, ...], start: int) -> int:
    best = -1
    for needle in needles:
        i = haystack.find(needle, start)
        if i != -1 and (best == -1 or i < best):
            best = i
    return best


def extract_weather_blocks(ofp_text: str) -> List[WeatherBlock]:
    """
    Extract all DEP/ARR/ALTN weather blocks from the OFP text.

    Each block runs from its header to the next header or the next major
    section marker, whichever comes first.

    Returns:
        Parsed blocks in document order
    """
    hits = []
    for kind, pattern in HEADER_PATTERNS:
        for match in pattern.finditer(ofp_text):
            hits.append((match.start(), match.end(), kind))

    if not hits:
        logger.info("No weather sections in OFP text")
        return []

    hits.sort(key=lambda h: h[0])

    blocks = []
    for k, (_, body_start, kind) in enumerate(hits):
        end = len(ofp_text)
        if k + 1 < len(hits):
            end = min(end, hits[k + 1][0])
        marker = _index_of_any(ofp_text, STOP_MARKERS, body_start)
        if marker != -1:
            end = min(end, marker)

        body = ofp_text[body_start:end].strip()
        if not body:
            logger.debug(f"Empty {kind.value} weather block skipped")
            continue

        blocks.append(parse_single_weather_block(kind, body))

    logger.info(f"Extracted {len(blocks)} weather block(s)")
    return blocks


def _looks_like_metar(line: str, icao: str) -> bool:
    return bool(
        METAR_TOKEN_RE.search(line)
        or re.match(rf'^{re.escape(icao)}\s+\d{{6}}Z\b', line)
        or METAR_HINT_RE.search(line)
    )


def _looks_like_taf(line: str) -> bool:
    return bool(TAF_HINT_RE.search(line))


def classify_weather_line(line: str, mode: WxMode, icao: str) -> WxMode:
    """
    Return the classifier mode after reading one line.

    Explicit METAR/SPECI/TAF labels always set the mode. Without a label,
    an unclassified line is tested for METAR then TAF hints, and a METAR
    run switches to TAF on TAF-only groups (METAR followed by TAF without
    a label).
    """
    upper = line.upper()

    if upper.startswith(("METAR ", "SPECI ")):
        mode = WxMode.METAR
    if upper.startswith(("TAF ", "TAF AMD")):
        mode = WxMode.TAF

    if mode is WxMode.OTHER:
        if _looks_like_metar(upper, icao):
            return WxMode.METAR
        if _looks_like_taf(upper):
            return WxMode.TAF
    elif mode is WxMode.METAR:
        if _looks_like_taf(upper) and not METAR_TOKEN_RE.search(upper):
            return WxMode.TAF
    return mode


def _cleanup(text: str) -> str:
    text = re.sub(r'\s+', ' ', text)
    return DUPLICATE_LABEL_RE.sub(r'\1', text).strip()


def _station(first_line: str) -> Optional[Tuple[str, Optional[str]]]:
    for pattern in (STATION_LINE_RE, BARE_STATION_LINE_RE):
        match = pattern.match(first_line)
        if match:
            return match.group(1), match.group(2).strip() or None
    return None


def parse_single_weather_block(kind: WeatherKind, raw_body: str) -> WeatherBlock:
    """
    Parse one weather block body.

    The first line normally names the station ("OMAA/AUH ABU DHABI INTL" or
    "OMAA ABU DHABI"); the remaining lines are split into METAR, TAF and
    unclassified remarks.
    """
    warnings = []
    lines = [l.strip() for l in raw_body.splitlines() if l.strip()]

    icao = "UNKN"
    name = None
    if lines:
        station = _station(lines[0])
        if station:
            icao, name = station
            lines = lines[1:]
        else:
            warnings.append("Could not parse airport identifier line in WX block.")

    metar_lines = []
    taf_lines = []
    remarks = []

    mode = WxMode.OTHER
    for line in lines:
        mode = classify_weather_line(line, mode, icao)
        if mode is WxMode.METAR:
            metar_lines.append(line)
        elif mode is WxMode.TAF:
            taf_lines.append(line)
        else:
            remarks.append(line)

    metar = _cleanup(" ".join(metar_lines)) if metar_lines else None
    taf = _cleanup(" ".join(taf_lines)) if taf_lines else None

    if not metar and not taf:
        warnings.append("No METAR/TAF detected (kept as raw).")
        logger.debug(f"{kind.value} {icao}: no METAR/TAF found")

    return WeatherBlock(
        kind=kind,
        icao=icao,
        name=name,
        raw=raw_body,
        metar=metar,
        taf=taf,
        remarks=tuple(remarks),
        parse_warnings=tuple(warnings),
    )
