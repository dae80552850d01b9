"""Bucketing of relevant NOTAMs for the destination/alternate briefing panels."""
import re
import logging
from enum import Enum
from typing import Dict, Iterable, List

from lido_briefing.config import Config
from lido_briefing.models.notam import ActiveResult, NotamRecord

logger = logging.getLogger(__name__)


class NotamCategory(Enum):
    """Briefing panel a NOTAM is shown under."""
    ILS = "ils"
    RUNWAY = "runway"
    OTHER = "other"


def _has_keyword(text_upper: str, keywords: Iterable[str]) -> bool:
    for keyword in keywords:
        # Word boundaries so that e.g. "GP" does not hit "GPS"
        pattern = r'\b' + re.escape(keyword) + r'\b'
        if re.search(pattern, text_upper):
            return True
    return False


def is_skipped(text: str) -> bool:
    """Check if a NOTAM is excluded from the briefing (laser/light beam activity)."""
    return _has_keyword(text.upper(), Config.SKIP_KEYWORDS)


def categorize_notam(text: str, alternate: bool = False) -> NotamCategory:
    """
    Assign a NOTAM text to a briefing category.

    Approach/ILS keywords are checked before runway keywords, so an ILS
    NOTAM mentioning its runway is filed under ILS. Alternates use the
    shorter Config.ALTN_ILS_KEYWORDS list.
    """
    upper = text.upper()
    ils_keywords = Config.ALTN_ILS_KEYWORDS if alternate else Config.ILS_KEYWORDS
    if _has_keyword(upper, ils_keywords):
        return NotamCategory.ILS
    if _has_keyword(upper, Config.RUNWAY_KEYWORDS):
        return NotamCategory.RUNWAY
    return NotamCategory.OTHER


def _empty_buckets() -> Dict[str, List[NotamRecord]]:
    return {category.value: [] for category in NotamCategory}


def bucket_active_notams(results: Iterable[ActiveResult]) -> Dict[str, Dict[str, List[NotamRecord]]]:
    """
    Group active records into destination and alternate panels.

    Returns:
        {'destination': {'ils': [...], 'runway': [...], 'other': [...]},
         'alternate': {...}}
    """
    buckets = {
        'destination': _empty_buckets(),
        'alternate': _empty_buckets(),
    }
    seen = set()

    for result in results:
        record = result.record
        key = (record.airport, record.id_raw, record.text)
        if key in seen:
            continue

        if is_skipped(record.text):
            logger.debug(f"Skipping {record.id_raw}: laser/light beam NOTAM")
            continue

        if result.dest_active:
            category = categorize_notam(record.text).value
            buckets['destination'][category].append(record)
            seen.add(key)
        if any((result.altn_active or {}).values()):
            category = categorize_notam(record.text, alternate=True).value
            buckets['alternate'][category].append(record)
            seen.add(key)

    return buckets
