"""OFP briefing pipeline: NOTAM relevance and airport weather for one flight."""
import time
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from lido_briefing.bulletin import extract_lido_notam_bulletin, parse_lido_notams
from lido_briefing.categorize import bucket_active_notams
from lido_briefing.config import Config
from lido_briefing.flight_header import (
    extract_alternate_icaos, extract_dep_dest_icao, extract_times_from_ofp
)
from lido_briefing.models.flight import AirportRefTimes, FlightTimesUTC
from lido_briefing.models.notam import ActiveResult, NotamRecord
from lido_briefing.models.weather import WeatherBlock
from lido_briefing.relevance import build_airport_ref_times, filter_active_notams
from lido_briefing.timeutils import extract_flight_date_utc, materialize_times
from lido_briefing.weather import extract_weather_blocks

logger = logging.getLogger(__name__)


@dataclass
class BriefingResult:
    """Everything the briefing core derives from one OFP."""
    flight_date_utc: Optional[datetime] = None
    dep_icao: Optional[str] = None
    dest_icao: Optional[str] = None
    alt_icaos: List[str] = field(default_factory=list)
    times: FlightTimesUTC = field(default_factory=FlightTimesUTC)
    refs: Optional[AirportRefTimes] = None
    records: List[NotamRecord] = field(default_factory=list)
    active: List[ActiveResult] = field(default_factory=list)
    weather: List[WeatherBlock] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def has_bulletin(self) -> bool:
        return bool(self.records)

    def buckets(self) -> Dict[str, Dict[str, List[NotamRecord]]]:
        return bucket_active_notams(self.active)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for JSON export."""
        buckets = self.buckets()
        return {
            'flight_date_utc': self.flight_date_utc.date().isoformat() if self.flight_date_utc else None,
            'dep_icao': self.dep_icao,
            'dest_icao': self.dest_icao,
            'alt_icaos': list(self.alt_icaos),
            'times': self.times.to_dict(),
            'refs': self.refs.to_dict() if self.refs else None,
            'notams': [r.to_dict() for r in self.active] if self.refs
            else [{'record': r.to_dict()} for r in self.records],
            'buckets': {
                panel: {cat: [r.id_raw for r in recs] for cat, recs in cats.items()}
                for panel, cats in buckets.items()
            },
            'weather': [w.to_dict() for w in self.weather],
            'warnings': list(self.warnings),
        }


class OfpAnalyzer:
    """Runs the briefing pipeline over pre-extracted OFP text."""

    def __init__(self, altn_buffer_minutes: Optional[int] = None):
        self.config = Config()
        self.altn_buffer_minutes = (
            self.config.ALTN_BUFFER_MINUTES if altn_buffer_minutes is None
            else altn_buffer_minutes
        )

    def analyze(self, ofp_text: str, alt_icaos: Optional[Sequence[str]] = None) -> BriefingResult:
        """
        Analyze one OFP.

        Args:
            ofp_text: Full OFP text from the PDF-to-text layer
            alt_icaos: Flight plan alternates; read from the first
                "ALTN XXXX" in the OFP when not given

        Returns:
            BriefingResult. Missing inputs (no flight date, no route, no
            block times) are reported in ``warnings``; NOTAM records are
            still returned, just without relevance verdicts.
        """
        start_time = time.time()
        result = BriefingResult()

        result.flight_date_utc = extract_flight_date_utc(ofp_text)
        result.dep_icao, result.dest_icao = extract_dep_dest_icao(ofp_text)
        result.alt_icaos = list(alt_icaos) if alt_icaos is not None else extract_alternate_icaos(ofp_text)

        if result.flight_date_utc is None:
            result.warnings.append("Flight date not found; times cannot be resolved.")
        else:
            result.times = materialize_times(result.flight_date_utc, extract_times_from_ofp(ofp_text))

        if not (result.dep_icao and result.dest_icao):
            result.warnings.append("Departure/destination ICAO not found.")
        if result.times.off_block_utc is None or result.times.landing_utc is None:
            result.warnings.append("OFF BLOCK or LANDING time not found.")

        if not result.warnings:
            result.refs = build_airport_ref_times(
                dep_icao=result.dep_icao,
                dest_icao=result.dest_icao,
                off_block_utc=result.times.off_block_utc,
                landing_utc=result.times.landing_utc,
                alt_icaos=result.alt_icaos,
                altn_buffer_minutes=self.altn_buffer_minutes,
            )

        bulletin = extract_lido_notam_bulletin(ofp_text)
        if bulletin is not None:
            result.records = parse_lido_notams(bulletin)
            if result.refs:
                result.active = filter_active_notams(result.records, result.refs)

        result.weather = extract_weather_blocks(ofp_text)

        for warning in result.warnings:
            logger.warning(warning)

        elapsed = time.time() - start_time
        logger.info(
            f"Analysis complete: {result.dep_icao or '????'}-{result.dest_icao or '????'} | "
            f"{len(result.records)} NOTAM record(s), "
            f"{sum(1 for a in result.active if a.is_active)} relevant, "
            f"{len(result.weather)} weather block(s) | {elapsed:.3f}s"
        )
        return result
