"""Flight time and airport window models."""
from datetime import datetime
from typing import Optional, Dict, Any, Tuple
from dataclasses import dataclass


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class FlightTimes:
    """Times of day (HHMM, UTC) read from the OFP, not yet tied to a date."""
    off_block: Optional[str] = None
    takeoff: Optional[str] = None
    landing: Optional[str] = None
    in_: Optional[str] = None


@dataclass(frozen=True)
class FlightTimesUTC:
    """Flight times resolved to UTC instants against the flight date."""
    off_block_utc: Optional[datetime] = None
    takeoff_utc: Optional[datetime] = None
    landing_utc: Optional[datetime] = None
    in_utc: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'off_block_utc': _iso(self.off_block_utc),
            'takeoff_utc': _iso(self.takeoff_utc),
            'landing_utc': _iso(self.landing_utc),
            'in_utc': _iso(self.in_utc),
        }


@dataclass(frozen=True)
class AirportWindow:
    """Reference instant and relevance window for one airport."""
    icao: str
    ref_utc: datetime
    window_start_utc: datetime
    window_end_utc: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'icao': self.icao,
            'ref_utc': _iso(self.ref_utc),
            'window_start_utc': _iso(self.window_start_utc),
            'window_end_utc': _iso(self.window_end_utc),
        }


@dataclass(frozen=True)
class AirportRefTimes:
    """Windows for departure, destination and (optionally) alternates."""
    dep: AirportWindow
    dest: AirportWindow
    altn: Optional[Tuple[AirportWindow, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'dep': self.dep.to_dict(),
            'dest': self.dest.to_dict(),
            'altn': [a.to_dict() for a in self.altn] if self.altn else None,
        }
