"""Airport weather block model."""
from typing import Optional, Dict, Any, Tuple
from dataclasses import dataclass
from enum import Enum


class WeatherKind(Enum):
    """Which OFP weather section a block came from."""
    DEP = "DEP"
    ARR = "ARR"
    ALTN = "ALTN"


@dataclass(frozen=True)
class WeatherBlock:
    """METAR/TAF extracted from one DEP/ARR/ALTN section of the OFP."""
    kind: WeatherKind
    icao: str
    raw: str
    name: Optional[str] = None
    metar: Optional[str] = None
    taf: Optional[str] = None
    remarks: Tuple[str, ...] = ()
    parse_warnings: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'icao': self.icao,
            'name': self.name,
            'raw': self.raw,
            'metar': self.metar,
            'taf': self.taf,
            'remarks': list(self.remarks),
            'parse_warnings': list(self.parse_warnings),
        }
