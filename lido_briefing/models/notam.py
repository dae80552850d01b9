"""NOTAM bulletin domain model."""
from datetime import datetime
from typing import Optional, Dict, Any, List, Tuple
from dataclasses import dataclass, field
from enum import Enum


class IdType(Enum):
    """Kind of bulletin record, from its identifier line."""
    NOTAM = "notam"      # 1A455/26
    AIP_SUP = "aip_sup"  # AIP SUP SX0079/25
    AIC = "aic"          # AIC AX0002/24
    UNKNOWN = "unknown"


class EndKind(Enum):
    """How the end of a validity period was expressed."""
    UFN = "UFN"          # until further notice
    PERM = "PERM"
    UNKNOWN = "UNKNOWN"  # explicit end date, or nothing parsed


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Validity:
    """
    Validity period of a bulletin record.

    ``end_utc`` of None means open ended (valid from ``start_utc`` onward).
    ``raw`` of None means no validity pattern matched the block at all.
    """
    start_utc: Optional[datetime] = None
    end_utc: Optional[datetime] = None
    end_kind: EndKind = EndKind.UNKNOWN
    raw: Optional[str] = None

    @property
    def is_known(self) -> bool:
        """Validity can be used for overlap checks."""
        return bool(self.raw and self.start_utc)

    @property
    def is_open_ended(self) -> bool:
        return self.end_utc is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start_utc': _iso(self.start_utc),
            'end_utc': _iso(self.end_utc),
            'end_kind': self.end_kind.value,
            'raw': self.raw,
        }


@dataclass(frozen=True)
class Schedule:
    """Recurring daily active window, e.g. ``1500-0230``."""
    start_hhmm: str
    end_hhmm: str
    spans_midnight: bool
    raw: str

    def contains(self, hhmm: str) -> bool:
        """
        Check if a time of day (HHMM) falls inside this schedule.

        Both bounds are inclusive. Comparison is on zero-padded 4-char
        strings, which orders the same as numeric HHMM.
        """
        if not self.spans_midnight:
            return self.start_hhmm <= hhmm <= self.end_hhmm
        return hhmm >= self.start_hhmm or hhmm <= self.end_hhmm

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start_hhmm': self.start_hhmm,
            'end_hhmm': self.end_hhmm,
            'spans_midnight': self.spans_midnight,
            'raw': self.raw,
        }


@dataclass(frozen=True)
class NotamRecord:
    """One record of a LIDO NOTAM bulletin, tagged with its airport section."""

    airport: str
    id_raw: str
    id_type: IdType
    text: str
    validity: Validity = field(default_factory=Validity)
    schedules: Tuple[Schedule, ...] = ()
    parse_warnings: Tuple[str, ...] = ()

    @property
    def is_scheduled(self) -> bool:
        return bool(self.schedules)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for JSON export."""
        return {
            'airport': self.airport,
            'id_raw': self.id_raw,
            'id_type': self.id_type.value,
            'text': self.text,
            'validity': self.validity.to_dict(),
            'schedules': [s.to_dict() for s in self.schedules],
            'parse_warnings': list(self.parse_warnings),
        }

    def summary(self) -> str:
        """Generate human-readable summary of the record."""
        lines = []

        header = f"{self.id_raw} | {self.airport} ({self.id_type.value})"
        lines.append(header)
        lines.append("=" * len(header))

        valid_str = "Valid: "
        if self.validity.start_utc:
            valid_str += self.validity.start_utc.strftime('%Y-%m-%d %H:%M UTC')
            if self.validity.end_utc:
                valid_str += f" -> {self.validity.end_utc.strftime('%Y-%m-%d %H:%M UTC')}"
            else:
                valid_str += f" -> {self.validity.end_kind.value}"
        else:
            valid_str += "UNKNOWN"
        lines.append(valid_str)

        if self.schedules:
            lines.append(f"Schedule: {', '.join(s.raw for s in self.schedules)}")

        body_preview = self.text.replace('\n', ' ').strip()
        if len(body_preview) > 200:
            body_preview = body_preview[:200] + "..."
        lines.append(f"\n{body_preview}")

        for warning in self.parse_warnings:
            lines.append(f"! {warning}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        """Compact single-line representation."""
        flags = []
        if not self.validity.is_known:
            flags.append("NOVAL")
        if self.validity.is_open_ended and self.validity.is_known:
            flags.append(self.validity.end_kind.value)
        if self.schedules:
            flags.append("SCHED")

        flag_str = f" [{','.join(flags)}]" if flags else ""

        return f"<NotamRecord {self.id_raw} {self.airport}{flag_str}>"


@dataclass
class ActiveResult:
    """Relevance verdicts for one record against the flight's airport windows."""
    record: NotamRecord
    dep_active: bool = False
    dest_active: bool = False
    altn_active: Optional[Dict[str, bool]] = None
    reasons: List[str] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        """Active for at least one airport of the flight."""
        return (
            self.dep_active
            or self.dest_active
            or any((self.altn_active or {}).values())
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'record': self.record.to_dict(),
            'dep_active': self.dep_active,
            'dest_active': self.dest_active,
            'altn_active': dict(self.altn_active) if self.altn_active is not None else None,
            'reasons': list(self.reasons),
        }
