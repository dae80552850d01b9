"""Airport relevance windows and active-NOTAM filtering."""
import logging
from datetime import datetime, timezone
from typing import Iterable, List, NamedTuple, Optional, Sequence

from lido_briefing.config import Config
from lido_briefing.models.flight import AirportRefTimes, AirportWindow
from lido_briefing.models.notam import ActiveResult, NotamRecord, Validity
from lido_briefing.timeutils import add_minutes, hhmm_from_utc

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

class Verdict(NamedTuple):
    ok: bool
    reason: str


def _window(icao: str, ref: datetime, before: int, after: int) -> AirportWindow:
    return AirportWindow(
        icao=icao,
        ref_utc=ref,
        window_start_utc=add_minutes(ref, -before),
        window_end_utc=add_minutes(ref, after),
    )


def build_airport_ref_times(
    dep_icao: str,
    dest_icao: str,
    off_block_utc: datetime,
    landing_utc: datetime,
    alt_icaos: Optional[Sequence[str]] = None,
    altn_buffer_minutes: Optional[int] = None,
) -> AirportRefTimes:
    """
    Build the relevance windows for departure, destination and alternates.

    Args:
        dep_icao: Departure ICAO, referenced at off-block
        dest_icao: Destination ICAO, referenced at landing
        off_block_utc: Materialized off-block instant
        landing_utc: Materialized landing instant
        alt_icaos: Flight plan alternates
        altn_buffer_minutes: Minutes after landing used as the alternate
            reference time (defaults to Config.ALTN_BUFFER_MINUTES)

    Returns:
        AirportRefTimes; ``altn`` is None when there are no alternates
    """
    buffer = Config.ALTN_BUFFER_MINUTES if altn_buffer_minutes is None else altn_buffer_minutes

    dep = _window(dep_icao, off_block_utc, Config.DEP_WINDOW_BEFORE, Config.DEP_WINDOW_AFTER)
    dest = _window(dest_icao, landing_utc, Config.DEST_WINDOW_BEFORE, Config.DEST_WINDOW_AFTER)

    altn_ref = add_minutes(landing_utc, buffer)
    altn = tuple(
        _window(icao, altn_ref, Config.ALTN_WINDOW_BEFORE, Config.ALTN_WINDOW_AFTER)
        for icao in (alt_icaos or [])
    )

    return AirportRefTimes(dep=dep, dest=dest, altn=altn or None)


def overlaps(validity: Validity, window_start: datetime, window_end: datetime) -> bool:
    """
    Check a validity period against the half-open window [start, end).

    An open-ended validity overlaps any window ending after its start. A
    missing start counts as the epoch.
    """
    start = validity.start_utc or EPOCH
    if validity.end_utc is None:
        return start < window_end
    return start < window_end and validity.end_utc > window_start


def is_active_for(
    record: NotamRecord,
    airport: str,
    ref_utc: datetime,
    window_start: datetime,
    window_end: datetime,
) -> Verdict:
    """
    Decide whether a record is relevant for one airport window.

    Records whose validity could not be read are always kept. Scheduled
    records must also be active at the reference time of day.
    """
    if record.airport != airport:
        return Verdict(False, "different airport")

    if not record.validity.is_known:
        return Verdict(True, "validity unknown -> kept")

    if not overlaps(record.validity, window_start, window_end):
        return Verdict(False, "outside validity window")

    if not record.schedules:
        return Verdict(True, "validity overlap")

    hhmm = hhmm_from_utc(ref_utc)
    if any(schedule.contains(hhmm) for schedule in record.schedules):
        return Verdict(True, "validity+schedule")
    return Verdict(False, "schedule not active at ref")


def _check(record: NotamRecord, window: AirportWindow) -> Verdict:
    return is_active_for(
        record, window.icao, window.ref_utc,
        window.window_start_utc, window.window_end_utc
    )


def filter_active_notams(records: Iterable[NotamRecord], refs: AirportRefTimes) -> List[ActiveResult]:
    """
    Evaluate every record against the departure, destination and alternates.

    Returns:
        One ActiveResult per record, in input order
    """
    results = []
    for record in records:
        reasons = []
        dep = _check(record, refs.dep)
        dest = _check(record, refs.dest)

        if dep.ok:
            reasons.append(f"DEP: {dep.reason}")
        if dest.ok:
            reasons.append(f"DEST: {dest.reason}")

        altn_active = None
        if refs.altn:
            altn_active = {}
            for window in refs.altn:
                verdict = _check(record, window)
                altn_active[window.icao] = verdict.ok
                if verdict.ok:
                    reasons.append(f"ALTN {window.icao}: {verdict.reason}")

        results.append(ActiveResult(
            record=record,
            dep_active=dep.ok,
            dest_active=dest.ok,
            altn_active=altn_active,
            reasons=reasons,
        ))

    logger.info(
        f"{sum(1 for r in results if r.is_active)} of {len(results)} record(s) "
        f"relevant for {refs.dep.icao}-{refs.dest.icao}"
    )
    return results
