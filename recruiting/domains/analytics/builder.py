"""Report builder — validates a report request and dispatches it.

    build("application_funnel", DateRange("2024-01-01", "2024-01-31"), snapshot)

The request is checked before any aggregation runs: an unknown report
type or an inverted window raises immediately.  Applications are then
cut to the window on ``application_date`` and handed to the aggregator.
"""

import logging
from collections.abc import Mapping

import pandas as pd

from recruiting.domains.analytics.funnel import application_funnel
from recruiting.domains.analytics.job_performance import job_performance
from recruiting.domains.analytics.metrics import date_window_filter
from recruiting.domains.analytics.models import DateRange, ReportResult, ReportType, Snapshot, parse_report_type
from recruiting.domains.analytics.sources import source_distribution
from recruiting.domains.analytics.time_to_hire import DEFAULT_PRECISION, time_to_hire
from recruiting.errors import InvalidRangeError, NotFoundError
from recruiting.utils.validators import find_orphans

logger = logging.getLogger(__name__)

# (snapshot frame, key, entity) each report needs every filtered application to resolve
_REFERENCES: dict[ReportType, tuple[tuple[str, str, str], ...]] = {
    ReportType.CANDIDATE_SOURCES: (("candidates", "candidate_id", "Candidate"),),
    ReportType.APPLICATION_FUNNEL: (),
    ReportType.TIME_TO_HIRE: (("jobs", "job_id", "Job"),),
    ReportType.JOB_PERFORMANCE: (("jobs", "job_id", "Job"),),
}


def _coerce_range(date_range: object) -> DateRange:
    match date_range:
        case DateRange():
            return date_range
        case {"start": start, "end": end}:
            return DateRange(start=start, end=end)
        case (start, end):
            return DateRange(start=start, end=end)
        case _:
            raise InvalidRangeError(f"Unreadable date range: {date_range!r}")


def _check_references(report_type: ReportType, applications: pd.DataFrame, snapshot: Snapshot) -> None:
    for frame_name, key, entity in _REFERENCES[report_type]:
        orphans = find_orphans(applications, getattr(snapshot, frame_name), key, key)
        if orphans:
            raise NotFoundError(entity, orphans)


def build(
    report_type: ReportType | str,
    date_range: DateRange | Mapping | tuple,
    snapshot: Snapshot,
    *,
    precision: int = DEFAULT_PRECISION,
) -> ReportResult:
    """Build one report over the applications submitted within ``date_range``."""
    kind = parse_report_type(report_type)
    requested = _coerce_range(date_range)
    if not requested.is_ordered:
        raise InvalidRangeError(
            f"Date range start {requested.start.date()} is after end {requested.end.date()}"
        )

    window = requested.resolved()
    filtered = date_window_filter(snapshot.applications, "application_date", window.start, window.end)
    _check_references(kind, filtered, snapshot)

    match kind:
        case ReportType.CANDIDATE_SOURCES:
            series, summary = source_distribution(filtered, snapshot.candidates)
        case ReportType.APPLICATION_FUNNEL:
            series, summary = application_funnel(filtered)
        case ReportType.TIME_TO_HIRE:
            series, summary = time_to_hire(filtered, snapshot.jobs, precision=precision)
        case ReportType.JOB_PERFORMANCE:
            series, summary = job_performance(filtered, snapshot.jobs, snapshot.interviews)

    logger.info(
        "Built %s report for %s..%s over %d of %d applications",
        kind, window.start.date(), window.end.date(), len(filtered), len(snapshot.applications),
    )
    return ReportResult(report_type=kind, date_range=window, series=series, summary=summary)
