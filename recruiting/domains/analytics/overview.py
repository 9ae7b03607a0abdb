"""Dashboard overview — headline KPIs over a whole snapshot."""

import logging

from recruiting.domains.analytics.metrics import bucket_by, rank_descending
from recruiting.domains.analytics.models import Snapshot
from recruiting.domains.analytics.time_to_hire import DEFAULT_PRECISION, time_to_hire
from recruiting.domains.stages.models import ApplicationStatus, Stage
from recruiting.errors import NotFoundError
from recruiting.utils.types import ReportSummary
from recruiting.utils.validators import find_orphans

logger = logging.getLogger(__name__)

SCHEDULED_INTERVIEW = "scheduled"


def _count_status(values, status: str) -> int:
    return int(values.map(lambda s: isinstance(s, str) and s.strip().lower() == status).sum())


def build_overview(snapshot: Snapshot, precision: int = DEFAULT_PRECISION) -> ReportSummary:
    """Headline numbers for the reports dashboard.

    Unlike the windowed reports this covers every record in the snapshot,
    and the source mix is counted per candidate rather than per application.
    Applications pointing at a job missing from the snapshot raise
    ``NotFoundError``, as they do for the time-to-hire report.
    """
    apps = snapshot.applications
    jobs = snapshot.jobs
    orphans = find_orphans(apps, jobs, "job_id", "job_id")
    if orphans:
        raise NotFoundError("Job", orphans)

    total = len(apps)
    hired = int((apps["current_stage"] == str(Stage.HIRED)).sum())
    _, hire_summary = time_to_hire(apps, jobs, precision=precision)

    overview = {
        "total_applications": total,
        "total_jobs": len(jobs),
        "active_jobs": _count_status(jobs["status"], "active"),
        "total_candidates": len(snapshot.candidates),
        "total_interviews": len(snapshot.interviews),
        "scheduled_interviews": _count_status(snapshot.interviews["status"], SCHEDULED_INTERVIEW),
        "offers_extended": _count_status(apps["status"], str(ApplicationStatus.OFFER_EXTENDED)),
        "hired": hired,
        "conversion_rate": round(hired / total * 100, 1) if total else 0.0,
        "average_time_to_hire_days": hire_summary["average_days"],
        "candidate_sources": dict(rank_descending(bucket_by(snapshot.candidates["source"]))),
    }
    logger.info(
        "Overview: %d applications, %d hired, %d active jobs",
        total, hired, overview["active_jobs"],
    )
    return overview
