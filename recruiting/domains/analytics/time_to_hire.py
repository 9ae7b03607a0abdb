"""Time-to-hire — days from application to the hire transition, per job."""

import logging

import pandas as pd

from recruiting.domains.analytics.models import job_labels
from recruiting.domains.stages.models import Stage
from recruiting.utils.dates import days_between
from recruiting.utils.types import Aggregate

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 1


def time_to_hire(
    applications: pd.DataFrame,
    jobs: pd.DataFrame,
    precision: int = DEFAULT_PRECISION,
) -> Aggregate:
    """Average days-to-hire per job, plus fastest/slowest across jobs.

    A hired application's ``updated_at`` is the instant it reached
    ``hired``.  Jobs without hires in the window are left out entirely
    rather than reported as zero days.
    """
    hired = applications.loc[
        applications["current_stage"] == str(Stage.HIRED),
        ["job_id", "application_date", "updated_at"],
    ].copy()
    hired["days"] = days_between(hired["application_date"], hired["updated_at"])
    per_job = hired.groupby("job_id", sort=False)["days"].agg(["mean", "count"])

    labels = job_labels(jobs)
    breakdown = []
    for job_id in jobs["job_id"]:
        if job_id not in per_job.index:
            continue
        breakdown.append({
            "job_id": job_id,
            "job": labels[job_id],
            "hires": int(per_job.at[job_id, "count"]),
            "average_days": round(float(per_job.at[job_id, "mean"]), precision),
        })

    averages = [entry["average_days"] for entry in breakdown]
    if averages:
        summary_stats = {
            "average_days": round(sum(averages) / len(averages), precision),
            "fastest_days": min(averages),
            "slowest_days": max(averages),
        }
        logger.info(
            "Time to hire: %d jobs with hires, average %.1f days",
            len(breakdown), summary_stats["average_days"],
        )
    else:
        summary_stats = {"average_days": None, "fastest_days": None, "slowest_days": None}
        logger.warning("No hires in window; time-to-hire is empty")

    series = tuple((entry["job"], entry["average_days"]) for entry in breakdown)
    summary = {
        **summary_stats,
        "total_hires": sum(entry["hires"] for entry in breakdown),
        "jobs_with_hires": len(breakdown),
        "job_breakdown": breakdown,
    }
    return series, summary
