"""Per-job application volume, hires and conversion."""

import logging

import pandas as pd

from recruiting.domains.analytics.metrics import percentage
from recruiting.domains.analytics.models import job_labels
from recruiting.domains.stages.models import Stage
from recruiting.utils.types import Aggregate

logger = logging.getLogger(__name__)


def _pick_best(breakdown: list[dict]) -> dict | None:
    """Highest conversion rate, then most applications, then first listed."""
    best = None
    for entry in breakdown:
        if best is None or (entry["conversion_rate"], entry["applications"]) > (
            best["conversion_rate"], best["applications"]
        ):
            best = entry
    return best


def job_performance(
    applications: pd.DataFrame,
    jobs: pd.DataFrame,
    interviews: pd.DataFrame,
) -> Aggregate:
    """Applications, hires, interviews and conversion rate for every job.

    Jobs with no applications in the window are still listed with zeros.
    """
    app_counts = applications["job_id"].value_counts()
    hire_counts = applications.loc[
        applications["current_stage"] == str(Stage.HIRED), "job_id"
    ].value_counts()
    interview_counts = interviews[["application_id"]].merge(
        applications[["application_id", "job_id"]],
        on="application_id",
        how="inner",
    )["job_id"].value_counts()

    labels = job_labels(jobs)
    breakdown = []
    for job_id in jobs["job_id"]:
        n_apps = int(app_counts.get(job_id, 0))
        n_hires = int(hire_counts.get(job_id, 0))
        breakdown.append({
            "job_id": job_id,
            "job": labels[job_id],
            "applications": n_apps,
            "hires": n_hires,
            "interviews": int(interview_counts.get(job_id, 0)),
            "conversion_rate": percentage(n_hires, n_apps),
        })

    best = _pick_best(breakdown)
    logger.info(
        "Job performance: %d jobs, best %s",
        len(breakdown), best["job"] if best else "n/a",
    )

    series = tuple((entry["job"], entry["applications"]) for entry in breakdown)
    summary = {
        "total_jobs": len(breakdown),
        "total_applications": sum(entry["applications"] for entry in breakdown),
        "total_hires": sum(entry["hires"] for entry in breakdown),
        "best_performing_job": best,
        "job_breakdown": breakdown,
    }
    return series, summary
