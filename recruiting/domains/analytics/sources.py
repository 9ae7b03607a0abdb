"""Candidate source distribution — where applications come from."""

import logging

import pandas as pd

from recruiting.domains.analytics.metrics import UNKNOWN_KEY, bucket_by, percentage, rank_descending
from recruiting.utils.types import Aggregate

logger = logging.getLogger(__name__)


def source_distribution(applications: pd.DataFrame, candidates: pd.DataFrame) -> Aggregate:
    """Bucket applications by their candidate's source.

    Percentages are taken against every application in the window.  The
    top source is the best-ranked *known* source; applications without a
    source still count towards ``"Unknown"`` but never win.
    """
    total = len(applications)
    merged = applications[["application_id", "candidate_id"]].merge(
        candidates[["candidate_id", "source"]],
        on="candidate_id",
        how="left",
    )
    ranked = rank_descending(bucket_by(merged["source"]))

    distribution = [
        {"source": source, "count": count, "percentage": percentage(count, total)}
        for source, count in ranked
    ]
    top_source, top_count = next(
        ((source, count) for source, count in ranked if source != UNKNOWN_KEY),
        (None, 0),
    )

    if total == 0:
        logger.warning("No applications in window; source distribution is empty")
    else:
        logger.info("Source distribution: %d applications across %d sources", total, len(ranked))

    series = tuple((entry["source"], entry["count"]) for entry in distribution)
    summary = {
        "total_applications": total,
        "top_source": top_source,
        "top_source_count": top_count,
        "distribution": distribution,
    }
    return series, summary
