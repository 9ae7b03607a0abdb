"""Pipeline board view — per-stage counts and board filters."""

import pandas as pd

from recruiting.domains.analytics.metrics import percentage
from recruiting.domains.analytics.models import Snapshot
from recruiting.domains.stages.models import STAGE_ORDER, Stage
from recruiting.utils.types import RecordID


def stage_counts(applications: pd.DataFrame, job_id: RecordID | None = None) -> dict[str, int]:
    """Number of applications sitting in each stage, every stage listed."""
    if job_id is not None:
        applications = applications.loc[applications["job_id"] == str(job_id)]
    observed = applications["current_stage"].value_counts()
    return {str(stage): int(observed.get(str(stage), 0)) for stage in STAGE_ORDER}


def filter_board(
    snapshot: Snapshot,
    *,
    job_id: RecordID | None = None,
    search: str | None = None,
    source: str | None = None,
) -> pd.DataFrame:
    """Applications matching a job, a name/email search term and a source.

    The search is a case-insensitive substring match against the
    candidate's first name, last name or email.  ``source`` must match the
    candidate's source exactly.
    """
    apps = snapshot.applications
    if job_id is not None:
        apps = apps.loc[apps["job_id"] == str(job_id)]

    if not search and source is None:
        return apps

    candidates = snapshot.candidates.set_index("candidate_id")
    matched = pd.Series(True, index=candidates.index)

    if search:
        term = search.strip().lower()
        hit = pd.Series(False, index=candidates.index)
        for col in ("first_name", "last_name", "email"):
            hit |= candidates[col].fillna("").astype(str).str.lower().str.contains(term, regex=False)
        matched &= hit

    if source is not None:
        matched &= candidates["source"] == source

    keep = set(candidates.index[matched])
    return apps.loc[apps["candidate_id"].isin(keep)]


def board_summary(applications: pd.DataFrame) -> dict[str, int]:
    total = len(applications)
    hired = int((applications["current_stage"] == str(Stage.HIRED)).sum())
    return {
        "total_applications": total,
        "hired": hired,
        "conversion_rate": percentage(hired, total),
    }
