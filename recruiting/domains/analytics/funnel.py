"""Application funnel — stage counts, conversion and drop-off."""

import logging
from itertools import pairwise

import pandas as pd

from recruiting.domains.analytics.board import stage_counts as count_stages
from recruiting.domains.analytics.metrics import percentage
from recruiting.domains.stages.models import FUNNEL_STAGES, Stage
from recruiting.utils.types import Aggregate

logger = logging.getLogger(__name__)


def _drop_off(current: int, following: int) -> int:
    """Share of ``current`` that did not make it to the next stage.

    An empty stage reports 0, not a total loss.  Later stages can hold more
    applications than earlier ones, which floors at 0.
    """
    if current == 0:
        return 0
    return max(0, 100 - percentage(following, current))


def application_funnel(applications: pd.DataFrame) -> Aggregate:
    """Count applications per current stage and derive the hiring funnel.

    Every application entered the pipeline at ``applied``, so the applied
    funnel entry is the window total.  The remaining entries count
    applications whose current stage is that stage.  Rejected applications
    are reported separately and never enter the funnel.
    """
    total = len(applications)
    stage_counts = count_stages(applications)

    funnel = {str(stage): stage_counts[str(stage)] for stage in FUNNEL_STAGES}
    funnel[str(Stage.APPLIED)] = total

    conversion_rates = {
        str(stage): percentage(funnel[str(stage)], total) for stage in FUNNEL_STAGES[1:]
    }
    drop_off = [
        {
            "from": str(current),
            "to": str(following),
            "rate": _drop_off(funnel[str(current)], funnel[str(following)]),
        }
        for current, following in pairwise(FUNNEL_STAGES)
    ]

    logger.info(
        "Funnel: %d applications, %d hired (%d%%), %d rejected",
        total,
        funnel[str(Stage.HIRED)],
        conversion_rates[str(Stage.HIRED)],
        stage_counts[str(Stage.REJECTED)],
    )

    series = tuple((str(stage).capitalize(), funnel[str(stage)]) for stage in FUNNEL_STAGES)
    summary = {
        "total_applications": total,
        "stage_counts": stage_counts,
        "funnel": funnel,
        "rejected": stage_counts[str(Stage.REJECTED)],
        "conversion_rates": conversion_rates,
        "drop_off": drop_off,
    }
    return series, summary
