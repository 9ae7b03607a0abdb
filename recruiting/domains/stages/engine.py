"""Stage engine — validates and applies pipeline stage transitions.

A transition is a pure function over a single Application: it returns a
new record and never touches storage.  Persisting the result is the
record store's job (see ``store.move_application``).
"""

import logging
from dataclasses import replace

import pandas as pd

from recruiting.domains.stages.models import (
    TERMINAL_STAGES,
    Application,
    ApplicationStatus,
    Stage,
    parse_stage,
)
from recruiting.errors import InvalidApplicationError
from recruiting.utils.dates import to_timestamp, utc_now
from recruiting.utils.types import Timestampish

logger = logging.getLogger(__name__)

STATUS_BY_STAGE: dict[Stage, ApplicationStatus] = {
    Stage.HIRED: ApplicationStatus.HIRED,
    Stage.OFFER: ApplicationStatus.OFFER_EXTENDED,
    Stage.REJECTED: ApplicationStatus.REJECTED,
}

_CLOCK_STEP = pd.Timedelta(microseconds=1)


def status_for(stage: Stage, current_status: str | None) -> str | None:
    """Derive the display status for ``stage``.

    Only hired, offer and rejected carry their own status; every other
    stage keeps whatever status the record already had.
    """
    match stage:
        case Stage.HIRED | Stage.OFFER | Stage.REJECTED:
            return str(STATUS_BY_STAGE[stage])
        case _:
            return current_status


def is_terminal(stage: Stage | str) -> bool:
    return parse_stage(stage) in TERMINAL_STAGES


def transition(
    application: Application,
    new_stage: Stage | str,
    *,
    now: Timestampish | None = None,
) -> Application:
    """Move ``application`` to ``new_stage`` and return the updated record.

    The status is recomputed and ``updated_at`` bumped even when the stage
    does not change.  Transitions out of hired/rejected are allowed.
    """
    if not isinstance(application, Application):
        raise InvalidApplicationError(
            f"Expected an Application record, got {type(application).__name__}"
        )
    stage = parse_stage(new_stage)

    stamp = utc_now() if now is None else to_timestamp(now)
    if stamp <= application.updated_at:
        # updated_at is strictly increasing per record
        stamp = application.updated_at + _CLOCK_STEP

    if application.is_terminal and stage != application.current_stage:
        logger.info(
            "Application %s leaving terminal stage %s for %s",
            application.application_id, application.current_stage, stage,
        )

    updated = replace(
        application,
        current_stage=stage,
        status=status_for(stage, application.status),
        updated_at=stamp,
    )
    logger.debug(
        "Application %s: %s -> %s (status=%s)",
        application.application_id, application.current_stage, stage, updated.status,
    )
    return updated
