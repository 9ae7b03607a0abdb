"""Pipeline stages, derived statuses and the Application record."""

from dataclasses import asdict, dataclass
from enum import StrEnum

import pandas as pd

from recruiting.errors import InvalidApplicationError, InvalidStageError
from recruiting.utils.dates import to_timestamp, utc_now
from recruiting.utils.types import Record, RecordID, Timestampish


class Stage(StrEnum):
    APPLIED = "applied"
    SCREENING = "screening"
    INTERVIEW = "interview"
    OFFER = "offer"
    HIRED = "hired"
    REJECTED = "rejected"


# Board order; rejected sits outside the forward progression.
STAGE_ORDER: tuple[Stage, ...] = tuple(Stage)
FUNNEL_STAGES: tuple[Stage, ...] = (
    Stage.APPLIED,
    Stage.SCREENING,
    Stage.INTERVIEW,
    Stage.OFFER,
    Stage.HIRED,
)
TERMINAL_STAGES = frozenset({Stage.HIRED, Stage.REJECTED})


class ApplicationStatus(StrEnum):
    """Statuses the engine itself writes.  Records may carry others."""

    ACTIVE = "active"
    OFFER_EXTENDED = "offer_extended"
    HIRED = "hired"
    REJECTED = "rejected"


def parse_stage(value: object) -> Stage:
    """Resolve a stage value, tolerating case and surrounding whitespace."""
    if isinstance(value, Stage):
        return value
    if not isinstance(value, str):
        raise InvalidStageError(value)
    try:
        return Stage(value.strip().lower())
    except ValueError:
        raise InvalidStageError(value) from None


@dataclass(frozen=True)
class Application:
    application_id: RecordID
    candidate_id: RecordID
    job_id: RecordID
    current_stage: Stage
    status: str | None
    application_date: pd.Timestamp
    updated_at: pd.Timestamp | None = None

    def __post_init__(self):
        for name in ("application_id", "candidate_id", "job_id"):
            value = getattr(self, name)
            if value is None or str(value).strip() == "":
                raise InvalidApplicationError(f"Application is missing {name}")
            object.__setattr__(self, name, str(value))

        object.__setattr__(self, "current_stage", parse_stage(self.current_stage))

        try:
            applied_at = to_timestamp(self.application_date)
            updated_at = applied_at if pd.isna(self.updated_at) else to_timestamp(self.updated_at)
        except (TypeError, ValueError) as exc:
            raise InvalidApplicationError(f"Application {self.application_id}: {exc}") from exc

        if updated_at < applied_at:
            raise InvalidApplicationError(
                f"Application {self.application_id}: updated_at {updated_at} "
                f"precedes application_date {applied_at}"
            )
        object.__setattr__(self, "application_date", applied_at)
        object.__setattr__(self, "updated_at", updated_at)

    @classmethod
    def from_record(cls, record: Record) -> "Application":
        """Build an Application from a plain record as the store hands it over."""
        try:
            return cls(
                application_id=record["application_id"],
                candidate_id=record["candidate_id"],
                job_id=record["job_id"],
                current_stage=record["current_stage"],
                status=record.get("status"),
                application_date=record["application_date"],
                updated_at=record.get("updated_at"),
            )
        except KeyError as exc:
            raise InvalidApplicationError(f"Application record is missing {exc.args[0]}") from None

    def to_record(self) -> Record:
        record = asdict(self)
        record["current_stage"] = str(self.current_stage)
        return record

    @property
    def is_terminal(self) -> bool:
        return self.current_stage in TERMINAL_STAGES


def new_application(
    application_id: RecordID,
    candidate_id: RecordID,
    job_id: RecordID,
    *,
    application_date: Timestampish | None = None,
    status: str = ApplicationStatus.ACTIVE,
) -> Application:
    """Create a freshly submitted application at the ``applied`` stage."""
    applied_at = utc_now() if application_date is None else application_date
    return Application(
        application_id=application_id,
        candidate_id=candidate_id,
        job_id=job_id,
        current_stage=Stage.APPLIED,
        status=str(status),
        application_date=applied_at,
        updated_at=applied_at,
    )
