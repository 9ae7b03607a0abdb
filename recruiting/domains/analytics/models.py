"""Snapshot schemas and report value types.

A Snapshot is the caller's point-in-time copy of the record store: four
DataFrames validated against the pandera schemas below.  Reports never
mutate it.
"""

from collections.abc import Iterable
from dataclasses import asdict, dataclass, is_dataclass
from enum import StrEnum

import pandas as pd
from pandera import Check, Column, DataFrameSchema

from recruiting.domains.stages.models import Stage
from recruiting.errors import InvalidRangeError, InvalidSnapshotError, UnknownReportTypeError
from recruiting.utils.dates import end_of_day, to_timestamp, to_timestamp_series, utc_now
from recruiting.utils.types import Record, ReportSeries, ReportSummary, Timestampish
from recruiting.utils.validators import validate_dataframe


class ReportType(StrEnum):
    CANDIDATE_SOURCES = "candidate_sources"
    APPLICATION_FUNNEL = "application_funnel"
    TIME_TO_HIRE = "time_to_hire"
    JOB_PERFORMANCE = "job_performance"


def parse_report_type(value: object) -> ReportType:
    if isinstance(value, ReportType):
        return value
    try:
        return ReportType(value)
    except ValueError:
        raise UnknownReportTypeError(value) from None


APPLICATION_COLUMNS = [
    "application_id", "candidate_id", "job_id", "current_stage",
    "status", "application_date", "updated_at",
]
CANDIDATE_COLUMNS = ["candidate_id", "first_name", "last_name", "email", "source", "created_at"]
JOB_COLUMNS = ["job_id", "title", "department", "location", "status", "created_at"]
INTERVIEW_COLUMNS = ["application_id", "scheduled_date", "status"]


applications_schema = DataFrameSchema(
    {
        "application_id": Column(str, unique=True),
        "candidate_id": Column(str),
        "job_id": Column(str),
        "current_stage": Column(str, Check.isin([str(stage) for stage in Stage])),
        "status": Column(nullable=True),
        "application_date": Column("datetime64[ns]", coerce=True),
        "updated_at": Column("datetime64[ns]", coerce=True),
    },
    checks=[
        Check(
            lambda df: df["updated_at"] >= df["application_date"],
            error="updated_at precedes application_date",
        ),
    ],
    strict=False,
)


candidates_schema = DataFrameSchema(
    {
        "candidate_id": Column(str, unique=True),
        "first_name": Column(nullable=True),
        "last_name": Column(nullable=True),
        "email": Column(nullable=True),
        "source": Column(nullable=True),
        "created_at": Column("datetime64[ns]", nullable=True, coerce=True),
    },
    strict=False,
)


jobs_schema = DataFrameSchema(
    {
        "job_id": Column(str, unique=True),
        "title": Column(nullable=True),
        "department": Column(nullable=True),
        "location": Column(nullable=True),
        "status": Column(nullable=True),
        "created_at": Column("datetime64[ns]", nullable=True, coerce=True),
    },
    strict=False,
)


interviews_schema = DataFrameSchema(
    {
        "application_id": Column(str),
        "scheduled_date": Column("datetime64[ns]", nullable=True, coerce=True),
        "status": Column(nullable=True),
    },
    strict=False,
)


def _as_rows(records: Iterable | pd.DataFrame | None) -> pd.DataFrame:
    match records:
        case None:
            return pd.DataFrame()
        case pd.DataFrame():
            return records.copy()
        case _:
            rows = []
            for record in records:
                if hasattr(record, "to_record"):
                    rows.append(record.to_record())
                elif is_dataclass(record):
                    rows.append(asdict(record))
                else:
                    rows.append(dict(record))
            return pd.DataFrame.from_records(rows)


def _stringify_ids(values: pd.Series) -> pd.Series:
    return values.map(lambda v: None if pd.isna(v) else str(v)).astype(object)


def build_frame(
    records: Iterable | pd.DataFrame | None,
    columns: list[str],
    *,
    id_columns: tuple[str, ...] = (),
    timestamp_columns: tuple[str, ...] = (),
) -> pd.DataFrame:
    """Normalise raw records into a frame with every expected column present."""
    frame = _as_rows(records)
    for col in columns:
        if col not in frame.columns:
            frame[col] = None
    extras = [col for col in frame.columns if col not in columns]
    frame = frame[columns + extras].reset_index(drop=True)

    for col in id_columns:
        frame[col] = _stringify_ids(frame[col])
    for col in timestamp_columns:
        frame[col] = to_timestamp_series(frame[col])
    return frame


def _checked(frame: pd.DataFrame, schema: DataFrameSchema, name: str) -> pd.DataFrame:
    validated, outcome = validate_dataframe(frame, schema)
    if not outcome["valid"]:
        raise InvalidSnapshotError(name, outcome["errors"])
    return validated


@dataclass(frozen=True, eq=False)
class Snapshot:
    applications: pd.DataFrame
    candidates: pd.DataFrame
    jobs: pd.DataFrame
    interviews: pd.DataFrame

    @classmethod
    def from_records(
        cls,
        applications: Iterable | pd.DataFrame | None = None,
        candidates: Iterable | pd.DataFrame | None = None,
        jobs: Iterable | pd.DataFrame | None = None,
        interviews: Iterable | pd.DataFrame | None = None,
    ) -> "Snapshot":
        """Build and validate a snapshot from record dicts, dataclasses or frames."""
        apps = build_frame(
            applications,
            APPLICATION_COLUMNS,
            id_columns=("application_id", "candidate_id", "job_id"),
            timestamp_columns=("application_date", "updated_at"),
        )
        apps["updated_at"] = apps["updated_at"].fillna(apps["application_date"])
        apps["current_stage"] = apps["current_stage"].map(
            lambda v: v.strip().lower() if isinstance(v, str) else v
        )

        return cls(
            applications=_checked(apps, applications_schema, "applications"),
            candidates=_checked(
                build_frame(candidates, CANDIDATE_COLUMNS,
                            id_columns=("candidate_id",), timestamp_columns=("created_at",)),
                candidates_schema,
                "candidates",
            ),
            jobs=_checked(
                build_frame(jobs, JOB_COLUMNS, id_columns=("job_id",), timestamp_columns=("created_at",)),
                jobs_schema,
                "jobs",
            ),
            interviews=_checked(
                build_frame(interviews, INTERVIEW_COLUMNS,
                            id_columns=("application_id",), timestamp_columns=("scheduled_date",)),
                interviews_schema,
                "interviews",
            ),
        )

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls.from_records()


@dataclass(frozen=True)
class DateRange:
    start: pd.Timestamp
    end: pd.Timestamp

    def __post_init__(self):
        if self.start is None or self.end is None:
            raise InvalidRangeError("Date range needs both a start and an end")
        try:
            object.__setattr__(self, "start", to_timestamp(self.start))
            object.__setattr__(self, "end", to_timestamp(self.end))
        except (TypeError, ValueError) as exc:
            raise InvalidRangeError(f"Unreadable date range bound: {exc}") from exc

    @classmethod
    def last_days(cls, days: int, today: Timestampish | None = None) -> "DateRange":
        end = (utc_now() if today is None else to_timestamp(today)).normalize()
        return cls(start=end - pd.Timedelta(days=days), end=end)

    @property
    def is_ordered(self) -> bool:
        """Start no later than end, compared as given."""
        return self.start <= self.end

    def resolved(self) -> "DateRange":
        """The inclusive window actually applied: ``end`` moved to end of day."""
        return DateRange(start=self.start, end=end_of_day(self.end))


@dataclass(frozen=True)
class ReportResult:
    report_type: ReportType
    date_range: DateRange
    series: ReportSeries
    summary: ReportSummary

    def to_dict(self) -> Record:
        return {
            "report_type": str(self.report_type),
            "date_range": {
                "start": self.date_range.start.isoformat(),
                "end": self.date_range.end.isoformat(),
            },
            "series": [{"label": label, "value": value} for label, value in self.series],
            "summary": self.summary,
        }


def job_labels(jobs: pd.DataFrame) -> dict[str, str]:
    """Display label per job id: the title, or the id when a job has no title."""
    labels = {}
    for job_id, title in zip(jobs["job_id"], jobs["title"]):
        labels[job_id] = title.strip() if isinstance(title, str) and title.strip() else job_id
    return labels
