"""Error taxonomy for the recruiting core.

Malformed requests (bad stage, unknown report type, inverted date range)
raise one of these.  Valid requests over sparse data never do; they
return zero-filled results instead.
"""


class RecruitingError(Exception):
    """Base class for every error raised by the recruiting core."""


class InvalidStageError(RecruitingError, ValueError):
    def __init__(self, stage: object):
        self.stage = stage
        super().__init__(f"Unknown pipeline stage: {stage!r}")


class InvalidApplicationError(RecruitingError, ValueError):
    """An application record is structurally invalid."""


class NotFoundError(RecruitingError, LookupError):
    def __init__(self, entity: str, keys: object):
        self.entity = entity
        self.keys = keys
        super().__init__(f"{entity} not found: {keys}")


class ConcurrentModificationError(RecruitingError):
    """The stored record changed between read and write; re-fetch and retry."""

    def __init__(self, application_id: str, expected, actual):
        self.application_id = application_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Application {application_id} was modified concurrently "
            f"(expected updated_at={expected}, found {actual})"
        )


class UnknownReportTypeError(RecruitingError, ValueError):
    def __init__(self, report_type: object):
        self.report_type = report_type
        super().__init__(f"Unknown report type: {report_type!r}")


class InvalidRangeError(RecruitingError, ValueError):
    """A date window is missing a bound or has start after end."""


class InvalidSnapshotError(RecruitingError, ValueError):
    def __init__(self, frame: str, errors: list[str]):
        self.frame = frame
        self.errors = errors
        super().__init__(f"Invalid {frame} snapshot: {len(errors)} problem(s): {errors[:3]}")
