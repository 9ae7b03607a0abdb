"""Shared utilities for the recruiting core."""

from recruiting.utils.dates import end_of_day, to_timestamp, utc_now
from recruiting.utils.io import read_snapshot_frames, write_report
from recruiting.utils.validators import validate_dataframe, validate_referential_integrity
