"""Shared type definitions for the recruiting core."""

from typing import TypeAlias
from datetime import date, datetime

import pandas as pd


RecordID: TypeAlias = str
Record: TypeAlias = dict[str, object]
Timestampish: TypeAlias = str | date | datetime | pd.Timestamp
SeriesPoint: TypeAlias = tuple[str, int | float]
ReportSeries: TypeAlias = tuple[SeriesPoint, ...]
ReportSummary: TypeAlias = dict[str, object]
ValidationOutcome: TypeAlias = dict[str, bool | str | list[str]]
Aggregate: TypeAlias = tuple[ReportSeries, ReportSummary]
