"""Timestamp normalisation.

Everything inside the core is a naive UTC ``pd.Timestamp``; aware values
are converted to UTC first, naive values are taken as UTC already.
"""

import numpy as np
import pandas as pd

from recruiting.utils.types import Timestampish


def to_timestamp(value: Timestampish) -> pd.Timestamp:
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"Not a timestamp: {value!r}")
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


def to_timestamp_series(values: pd.Series) -> pd.Series:
    """Vectorised ``to_timestamp`` for a frame column."""
    parsed = pd.to_datetime(values, utc=True, errors="coerce", format="ISO8601")
    return parsed.dt.tz_convert(None).astype("datetime64[ns]")


def utc_now() -> pd.Timestamp:
    return pd.Timestamp.now(tz="UTC").tz_localize(None)


def days_between(start: pd.Series, end: pd.Series) -> pd.Series:
    """Fractional days from ``start`` to ``end``, element-wise."""
    return (end - start) / np.timedelta64(1, "D")


def end_of_day(value: Timestampish) -> pd.Timestamp:
    """23:59:59.999 on the calendar day of ``value``."""
    return to_timestamp(value).normalize() + pd.Timedelta(days=1) - pd.Timedelta(milliseconds=1)
