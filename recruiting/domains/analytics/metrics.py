"""Metric primitives shared by every report.

Small pure functions: no logging, no state.  Aggregators compose them.
"""

import math
from collections.abc import Callable, Hashable, Iterable, Mapping

import pandas as pd

from recruiting.errors import InvalidRangeError
from recruiting.utils.dates import end_of_day, to_timestamp
from recruiting.utils.types import Timestampish

UNKNOWN_KEY = "Unknown"


def date_window_filter(
    items: pd.DataFrame,
    field: str,
    start: Timestampish,
    end: Timestampish,
) -> pd.DataFrame:
    """Rows whose ``field`` falls within ``[start, end_of_day(end)]``.

    Both bounds are required; there is no open-ended window.
    """
    if start is None or end is None:
        raise InvalidRangeError("Date window needs both a start and an end")
    lower = to_timestamp(start)
    upper = end_of_day(end)
    stamps = items[field]
    mask = (stamps >= lower) & (stamps <= upper)
    return items.loc[mask]


def percentage(numerator: float, denominator: float) -> int:
    """``numerator / denominator`` as a whole percentage, rounded half up.

    A zero denominator yields 0 rather than NaN or infinity.
    """
    if not denominator:
        return 0
    return int(math.floor(numerator / denominator * 100 + 0.5))


def _normalise_key(key: object) -> str:
    if key is None:
        return UNKNOWN_KEY
    if not isinstance(key, str) and pd.isna(key):
        return UNKNOWN_KEY
    text = str(key).strip()
    return text or UNKNOWN_KEY


def bucket_by(items: Iterable, key_fn: Callable[[object], Hashable] | None = None) -> dict[str, int]:
    """Count items per key, in first-seen key order.

    Absent, NaN or blank keys are counted under ``"Unknown"``.
    """
    counts: dict[str, int] = {}
    for item in items:
        key = _normalise_key(item if key_fn is None else key_fn(item))
        counts[key] = counts.get(key, 0) + 1
    return counts


def rank_descending(mapping: Mapping[str, int]) -> list[tuple[str, int]]:
    """Entries by count, highest first; ties keep first-seen order."""
    # sorted() is stable, so equal counts stay in insertion order
    return sorted(mapping.items(), key=lambda entry: entry[1], reverse=True)
