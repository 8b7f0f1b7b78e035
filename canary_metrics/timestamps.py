"""Instant parsing and formatting helpers."""

from datetime import datetime
from typing import Union

import pandas as pd

Instant = Union[str, datetime, pd.Timestamp]


def to_utc_timestamp(value: Instant) -> pd.Timestamp:
    """Parse an instant into a UTC pandas Timestamp. Naive values are taken as UTC."""
    ts = pd.Timestamp(value)
    if ts is pd.NaT:
        raise ValueError(f"Not a valid instant: {value!r}")
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def to_epoch_millis(value: Instant) -> int:
    return to_utc_timestamp(value).value // 1_000_000


def to_epoch_nanos(value: Instant) -> int:
    return to_utc_timestamp(value).value


def format_rfc3339(value: Instant) -> str:
    """Format an instant the way Cloud Monitoring expects, e.g. 2017-01-01T00:00:00Z."""
    return to_utc_timestamp(value).isoformat().replace("+00:00", "Z")
