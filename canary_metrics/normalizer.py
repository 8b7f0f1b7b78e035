"""Turns raw backend series into fixed-cadence MetricSets."""

import logging
from typing import List, Optional

from .timestamps import Instant, to_epoch_millis, to_utc_timestamp, format_rfc3339
from .types import MetricQuerySpec, MetricSet, RawSeries

logger = logging.getLogger(__name__)


def expected_intervals(start: Instant, end: Instant, alignment_period: int) -> int:
    """Number of alignment periods covering [start, end], rounded up."""
    elapsed_seconds = (to_epoch_millis(end) - to_epoch_millis(start)) // 1000
    intervals, remainder = divmod(elapsed_seconds, alignment_period)
    if remainder > 0:
        intervals += 1
    return intervals


def normalize_series(series: RawSeries, spec: MetricQuerySpec,
                     num_intervals: int) -> MetricSet:
    """Build one MetricSet from one raw series.

    Points are reversed in place into chronological order. A point count that
    does not match ``num_intervals`` is logged and otherwise left alone.
    """
    points = series.points

    if len(points) != num_intervals:
        point_or_points = "point" if num_intervals == 1 else "points"
        logger.warning("Expected %d data %s, but received %d.",
                       num_intervals, point_or_points, len(points))

    points.reverse()

    if points:
        start_time = to_utc_timestamp(points[0].start_time)
    else:
        start_time = to_utc_timestamp(spec.start)

    return MetricSet(
        name=spec.name,
        start_time_millis=start_time.value // 1_000_000,
        start_time_iso=format_rfc3339(start_time),
        step_millis=spec.alignment_period * 1000,
        values=[point.value for point in points],
        tags=dict(series.labels) if series.labels else None,
    )


def normalize(series_list: Optional[List[RawSeries]], spec: MetricQuerySpec) -> List[MetricSet]:
    """Normalize every raw series; an empty response yields one placeholder MetricSet."""
    num_intervals = expected_intervals(spec.start, spec.end, spec.alignment_period)

    if not series_list:
        series_list = [RawSeries.placeholder()]

    return [normalize_series(series, spec, num_intervals) for series in series_list]
