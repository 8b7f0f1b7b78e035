"""Stackdriver (Google Cloud Monitoring v3) backend."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..timestamps import Instant, format_rfc3339
from ..types import MetricQuerySpec, RawPoint, RawSeries
from .base import MetricsBackend

CROSS_SERIES_REDUCER = "REDUCE_MEAN"
PER_SERIES_ALIGNER = "ALIGN_MEAN"
RESOURCE_TYPE = "gce_instance"


@dataclass(frozen=True)
class StackdriverQuery:
    name: str
    filter: str
    alignment_period: str
    cross_series_reducer: str
    per_series_aligner: str
    interval_start: str
    interval_end: str
    group_by_fields: Optional[List[str]] = None

    def to_request_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``projects().timeSeries().list()``."""
        kwargs = {
            'name': self.name,
            'filter': self.filter,
            'aggregation_alignmentPeriod': self.alignment_period,
            'aggregation_crossSeriesReducer': self.cross_series_reducer,
            'aggregation_perSeriesAligner': self.per_series_aligner,
            'interval_startTime': self.interval_start,
            'interval_endTime': self.interval_end,
        }
        if self.group_by_fields is not None:
            kwargs['aggregation_groupByFields'] = self.group_by_fields
        return kwargs


def build_filter(spec: MetricQuerySpec, project: str) -> str:
    # TODO: scope the resource type per metric so non-GCE resources can be queried.
    return (
        f'metric.type="{spec.metric_type}"'
        f" AND resource.labels.project_id={project}"
        f" AND resource.metadata.tag.spinnaker-region={spec.region}"
        f" AND resource.metadata.tag.spinnaker-server-group={spec.scope}"
        f" AND resource.type = {RESOURCE_TYPE}"
    )


def _point_value(value: Dict[str, Any]) -> float:
    if value.get('doubleValue') is not None:
        return float(value['doubleValue'])
    # int64 values are JSON strings
    if value.get('int64Value') is not None:
        return float(value['int64Value'])
    return float('nan')


class StackdriverBackend(MetricsBackend):
    """Queries ``projects.timeSeries.list`` through a googleapiclient Monitoring service."""

    type = "stackdriver"
    fetch_timer_name = "stackdriver.fetchTime"

    def __init__(self, timestamp_formatter: Callable[[Instant], str] = format_rfc3339):
        self.timestamp_formatter = timestamp_formatter

    def build_query(self, spec: MetricQuerySpec, project: str) -> StackdriverQuery:
        return StackdriverQuery(
            name=f"projects/{project}",
            filter=build_filter(spec, project),
            alignment_period=f"{spec.alignment_period}s",
            cross_series_reducer=CROSS_SERIES_REDUCER,
            per_series_aligner=PER_SERIES_ALIGNER,
            interval_start=self.timestamp_formatter(spec.start),
            interval_end=self.timestamp_formatter(spec.end),
            group_by_fields=spec.group_by_fields,
        )

    def execute(self, client: Any, query: StackdriverQuery) -> Dict[str, Any]:
        request = client.projects().timeSeries().list(**query.to_request_kwargs())
        return request.execute()

    def parse_series(self, response: Optional[Dict[str, Any]],
                     query: StackdriverQuery) -> List[RawSeries]:
        series_list = []
        for time_series in (response or {}).get('timeSeries') or []:
            points = [
                RawPoint(
                    # gauge intervals may omit startTime, meaning startTime == endTime
                    start_time=point['interval'].get('startTime') or point['interval'].get('endTime'),
                    end_time=point['interval'].get('endTime'),
                    value=_point_value(point.get('value', {})),
                )
                for point in time_series.get('points') or []
            ]
            resource = time_series.get('resource') or {}
            series_list.append(RawSeries(points=points, labels=resource.get('labels')))
        return series_list
