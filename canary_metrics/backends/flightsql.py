"""Hyprstream backend, reached over Arrow Flight SQL."""

from dataclasses import dataclass
from typing import Any, List, Optional

import adbc_driver_flightsql.dbapi
import pandas as pd
import pyarrow as pa

from ..normalizer import expected_intervals
from ..timestamps import format_rfc3339, to_epoch_nanos
from ..types import MetricQuerySpec, RawPoint, RawSeries
from .base import MetricsBackend

DEFAULT_METRIC_ID_TEMPLATE = "{region}.{scope}.{metric_type}"
VALUE_COLUMN = "value_running_window_avg"


class HyprstreamClient:
    """Client for reading metrics from a Hyprstream Flight SQL server."""

    def __init__(self, connection_string: str = "grpc://localhost:50051"):
        self.connection_string = connection_string
        self.conn = None

    def connect(self):
        """Establish connection to the Flight SQL server."""
        self.conn = adbc_driver_flightsql.dbapi.connect(self.connection_string)

    def disconnect(self):
        """Close the connection to the Flight SQL server."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()

    def fetch_table(self, query: str, params: List[Any]) -> pa.Table:
        """Run a parameterized query and return the result as an Arrow table."""
        if not self.conn:
            raise ConnectionError("Not connected to server")

        cursor = self.conn.cursor()
        try:
            cursor.execute(query, params)
            return cursor.fetch_arrow_table()
        finally:
            cursor.close()


@dataclass(frozen=True)
class FlightSqlQuery:
    metric_id: str
    sql: str
    params: List[Any]
    start_ns: int
    step_ns: int
    num_buckets: int


class FlightSqlBackend(MetricsBackend):
    """Reads raw running-window rows and aligns them into buckets locally.

    The metrics table has no label columns, so region and server group are
    folded into the metric id through ``metric_id_template``.
    """

    type = "hyprstream"
    fetch_timer_name = "hyprstream.fetchTime"

    def __init__(self, metric_id_template: str = DEFAULT_METRIC_ID_TEMPLATE):
        self.metric_id_template = metric_id_template

    def metric_id(self, spec: MetricQuerySpec) -> str:
        return self.metric_id_template.format(
            region=spec.region, scope=spec.scope, metric_type=spec.metric_type
        )

    def build_query(self, spec: MetricQuerySpec, project: str) -> FlightSqlQuery:
        start_ns = to_epoch_nanos(spec.start)
        end_ns = to_epoch_nanos(spec.end)
        metric_id = self.metric_id(spec)
        sql = f"""
        SELECT metric_id, timestamp, {VALUE_COLUMN} FROM metrics
        WHERE metric_id = ? AND timestamp >= ? AND timestamp < ?
        ORDER BY timestamp DESC
        """
        return FlightSqlQuery(
            metric_id=metric_id,
            sql=sql,
            params=[metric_id, start_ns, end_ns],
            start_ns=start_ns,
            step_ns=spec.alignment_period * 1_000_000_000,
            num_buckets=expected_intervals(spec.start, spec.end, spec.alignment_period),
        )

    def execute(self, client: HyprstreamClient, query: FlightSqlQuery) -> pa.Table:
        return client.fetch_table(query.sql, query.params)

    def parse_series(self, response: Optional[pa.Table],
                     query: FlightSqlQuery) -> List[RawSeries]:
        if response is None or response.num_rows == 0:
            return []

        df = response.to_pandas()
        df['bucket'] = (df['timestamp'] - query.start_ns) // query.step_ns
        # one slot per interval; empty buckets become NaN and stray buckets are dropped
        means = (
            df.groupby('bucket')[VALUE_COLUMN].mean()
            .reindex(range(query.num_buckets))
            .sort_index(ascending=False)
        )

        points = []
        for bucket, value in means.items():
            bucket_start = query.start_ns + int(bucket) * query.step_ns
            points.append(RawPoint(
                start_time=format_rfc3339(pd.Timestamp(bucket_start, unit='ns')),
                end_time=format_rfc3339(pd.Timestamp(bucket_start + query.step_ns, unit='ns')),
                value=float(value),
            ))
        return [RawSeries(points=points, labels={'metric_id': query.metric_id})]
