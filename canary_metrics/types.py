"""Type definitions for the canary metrics client."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, List, Optional

import pandas as pd

from .errors import InvalidQueryError
from .timestamps import to_utc_timestamp


@dataclass(frozen=True)
class CanaryScope:
    """The slice of telemetry a query covers: server group, region and time window."""
    scope: str
    region: str
    start: datetime
    end: datetime
    step: int = 60


@dataclass(frozen=True)
class MetricQueryConfig:
    """Backend-specific part of a metric configuration."""
    metric_type: str
    group_by_fields: Optional[List[str]] = None


@dataclass(frozen=True)
class CanaryMetricConfig:
    name: str
    query: MetricQueryConfig


@dataclass(frozen=True)
class MetricQuerySpec:
    """Everything needed to build and normalize one metric query."""
    account: str
    name: str
    metric_type: str
    scope: str
    region: str
    alignment_period: int
    start: datetime
    end: datetime
    group_by_fields: Optional[List[str]] = None

    def __post_init__(self):
        if self.alignment_period <= 0:
            raise InvalidQueryError(
                f"Alignment period must be positive, got {self.alignment_period}"
            )
        if to_utc_timestamp(self.start) > to_utc_timestamp(self.end):
            raise InvalidQueryError(
                f"Scope start {self.start} is after scope end {self.end}"
            )

    @classmethod
    def from_config(cls, account: str, metric_config: CanaryMetricConfig,
                    scope: CanaryScope) -> 'MetricQuerySpec':
        """Combine a metric configuration and a scope into a query spec."""
        group_by = metric_config.query.group_by_fields
        return cls(
            account=account,
            name=metric_config.name,
            metric_type=metric_config.query.metric_type,
            scope=scope.scope,
            region=scope.region,
            alignment_period=scope.step,
            start=scope.start,
            end=scope.end,
            group_by_fields=list(group_by) if group_by is not None else None,
        )


@dataclass
class RawPoint:
    """One sample as returned by a backend."""
    start_time: str
    end_time: str
    value: float


@dataclass
class RawSeries:
    """One time series as returned by a backend, points newest first."""
    points: List[RawPoint] = field(default_factory=list)
    labels: Optional[Dict[str, str]] = None

    @classmethod
    def placeholder(cls) -> 'RawSeries':
        """An empty series standing in for a response with no series at all."""
        return cls(points=[], labels=None)


@dataclass
class MetricSet:
    """A normalized, fixed-cadence series handed to the canary judge."""
    name: str
    start_time_millis: int
    start_time_iso: str
    step_millis: int
    values: List[float] = field(default_factory=list)
    tags: Optional[Dict[str, str]] = None

    @property
    def start_time(self) -> pd.Timestamp:
        return to_utc_timestamp(self.start_time_iso)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary; ``tags`` is left out when absent."""
        data = {
            'name': self.name,
            'startTimeMillis': self.start_time_millis,
            'startTimeIso': self.start_time_iso,
            'stepMillis': self.step_millis,
            'values': list(self.values),
        }
        if self.tags:
            data['tags'] = dict(self.tags)
        return data

    def to_series(self) -> pd.Series:
        """Values as a pandas Series indexed by the start of each interval."""
        index = pd.date_range(
            start=self.start_time,
            periods=len(self.values),
            freq=pd.Timedelta(milliseconds=self.step_millis),
        )
        return pd.Series(self.values, index=index, name=self.name, dtype='float64')
