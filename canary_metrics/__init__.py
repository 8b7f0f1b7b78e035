"""
Canary metrics client: fetches a metric for a canary scope from a monitoring
backend and normalizes it into fixed-cadence MetricSets.
"""

from .accounts import AccountCredentials, AccountCredentialsRepository
from .errors import AccountResolutionError, CanaryMetricsError, InvalidQueryError
from .registry import InMemoryRegistry, OpenTelemetryRegistry, Registry, timed
from .service import MetricsService
from .types import CanaryMetricConfig, CanaryScope, MetricQueryConfig, MetricQuerySpec, MetricSet

__version__ = "0.1.0"
__all__ = [
    "AccountCredentials",
    "AccountCredentialsRepository",
    "AccountResolutionError",
    "CanaryMetricsError",
    "InvalidQueryError",
    "InMemoryRegistry",
    "OpenTelemetryRegistry",
    "Registry",
    "timed",
    "MetricsService",
    "CanaryMetricConfig",
    "CanaryScope",
    "MetricQueryConfig",
    "MetricQuerySpec",
    "MetricSet",
]
