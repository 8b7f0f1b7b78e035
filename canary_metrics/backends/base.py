"""Adapter interface between the metrics service and a monitoring backend."""

from abc import ABC, abstractmethod
from typing import Any, List

from ..types import MetricQuerySpec, RawSeries


class MetricsBackend(ABC):
    """Translates query specs into a backend's vocabulary and back.

    Implementations must hand raw series to the normalizer with their points
    ordered newest first.
    """

    type: str = ""
    fetch_timer_name: str = ""

    @abstractmethod
    def build_query(self, spec: MetricQuerySpec, project: str) -> Any:
        """Build the backend query for ``spec`` within ``project``."""

    @abstractmethod
    def execute(self, client: Any, query: Any) -> Any:
        """Send ``query`` through ``client`` and return the raw response."""

    @abstractmethod
    def parse_series(self, response: Any, query: Any) -> List[RawSeries]:
        """Turn a raw response into raw series, in the order the backend returned them."""
