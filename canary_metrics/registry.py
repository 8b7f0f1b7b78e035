"""Instrumentation sinks for fetch timings."""

import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional

from opentelemetry import metrics


@dataclass
class Measurement:
    name: str
    duration_ns: int
    tags: Dict[str, str] = field(default_factory=dict)


class Registry(ABC):
    """Receives duration measurements. Subclasses decide where they go."""

    def __init__(self, clock: Callable[[], int] = time.monotonic_ns):
        self.clock = clock

    @abstractmethod
    def record(self, name: str, duration_ns: int, tags: Dict[str, str]) -> None:
        """Record one duration, in nanoseconds, under ``name``."""


class InMemoryRegistry(Registry):
    """Keeps every measurement in a list."""

    def __init__(self, clock: Callable[[], int] = time.monotonic_ns):
        super().__init__(clock)
        self.measurements: List[Measurement] = []

    def record(self, name: str, duration_ns: int, tags: Dict[str, str]) -> None:
        self.measurements.append(Measurement(name, duration_ns, dict(tags)))

    def find(self, name: str) -> List[Measurement]:
        return [m for m in self.measurements if m.name == name]


class OpenTelemetryRegistry(Registry):
    """Records durations, in milliseconds, into one OpenTelemetry histogram per name."""

    def __init__(self, meter_provider: Optional[metrics.MeterProvider] = None,
                 clock: Callable[[], int] = time.monotonic_ns):
        super().__init__(clock)
        if meter_provider is not None:
            self.meter = meter_provider.get_meter(__name__)
        else:
            self.meter = metrics.get_meter(__name__)
        self._histograms = {}

    def record(self, name: str, duration_ns: int, tags: Dict[str, str]) -> None:
        histogram = self._histograms.get(name)
        if histogram is None:
            histogram = self.meter.create_histogram(
                name, unit="ms", description=f"Duration of {name}"
            )
            self._histograms[name] = histogram
        histogram.record(duration_ns / 1_000_000, attributes=dict(tags))


@contextmanager
def timed(registry: Registry, name: str, **tags: str) -> Iterator[None]:
    """Measure the enclosed block and record it, whether or not it raises."""
    start = registry.clock()
    try:
        yield
    finally:
        registry.record(name, registry.clock() - start, tags)
