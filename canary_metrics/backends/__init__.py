"""Monitoring backends the metrics service can query."""

from .base import MetricsBackend
from .flightsql import FlightSqlBackend, HyprstreamClient
from .stackdriver import StackdriverBackend

__all__ = ["MetricsBackend", "FlightSqlBackend", "HyprstreamClient", "StackdriverBackend"]
