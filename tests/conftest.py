"""Shared fixtures for the canary metrics tests."""

import itertools
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from canary_metrics import (
    AccountCredentials,
    AccountCredentialsRepository,
    CanaryMetricConfig,
    CanaryScope,
    InMemoryRegistry,
    MetricQueryConfig,
    MetricQuerySpec,
)

START = datetime(2017, 1, 1, tzinfo=timezone.utc)
END = START + timedelta(seconds=300)


def stackdriver_point(start, value):
    """A Cloud Monitoring point for the 60 second interval beginning at ``start``."""
    end = start + timedelta(seconds=60)
    return {
        'interval': {
            'startTime': start.strftime('%Y-%m-%dT%H:%M:%SZ'),
            'endTime': end.strftime('%Y-%m-%dT%H:%M:%SZ'),
        },
        'value': {'doubleValue': value},
    }


def stackdriver_series(values, labels=None, start=START):
    """A Cloud Monitoring time series holding ``values`` newest first."""
    points = [
        stackdriver_point(start + timedelta(seconds=60 * i), value)
        for i, value in enumerate(values)
    ]
    series = {
        'metric': {'type': 'compute.googleapis.com/instance/cpu/utilization'},
        'points': list(reversed(points)),
    }
    if labels is not None:
        series['resource'] = {'type': 'gce_instance', 'labels': labels}
    return series


@pytest.fixture
def scope():
    return CanaryScope(scope='myapp-v010', region='us-east1', start=START, end=END, step=60)


@pytest.fixture
def metric_config():
    return CanaryMetricConfig(
        name='cpu',
        query=MetricQueryConfig(metric_type='compute.googleapis.com/instance/cpu/utilization'),
    )


@pytest.fixture
def spec(metric_config, scope):
    return MetricQuerySpec.from_config('my-account', metric_config, scope)


@pytest.fixture
def registry():
    """A registry whose clock advances 500ns per reading."""
    ticks = itertools.count(start=1000, step=500)
    return InMemoryRegistry(clock=lambda: next(ticks))


@pytest.fixture
def monitoring():
    """A stand-in for a googleapiclient Monitoring service."""
    client = MagicMock()
    client.projects.return_value.timeSeries.return_value.list.return_value.execute.return_value = {}
    return client


@pytest.fixture
def accounts(monitoring):
    return AccountCredentialsRepository([
        AccountCredentials(name='my-account', project='my-project', client=monitoring),
    ])


def set_response(monitoring, response):
    monitoring.projects.return_value.timeSeries.return_value.list.return_value.execute.return_value = response


def list_kwargs(monitoring):
    return monitoring.projects.return_value.timeSeries.return_value.list.call_args.kwargs
