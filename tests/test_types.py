"""Tests for the data model."""

from datetime import timedelta

import pandas as pd
import pytest

from canary_metrics import AccountCredentialsRepository, AccountResolutionError, InvalidQueryError
from canary_metrics.types import CanaryScope, MetricQuerySpec, MetricSet, RawSeries
from conftest import START, END


def test_spec_from_config(spec):
    assert spec.account == 'my-account'
    assert spec.name == 'cpu'
    assert spec.metric_type == 'compute.googleapis.com/instance/cpu/utilization'
    assert spec.scope == 'myapp-v010'
    assert spec.region == 'us-east1'
    assert spec.alignment_period == 60
    assert spec.group_by_fields is None


def test_spec_rejects_reversed_window(metric_config):
    scope = CanaryScope(scope='s', region='r', start=END, end=START, step=60)

    with pytest.raises(InvalidQueryError):
        MetricQuerySpec.from_config('a', metric_config, scope)


@pytest.mark.parametrize("step", [0, -60])
def test_spec_rejects_non_positive_step(metric_config, step):
    scope = CanaryScope(scope='s', region='r', start=START, end=END, step=step)

    with pytest.raises(ValueError):
        MetricQuerySpec.from_config('a', metric_config, scope)


def test_placeholder_series():
    placeholder = RawSeries.placeholder()

    assert placeholder.points == []
    assert placeholder.labels is None


def test_metric_set_to_dict():
    metric_set = MetricSet(
        name='cpu',
        start_time_millis=1483228800000,
        start_time_iso='2017-01-01T00:00:00Z',
        step_millis=60000,
        values=[1.0, 2.0],
        tags={'zone': 'us-east1-b'},
    )

    assert metric_set.to_dict() == {
        'name': 'cpu',
        'startTimeMillis': 1483228800000,
        'startTimeIso': '2017-01-01T00:00:00Z',
        'stepMillis': 60000,
        'values': [1.0, 2.0],
        'tags': {'zone': 'us-east1-b'},
    }


def test_metric_set_to_series():
    metric_set = MetricSet('cpu', 1483228800000, '2017-01-01T00:00:00Z', 60000, [1.0, 2.0, 3.0])

    series = metric_set.to_series()

    assert series.name == 'cpu'
    assert series.tolist() == [1.0, 2.0, 3.0]
    assert series.index[0] == pd.Timestamp(START)
    assert series.index[-1] == pd.Timestamp(START + timedelta(minutes=2))


def test_empty_metric_set_to_series():
    metric_set = MetricSet('cpu', 1483228800000, '2017-01-01T00:00:00Z', 60000)

    assert metric_set.to_series().empty


def test_account_repository():
    repository = AccountCredentialsRepository()

    assert repository.get_one('missing') is None
    assert 'missing' not in repository
    with pytest.raises(AccountResolutionError) as excinfo:
        repository.get_required('missing')
    assert excinfo.value.account_name == 'missing'
    assert str(excinfo.value) == "Unable to resolve account missing."
