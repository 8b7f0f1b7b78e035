"""Command line interface for the canary metrics client."""

import json
import logging
from typing import List, Optional

import click
from googleapiclient import discovery

from .accounts import AccountCredentials, AccountCredentialsRepository
from .backends import FlightSqlBackend, HyprstreamClient, StackdriverBackend
from .config import get_settings
from .registry import InMemoryRegistry
from .service import MetricsService
from .timestamps import to_utc_timestamp
from .types import CanaryMetricConfig, CanaryScope, MetricQueryConfig

CLI_ACCOUNT = "cli"


def _run_query(service, metric_config, scope, as_json):
    metric_sets = service.query_metrics(CLI_ACCOUNT, metric_config, scope)

    if as_json:
        click.echo(json.dumps([m.to_dict() for m in metric_sets], indent=2))
        return

    for metric_set in metric_sets:
        if metric_set.tags:
            click.echo(", ".join(f"{k}={v}" for k, v in sorted(metric_set.tags.items())))
        if not metric_set.values:
            click.echo("No metrics found")
        else:
            click.echo(metric_set.to_series().to_frame().to_string())


@click.group()
@click.option('--log-level', default=lambda: get_settings().log_level, help='Logging level')
def cli(log_level: str):
    """Canary metrics client CLI."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


@cli.command()
@click.option('--backend', type=click.Choice(['hyprstream', 'stackdriver']),
              default='hyprstream', help='Monitoring backend to query')
@click.option('--metric-type', required=True, help='Metric type to query')
@click.option('--name', default=None, help='Display name of the metric (defaults to the type)')
@click.option('--region', required=True, help='Region of the server group')
@click.option('--scope', required=True, help='Server group to query')
@click.option('--start', required=True, help='Start of the window, ISO 8601')
@click.option('--end', required=True, help='End of the window, ISO 8601')
@click.option('--step', default=60, type=int, help='Alignment period in seconds')
@click.option('--group-by', multiple=True, help='Group-by field (Stackdriver only)')
@click.option('--uri', default=lambda: get_settings().flight_sql_uri, help='Hyprstream Flight SQL URI')
@click.option('--project', default=lambda: get_settings().stackdriver_project, help='GCP project id')
@click.option('--json', 'as_json', is_flag=True, help='Print MetricSets as JSON')
def query_metrics(backend: str, metric_type: str, name: Optional[str], region: str,
                  scope: str, start: str, end: str, step: int, group_by: List[str],
                  uri: str, project: Optional[str], as_json: bool):
    """Query one metric for a server group over a time window."""
    metric_config = CanaryMetricConfig(
        name=name or metric_type,
        query=MetricQueryConfig(metric_type=metric_type,
                                group_by_fields=list(group_by) if group_by else None),
    )
    canary_scope = CanaryScope(
        scope=scope,
        region=region,
        start=to_utc_timestamp(start),
        end=to_utc_timestamp(end),
        step=step,
    )

    if backend == 'stackdriver':
        if not project:
            raise click.UsageError("--project is required for the stackdriver backend")
        monitoring = discovery.build('monitoring', 'v3', cache_discovery=False)
        accounts = AccountCredentialsRepository([AccountCredentials(CLI_ACCOUNT, project, monitoring)])
        service = MetricsService(StackdriverBackend(), [CLI_ACCOUNT], accounts, InMemoryRegistry())
        _run_query(service, metric_config, canary_scope, as_json)
        return

    template = get_settings().metric_id_template
    with HyprstreamClient(uri) as client:
        accounts = AccountCredentialsRepository([AccountCredentials(CLI_ACCOUNT, uri, client)])
        service = MetricsService(FlightSqlBackend(template), [CLI_ACCOUNT], accounts, InMemoryRegistry())
        _run_query(service, metric_config, canary_scope, as_json)


if __name__ == '__main__':
    cli()
