"""Metrics service: build the query, fetch it with timing, normalize the result."""

import logging
from typing import Iterable, List

from .accounts import AccountCredentialsRepository
from .backends.base import MetricsBackend
from .normalizer import normalize
from .registry import Registry, timed
from .types import CanaryMetricConfig, CanaryScope, MetricQuerySpec, MetricSet

logger = logging.getLogger(__name__)


class MetricsService:
    """Fetches canary metrics for a set of accounts from one backend."""

    def __init__(self, backend: MetricsBackend, account_names: Iterable[str],
                 accounts: AccountCredentialsRepository, registry: Registry):
        self.backend = backend
        self.account_names = list(account_names)
        self.accounts = accounts
        self.registry = registry

    def get_type(self) -> str:
        return self.backend.type

    def services_account(self, account_name: str) -> bool:
        return account_name in self.account_names

    def query_metrics(self, account_name: str, metric_config: CanaryMetricConfig,
                      scope: CanaryScope) -> List[MetricSet]:
        """Query one metric over one scope.

        Raises AccountResolutionError before any I/O if the account is unknown.
        Backend errors propagate unchanged once the fetch timing is recorded.
        """
        credentials = self.accounts.get_required(account_name)
        spec = MetricQuerySpec.from_config(account_name, metric_config, scope)
        query = self.backend.build_query(spec, credentials.project)

        try:
            with timed(self.registry, self.backend.fetch_timer_name,
                       project=credentials.project, region=spec.region):
                response = self.backend.execute(credentials.client, query)
        except Exception as e:
            logger.error(f"Error fetching {spec.metric_type} for account {account_name}: {e}")
            raise

        series_list = self.backend.parse_series(response, query)
        logger.debug("Fetched %d series for %s", len(series_list), spec.name)
        return normalize(series_list, spec)
