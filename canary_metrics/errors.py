"""Exceptions raised by the canary metrics client."""


class CanaryMetricsError(Exception):
    """Base class for errors raised by this package."""


class AccountResolutionError(CanaryMetricsError, ValueError):
    """The account name does not map to known credentials."""

    def __init__(self, account_name: str):
        super().__init__(f"Unable to resolve account {account_name}.")
        self.account_name = account_name


class InvalidQueryError(CanaryMetricsError, ValueError):
    """A metric query was built from an inconsistent scope."""
