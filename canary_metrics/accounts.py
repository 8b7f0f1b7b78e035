"""Named account credentials handed to the metrics service."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from .errors import AccountResolutionError


@dataclass(frozen=True)
class AccountCredentials:
    """An authenticated client handle together with the project it belongs to."""
    name: str
    project: str
    client: Any


class AccountCredentialsRepository:
    """Lookup from account name to already-authenticated credentials."""

    def __init__(self, credentials: Optional[Iterable[AccountCredentials]] = None):
        self._accounts: Dict[str, AccountCredentials] = {}
        for account in credentials or ():
            self.save(account)

    def save(self, credentials: AccountCredentials) -> None:
        self._accounts[credentials.name] = credentials

    def get_one(self, name: str) -> Optional[AccountCredentials]:
        return self._accounts.get(name)

    def get_required(self, name: str) -> AccountCredentials:
        """Return the credentials for ``name`` or raise AccountResolutionError."""
        credentials = self.get_one(name)
        if credentials is None:
            raise AccountResolutionError(name)
        return credentials

    def __contains__(self, name: str) -> bool:
        return name in self._accounts

    def __len__(self) -> int:
        return len(self._accounts)
