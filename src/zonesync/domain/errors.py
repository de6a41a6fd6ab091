"""Error taxonomy for refresh runs.

Only ``ConnectivityError`` is fatal to a whole refresh. Fetch failures and
local store failures are scoped to one zone (or to the zone listing) and are
reported on the refresh result instead of aborting sibling scopes.
"""

from __future__ import annotations


class ZoneSyncError(RuntimeError):
    """Base class for errors raised by the sync domain."""


class ConnectivityError(ZoneSyncError):
    """Raised when the remote DNS service cannot be reached at all."""


class FetchError(ZoneSyncError):
    """Raised inside source adapters when a remote listing cannot be retrieved.

    Adapters turn it into a failed ``FetchResult`` before it reaches the refresh.
    """


class PersistenceError(ZoneSyncError):
    """Raised by local store adapters when a read or bulk write fails."""


class MutationError(ZoneSyncError):
    """Raised when a bulk create/save/remove call for a scope fails."""

    def __init__(self, message: str, *, scope: str, operation: str) -> None:
        super().__init__(message)
        self.scope = scope
        self.operation = operation


class IntegrationNotFoundError(ZoneSyncError):
    """Raised when a refresh is requested for an unknown integration."""


class ZoneNotFoundError(ZoneSyncError):
    """Raised when a record operation names a zone that is not cached locally."""
