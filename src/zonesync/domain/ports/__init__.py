"""Domain port definitions for adapters."""

from __future__ import annotations

from .editing import RemoteRecordEditor
from .fetching import FetchResult, RemoteDnsSource
from .persistence import IntegrationRepository, RecordRepository, ScopedStore, ZoneRepository
from .unit_of_work import DnsRepositories, DnsUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "DnsRepositories",
    "DnsUnitOfWork",
    "FetchResult",
    "IntegrationRepository",
    "RecordRepository",
    "RemoteDnsSource",
    "RemoteRecordEditor",
    "RepositoryCollection",
    "ScopedStore",
    "UnitOfWork",
    "ZoneRepository",
]
