"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ServiceVersion(StrEnum):
    """PowerDNS HTTP API generations with different record payload shapes."""

    V3 = "3"
    V4 = "4"


class IntegrationStatus(StrEnum):
    OK = "ok"
    ERROR = "error"


class RefSource(StrEnum):
    INTEGRATION = "integration"
    USER = "user"


class RecordSource(StrEnum):
    SYNC = "sync"
    USER = "user"


class FailureKind(StrEnum):
    FETCH = "fetch"
    MUTATION = "mutation"
    STORE = "store"
