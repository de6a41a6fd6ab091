"""Public interface for the PowerDNS adapter."""

from __future__ import annotations

from .client import (
    PowerDnsAPIError,
    PowerDnsSource,
    api_path,
    clean_api_path,
    rrset_change_body,
)
from .schema import RRSetPayload, ZoneDetailPayload, ZonePayload
from .translator import parse_rrset, parse_zone, parse_zone_records

__all__ = [
    "PowerDnsAPIError",
    "PowerDnsSource",
    "RRSetPayload",
    "ZoneDetailPayload",
    "ZonePayload",
    "api_path",
    "clean_api_path",
    "parse_rrset",
    "parse_zone",
    "parse_zone_records",
    "rrset_change_body",
]
