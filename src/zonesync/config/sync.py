"""Synchronization defaults for refresh runs."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int

DEFAULT_ZONE_BATCH_SIZE = 50


@dataclass(frozen=True, slots=True)
class SyncConfig:
    zone_batch_size: int = DEFAULT_ZONE_BATCH_SIZE
    timeout_seconds: int | None = None


def get_sync_config() -> SyncConfig:
    timeout = env_int("ZONESYNC_REFRESH_TIMEOUT", default=0, minimum=0)
    return SyncConfig(
        zone_batch_size=env_int("ZONESYNC_ZONE_BATCH_SIZE", default=DEFAULT_ZONE_BATCH_SIZE),
        timeout_seconds=timeout or None,
    )
