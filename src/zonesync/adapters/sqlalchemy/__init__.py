"""SQLAlchemy adapter package for zonesync."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyIntegrationRepository,
    SqlAlchemyRecordRepository,
    SqlAlchemyZoneRepository,
)

__all__ = [
    "SqlAlchemyIntegrationRepository",
    "SqlAlchemyRecordRepository",
    "SqlAlchemyZoneRepository",
    "mapper_registry",
    "start_mappers",
]
