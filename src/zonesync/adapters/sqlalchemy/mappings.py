"""SQLAlchemy mapping metadata for the zonesync domain model."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    orm,
)
from sqlalchemy.orm import configure_mappers

from zonesync.domain.model import (
    Integration,
    IntegrationStatus,
    RecordSource,
    RefSource,
    ServiceVersion,
    Zone,
    ZoneRecord,
)

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

integration_table = Table(
    "integration",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("service_url", String(1024), nullable=False),
    Column("service_version", Enum(ServiceVersion, native_enum=False), nullable=False),
    Column("create_pointers", Boolean, nullable=False, default=True),
    Column("domain_active", Boolean, nullable=False, default=True),
    Column("status", Enum(IntegrationStatus, native_enum=False), nullable=True),
    Column("status_message", Text, nullable=True),
    Column("status_date", UTCDateTime(), nullable=True),
    UniqueConstraint("name", name="uq_integration_name"),
)

zone_table = Table(
    "zone",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "integration_id",
        Integer,
        ForeignKey("integration.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(255), nullable=False),
    Column("fqdn", String(255), nullable=False),
    Column("external_id", String(1024), nullable=True),
    Column("zone_type", String(64), nullable=True),
    Column("public_zone", Boolean, nullable=False, default=True),
    Column("active", Boolean, nullable=False, default=True),
    Column("domain_serial", Integer, nullable=True),
    Column("dnssec", Boolean, nullable=False, default=False),
    Column("ref_source", Enum(RefSource, native_enum=False), nullable=True),
    Index("ix_zone_integration_id", "integration_id"),
)

zone_record_table = Table(
    "zone_record",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("zone_id", Integer, ForeignKey("zone.id", ondelete="CASCADE"), nullable=False),
    Column("name", String(255), nullable=False),
    Column("fqdn", String(255), nullable=True),
    Column("type", String(16), nullable=False),
    Column("content", Text, nullable=True),
    Column("ttl", Integer, nullable=True),
    Column("comments", Text, nullable=True),
    Column("external_id", String(512), nullable=True),
    Column("source", Enum(RecordSource, native_enum=False), nullable=False),
    Index("ix_zone_record_zone_id", "zone_id"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Integration, integration_table)
    mapper_registry.map_imperatively(Zone, zone_table)
    mapper_registry.map_imperatively(ZoneRecord, zone_record_table)

    configure_mappers()
    return mapper_registry
