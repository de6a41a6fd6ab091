"""Initial schema: integrations, zones and zone records.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17 00:00:00

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from zonesync.adapters.sqlalchemy.mappings import UTCDateTime

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_SERVICE_VERSIONS = ("V3", "V4")
_STATUSES = ("OK", "ERROR")
_REF_SOURCES = ("INTEGRATION", "USER")
_RECORD_SOURCES = ("SYNC", "USER")


def upgrade() -> None:
    op.create_table(
        "integration",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("service_url", sa.String(length=1024), nullable=False),
        sa.Column(
            "service_version",
            sa.Enum(*_SERVICE_VERSIONS, name="serviceversion", native_enum=False),
            nullable=False,
        ),
        sa.Column("create_pointers", sa.Boolean(), nullable=False),
        sa.Column("domain_active", sa.Boolean(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*_STATUSES, name="integrationstatus", native_enum=False),
            nullable=True,
        ),
        sa.Column("status_message", sa.Text(), nullable=True),
        sa.Column("status_date", UTCDateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_integration")),
        sa.UniqueConstraint("name", name="uq_integration_name"),
    )
    op.create_table(
        "zone",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("integration_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("fqdn", sa.String(length=255), nullable=False),
        sa.Column("external_id", sa.String(length=1024), nullable=True),
        sa.Column("zone_type", sa.String(length=64), nullable=True),
        sa.Column("public_zone", sa.Boolean(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("domain_serial", sa.Integer(), nullable=True),
        sa.Column("dnssec", sa.Boolean(), nullable=False),
        sa.Column(
            "ref_source",
            sa.Enum(*_REF_SOURCES, name="refsource", native_enum=False),
            nullable=True,
        ),
        sa.ForeignKeyConstraint(
            ["integration_id"],
            ["integration.id"],
            name=op.f("fk_zone_integration_id_integration"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_zone")),
    )
    op.create_index("ix_zone_integration_id", "zone", ["integration_id"])
    op.create_table(
        "zone_record",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("zone_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("fqdn", sa.String(length=255), nullable=True),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("ttl", sa.Integer(), nullable=True),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("external_id", sa.String(length=512), nullable=True),
        sa.Column(
            "source",
            sa.Enum(*_RECORD_SOURCES, name="recordsource", native_enum=False),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["zone_id"],
            ["zone.id"],
            name=op.f("fk_zone_record_zone_id_zone"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_zone_record")),
    )
    op.create_index("ix_zone_record_zone_id", "zone_record", ["zone_id"])


def downgrade() -> None:
    op.drop_index("ix_zone_record_zone_id", table_name="zone_record")
    op.drop_table("zone_record")
    op.drop_index("ix_zone_integration_id", table_name="zone")
    op.drop_table("zone")
    op.drop_table("integration")
