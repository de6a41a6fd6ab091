"""Domain-name and natural-key helpers.

Remote listings report fully-qualified names with a trailing dot (v4) or
without one (v3), and older local rows may differ in case. Every natural-key
comparison goes through ``normalize_key`` so neither difference splits one
real-world object into an add plus a delete.
"""

from __future__ import annotations

APEX_RECORD_NAME = "@"


def friendly_domain_name(name: str) -> str:
    """Strip a single trailing dot from a fully-qualified name."""

    return name[:-1] if name.endswith(".") else name


def fqdn_domain_name(name: str) -> str:
    """Return ``name`` with exactly the one trailing dot it should carry."""

    return name if name.endswith(".") else f"{name}."


def normalize_key(value: str | None) -> str | None:
    if value is None:
        return None
    return friendly_domain_name(value.strip()).casefold()


def keys_equal(left: str | None, right: str | None) -> bool:
    normalized_left = normalize_key(left)
    return normalized_left is not None and normalized_left == normalize_key(right)


def record_external_id(record_type: str | None, name: str) -> str:
    """Compound natural key of a record: ``TYPE:NAME`` with the type upper-cased."""

    return f"{(record_type or '').upper()}:{name}"


def domain_record_name(record_name: str, zone_fqdn: str | None) -> str:
    """Return ``record_name`` relative to its zone (``@`` for the apex)."""

    name = friendly_domain_name(record_name)
    if not zone_fqdn:
        return name
    zone = friendly_domain_name(zone_fqdn)
    if name.casefold() == zone.casefold():
        return APEX_RECORD_NAME
    suffix = f".{zone}"
    if name.casefold().endswith(suffix.casefold()):
        return name[: -len(suffix)]
    return name


def record_fqdn(record_name: str, zone_fqdn: str) -> str:
    """Inverse of ``domain_record_name``: qualify a zone-relative name."""

    zone = fqdn_domain_name(zone_fqdn)
    name = record_name.strip()
    if not name or name == APEX_RECORD_NAME:
        return zone
    if name.endswith("."):
        return name
    friendly_name = friendly_domain_name(name).casefold()
    friendly_zone = friendly_domain_name(zone).casefold()
    if friendly_name == friendly_zone or friendly_name.endswith(f".{friendly_zone}"):
        return fqdn_domain_name(name)
    return f"{name}.{zone}"
