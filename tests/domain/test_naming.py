from __future__ import annotations

import pytest

from zonesync.domain.naming import (
    domain_record_name,
    fqdn_domain_name,
    friendly_domain_name,
    keys_equal,
    normalize_key,
    record_external_id,
    record_fqdn,
)


def test_friendly_and_fqdn_names() -> None:
    assert friendly_domain_name("example.com.") == "example.com"
    assert friendly_domain_name("example.com") == "example.com"
    assert fqdn_domain_name("example.com") == "example.com."
    assert fqdn_domain_name("example.com.") == "example.com."


def test_normalize_key_strips_one_trailing_dot_and_casefolds() -> None:
    assert normalize_key(" WWW.Example.COM. ") == "www.example.com"
    assert normalize_key(None) is None
    assert keys_equal("A:www.example.com.", "a:WWW.example.com")
    assert not keys_equal(None, None)


def test_record_external_id_upper_cases_type() -> None:
    assert record_external_id("a", "foo.example.com") == "A:foo.example.com"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("www.example.com.", "www"),
        ("a.b.example.com", "a.b"),
        ("example.com.", "@"),
        ("other.org.", "other.org"),
    ],
)
def test_domain_record_name_is_zone_relative(name: str, expected: str) -> None:
    assert domain_record_name(name, "example.com.") == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("www", "www.example.com."),
        ("@", "example.com."),
        ("", "example.com."),
        ("www.example.com", "www.example.com."),
        ("host.other.org.", "host.other.org."),
        ("Example.com", "Example.com."),
        ("myexample.com", "myexample.com.example.com."),
    ],
)
def test_record_fqdn_qualifies_relative_names(name: str, expected: str) -> None:
    assert record_fqdn(name, "example.com") == expected
