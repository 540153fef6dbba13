# tests/unit/cache/test_fingerprint.py
"""Tests for cache/fingerprint.py: cache key derivation."""

from __future__ import annotations

import pytest

from transcache.cache.fingerprint import derive_fingerprint, is_default_domain


class TestIsDefaultDomain:
    @pytest.mark.parametrize("domain", ["", "default", None])
    def test_default(self, domain):
        assert is_default_domain(domain) is True

    def test_named(self):
        assert is_default_domain("my-theme") is False


class TestDeriveFingerprint:
    def test_deterministic(self):
        a = derive_fingerprint("my-theme", "/path/fr_FR.mo", "1.2")
        b = derive_fingerprint("my-theme", "/path/fr_FR.mo", "1.2")
        assert a == b

    def test_fixed_length_hex(self):
        fp = derive_fingerprint("my-theme", "/path/fr_FR.mo")
        assert len(fp) == 64
        int(fp, 16)

    @pytest.mark.parametrize("changed", [
        ("other-theme", "/path/fr_FR.mo", "1.2"),
        ("my-theme", "/path/de_DE.mo", "1.2"),
        ("my-theme", "/path/fr_FR.mo", "1.3"),
    ])
    def test_any_input_change_changes_key(self, changed):
        base = derive_fingerprint("my-theme", "/path/fr_FR.mo", "1.2")
        assert derive_fingerprint(*changed) != base

    def test_format_version_changes_key(self):
        a = derive_fingerprint("my-theme", "/p.mo", format_version="1")
        b = derive_fingerprint("my-theme", "/p.mo", format_version="2")
        assert a != b

    def test_no_ambiguity_between_adjacent_fields(self):
        assert derive_fingerprint("ab", "c") != derive_fingerprint("a", "bc")

    def test_default_domain_uses_host_version(self):
        a = derive_fingerprint("default", "/core.mo", host_version="6.4")
        b = derive_fingerprint("default", "/core.mo", host_version="6.5")
        assert a != b

    def test_empty_domain_uses_host_version(self):
        a = derive_fingerprint("", "/core.mo", host_version="6.4")
        b = derive_fingerprint("", "/core.mo", host_version="6.5")
        assert a != b

    def test_default_domain_caller_seed_wins(self):
        a = derive_fingerprint("default", "/core.mo", "custom", host_version="6.4")
        b = derive_fingerprint("default", "/core.mo", "custom", host_version="6.5")
        assert a == b
        assert a != derive_fingerprint("default", "/core.mo", host_version="6.4")

    def test_named_domain_ignores_host_version(self):
        a = derive_fingerprint("my-plugin", "/p.mo", host_version="6.4")
        b = derive_fingerprint("my-plugin", "/p.mo", host_version="6.5")
        assert a == b

    def test_invalid_types_coerced(self):
        assert derive_fingerprint(None, 42, ["x"]) == derive_fingerprint("", "", "")
