"""Tests for acmestore.storage.keys module."""

import pytest

from acmestore.storage import keys


class TestNormalizePrefix:
    """Tests for prefix normalization."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, ""),
            ("", ""),
            ("acme", "acme/"),
            ("acme/", "acme/"),
            ("acme//", "acme/"),
            ("a/b", "a/b/"),
            ("/", "/"),
        ],
    )
    def test_normalize(self, raw, expected):
        """Non-empty prefixes end with exactly one separator."""
        assert keys.normalize_prefix(raw) == expected

    def test_idempotent(self):
        """Normalizing twice changes nothing."""
        once = keys.normalize_prefix("certs-bucket/prod")
        assert keys.normalize_prefix(once) == once


class TestKeyLayout:
    """Tests for object key templates."""

    def test_account_key(self):
        assert keys.account_key_key("acme") == "acme/account.pem"
        assert keys.account_key_key("") == "account.pem"

    def test_certificate_parts(self):
        """Each bundle part lives under certs/<cn>/<version>/."""
        assert keys.certificate_key("acme", "example.com", "v1") == "acme/certs/example.com/v1/cert.pem"
        assert keys.chain_key("acme", "example.com", "v1") == "acme/certs/example.com/v1/chain.pem"
        assert keys.fullchain_key("acme", "example.com", "v1") == "acme/certs/example.com/v1/fullchain.pem"
        assert keys.private_key_key("acme", "example.com", "v1") == "acme/certs/example.com/v1/key.pem"

    def test_current_pointer(self):
        assert keys.certificate_current_key("acme/", "example.com") == "acme/certs/example.com/current"

    def test_listing_prefixes(self):
        assert keys.certs_prefix(None) == "certs/"
        assert keys.certificate_versions_prefix("p", "example.com") == "p/certs/example.com/"

    def test_prefix_with_and_without_separator_agree(self):
        """Raw prefixes with or without trailing '/' produce identical keys."""
        assert keys.certificate_key("acme", "a", "1") == keys.certificate_key("acme/", "a", "1")
        assert keys.account_key_key("acme") == keys.account_key_key("acme///")


class TestStripListingPrefix:
    """Tests for reducing listed names to a path segment."""

    def test_common_prefix(self):
        assert keys.strip_listing_prefix("certs/example.com/", "certs/") == "example.com"

    def test_nested_key(self):
        assert keys.strip_listing_prefix("certs/example.com/v1/cert.pem", "certs/") == "example.com"

    def test_plain_key(self):
        assert keys.strip_listing_prefix("certs/example.com/current", "certs/example.com/") == "current"

    def test_empty_remainder(self):
        assert keys.strip_listing_prefix("certs/", "certs/") == ""
