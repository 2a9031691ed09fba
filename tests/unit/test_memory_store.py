"""Tests for the in-memory object store."""

import pytest

from acmestore.core.exceptions import ObjectNotFoundError
from acmestore.storage import InMemoryObjectStore


@pytest.fixture
def populated():
    store = InMemoryObjectStore(page_size=100)
    for key in [
        "certs/a/v1/cert.pem",
        "certs/a/v1/key.pem",
        "certs/a/current",
        "certs/b/v1/cert.pem",
        "account.pem",
    ]:
        store.put(key, b"x", "text/plain")
    return store


class TestInMemoryObjectStore:
    """Tests for InMemoryObjectStore."""

    def test_get_missing(self):
        with pytest.raises(ObjectNotFoundError) as exc_info:
            InMemoryObjectStore().get("nope")
        assert exc_info.value.key == "nope"

    def test_put_get(self):
        store = InMemoryObjectStore()
        store.put("k", b"body", "text/plain")

        assert store.get("k") == b"body"
        assert store.content_types["k"] == "text/plain"

    def test_list_without_delimiter(self, populated):
        page = populated.list("certs/a/")

        assert page.prefixes == []
        assert page.keys == ["certs/a/current", "certs/a/v1/cert.pem", "certs/a/v1/key.pem"]
        assert page.next_token is None

    def test_list_with_delimiter(self, populated):
        """Deeper keys collapse into common prefixes."""
        page = populated.list("certs/a/", "/")

        assert page.prefixes == ["certs/a/v1/"]
        assert page.keys == ["certs/a/current"]

    def test_list_top_level(self, populated):
        page = populated.list("certs/", "/")
        assert page.prefixes == ["certs/a/", "certs/b/"]

    def test_paging(self, populated):
        populated.page_size = 1

        first = populated.list("certs/", "/")
        second = populated.list("certs/", "/", first.next_token)

        assert first.prefixes == ["certs/a/"]
        assert second.prefixes == ["certs/b/"]
        assert second.next_token is None

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            InMemoryObjectStore(page_size=0)
