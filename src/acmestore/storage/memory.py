"""In-memory object store for development and tests."""

from __future__ import annotations

from acmestore.core.exceptions import ObjectNotFoundError
from acmestore.storage.base import ListPage


class InMemoryObjectStore:
    """
    Dict-backed object store with S3-like listing.

    Listing honours delimiters (collapsing deeper keys into common
    prefixes) and pages results with opaque continuation tokens.
    """

    def __init__(self, bucket: str = "memory", page_size: int = 1000):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.bucket = bucket
        self.page_size = page_size
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}

    def get(self, key: str) -> bytes:
        try:
            return self.objects[key]
        except KeyError:
            raise ObjectNotFoundError(key) from None

    def put(self, key: str, body: bytes, content_type: str) -> None:
        self.objects[key] = bytes(body)
        self.content_types[key] = content_type

    def list(
        self,
        prefix: str,
        delimiter: str | None = None,
        continuation_token: str | None = None,
    ) -> ListPage:
        entries: dict[str, bool] = {}  # name -> is common prefix
        for key in sorted(self.objects):
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            if delimiter and delimiter in rest:
                common = prefix + rest[: rest.index(delimiter) + len(delimiter)]
                entries[common] = True
            else:
                entries[key] = False

        names = sorted(entries)
        start = int(continuation_token) if continuation_token else 0
        end = start + self.page_size
        page = names[start:end]

        return ListPage(
            prefixes=[n for n in page if entries[n]],
            keys=[n for n in page if not entries[n]],
            next_token=str(end) if end < len(names) else None,
        )
