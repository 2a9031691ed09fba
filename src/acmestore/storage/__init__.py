"""Storage layer for acmestore."""

from __future__ import annotations

from typing import TYPE_CHECKING

from acmestore.storage.base import CertificateStorage, ListPage, ObjectStore
from acmestore.storage.memory import InMemoryObjectStore
from acmestore.storage.object_storage import CertificateStore

if TYPE_CHECKING:
    from acmestore.config import Settings


def get_object_store(settings: Settings) -> ObjectStore:
    """Build the object store selected by settings.backend."""
    if settings.backend == "memory":
        return InMemoryObjectStore(
            bucket=settings.bucket or "memory",
            page_size=settings.list_page_size,
        )
    if settings.backend == "s3":
        from acmestore.storage.s3 import S3ObjectStore

        return S3ObjectStore(
            bucket=settings.bucket,
            region=settings.region,
            endpoint_url=settings.endpoint_url,
            access_key_id=settings.access_key_id,
            secret_access_key=settings.secret_access_key,
            page_size=settings.list_page_size,
        )
    raise ValueError(f"Unknown storage backend: {settings.backend}")


def get_certificate_storage(settings: Settings) -> CertificateStorage:
    """Factory for the configured certificate storage."""
    return CertificateStore(get_object_store(settings), prefix=settings.prefix)


__all__ = [
    # Interfaces
    "CertificateStorage",
    "ListPage",
    "ObjectStore",
    # Implementations
    "CertificateStore",
    "InMemoryObjectStore",
    # Factories
    "get_object_store",
    "get_certificate_storage",
]
