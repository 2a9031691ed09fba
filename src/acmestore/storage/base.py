"""Abstract interfaces for certificate storage and the object stores behind it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Protocol

from acmestore.core.models import AccountKey, Certificate
from acmestore.storage.keys import CURRENT_VERSION

PEM_CONTENT_TYPE = "application/x-pem-file"
TEXT_CONTENT_TYPE = "text/plain"


@dataclass
class ListPage:
    """One page of a delimited object listing."""

    prefixes: list[str] = field(default_factory=list)  # common prefixes ("directories")
    keys: list[str] = field(default_factory=list)  # objects directly under the prefix
    next_token: str | None = None


class ObjectStore(Protocol):
    """Protocol for flat key/value object stores (S3 or in-memory)."""

    bucket: str

    def get(self, key: str) -> bytes:
        """Return object content. Raises ObjectNotFoundError if absent."""
        ...

    def put(self, key: str, body: bytes, content_type: str) -> None:
        """Create or replace an object."""
        ...

    def list(
        self,
        prefix: str,
        delimiter: str | None = None,
        continuation_token: str | None = None,
    ) -> ListPage:
        """List one page of keys and common prefixes under prefix."""
        ...


class CertificateStorage(ABC):
    """
    Abstract base class for ACME account key and certificate storage.

    Certificates are identified by common name and version. Each common
    name additionally carries a "current" pointer naming its active version.
    """

    @abstractmethod
    def get_account_key(self) -> AccountKey:
        """
        Retrieve the ACME account key.

        Raises:
            NotExistError: If no account key has been stored
        """
        pass

    @abstractmethod
    def account_key_exists(self) -> bool:
        """Return True if an account key is stored."""
        pass

    @abstractmethod
    def put_account_key(self, key: AccountKey, passphrase: str | None = None) -> None:
        """
        Store the ACME account key.

        Raises:
            AlreadyExistError: If an account key is already stored
        """
        pass

    @abstractmethod
    def put_certificate(
        self,
        cert: Certificate,
        passphrase: str | None = None,
        update_current: bool = True,
    ) -> None:
        """Store a certificate bundle, optionally making it the current version."""
        pass

    @abstractmethod
    def get_certificate(self, common_name: str, version: str = CURRENT_VERSION) -> Certificate:
        """
        Retrieve a certificate bundle.

        Raises:
            NotExistError: If the version or any part of the bundle is missing
        """
        pass

    @abstractmethod
    def list_certificates(self) -> set[str]:
        """Return the common names that have stored certificates."""
        pass

    @abstractmethod
    def list_certificate_versions(self, common_name: str) -> set[str]:
        """Return stored versions of a common name."""
        pass

    @abstractmethod
    def get_current_certificate_version(self, common_name: str) -> str:
        """
        Return the current version of a common name.

        Raises:
            NotExistError: If no current version is recorded
        """
        pass
