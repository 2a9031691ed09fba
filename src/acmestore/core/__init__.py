"""Core domain objects for acmestore."""

from acmestore.core.exceptions import (
    AcmeStoreError,
    AlreadyExistError,
    InvalidCertificateError,
    NotExistError,
    ObjectNotFoundError,
    StorageError,
)
from acmestore.core.models import AccountKey, Certificate

__all__ = [
    "AccountKey",
    "Certificate",
    "AcmeStoreError",
    "AlreadyExistError",
    "InvalidCertificateError",
    "NotExistError",
    "ObjectNotFoundError",
    "StorageError",
]
