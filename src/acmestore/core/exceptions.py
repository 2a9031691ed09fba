"""Custom exceptions for acmestore."""


class AcmeStoreError(Exception):
    """Base exception for all acmestore errors."""

    pass


class StorageError(AcmeStoreError):
    """Error with certificate storage operations."""

    pass


class NotExistError(StorageError):
    """Requested account key, certificate or current pointer does not exist."""

    pass


class AlreadyExistError(StorageError):
    """Object that must be created only once already exists."""

    pass


class ObjectNotFoundError(StorageError):
    """Object store confirmed that a key is absent."""

    def __init__(self, key: str):
        super().__init__(f"Object not found: {key}")
        self.key = key


class InvalidCertificateError(AcmeStoreError):
    """Certificate or key material could not be parsed."""

    pass
