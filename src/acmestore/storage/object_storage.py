"""Certificate storage on top of a flat object store."""

from __future__ import annotations

from acmestore.core.exceptions import AlreadyExistError, NotExistError, ObjectNotFoundError
from acmestore.core.models import AccountKey, Certificate
from acmestore.logging import get_audit_logger, get_logger
from acmestore.storage import keys
from acmestore.storage.base import (
    PEM_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
    CertificateStorage,
    ObjectStore,
)

logger = get_logger("storage")


def canonical_pem(body: bytes) -> bytes:
    """Trim trailing whitespace and terminate with exactly one newline."""
    return body.rstrip() + b"\n"


class CertificateStore(CertificateStorage):
    """
    Account key and certificate storage in an object store bucket.

    Writes are not coordinated: the four objects of a bundle and the
    current pointer are separate puts with no locking and no rollback.
    A failed put leaves earlier objects of the same call in place and the
    error propagates. Concurrent writers for the same common name must be
    serialized by the caller, and a failed bundle should be re-written
    under a new version rather than reusing the old one.
    """

    def __init__(self, store: ObjectStore, prefix: str | None = None):
        """
        Initialize the certificate store.

        Args:
            store: Object store handle (S3ObjectStore, InMemoryObjectStore, ...)
            prefix: Key prefix inside the bucket; a trailing "/" is added
        """
        self.store = store
        self.prefix = keys.normalize_prefix(prefix)
        self.audit = get_audit_logger()
        self.log = logger.with_context(bucket=store.bucket, prefix=self.prefix)

    def _get(self, key: str) -> bytes:
        self.log.debug("Fetching object", fields={"key": key})
        return self.store.get(key)

    def _put(self, key: str, body: bytes, content_type: str) -> None:
        self.log.debug("Writing object", fields={"key": key, "content_type": content_type})
        self.store.put(key, body, content_type)

    def get_account_key(self) -> AccountKey:
        try:
            return AccountKey(self._get(keys.account_key_key(self.prefix)))
        except ObjectNotFoundError as e:
            raise NotExistError("Account key doesn't exist") from e

    def account_key_exists(self) -> bool:
        try:
            self.get_account_key()
        except NotExistError:
            return False
        return True

    def put_account_key(self, key: AccountKey, passphrase: str | None = None) -> None:
        # Check-then-write; two concurrent callers can both pass the check
        if self.account_key_exists():
            raise AlreadyExistError("Account key already exists")

        object_key = keys.account_key_key(self.prefix)
        self._put(object_key, key.export(passphrase), PEM_CONTENT_TYPE)
        self.audit.account_key_created(self.store.bucket, object_key)

    def put_certificate(
        self,
        cert: Certificate,
        passphrase: str | None = None,
        update_current: bool = True,
    ) -> None:
        cn, version = cert.common_name, cert.version
        if version == keys.CURRENT_VERSION:
            raise ValueError(f"Version name {keys.CURRENT_VERSION!r} is reserved")

        parts = cert.export(passphrase)
        objects = [
            (keys.certificate_key(self.prefix, cn, version), parts["certificate"]),
            (keys.chain_key(self.prefix, cn, version), parts["chain"]),
            (keys.fullchain_key(self.prefix, cn, version), parts["fullchain"]),
            (keys.private_key_key(self.prefix, cn, version), parts["private_key"]),
        ]

        try:
            for object_key, body in objects:
                self._put(object_key, canonical_pem(body), PEM_CONTENT_TYPE)
            if update_current:
                self._put(
                    keys.certificate_current_key(self.prefix, cn),
                    version.encode(),
                    TEXT_CONTENT_TYPE,
                )
        except Exception as e:
            self.audit.certificate_stored(
                self.store.bucket, cn, version, update_current, error=str(e)
            )
            raise

        self.audit.certificate_stored(self.store.bucket, cn, version, update_current)
        if update_current:
            self.audit.current_updated(self.store.bucket, cn, version)

    def get_certificate(
        self, common_name: str, version: str = keys.CURRENT_VERSION
    ) -> Certificate:
        if version == keys.CURRENT_VERSION:
            version = self._current_version(common_name)

        # fullchain.pem is written by put_certificate but never read back;
        # Certificate.fullchain rebuilds it from certificate and chain.
        try:
            certificate = self._get(keys.certificate_key(self.prefix, common_name, version))
            chain = self._get(keys.chain_key(self.prefix, common_name, version))
            private_key = self._get(keys.private_key_key(self.prefix, common_name, version))
        except ObjectNotFoundError as e:
            raise NotExistError(
                f"Certificate for {common_name!r} of {version} version doesn't exist"
            ) from e

        return Certificate(
            certificate,
            chain,
            private_key,
            common_name=common_name,
            version=version,
        )

    def list_certificates(self) -> set[str]:
        return self._list_names(keys.certs_prefix(self.prefix))

    def list_certificate_versions(self, common_name: str) -> set[str]:
        names = self._list_names(keys.certificate_versions_prefix(self.prefix, common_name))
        names.discard(keys.CURRENT_VERSION)
        return names

    def get_current_certificate_version(self, common_name: str) -> str:
        return self._current_version(common_name)

    def _current_version(self, common_name: str) -> str:
        try:
            body = self._get(keys.certificate_current_key(self.prefix, common_name))
        except ObjectNotFoundError as e:
            raise NotExistError(
                f"Certificate for {common_name!r} of current version doesn't exist"
            ) from e
        return body.decode().rstrip("\r\n")

    def _list_names(self, listing_prefix: str) -> set[str]:
        """Collect first path segments below listing_prefix across all pages."""
        names: set[str] = set()
        token = None

        while True:
            page = self.store.list(listing_prefix, keys.SEPARATOR, token)
            for name in page.prefixes + page.keys:
                segment = keys.strip_listing_prefix(name, listing_prefix)
                if segment:
                    names.add(segment)

            # Stop on exhaustion or if the store hands back the token just used
            if not page.next_token or page.next_token == token:
                break
            token = page.next_token

        return names
