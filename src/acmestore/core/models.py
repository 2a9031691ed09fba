"""Account key and certificate value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Self

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from acmestore.core.exceptions import InvalidCertificateError

# Timestamp portion of a derived certificate version
VERSION_TIME_FORMAT = "%Y%m%d-%H%M%S"


def _to_bytes(value: bytes | str) -> bytes:
    if isinstance(value, str):
        return value.encode()
    return value


def _encrypt_private_key(pem: bytes, passphrase: str) -> bytes:
    """Re-serialize an unencrypted PEM private key under a passphrase."""
    try:
        key = serialization.load_pem_private_key(pem, password=None)
    except (ValueError, TypeError) as e:
        raise InvalidCertificateError(f"Cannot load private key: {e}") from e

    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.BestAvailableEncryption(passphrase.encode()),
    )


@dataclass
class AccountKey:
    """
    ACME account private key.

    The key is kept as PEM bytes and handed to storage as-is unless a
    passphrase is supplied at export time.
    """

    pem: bytes

    def __post_init__(self) -> None:
        self.pem = _to_bytes(self.pem)

    @classmethod
    def generate(cls, bits: int = 2048) -> Self:
        """
        Generate a new RSA account key.

        Args:
            bits: RSA modulus size

        Returns:
            New AccountKey instance
        """
        key = rsa.generate_private_key(public_exponent=65537, key_size=bits)
        pem = key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return cls(pem)

    def export(self, passphrase: str | None = None) -> bytes:
        """
        Export the key as PEM.

        Args:
            passphrase: Optional passphrase to encrypt the exported key

        Returns:
            PEM bytes, encrypted when a passphrase is given

        Raises:
            InvalidCertificateError: If the key cannot be parsed for encryption
        """
        if passphrase is None:
            return self.pem
        return _encrypt_private_key(self.pem, passphrase)


@dataclass
class Certificate:
    """
    Issued TLS certificate bundle.

    common_name and version are read from the X.509 certificate when they
    are not given explicitly.
    """

    certificate: bytes
    chain: bytes
    private_key: bytes = field(repr=False)
    common_name: str | None = None
    version: str | None = None

    def __post_init__(self) -> None:
        self.certificate = _to_bytes(self.certificate)
        self.chain = _to_bytes(self.chain)
        self.private_key = _to_bytes(self.private_key)

        if self.common_name is None:
            self.common_name = self._read_common_name()
        if self.version is None:
            self.version = self._derive_version()

    @cached_property
    def x509_certificate(self) -> x509.Certificate:
        """Parsed leaf certificate."""
        try:
            return x509.load_pem_x509_certificate(self.certificate)
        except ValueError as e:
            raise InvalidCertificateError(f"Cannot parse certificate: {e}") from e

    @property
    def fullchain(self) -> bytes:
        """Leaf certificate followed by the chain."""
        return self.certificate.rstrip() + b"\n" + self.chain

    def _read_common_name(self) -> str:
        attrs = self.x509_certificate.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
        if not attrs:
            raise InvalidCertificateError("Certificate subject has no common name")
        return str(attrs[0].value)

    def _derive_version(self) -> str:
        issued = self.x509_certificate.not_valid_before_utc.strftime(VERSION_TIME_FORMAT)
        return f"{issued}_{self.x509_certificate.serial_number:x}"

    def export(self, passphrase: str | None = None) -> dict[str, bytes]:
        """
        Export the bundle as PEM parts.

        Args:
            passphrase: Optional passphrase to encrypt the private key

        Returns:
            Dict with certificate, chain, fullchain and private_key entries
        """
        private_key = self.private_key
        if passphrase is not None:
            private_key = _encrypt_private_key(private_key, passphrase)

        return {
            "certificate": self.certificate,
            "chain": self.chain,
            "fullchain": self.fullchain,
            "private_key": private_key,
        }
