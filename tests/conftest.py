"""Pytest configuration and fixtures for acmestore tests."""

from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from acmestore.core.models import AccountKey, Certificate
from acmestore.storage import CertificateStore, InMemoryObjectStore

ISSUED_AT = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def make_certificate_pem(
    common_name: str,
    serial: int = 0x1234,
    not_before: datetime = ISSUED_AT,
) -> tuple[bytes, bytes]:
    """Create a self-signed certificate; returns (certificate_pem, key_pem)."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(serial)
        .not_valid_before(not_before)
        .not_valid_after(not_before + timedelta(days=90))
        .sign(key, hashes.SHA256())
    )
    key_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return cert.public_bytes(serialization.Encoding.PEM), key_pem


def make_bundle(common_name: str = "example.com", version: str = "v1") -> Certificate:
    """Bundle with placeholder PEM bodies and explicit identity."""
    return Certificate(
        f"-----CERT {common_name} {version}-----\n".encode(),
        f"-----CHAIN {common_name} {version}-----\n".encode(),
        f"-----KEY {common_name} {version}-----\n".encode(),
        common_name=common_name,
        version=version,
    )


@pytest.fixture
def memory_store():
    """Provide an empty in-memory object store."""
    return InMemoryObjectStore(bucket="test-bucket")


@pytest.fixture
def small_page_store():
    """Provide an in-memory object store that pages every two entries."""
    return InMemoryObjectStore(bucket="test-bucket", page_size=2)


@pytest.fixture
def cert_store(memory_store):
    """Provide a certificate store with a prefix over the in-memory store."""
    return CertificateStore(memory_store, prefix="acme")


@pytest.fixture
def bundle():
    """Provide a placeholder certificate bundle for example.com v1."""
    return make_bundle()


@pytest.fixture
def real_certificate():
    """Provide a certificate bundle backed by a real self-signed certificate."""
    cert_pem, key_pem = make_certificate_pem("real.example")
    chain_pem, _ = make_certificate_pem("Test Intermediate", serial=0x99)
    return Certificate(cert_pem, chain_pem, key_pem)


@pytest.fixture
def account_key():
    """Provide a freshly generated account key."""
    return AccountKey.generate(bits=2048)
