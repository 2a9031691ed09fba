"""
Object key layout for the certificate store.

The bucket is flat, so directories are emulated with "/"-separated key
prefixes:

    <prefix>account.pem
    <prefix>certs/<common_name>/current
    <prefix>certs/<common_name>/<version>/cert.pem
    <prefix>certs/<common_name>/<version>/chain.pem
    <prefix>certs/<common_name>/<version>/fullchain.pem
    <prefix>certs/<common_name>/<version>/key.pem

Every function here is pure and accepts a raw, not yet normalized prefix.
"""

SEPARATOR = "/"

ACCOUNT_KEY_NAME = "account.pem"
CERTS_DIR = "certs"

# Reserved version name holding the current version pointer
CURRENT_VERSION = "current"

CERTIFICATE_NAME = "cert.pem"
CHAIN_NAME = "chain.pem"
FULLCHAIN_NAME = "fullchain.pem"
PRIVATE_KEY_NAME = "key.pem"


def normalize_prefix(prefix: str | None) -> str:
    """Return prefix ending with exactly one separator, or "" when empty."""
    if not prefix:
        return ""
    return prefix.rstrip(SEPARATOR) + SEPARATOR


def account_key_key(prefix: str | None) -> str:
    return f"{normalize_prefix(prefix)}{ACCOUNT_KEY_NAME}"


def certs_prefix(prefix: str | None) -> str:
    """Listing prefix under which every common name lives."""
    return f"{normalize_prefix(prefix)}{CERTS_DIR}{SEPARATOR}"


def certificate_versions_prefix(prefix: str | None, common_name: str) -> str:
    """Listing prefix under which every version of common_name lives."""
    return f"{certs_prefix(prefix)}{common_name}{SEPARATOR}"


def certificate_base_key(prefix: str | None, common_name: str, version: str) -> str:
    return f"{certificate_versions_prefix(prefix, common_name)}{version}"


def certificate_current_key(prefix: str | None, common_name: str) -> str:
    return certificate_base_key(prefix, common_name, CURRENT_VERSION)


def certificate_key(prefix: str | None, common_name: str, version: str) -> str:
    return f"{certificate_base_key(prefix, common_name, version)}{SEPARATOR}{CERTIFICATE_NAME}"


def chain_key(prefix: str | None, common_name: str, version: str) -> str:
    return f"{certificate_base_key(prefix, common_name, version)}{SEPARATOR}{CHAIN_NAME}"


def fullchain_key(prefix: str | None, common_name: str, version: str) -> str:
    return f"{certificate_base_key(prefix, common_name, version)}{SEPARATOR}{FULLCHAIN_NAME}"


def private_key_key(prefix: str | None, common_name: str, version: str) -> str:
    return f"{certificate_base_key(prefix, common_name, version)}{SEPARATOR}{PRIVATE_KEY_NAME}"


def strip_listing_prefix(name: str, listing_prefix: str) -> str:
    """
    Reduce a listed key or common prefix to its first path segment.

    Args:
        name: Key or common prefix returned by a list call
        listing_prefix: Prefix the list call was scoped to

    Returns:
        The segment directly below listing_prefix ("" if there is none)

    Example:
        >>> strip_listing_prefix("certs/example.com/v1/", "certs/")
        'example.com'
    """
    if name.startswith(listing_prefix):
        name = name[len(listing_prefix):]
    return name.split(SEPARATOR, 1)[0]
