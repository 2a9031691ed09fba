"""acmestore - object-storage backend for ACME certificates."""

__version__ = "0.1.0"
