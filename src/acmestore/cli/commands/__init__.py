"""CLI command groups for acmestore."""

from acmestore.cli.commands.account import account_group
from acmestore.cli.commands.cert import cert_group

__all__ = ["account_group", "cert_group"]
