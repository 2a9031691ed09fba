"""CLI main entry point and command groups."""

from __future__ import annotations

import sys
from collections.abc import Callable
from functools import wraps

import click

from acmestore import __version__
from acmestore.cli.output import OutputFormat, error_console, print_error
from acmestore.config import Settings, get_settings
from acmestore.logging import init_logging
from acmestore.storage import CertificateStorage, get_certificate_storage


class Context:
    """CLI context object passed to all commands."""

    def __init__(self):
        self.settings: Settings = get_settings()
        self.output_format: OutputFormat = OutputFormat.TEXT
        self.verbose: bool = False
        self._storage: CertificateStorage | None = None

    @property
    def storage(self) -> CertificateStorage:
        """Certificate storage built from settings on first use."""
        if self._storage is None:
            self._storage = get_certificate_storage(self.settings)
        return self._storage


pass_context = click.make_pass_decorator(Context, ensure=True)


def handle_errors(f: Callable) -> Callable:
    """Decorator to handle common errors gracefully."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except KeyboardInterrupt:
            print_error("Operation cancelled")
            sys.exit(130)
        except click.ClickException:
            raise
        except Exception as e:
            print_error(str(e))
            if args and getattr(args[0], "verbose", False):
                error_console.print_exception()
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(version=__version__, prog_name="acmestore")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@pass_context
def cli(ctx: Context, output_format: str, verbose: bool):
    """
    acmestore - ACME certificate storage in object storage buckets

    Inspect and populate the account key and versioned certificate
    bundles kept under ACMESTORE_BUCKET / ACMESTORE_PREFIX.
    """
    init_logging()
    ctx.output_format = OutputFormat(output_format)
    ctx.verbose = verbose


# Import and register command groups
from acmestore.cli.commands.account import account_group
from acmestore.cli.commands.cert import cert_group

cli.add_command(account_group)
cli.add_command(cert_group)


def main():
    """Main entry point."""
    cli(auto_envvar_prefix="ACMESTORE")


if __name__ == "__main__":
    main()
