"""Account key commands for CLI."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from acmestore.cli.main import Context, handle_errors, pass_context
from acmestore.cli.output import OutputFormat, print_json, print_success
from acmestore.core.models import AccountKey


@click.group("account")
def account_group():
    """ACME account key commands."""
    pass


@account_group.command("exists")
@pass_context
@handle_errors
def exists(ctx: Context):
    """
    Check whether an account key is stored.

    Exits with status 0 if the key exists and 2 if it does not.
    """
    found = ctx.storage.account_key_exists()

    if ctx.output_format == OutputFormat.JSON:
        print_json({"exists": found})
    else:
        click.echo("yes" if found else "no")

    if not found:
        sys.exit(2)


@account_group.command("show")
@pass_context
@handle_errors
def show(ctx: Context):
    """Print the stored account key PEM."""
    key = ctx.storage.get_account_key()
    click.echo(key.pem.decode(), nl=False)


@account_group.command("put")
@click.argument("key_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--passphrase",
    envvar="ACMESTORE_PASSPHRASE",
    default=None,
    help="Encrypt the key with this passphrase before storing",
)
@pass_context
@handle_errors
def put(ctx: Context, key_file: str, passphrase: str | None):
    """
    Store an existing PEM account key.

    Fails if an account key is already stored; keys are never overwritten.
    """
    key = AccountKey(Path(key_file).read_bytes())
    ctx.storage.put_account_key(key, passphrase)
    print_success("Account key stored")


@account_group.command("generate")
@click.option("--bits", default=2048, show_default=True, help="RSA key size")
@click.option(
    "--passphrase",
    envvar="ACMESTORE_PASSPHRASE",
    default=None,
    help="Encrypt the key with this passphrase before storing",
)
@pass_context
@handle_errors
def generate(ctx: Context, bits: int, passphrase: str | None):
    """Generate a new RSA account key and store it."""
    ctx.storage.put_account_key(AccountKey.generate(bits=bits), passphrase)
    print_success(f"Generated and stored {bits}-bit RSA account key")
