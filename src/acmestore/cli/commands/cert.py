"""Certificate commands for CLI."""

from __future__ import annotations

from pathlib import Path

import click

from acmestore.cli.main import Context, handle_errors, pass_context
from acmestore.cli.output import (
    OutputFormat,
    certificate_summary,
    console,
    create_table,
    print_certificate_details,
    print_info,
    print_json,
    print_success,
)
from acmestore.core.exceptions import NotExistError
from acmestore.core.models import Certificate
from acmestore.storage.keys import CURRENT_VERSION

PARTS = ("certificate", "chain", "fullchain", "private_key")


@click.group("cert")
def cert_group():
    """Certificate bundle commands."""
    pass


@cert_group.command("list")
@pass_context
@handle_errors
def list_certs(ctx: Context):
    """List common names that have stored certificates."""
    names = sorted(ctx.storage.list_certificates())

    if ctx.output_format == OutputFormat.JSON:
        print_json(names)
        return

    if not names:
        print_info("No certificates stored")
        return

    for name in names:
        click.echo(name)


@cert_group.command("versions")
@click.argument("common_name")
@pass_context
@handle_errors
def versions(ctx: Context, common_name: str):
    """List stored versions of COMMON_NAME, marking the current one."""
    storage = ctx.storage
    found = sorted(storage.list_certificate_versions(common_name))
    try:
        current = storage.get_current_certificate_version(common_name)
    except NotExistError:
        current = None

    if ctx.output_format == OutputFormat.JSON:
        print_json({"common_name": common_name, "current": current, "versions": found})
        return

    if not found:
        print_info(f"No versions stored for {common_name}")
        return

    table = create_table(
        title=f"Versions of {common_name}",
        columns=[("Version", "white"), ("Current", "green")],
    )
    for version in found:
        table.add_row(version, "✓" if version == current else "")
    console.print(table)


@cert_group.command("current")
@click.argument("common_name")
@pass_context
@handle_errors
def current(ctx: Context, common_name: str):
    """Print the current version of COMMON_NAME."""
    version = ctx.storage.get_current_certificate_version(common_name)

    if ctx.output_format == OutputFormat.JSON:
        print_json({"common_name": common_name, "current": version})
    else:
        click.echo(version)


@cert_group.command("show")
@click.argument("common_name")
@click.option(
    "--version",
    "-V",
    "version",
    default=CURRENT_VERSION,
    show_default=True,
    help="Version to show",
)
@click.option(
    "--part",
    "-p",
    type=click.Choice(PARTS),
    default=None,
    help="Print a single PEM part instead of a summary",
)
@pass_context
@handle_errors
def show(ctx: Context, common_name: str, version: str, part: str | None):
    """
    Show a stored certificate bundle.

    Example:
        acmestore cert show example.com --part fullchain > fullchain.pem
    """
    cert = ctx.storage.get_certificate(common_name, version)

    if part:
        click.echo(getattr(cert, part).decode(), nl=False)
        return

    summary = certificate_summary(cert)
    if ctx.output_format == OutputFormat.JSON:
        print_json(summary)
    else:
        print_certificate_details(summary)


@cert_group.command("put")
@click.option("--cert", "cert_file", required=True, type=click.Path(exists=True, dir_okay=False), help="Leaf certificate PEM")
@click.option("--chain", "chain_file", required=True, type=click.Path(exists=True, dir_okay=False), help="Intermediate chain PEM")
@click.option("--key", "key_file", required=True, type=click.Path(exists=True, dir_okay=False), help="Private key PEM")
@click.option("--common-name", default=None, help="Override the common name read from the certificate")
@click.option("--version", "version", default=None, help="Override the version derived from the certificate")
@click.option(
    "--passphrase",
    envvar="ACMESTORE_PASSPHRASE",
    default=None,
    help="Encrypt the private key with this passphrase before storing",
)
@click.option(
    "--update-current/--no-update-current",
    default=True,
    show_default=True,
    help="Point the current version at this bundle",
)
@pass_context
@handle_errors
def put(
    ctx: Context,
    cert_file: str,
    chain_file: str,
    key_file: str,
    common_name: str | None,
    version: str | None,
    passphrase: str | None,
    update_current: bool,
):
    """
    Store a certificate bundle as a new version.

    Example:
        acmestore cert put --cert cert.pem --chain chain.pem --key key.pem
    """
    cert = Certificate(
        Path(cert_file).read_bytes(),
        Path(chain_file).read_bytes(),
        Path(key_file).read_bytes(),
        common_name=common_name,
        version=version,
    )
    ctx.storage.put_certificate(cert, passphrase, update_current=update_current)

    suffix = " (current)" if update_current else ""
    print_success(f"Stored {cert.common_name} version {cert.version}{suffix}")
