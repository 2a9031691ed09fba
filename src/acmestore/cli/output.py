"""Output formatting helpers for CLI."""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from acmestore.core.exceptions import InvalidCertificateError
from acmestore.core.models import Certificate

# Global console instances
console = Console()
error_console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]✗[/red] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def print_json(data: Any) -> None:
    """Print data as formatted JSON."""

    def serialize(obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        elif isinstance(obj, (set, frozenset)):
            return sorted(obj)
        elif isinstance(obj, bytes):
            return obj.decode()
        return str(obj)

    console.print_json(json.dumps(data, default=serialize, indent=2))


def create_table(
    title: str | None = None,
    columns: list[tuple[str, str]] | None = None,
) -> Table:
    """
    Create a rich table.

    Args:
        title: Optional table title
        columns: List of (header, style) tuples

    Returns:
        Rich Table instance
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")

    if columns:
        for header, style in columns:
            table.add_column(header, style=style)

    return table


def format_datetime(dt: datetime | None) -> str:
    """Format a datetime for display."""
    if dt is None:
        return "—"
    return dt.strftime("%Y-%m-%d %H:%M:%S %Z")


def certificate_summary(cert: Certificate) -> dict[str, Any]:
    """Describe a certificate bundle; X.509 fields are omitted if unparseable."""
    summary: dict[str, Any] = {
        "common_name": cert.common_name,
        "version": cert.version,
    }
    try:
        parsed = cert.x509_certificate
    except InvalidCertificateError:
        return summary

    summary.update(
        {
            "subject": parsed.subject.rfc4514_string(),
            "issuer": parsed.issuer.rfc4514_string(),
            "serial": f"{parsed.serial_number:x}",
            "not_before": parsed.not_valid_before_utc,
            "not_after": parsed.not_valid_after_utc,
        }
    )
    return summary


def print_certificate_details(summary: dict[str, Any]) -> None:
    """Print certificate details in a formatted panel."""
    content = []
    content.append(f"[cyan]Common Name:[/cyan]  {summary.get('common_name', 'N/A')}")
    content.append(f"[cyan]Version:[/cyan]      {summary.get('version', 'N/A')}")

    if "subject" in summary:
        content.append("")
        content.append(f"[cyan]Subject:[/cyan]      {summary['subject']}")
        content.append(f"[cyan]Issuer:[/cyan]       {summary['issuer']}")
        content.append(f"[cyan]Serial:[/cyan]       {summary['serial']}")
        content.append(f"[cyan]Valid From:[/cyan]   {format_datetime(summary['not_before'])}")
        content.append(f"[cyan]Valid Until:[/cyan]  {format_datetime(summary['not_after'])}")

    panel = Panel(
        "\n".join(content),
        title=f"[bold]Certificate: {summary.get('common_name', 'Unknown')}[/bold]",
        border_style="green",
    )
    console.print(panel)
