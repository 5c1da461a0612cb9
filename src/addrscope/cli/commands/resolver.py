"""Resolver command implementations."""

import json
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from addrscope.cli.commands.resolve import build_handle, output_format
from addrscope.cli.main import OutputFormat
from addrscope.core.resolver.hostname import HostnameResolver

console = Console()


def show(resolver_source: Optional[str], options):
    """Show resolver origin and nameservers."""
    handle = build_handle(resolver_source)

    if output_format(options) == OutputFormat.JSON:
        console.print_json(
            json.dumps(
                {
                    "origin": handle.origin.value,
                    "nameservers": [ns.model_dump(mode="json") for ns in handle.nameservers],
                }
            )
        )
        return

    table = Table(title=f"Resolver ({handle.origin.value})")
    table.add_column("Address", style="cyan")
    table.add_column("Port", style="yellow")
    table.add_column("Protocol", style="magenta")
    table.add_column("TLS Name", style="green")

    for ns in handle.nameservers:
        table.add_row(str(ns.address), str(ns.port), ns.protocol.value, ns.tls_name or "-")

    console.print(table)


def lookup(hostname: str, resolver_source: Optional[str], options):
    """Resolve a single hostname through the lookup chain."""
    handle = build_handle(resolver_source)
    resolver = HostnameResolver.for_handle(handle)
    addresses = resolver.resolve(hostname)

    if output_format(options) == OutputFormat.JSON:
        console.print_json(
            json.dumps({"hostname": hostname, "addresses": [str(ip) for ip in addresses]})
        )
        return

    if not addresses:
        console.print(f"[red]{escape(hostname)} could not be resolved[/]")
        return

    for ip in addresses:
        console.print(f"[green]{ip}[/]")
