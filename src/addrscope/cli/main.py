"""Main CLI entry point for addrscope."""

from enum import Enum
from typing import List, Optional

import typer
from rich.console import Console

# Create the main app
app = typer.Typer(
    name="addrscope",
    help="Turn IPs, CIDR blocks, hostnames and target files into a scan list",
    no_args_is_help=True,
)

console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    PLAIN = "plain"


# Global options stored in context
class GlobalOptions:
    def __init__(self):
        self.output: OutputFormat = OutputFormat.TABLE
        self.verbose: bool = False
        self.debug: bool = False


def split_values(values: Optional[List[str]]) -> List[str]:
    """Flatten repeated and comma-separated option values."""
    out: List[str] = []
    for value in values or []:
        out.extend(part for part in value.split(",") if part.strip())
    return out


# ============================================================================
# Resolve Commands
# ============================================================================


@app.command("resolve")
def resolve(
    ctx: typer.Context,
    targets: List[str] = typer.Argument(..., help="IPs, CIDRs, hostnames or target files"),
    resolver: Optional[str] = typer.Option(
        None, "--resolver", "-r", help="Resolver file or comma-separated nameserver IPs"
    ),
    exclude: Optional[List[str]] = typer.Option(
        None, "--exclude", "-x", help="CIDRs, IPs or hostnames to exclude"
    ),
    greppable: bool = typer.Option(False, "--greppable", "-g", help="Addresses only, no warnings"),
    accessible: bool = typer.Option(False, "--accessible", help="Plain-text warnings"),
):
    """Resolve targets into an ordered, de-duplicated address list."""
    from addrscope.cli.commands.resolve import run

    run(
        split_values(targets),
        resolver,
        split_values(exclude) or None,
        greppable,
        accessible,
        ctx.obj,
    )


@app.command("classify")
def classify(
    ctx: typer.Context,
    tokens: List[str] = typer.Argument(..., help="Tokens to classify"),
    resolver: Optional[str] = typer.Option(None, "--resolver", "-r", help="Resolver source"),
    limit: int = typer.Option(10, "--limit", "-l", help="Addresses shown per token"),
):
    """Show how each token is interpreted."""
    from addrscope.cli.commands.resolve import explain

    explain(tokens, resolver, limit, ctx.obj)


# ============================================================================
# Resolver Commands
# ============================================================================

resolver_app = typer.Typer(help="DNS resolver commands")
app.add_typer(resolver_app, name="resolver")


@resolver_app.command("show")
def resolver_show(
    ctx: typer.Context,
    resolver: Optional[str] = typer.Option(None, "--resolver", "-r", help="Resolver source"),
):
    """Show the resolver that hostname lookups would use."""
    from addrscope.cli.commands.resolver import show

    show(resolver, ctx.obj)


@resolver_app.command("lookup")
def resolver_lookup(
    ctx: typer.Context,
    hostname: str = typer.Argument(..., help="Hostname to resolve"),
    resolver: Optional[str] = typer.Option(None, "--resolver", "-r", help="Resolver source"),
):
    """Resolve a hostname the way targets are resolved."""
    from addrscope.cli.commands.resolver import lookup

    lookup(hostname, resolver, ctx.obj)


# ============================================================================
# Version Command
# ============================================================================


@app.command("version")
def version():
    """Show version information."""
    from addrscope import __version__

    console.print(f"addrscope version {__version__}")


# ============================================================================
# Main Callback (Global Options)
# ============================================================================


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug mode"),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE, "--output", "-o", help="Output format"
    ),
):
    """addrscope - target list builder for network scanners."""
    from addrscope.logging_cfg import configure_logging

    ctx.ensure_object(GlobalOptions)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.output = output
    configure_logging(verbose=verbose, debug=debug)


if __name__ == "__main__":
    app()
