"""Resolve command implementations."""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from addrscope.cli.main import GlobalOptions, OutputFormat
from addrscope.config import get_settings
from addrscope.core.exceptions import (
    ResolverConstructionError,
    TargetFileReadError,
    UnresolvedTargetError,
)
from addrscope.core.models import TargetOptions, TokenKind
from addrscope.core.pipeline import resolve_targets
from addrscope.core.resolver.provider import ResolverHandle, build_resolver
from addrscope.core.targets.classifier import TargetClassifier
from addrscope.core.targets.loader import load_file
from addrscope.core.warnings import CollectingWarningSink, ConsoleWarningSink

console = Console()


def output_format(options: Optional[GlobalOptions]) -> OutputFormat:
    return options.output if options else OutputFormat.TABLE


def build_handle(source: Optional[str]) -> ResolverHandle:
    try:
        return build_resolver(source or get_settings().resolver)
    except ResolverConstructionError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)


def run(
    targets: list[str],
    resolver_source: Optional[str],
    exclude: Optional[list[str]],
    greppable: bool,
    accessible: bool,
    options: Optional[GlobalOptions],
):
    """Resolve targets and print the scan list."""
    output = output_format(options)
    target_options = TargetOptions(
        addresses=targets,
        resolver=resolver_source,
        exclude_addresses=exclude,
        greppable=greppable,
        accessible=accessible,
    )

    if output == OutputFormat.JSON:
        sink = CollectingWarningSink()
    else:
        sink = ConsoleWarningSink(console, greppable=greppable, accessible=accessible)

    handle = build_handle(resolver_source)
    report = resolve_targets(target_options, sink=sink, resolver=handle)

    if output == OutputFormat.JSON:
        data = report.as_dict()
        data["warnings"] = list(sink.messages)
        console.print_json(json.dumps(data))
        return

    if greppable or output == OutputFormat.PLAIN:
        for ip in report.addresses:
            console.print(str(ip), highlight=False)
        return

    table = Table(title=f"Targets ({report.total})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Address", style="green")
    table.add_column("Version", style="cyan")

    for i, ip in enumerate(report.addresses, 1):
        table.add_row(str(i), str(ip), f"IPv{ip.version}")

    console.print(table)
    console.print(
        f"Duplicates removed: {report.duplicates_removed}  "
        f"Excluded: {report.excluded_removed}  "
        f"Unresolved: {len(report.unresolved)}"
    )


def explain(tokens: list[str], resolver_source: Optional[str], limit: int, options):
    """Classify each token and show what it expands to."""
    handle = build_handle(resolver_source)
    classifier = TargetClassifier.for_handle(handle)
    rows = []

    for token in tokens:
        kind = classifier.kind_of(token)
        addresses = classifier.classify(token)
        if not addresses:
            try:
                addresses = load_file(token, classifier)
                kind = TokenKind.FILE
            except (UnresolvedTargetError, TargetFileReadError):
                kind = TokenKind.UNRESOLVED
        rows.append((token, kind, addresses))

    if output_format(options) == OutputFormat.JSON:
        console.print_json(
            json.dumps(
                [
                    {"token": t, "kind": k.value, "addresses": [str(ip) for ip in a]}
                    for t, k, a in rows
                ]
            )
        )
        return

    table = Table(title="Token Classification")
    table.add_column("Token", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Count", style="yellow", justify="right")
    table.add_column("Addresses", style="green")

    for token, kind, addresses in rows:
        shown = ", ".join(str(ip) for ip in addresses[:limit])
        if len(addresses) > limit:
            shown += f", ... (+{len(addresses) - limit})"
        style = "red" if kind == TokenKind.UNRESOLVED else ""
        label = f"[{style}]{kind.value}[/]" if style else kind.value
        table.add_row(escape(token), label, str(len(addresses)), shown)

    console.print(table)
