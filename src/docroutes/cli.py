"""Command line interface for docroutes."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from docroutes.config import AppConfig
from docroutes.models import RouteAnnotation
from docroutes.pathtree.forest import TreeNode
from docroutes.routes.collector import CollectStats, RouteCollector
from docroutes.routes.composer import PopulatedRoutes, Routes
from docroutes.routes.issues import IssueCollector


console = Console()
app = typer.Typer(help="docroutes - route annotations, trees and breadcrumbs for markdown notebooks")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _collect(inputs: List[Path], config: AppConfig) -> tuple[CollectStats, IssueCollector]:
    sink = IssueCollector()
    stats = RouteCollector(sink=sink, config=config).collect(inputs)
    if not stats.processed_files:
        raise typer.BadParameter("No markdown documents found.")
    return stats, sink


def _populate(inputs: List[Path], config: AppConfig) -> PopulatedRoutes:
    stats, _ = _collect(inputs, config)
    return asyncio.run(Routes(stats.collected, config).populate())


def _add_branch(parent: Tree, node: TreeNode[RouteAnnotation]) -> None:
    if node.payloads:
        label = f"{escape(node.payloads[0].caption)} [dim]{escape(node.path)}[/dim]"
    else:
        label = f"[italic]{escape(node.basename or node.path)}[/italic]"
    branch = parent.add(label)
    for child in node.children:
        _add_branch(branch, child)


@app.command()
def check(
    inputs: List[Path] = typer.Argument(
        ..., help="Markdown files or directories to check.", resolve_path=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Validate the route annotations of markdown notebooks."""
    _setup_logging(verbose)
    stats, sink = _collect(inputs, AppConfig())
    console.print(
        f"Documents: {stats.documents}, cells: {stats.cells}, "
        f"routes: {stats.routes}, issues: {stats.issues}, failed: {stats.failed}"
    )
    if not sink.issues:
        console.print("[green]No issues found.[/green]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Location")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Message")
    for issue in sink.issues:
        table.add_row(
            escape(f"{issue.provenance}:{issue.start_line}-{issue.end_line}"),
            issue.kind,
            escape(issue.message),
        )
    console.print(table)
    raise typer.Exit(code=1)


@app.command()
def tree(
    inputs: List[Path] = typer.Argument(
        ..., help="Markdown files or directories to read.", resolve_path=True
    ),
    folder_first: bool = typer.Option(False, "--folder-first", help="List containers before leaves"),
    synthesize: bool = typer.Option(
        True, "--synthesize/--no-synthesize", help="Create nodes for implicit parent paths"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the tree as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the route tree built from the notebooks."""
    _setup_logging(verbose)
    config = AppConfig(folder_first=folder_first, synthesize_containers=synthesize)
    populated = _populate(inputs, config)
    if as_json:
        typer.echo(populated.serializers.to_json())
        return

    if not populated.tree:
        console.print("[yellow]No routes found.[/yellow]")
        return
    root = Tree("[bold]routes[/bold]")
    for node in populated.tree:
        _add_branch(root, node)
    console.print(root)


@app.command()
def crumbs(
    inputs: List[Path] = typer.Argument(
        ..., help="Markdown files or directories to read.", resolve_path=True
    ),
    as_json: bool = typer.Option(False, "--json", help="Print breadcrumbs as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the breadcrumb trail of every route."""
    _setup_logging(verbose)
    populated = _populate(inputs, AppConfig())
    breadcrumbs = populated.breadcrumbs
    if as_json:
        typer.echo(breadcrumbs.to_json(indent=2))
        return

    if not breadcrumbs.crumbs:
        console.print("[yellow]No routes found.[/yellow]")
        return
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path", no_wrap=True)
    table.add_column("Breadcrumbs")
    for path in sorted(breadcrumbs.crumbs):
        trail = " › ".join(
            route.effective_abbreviated_caption for route in breadcrumbs.crumbs[path]
        )
        table.add_row(escape(path), escape(trail) if trail else "[dim](root)[/dim]")
    console.print(table)
