"""CLI for managing OctoFlow practice catalogs."""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .catalog import CatalogValidator, load_catalog, save_catalog
from .catalog_download import CatalogDownloadError, download_catalog
from .defaults import build_default_catalog
from .errors import ConfigurationError
from .schema import PracticeCatalog


console = Console()


@click.group()
@click.version_option(version="1.0.0", prog_name="octoflow-catalog")
def main():
    """OctoFlow Practice Catalog tools.

    Export, validate and download the question, benchmark and
    recommendation catalog used by the assessment engine.
    """
    pass


@main.command()
@click.option(
    '--out', '-o',
    type=click.Path(path_type=Path),
    default='practice-catalog.json',
    help='Output path (.json, .yaml or .yml)'
)
@click.option(
    '--force', '-f',
    is_flag=True,
    help='Overwrite an existing file'
)
def export(out: Path, force: bool):
    """Export the built-in catalog so it can be customized.

    Example:
        octoflow-catalog export --out my-catalog.yaml
    """
    if out.exists() and not force:
        console.print(f"[red]Error:[/red] File already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    catalog = build_default_catalog()
    save_catalog(catalog, out)
    console.print(f"[green]✓[/green] Catalog exported: {out}")
    _print_summary(catalog)


@main.command()
@click.option(
    '--catalog', '-c',
    type=click.Path(path_type=Path),
    required=True,
    help='Path to the catalog file'
)
def validate(catalog: Path):
    """Validate a catalog file.

    Exits with status 1 when the catalog cannot be loaded or has issues.
    """
    try:
        cat = load_catalog(catalog)
    except ConfigurationError as e:
        console.print(f"[red]Error loading catalog:[/red] {e}")
        sys.exit(1)

    issues = CatalogValidator().validate(cat)

    console.print(f"\n[bold]Catalog Validation[/bold]")
    console.print(f"Questions: {len(cat.questions)}")
    console.print(f"Recommendations: {len(cat.recommendations)}")

    if issues:
        console.print(f"\n[yellow]Issues ({len(issues)}):[/yellow]")
        for issue in issues:
            console.print(f"  • {issue}")
        sys.exit(1)
    else:
        console.print(f"\n[green]✓[/green] Catalog is valid")


@main.command()
@click.option(
    '--url', '-u',
    required=True,
    help='HTTPS URL of the catalog JSON file'
)
@click.option(
    '--out', '-o',
    type=click.Path(path_type=Path),
    default='remote-catalog.json',
    help='Where to save the downloaded catalog'
)
def download(url: str, out: Path):
    """Download a catalog from a remote URL.

    Only HTTPS URLs on allowlisted hosts are accepted.

    Example:
        octoflow-catalog download --url https://raw.githubusercontent.com/org/repo/main/catalog.json
    """
    try:
        catalog, dest = download_catalog(url, output=out)
    except CatalogDownloadError as e:
        console.print(f"[red]Download failed:[/red] {e}")
        sys.exit(1)

    console.print(
        f"[green]✓[/green] Saved {len(catalog.questions)} questions to {dest}"
    )
    _print_summary(catalog)


def _print_summary(catalog: PracticeCatalog):
    """Print a summary of a catalog."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Questions", justify="right")
    table.add_column("Recommendations", justify="right")

    category_ids = [c.id for c in catalog.categories]
    for q in catalog.questions:
        if q.category not in category_ids:
            category_ids.append(q.category)

    for category_id in category_ids:
        table.add_row(
            catalog.category_title(category_id),
            str(sum(1 for q in catalog.questions if q.category == category_id)),
            str(sum(1 for r in catalog.recommendations if r.category == category_id)),
        )

    console.print(f"\n[bold]Catalog {catalog.version}[/bold]")
    console.print(table)
