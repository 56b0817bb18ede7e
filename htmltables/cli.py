"""CLI interface for htmltables.

Usage:
    htmltables extract page.html               # Summarize tables in a file or URL
    htmltables export page.html -f csv -f json # Write tables to data/exports/
    htmltables run --config sources.yaml       # Extract all configured sources into the DB
    htmltables run --force                     # Re-extract even if unchanged
    htmltables status                          # Show stored documents
"""

import logging
import sys

import click
import requests

from htmltables.database import Database
from htmltables.export import DEFAULT_EXPORT_DIR, EXPORT_FORMATS, Exporter
from htmltables.extractor import extract_all
from htmltables.guards import InvalidArgument
from htmltables.pipeline import Pipeline
from htmltables.sources import DEFAULT_SOURCES_PATH, load_sources, source_from_location
from htmltables.utils.html_text import plain_text

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

_PREVIEW_ROWS = 3
_PREVIEW_WIDTH = 24


def _load_tables(location: str, cache: bool, clean: bool):
    try:
        source = source_from_location(location, cache=cache)
        html = source.fetch()
    except (FileNotFoundError, InvalidArgument, requests.RequestException) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    tables = extract_all(html)
    if clean:
        tables = [plain_text(t) for t in tables]
    return source, tables


def _truncate(value: str) -> str:
    value = value.replace("\n", " ")
    if len(value) > _PREVIEW_WIDTH:
        return value[:_PREVIEW_WIDTH - 1] + "…"
    return value


@click.group()
@click.option("--db", default="data/htmltables.db", help="Database path")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db, verbose):
    """Extract tables from HTML documents."""
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = db
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.argument("location")
@click.option("--plain-text", "clean", is_flag=True, help="Strip tags and entities from cells")
@click.option("--cache", is_flag=True, help="Cache fetched URLs under data/cache/")
def extract(location, clean, cache):
    """Summarize every table found in LOCATION (file path or URL)."""
    _, tables = _load_tables(location, cache, clean)

    if not tables:
        click.echo("No tables found.")
        return

    click.echo(f"Found {len(tables)} table(s)\n")
    for i, table in enumerate(tables):
        click.echo(f"--- Table {i}: {table.column_count} columns, {table.row_count} rows ---")
        click.echo("  " + " | ".join(_truncate(c) for c in table.columns))
        for row in table.rows[:_PREVIEW_ROWS]:
            click.echo("  " + " | ".join(_truncate(v) for v in row))
        if table.row_count > _PREVIEW_ROWS:
            click.echo(f"  ... {table.row_count - _PREVIEW_ROWS} more rows")
        click.echo()


@cli.command("export")
@click.argument("location")
@click.option("--format", "-f", "formats", multiple=True, type=click.Choice(EXPORT_FORMATS),
              default=("csv",), show_default=True, help="Output format (repeatable)")
@click.option("--out", "out_dir", default=str(DEFAULT_EXPORT_DIR), show_default=True,
              help="Export directory")
@click.option("--plain-text", "clean", is_flag=True, help="Strip tags and entities from cells")
@click.option("--cache", is_flag=True, help="Cache fetched URLs under data/cache/")
def export_cmd(location, formats, out_dir, clean, cache):
    """Export the tables in LOCATION to CSV, JSON and/or Excel."""
    source, tables = _load_tables(location, cache, clean)
    exporter = Exporter(out_dir)
    results = exporter.export_all(tables, source.name, formats)

    click.echo("--- Exports ---")
    for fmt, output in results.items():
        if not output:
            click.echo(f"  {fmt}: (no data)")
        elif isinstance(output, list):
            for path in output:
                click.echo(f"  {fmt}: {path}")
        else:
            click.echo(f"  {fmt}: {output}")


@cli.command()
@click.option("--config", "config_path", default=str(DEFAULT_SOURCES_PATH), show_default=True,
              help="YAML file listing sources")
@click.option("--force", is_flag=True, help="Extract even if the document hasn't changed")
@click.option("--plain-text", "clean", is_flag=True, help="Strip tags and entities from cells")
@click.pass_context
def run(ctx, config_path, force, clean):
    """Run the extraction pipeline over all configured sources."""
    try:
        sources = load_sources(config_path)
    except (FileNotFoundError, InvalidArgument) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not sources:
        click.echo("No sources configured.")
        return

    db = Database(ctx.obj["db_path"])
    try:
        pipeline = Pipeline(db, clean_text=clean)
        click.echo(f"Running pipeline for {len(sources)} source(s)...")
        results = pipeline.run(sources, force=force)

        click.echo("\n--- Pipeline Results ---")
        total = 0
        for name, result in results.items():
            status = result.get("status", "unknown")
            if status == "completed":
                total += result["tables_extracted"]
                click.echo(f"  {name}: {result['tables_extracted']} tables, "
                           f"{result['rows_extracted']} rows")
            elif status == "skipped":
                click.echo(f"  {name}: skipped (source unchanged)")
            elif status == "error":
                click.echo(f"  {name}: ERROR - {result.get('error', 'unknown')[:100]}")

        click.echo(f"\nTotal: {total} tables extracted")

    finally:
        db.close()


@cli.command()
@click.pass_context
def status(ctx):
    """Show stored documents and table counts."""
    db = Database(ctx.obj["db_path"])
    try:
        db.migrate()
        documents = db.list_documents()
        if not documents:
            click.echo("No documents extracted yet.")
            return

        click.echo("--- Documents ---\n")
        for doc in documents:
            click.echo(f"  {doc['source_name']}: {doc['table_count']} tables")
            click.echo(f"    Location: {doc['location']}")
            click.echo(f"    Extracted: {doc['extracted_at']}")
        click.echo(f"\nDatabase totals: {len(documents)} documents, {db.count_tables()} tables")

    finally:
        db.close()


if __name__ == "__main__":
    cli()
