"""CLI for notetree (build, tree, schemas)."""

import json
from pathlib import Path
from typing import Annotated

import typer
import yaml
from loguru import logger

from notetree.config import ParserOptions, resolve_vault_directory
from notetree.core.importer.loader import VaultLoad, load_vault
from notetree.core.tree.markdown import render_subtree_as_markdown
from notetree.exceptions import NotetreeError
from notetree.logging_config import configure_logging

app = typer.Typer(help="notetree: rebuild note hierarchies from dot-named files.")

VaultArg = Annotated[
    Path | None,
    typer.Argument(help="Vault directory (defaults to the first configured vault found)"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    configure_logging(verbose=verbose, quiet=quiet)


def _load(vault: Path | None, *, allow_missing: bool, skip_bad_parse: bool) -> VaultLoad:
    """Load the vault, turning expected failures into a clean exit."""
    vault_dir = vault or resolve_vault_directory()
    if not vault_dir.is_dir():
        logger.error("Vault directory not found: {}", vault_dir)
        raise typer.Exit(1)
    options = ParserOptions(error_on_empty=not allow_missing, error_on_bad_parse=not skip_bad_parse)
    try:
        return load_vault(vault_dir, options=options)
    except (NotetreeError, OSError, yaml.YAMLError) as e:
        logger.error("Failed to load {}: {}", vault_dir, e)
        raise typer.Exit(1) from e


@app.command()
def build(
    vault: VaultArg = None,
    allow_missing: bool = typer.Option(
        False, "--allow-missing", "-m", help="Create stubs for missing parents instead of failing"
    ),
    skip_bad_parse: bool = typer.Option(
        False, "--skip-bad-parse", "-s", help="Skip unparsable notes instead of failing"
    ),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Build the note tree and print what was repaired or skipped."""
    load = _load(vault, allow_missing=allow_missing, skip_bad_parse=skip_bad_parse)
    report = load.result.report

    if output_json:
        data = {
            "notes": load.num_notes,
            "stubs": load.num_stubs,
            "schemas": load.num_schemas,
            "report": report.to_dict(),
        }
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(
            f"Built {load.num_notes} notes, {load.num_stubs} stubs, {load.num_schemas} schemas"
        )
        for issue in report.errors:
            typer.echo(f"  [{issue.status}] {issue.file}: {issue.detail}")
        if report.missing:
            typer.echo(f"Missing: {', '.join(report.missing)}")

    if report.num_errors:
        raise typer.Exit(2)


@app.command()
def tree(
    vault: VaultArg = None,
    start: Annotated[
        str | None,
        typer.Option("--from", "-f", help="Render below this note (fname)"),
    ] = None,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-d", help="Max depth levels to render"),
    ] = None,
    allow_missing: bool = typer.Option(
        False, "--allow-missing", "-m", help="Create stubs for missing parents instead of failing"
    ),
) -> None:
    """Render the note tree as a markdown outline."""
    load = _load(vault, allow_missing=allow_missing, skip_bad_parse=False)
    node = load.result.nodes.get(start) if start else load.result.root
    if node is None:
        typer.echo(f"Note '{start or 'root'}' not found.")
        raise typer.Exit(1)
    typer.echo(render_subtree_as_markdown(node, max_depth=max_depth), nl=False)


@app.command()
def schemas(
    vault: VaultArg = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List the resolved schema records."""
    load = _load(vault, allow_missing=True, skip_bad_parse=True)
    if output_json:
        typer.echo(json.dumps([r.to_dict() for r in load.schemas], indent=2))
        return
    typer.echo(f"{load.num_schemas} schemas:\n")
    for record in load.schemas:
        pattern = record.data.get("pattern")
        suffix = f"  pattern={pattern}" if pattern else ""
        typer.echo(f"  {record.id} ({record.fname}){suffix}")
