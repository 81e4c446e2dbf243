"""
theme.json developer CLI.

Commands for compiling, migrating, sanitizing and merging theme.json
documents from the command line.
"""

from pathlib import Path

import typer

from themejson.core.blocks import BlockMetadataCache
from themejson.core.errors import ThemeJSONError
from themejson.core.stylesheet import StylesheetType
from themejson.core.theme_json import ThemeJSON
from themejson.core.theme_json_loader import (
    dump_raw_data,
    load_block_types,
    load_theme_json,
    save_theme_json,
)

app = typer.Typer(help="Compile and maintain theme.json documents")

BLOCKS_OPTION_HELP = "JSON/YAML list of {name, selector} block registrations"


def _block_cache(blocks: Path | None) -> BlockMetadataCache:
    if blocks is None:
        return BlockMetadataCache()
    return BlockMetadataCache(load_block_types(blocks))


def _load(path: Path, blocks: Path | None) -> ThemeJSON:
    try:
        return load_theme_json(path, block_metadata=_block_cache(blocks))
    except ThemeJSONError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _emit(theme: ThemeJSON, output: Path | None) -> None:
    if output is None:
        typer.echo(dump_raw_data(theme))
        return
    save_theme_json(theme, output)
    typer.echo(f"✓ Wrote {output}")


@app.command("stylesheet")
def stylesheet(
    path: Path = typer.Argument(..., help="theme.json document"),
    stylesheet_type: StylesheetType = typer.Option(
        StylesheetType.ALL, "--type", "-t", help="Which rulesets to emit"
    ),
    debug: bool = typer.Option(False, "--debug", help="Emit multi-line rulesets"),
    blocks: Path | None = typer.Option(None, "--blocks", "-b", help=BLOCKS_OPTION_HELP),
) -> None:
    """Print the compiled stylesheet."""
    theme = _load(path, blocks)
    typer.echo(theme.get_stylesheet(stylesheet_type, debug=debug or None))


@app.command("migrate")
def migrate(
    path: Path = typer.Argument(..., help="theme.json document"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write here instead of stdout"),
    blocks: Path | None = typer.Option(None, "--blocks", "-b", help=BLOCKS_OPTION_HELP),
) -> None:
    """Print the document upgraded to the current schema."""
    _emit(_load(path, blocks), output)


@app.command("sanitize")
def sanitize(
    path: Path = typer.Argument(..., help="theme.json document"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write here instead of stdout"),
    blocks: Path | None = typer.Option(None, "--blocks", "-b", help=BLOCKS_OPTION_HELP),
) -> None:
    """Print the document with insecure values removed."""
    theme = _load(path, blocks)
    theme.remove_insecure_properties()
    _emit(theme, output)


@app.command("merge")
def merge(
    base: Path = typer.Argument(..., help="Base theme.json document"),
    incoming: Path = typer.Argument(..., help="Document merged on top of the base"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write here instead of stdout"),
    blocks: Path | None = typer.Option(None, "--blocks", "-b", help=BLOCKS_OPTION_HELP),
) -> None:
    """Print the result of merging INCOMING onto BASE."""
    theme = _load(base, blocks)
    theme.merge(_load(incoming, blocks))
    _emit(theme, output)


def main() -> None:
    app()
