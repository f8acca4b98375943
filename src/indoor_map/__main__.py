"""Indoor map CLI.

Usage:
    python -m indoor_map <command> <map.json> [options]

Every command prints a JSON object with an "ok" flag to stdout.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from indoor_map import __version__
from indoor_map.errors import MapValidationError
from indoor_map.models.map import MapData
from indoor_map.queries.connections import detect_connections
from indoor_map.services.maps import create_empty_map, prepare_map
from indoor_map.validators.map import ValidationRules, validate_map

app = typer.Typer(
    name="indoor_map",
    help="Indoor map validation and connection inference.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(error: str) -> None:
    _output({"ok": False, "error": error})
    raise typer.Exit(1)


def _load_map(path: Path) -> MapData:
    if not path.exists():
        _fail(f"Map not found: {path}")
    try:
        return MapData.load(path)
    except ValidationError as e:
        _fail(f"Malformed map {path}: {e.error_count()} problems")


def _load_rules(path: Optional[Path]) -> Optional[ValidationRules]:
    if path is None:
        return None
    if not path.exists():
        _fail(f"Rules not found: {path}")
    try:
        return ValidationRules.load(path)
    except ValidationError as e:
        _fail(f"Malformed rules {path}: {e.error_count()} problems")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log to stderr"),
):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def version():
    """Show version."""
    typer.echo(f"indoor-map v{__version__}")


@app.command()
def validate(
    map_path: Path = typer.Argument(..., help="Map JSON file"),
    rules: Optional[Path] = typer.Option(None, "--rules", "-r", help="Rules JSON file"),
):
    """Validate a map against the default (or given) rules."""
    map_data = _load_map(map_path)
    result = validate_map(map_data, _load_rules(rules))
    _output({"ok": True, "validation": result.to_dict()})


@app.command()
def connections(
    map_path: Path = typer.Argument(..., help="Map JSON file"),
    level: Optional[int] = typer.Option(None, "--level", "-l", help="Only this floor level"),
):
    """Infer connections for each floor from element adjacency."""
    map_data = _load_map(map_path)
    floors = []
    for floor in map_data.floors or []:
        if level is not None and floor.level != level:
            continue
        detected = detect_connections(floor)
        floors.append({
            "level": floor.level,
            "name": floor.name,
            "connections": [c.model_dump(mode="json", by_alias=True) for c in detected],
        })
    _output({"ok": True, "floors": floors})


@app.command()
def prepare(
    map_path: Path = typer.Argument(..., help="Map JSON file"),
    rules: Optional[Path] = typer.Option(None, "--rules", "-r", help="Rules JSON file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output path (default: overwrite input)"),
):
    """Validate a map and fill in connections on floors that have none."""
    map_data = _load_map(map_path)
    try:
        prepared = prepare_map(map_data, _load_rules(rules))
    except MapValidationError as e:
        _output({"ok": False, "errors": e.errors})
        raise typer.Exit(1)

    path = prepared.save(output or map_path)
    _output({
        "ok": True,
        "path": str(path),
        "connections": sum(len(f.connections) for f in prepared.floors or []),
    })


@app.command()
def new(
    name: str = typer.Argument(..., help="Map name"),
    created_by: str = typer.Option(..., "--created-by", help="Owner user id"),
    output: Path = typer.Option(..., "--output", "-o", help="Where to write the map"),
):
    """Create an empty single-floor map."""
    map_data = create_empty_map(name, created_by)
    path = map_data.save(output)
    _output({"ok": True, "id": map_data.id, "path": str(path)})


if __name__ == "__main__":
    app()
