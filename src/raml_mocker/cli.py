"""CLI entry point for raml-mocker."""

import asyncio
import json
import logging
from pathlib import Path

import click

from raml_mocker.config import MockerOptions
from raml_mocker.errors import MockerError
from raml_mocker.mocker import generate_catalog
from raml_mocker.parser.base import Endpoint

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _build_catalog(files: tuple[Path, ...], path: Path | None, dereference: bool) -> list[Endpoint]:
    """Run generation for the CLI arguments, turning errors into click errors."""
    if not files and path is None:
        raise click.UsageError("Give at least one RAML file or --path.")
    options = MockerOptions(
        path=str(path) if path else None,
        files=[str(f) for f in files],
        parser_options={"dereferenceSchemas": dereference},
    )
    try:
        return asyncio.run(generate_catalog(options))
    except MockerError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    envvar="RAML_MOCKER_LOG_LEVEL",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging verbosity.",
)
def main(log_level: str):
    """RAML Mocker: turn RAML specifications into mockable endpoints."""
    logging.basicConfig(level=log_level.upper(), format="[RAML-MOCKER] %(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--path", "path", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Directory scanned for .raml files.")
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output JSON file (stdout when omitted).")
@click.option("--no-dereference", is_flag=True, help="Keep schema references unresolved.")
@click.option("--indent", default=2, show_default=True, help="JSON indentation.")
def generate(files: tuple[Path, ...], path: Path | None, output: Path | None, no_dereference: bool, indent: int):
    """Write the endpoint catalog as JSON."""
    endpoints = _build_catalog(files, path, dereference=not no_dereference)
    text = json.dumps([e.to_dict() for e in endpoints], indent=indent, default=str)

    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Wrote {len(endpoints)} endpoints to {output}", err=True)


@main.command(name="list")
@click.argument("files", nargs=-1, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--path", "path", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Directory scanned for .raml files.")
def list_endpoints(files: tuple[Path, ...], path: Path | None):
    """Print one line per endpoint: method, uri and status codes."""
    endpoints = _build_catalog(files, path, dereference=True)
    for endpoint in endpoints:
        codes = ", ".join(str(c) for c in sorted(endpoint.responses))
        click.echo(f"{endpoint.method:<7} {endpoint.uri}  [{codes}]")
    click.echo(f"Found {len(endpoints)} endpoints.", err=True)
