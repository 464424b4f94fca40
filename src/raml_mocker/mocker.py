"""Catalog generation entry points.

``generate(options, callback)`` scans RAML files, walks each parsed tree and
hands the merged endpoint catalog to ``callback``. Files are loaded
concurrently; a file that fails to load is reported and skipped.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Callable

import click

from raml_mocker.config import MockerOptions
from raml_mocker.errors import ConfigurationError, DirectoryListError, LoadError
from raml_mocker.generator.walker import walk
from raml_mocker.parser.base import Endpoint, merge_endpoints
from raml_mocker.parser.detect import is_raml_file
from raml_mocker.parser.raml import load_api
from raml_mocker.result import Fatal, Ok, Warn

logger = logging.getLogger(__name__)

USAGE = """\
--------------------------------------------------------------------
---------------------- HOW TO USE RAML MOCKER ----------------------
--  from raml_mocker.mocker import generate                        --
--  options = {"path": "test/raml"}                                --
--  def callback(endpoints): print(endpoints)                      --
--  generate(options, callback)                                    --
--------------------------------------------------------------------"""


def show_usage() -> None:
    click.echo(USAGE, err=True)


def generate(options: Any, callback: Callable[[list[Endpoint]], Any]) -> None:
    """Build the endpoint catalog and pass it to ``callback``.

    The callback runs once, even when some files failed to load. Invalid
    options or an unexpected error are logged with usage guidance and the
    callback is not called. An unreadable ``path`` raises DirectoryListError.
    Inside a running event loop nothing is generated and the error is
    logged; await ``generate_catalog`` there instead.
    """
    if not options:
        logger.error("You must define an options object")
        show_usage()
        return
    if not callable(callback):
        logger.error("You must define a callback function")
        show_usage()
        return
    try:
        options = MockerOptions.from_value(options)
    except ConfigurationError as e:
        logger.error("%s", e)
        show_usage()
        return

    if _in_event_loop():
        result = Fatal("generate() cannot run inside an event loop, await generate_catalog() instead")
    else:
        result = asyncio.run(_run(options))
    if not result.ok:
        if isinstance(result.error, DirectoryListError):
            raise result.error
        logger.error("A runtime error has occurred: %s", result.reason, exc_info=result.error)
        show_usage()
        return
    callback(result.value)


def _in_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


async def _run(options: MockerOptions) -> Ok | Fatal:
    try:
        return Ok(await generate_catalog(options))
    except Exception as e:
        return Fatal(str(e), e)


async def generate_catalog(options: Any) -> list[Endpoint]:
    """Return the merged catalog for every file named by ``options``."""
    options = MockerOptions.from_value(options)

    files = list(options.files)
    if options.path:
        files.extend(await asyncio.to_thread(list_spec_files, options.path, options.extension))

    results = await asyncio.gather(*(_generate_from_file(f, options) for f in files))

    catalogs = []
    for result in results:
        if result.ok:
            catalogs.append(result.value)
        else:
            logger.warning("%s", result.reason)
    return merge_endpoints(*catalogs)


def list_spec_files(path: str, extension: str = ".raml") -> list[str]:
    """List the specification files directly inside ``path``."""
    try:
        names = sorted(os.listdir(path))
    except OSError as e:
        raise DirectoryListError(f"Cannot read directory {path}: {e}") from e
    return [
        str(Path(path) / name)
        for name in names
        if is_raml_file(name, extension) and (Path(path) / name).is_file()
    ]


async def _generate_from_file(file_path: str, options: MockerOptions) -> Ok | Warn:
    try:
        tree = await asyncio.to_thread(load_api, file_path, options.parser_options)
    except LoadError as e:
        return Warn(str(e), error=e)
    endpoints = walk(tree, "/", options.formats)
    logger.debug("Found %d endpoints in %s", len(endpoints), file_path)
    return Ok(endpoints)
