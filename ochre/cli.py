import logging
import sys

import click
from returns.result import Failure

from ochre.fetchers import (
    fetch_bibliography,
    fetch_concept,
    fetch_resource,
    fetch_set,
    fetch_spatial_unit,
    fetch_tree,
    fetch_website,
)
from ochre.logging_config import configure_logging
from ochre.settings import settings

logger = logging.getLogger(__name__)

FETCHERS = {
    "resource": fetch_resource,
    "spatial-unit": fetch_spatial_unit,
    "concept": fetch_concept,
    "set": fetch_set,
    "tree": fetch_tree,
    "bibliography": fetch_bibliography,
}


def _echo_result(result) -> None:
    if isinstance(result, Failure):
        logger.error(f"💥 {result.failure()}")
        sys.exit(1)

    click.echo(result.unwrap().model_dump_json(indent=2))


@click.group()
def cli():
    """Fetch OCHRE items and print them as normalized JSON."""
    configure_logging()


@cli.command()
@click.argument("kind", type=click.Choice(list(FETCHERS)))
@click.argument("uuid")
@click.option(
    "--language",
    default=settings.default_language,
    show_default=True,
    help="3-letter code of the language to resolve strings in.",
)
def fetch(kind: str, uuid: str, language: str):
    """Fetch the item UUID of the given KIND."""
    _echo_result(FETCHERS[kind](uuid, language=language))


@cli.command()
@click.argument("abbreviation")
@click.option(
    "--language",
    default=settings.default_language,
    show_default=True,
    help="3-letter code of the language to resolve strings in.",
)
def website(abbreviation: str, language: str):
    """Build the website with the given ABBREVIATION."""
    _echo_result(fetch_website(abbreviation, language=language))


if __name__ == "__main__":
    cli()
