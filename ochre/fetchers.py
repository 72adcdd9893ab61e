"""
Top-level entry points.

Each entry point fetches one OCHRE item, assembles it and wraps the outcome in a
``Result``: any error raised while fetching or assembling comes back as a
``Failure`` and no partially built item is ever returned.
"""

import logging
from typing import Any, Callable, TypeVar

from returns.result import Failure, Result, Success

from ochre.errors import FetchError
from ochre.extract.connector import Fetcher, OchreConnector
from ochre.log_context import log_context
from ochre.models import (
    BelongsTo,
    Bibliography,
    Concept,
    Data,
    Resource,
    Set,
    SpatialUnit,
    Tree,
)
from ochre.settings import settings
from ochre.transform.bibliography import parse_bibliography
from ochre.transform.common import parse_identification, parse_metadata
from ochre.transform.entities import (
    parse_concept,
    parse_resource,
    parse_set,
    parse_spatial_unit,
    parse_tree,
)
from ochre.transform.strings import parse_fake_string
from ochre.util import parse_datetime
from ochre.website.builder import parse_website
from ochre.website.models import Website

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def parse_data(
    envelope: dict[str, Any], item: T, language: str = settings.default_language
) -> Data[T]:
    """Wrap an assembled item with the provenance of the envelope it came in."""
    languages = envelope.get("languages")
    return Data(
        uuid=parse_fake_string(envelope["uuid"]),
        belongs_to=BelongsTo(
            uuid=envelope.get("uuidBelongsTo", ""),
            abbreviation=parse_fake_string(envelope.get("belongsTo")),
        ),
        publication_datetime=parse_datetime(envelope.get("publicationDateTime")),
        metadata=parse_metadata(envelope.get("metadata") or {}, language),
        languages=(
            [code.strip() for code in parse_fake_string(languages).split(";")]
            if languages
            else []
        ),
        item=item,
    )


def fetch_by_uuid(
    uuid: str, fetcher: Fetcher | None = None
) -> Result[dict[str, Any], Exception]:
    """Fetch the raw contents of an OCHRE envelope."""
    if fetcher is not None:
        return fetcher.fetch_by_uuid(uuid)

    connector = OchreConnector()
    try:
        return connector.fetch_by_uuid(uuid)
    finally:
        connector.close()


def _fetch_item(
    uuid: str,
    key: str,
    assemble: Callable[..., T],
    fetcher: Fetcher | None,
    language: str,
) -> Result[Data[T], Exception]:
    with log_context(uuid=uuid, kind=key):
        fetched = fetch_by_uuid(uuid, fetcher)
        if isinstance(fetched, Failure):
            _LOGGER.error(f"Fetching {key} {uuid} failed: {fetched.failure()}")
            return Failure(fetched.failure())
        envelope = fetched.unwrap()

        try:
            if key not in envelope:
                raise FetchError(f"Invalid OCHRE data: API response missing '{key}' key")

            item = assemble(envelope[key], language=language)
            return Success(parse_data(envelope, item, language))
        except Exception as e:
            _LOGGER.exception(f"Assembling {key} {uuid} failed")
            return Failure(e)


def fetch_resource(
    uuid: str,
    fetcher: Fetcher | None = None,
    language: str = settings.default_language,
) -> Result[Data[Resource], Exception]:
    return _fetch_item(uuid, "resource", parse_resource, fetcher, language)


def fetch_spatial_unit(
    uuid: str,
    fetcher: Fetcher | None = None,
    language: str = settings.default_language,
) -> Result[Data[SpatialUnit], Exception]:
    return _fetch_item(uuid, "spatialUnit", parse_spatial_unit, fetcher, language)


def fetch_concept(
    uuid: str,
    fetcher: Fetcher | None = None,
    language: str = settings.default_language,
) -> Result[Data[Concept], Exception]:
    return _fetch_item(uuid, "concept", parse_concept, fetcher, language)


def fetch_set(
    uuid: str,
    fetcher: Fetcher | None = None,
    language: str = settings.default_language,
) -> Result[Data[Set], Exception]:
    return _fetch_item(uuid, "set", parse_set, fetcher, language)


def fetch_tree(
    uuid: str,
    fetcher: Fetcher | None = None,
    language: str = settings.default_language,
) -> Result[Data[Tree], Exception]:
    return _fetch_item(uuid, "tree", parse_tree, fetcher, language)


def fetch_bibliography(
    uuid: str,
    fetcher: Fetcher | None = None,
    language: str = settings.default_language,
) -> Result[Data[Bibliography], Exception]:
    return _fetch_item(uuid, "bibliography", parse_bibliography, fetcher, language)


def build_website(
    envelope: dict[str, Any],
    fetcher: Fetcher,
    language: str = settings.default_language,
) -> Result[Website, Exception]:
    """
    Build a website from an envelope holding its tree.

    The project name and website URL come from the envelope's project metadata.
    """
    try:
        project = (envelope.get("metadata") or {}).get("project") or {}
        raw_identification = project.get("identification")
        project_name = (
            parse_identification(raw_identification, language).label
            if raw_identification
            else ""
        )
        website_url = raw_identification.get("website") if raw_identification else None

        return Success(
            parse_website(
                envelope["tree"], project_name, website_url, fetcher, language
            )
        )
    except Exception as e:
        _LOGGER.exception("Building the website failed")
        return Failure(e)


def fetch_website(
    abbreviation: str,
    connector: OchreConnector | None = None,
    language: str = settings.default_language,
) -> Result[Website, Exception]:
    """
    Fetch a website tree by its abbreviation and build the website.

    Linked documents needed by components are fetched through the same connector.
    """
    owned = connector is None
    connector = connector or OchreConnector()
    try:
        with log_context(website=abbreviation):
            match connector.fetch_website_tree(abbreviation):
                case Failure(error):
                    _LOGGER.error(f"Fetching website {abbreviation} failed: {error}")
                    return Failure(error)
                case Success(envelope):
                    return build_website(envelope, connector, language)
    finally:
        if owned:
            connector.close()
