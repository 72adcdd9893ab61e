from datetime import date
from typing import Any

from ochre.models import (
    Bibliography,
    BibliographySource,
    BibliographySourceResource,
    Citation,
    EntryInfo,
    NestedBibliography,
    PublicationInfo,
)
from ochre.transform.common import (
    parse_context,
    parse_identification,
    parse_optional_identification,
    parse_persons,
)
from ochre.transform.properties import parse_properties_block
from ochre.transform.strings import DEFAULT_LANGUAGE, parse_fake_string
from ochre.util import asset_url, ensure_list, parse_datetime


def _parse_citation(bibliography: dict[str, Any]) -> Citation:
    """
    Citations are pre-rendered HTML fragments; depending on the exporting
    namespace the wrappers are keyed ``span``/``div`` or ``default:span``/``default:div``.
    """
    short = None
    span = bibliography.get("citationFormatSpan")
    if span:
        inner = span.get("default:span") or span.get("span") or {}
        short = parse_fake_string(inner.get("content"))

    long = None
    div = bibliography.get("referenceFormatDiv")
    if div:
        outer = div.get("default:div") or div.get("div") or {}
        inner = outer.get("default:div") or outer.get("div") or {}
        long = parse_fake_string(inner.get("content"))

    return Citation(
        format=bibliography.get("citationFormat"),
        short=short,
        long=long,
    )


def _parse_publication_info(
    publication_info: dict[str, Any] | None, language: str
) -> PublicationInfo:
    if not publication_info:
        return PublicationInfo()

    publishers = []
    if publication_info.get("publishers"):
        publishers = parse_persons(
            publication_info["publishers"]["publishers"].get("person"), language
        )

    start_date = None
    raw_start_date = publication_info.get("startDate")
    if raw_start_date:
        start_date = date(
            raw_start_date["year"],
            raw_start_date.get("month", 1),
            raw_start_date.get("day", 1),
        )

    return PublicationInfo(publishers=publishers, start_date=start_date)


def _parse_source(bibliography: dict[str, Any], language: str) -> BibliographySource:
    resource = None
    raw_source = bibliography.get("source")
    if raw_source and raw_source.get("resource"):
        raw_resource = raw_source["resource"]
        resource = BibliographySourceResource(
            uuid=raw_resource["uuid"],
            publication_datetime=parse_datetime(
                raw_resource.get("publicationDateTime")
            ),
            type=raw_resource.get("type"),
            identification=parse_identification(
                raw_resource["identification"], language
            ),
        )

    source_document = bibliography.get("sourceDocument")
    return BibliographySource(
        resource=resource,
        document_url=(
            asset_url(source_document["uuid"]) if source_document else None
        ),
    )


def parse_bibliography(
    bibliography: dict[str, Any],
    is_nested: bool = False,
    language: str = DEFAULT_LANGUAGE,
) -> Bibliography | NestedBibliography:
    """
    Assemble a bibliography entry.

    :param dict bibliography: The raw bibliography.
    :param bool is_nested: Build the nested form, which has no publication
        timestamp or context.
    :param str language: The requested 3-letter language code.
    :return Bibliography | NestedBibliography: The assembled entry.
    """
    project = bibliography.get("project") or {}
    entry_info = bibliography.get("entryInfo")

    fields = dict(
        uuid=bibliography["uuid"],
        type=bibliography.get("type"),
        number=bibliography.get("n"),
        identification=parse_optional_identification(
            bibliography.get("identification"), language
        ),
        project_identification=parse_optional_identification(
            project.get("identification"), language
        ),
        citation=_parse_citation(bibliography),
        publication_info=_parse_publication_info(
            bibliography.get("publicationInfo"), language
        ),
        entry_info=(
            EntryInfo(
                start_issue=parse_fake_string(entry_info.get("startIssue")),
                start_volume=parse_fake_string(entry_info.get("startVolume")),
            )
            if entry_info
            else None
        ),
        source=_parse_source(bibliography, language),
        authors=(
            parse_persons(bibliography["authors"].get("person"), language)
            if bibliography.get("authors")
            else []
        ),
        properties=parse_properties_block(bibliography.get("properties"), language),
    )

    if is_nested:
        return NestedBibliography(**fields)

    return Bibliography(
        **fields,
        publication_datetime=parse_datetime(bibliography.get("publicationDateTime")),
        context=(
            parse_context(bibliography["context"])
            if bibliography.get("context")
            else None
        ),
    )


def parse_bibliographies(
    bibliographies: Any, is_nested: bool = False, language: str = DEFAULT_LANGUAGE
) -> list[Bibliography] | list[NestedBibliography]:
    return [
        parse_bibliography(bibliography, is_nested, language)
        for bibliography in ensure_list(bibliographies)
    ]
