"""
Sub-records shared by several entity kinds.
"""

from typing import Any

from ochre.models import (
    Context,
    ContextItem,
    ContextNode,
    Coordinates,
    Event,
    EventAgent,
    Identification,
    Image,
    ImageMap,
    ImageMapArea,
    License,
    Metadata,
    MetadataItem,
    MetadataProject,
    Period,
    Person,
    ProjectIdentification,
)
from ochre.transform.strings import (
    DEFAULT_LANGUAGE,
    parse_fake_string,
    parse_string_content,
)
from ochre.util import ensure_list, parse_datetime


def parse_identification(
    identification: dict[str, Any], language: str = DEFAULT_LANGUAGE
) -> Identification:
    abbreviation = identification.get("abbreviation")
    return Identification(
        label=parse_string_content(identification["label"], language),
        abbreviation=(
            parse_string_content(abbreviation, language)
            if abbreviation is not None
            else ""
        ),
    )


def parse_optional_identification(
    identification: dict[str, Any] | None, language: str = DEFAULT_LANGUAGE
) -> Identification | None:
    if not identification:
        return None
    return parse_identification(identification, language)


def parse_languages(languages: Any) -> list[str]:
    return [parse_string_content(language) for language in ensure_list(languages)]


def parse_metadata(
    metadata: dict[str, Any], language: str = DEFAULT_LANGUAGE
) -> Metadata:
    """
    Parse the metadata block shared by every OCHRE envelope.

    Items published before identification blocks existed carry ``label`` and
    ``abbreviation`` directly on the item; both layouts are accepted.
    """
    item = None
    raw_item = metadata.get("item")
    if raw_item:
        if raw_item.get("label") or raw_item.get("abbreviation"):
            identification = Identification(
                label=(
                    parse_string_content(raw_item["label"], language)
                    if raw_item.get("label")
                    else ""
                ),
                abbreviation=(
                    parse_string_content(raw_item["abbreviation"], language)
                    if raw_item.get("abbreviation")
                    else ""
                ),
            )
        else:
            identification = parse_identification(
                raw_item["identification"], language
            )

        item = MetadataItem(
            identification=identification,
            category=raw_item.get("category"),
            type=raw_item.get("type"),
            max_length=raw_item.get("maxLength"),
        )

    project = None
    raw_project = metadata.get("project")
    if raw_project and raw_project.get("identification"):
        project_identification = parse_identification(
            raw_project["identification"], language
        )
        project = MetadataProject(
            identification=ProjectIdentification(
                **project_identification.model_dump(),
                website=raw_project["identification"].get("website"),
            )
        )

    return Metadata(
        project=project,
        item=item,
        dataset=parse_string_content(metadata.get("dataset", ""), language),
        publisher=parse_string_content(metadata.get("publisher", ""), language),
        languages=parse_languages(metadata.get("language")),
        identifier=parse_string_content(metadata.get("identifier", ""), language),
        description=parse_string_content(metadata.get("description", ""), language),
    )


def parse_context_item(context_item: dict[str, Any]) -> ContextItem:
    return ContextItem(
        uuid=context_item["uuid"],
        publication_datetime=parse_datetime(context_item.get("publicationDateTime")),
        number=context_item.get("n"),
        content=parse_fake_string(context_item.get("content")),
    )


def parse_context(context: dict[str, Any]) -> Context:
    nodes = [
        ContextNode(
            tree=parse_context_item(node["tree"]),
            project=parse_context_item(node["project"]),
            spatial_units=[
                parse_context_item(item)
                for item in ensure_list(node.get("spatialUnit"))
            ],
        )
        for node in ensure_list(context.get("context"))
    ]
    return Context(nodes=nodes, display_path=context.get("displayPath", ""))


def parse_license(availability: dict[str, Any] | None) -> License | None:
    """A bare string license is a placeholder and carries no usable terms."""
    if not availability:
        return None

    license = availability.get("license")
    if not isinstance(license, dict):
        return None

    return License(content=license["content"], url=license["target"])


def parse_persons(
    persons: Any, language: str = DEFAULT_LANGUAGE
) -> list[Person]:
    return [
        Person(
            uuid=person["uuid"],
            publication_datetime=parse_datetime(person.get("publicationDateTime")),
            type=person.get("type"),
            date=parse_datetime(person.get("date")),
            identification=parse_optional_identification(
                person.get("identification"), language
            ),
            content=(
                parse_fake_string(person["content"])
                if person.get("content") is not None
                else None
            ),
        )
        for person in ensure_list(persons)
    ]


def parse_image(image: dict[str, Any], language: str = DEFAULT_LANGUAGE) -> Image:
    """
    Images either link out (``href``) or embed their data after an HTML prefix.
    """
    prefix = image.get("htmlImgSrcPrefix")
    content = image.get("content")

    url = image.get("href")
    if url is None and prefix is None and content is not None:
        url = parse_fake_string(content)

    return Image(
        publication_datetime=parse_datetime(image.get("publicationDateTime")),
        identification=parse_optional_identification(
            image.get("identification"), language
        ),
        url=url,
        html_prefix=prefix,
        content=(
            parse_fake_string(content)
            if prefix is not None and content is not None
            else None
        ),
    )


def parse_image_map(image_map: dict[str, Any]) -> ImageMap:
    return ImageMap(
        areas=[
            ImageMapArea(
                uuid=area["uuid"],
                publication_datetime=parse_datetime(area.get("publicationDateTime")),
                type=area.get("type"),
                title=parse_fake_string(area.get("title")),
                shape="rectangle" if area.get("shape") == "rect" else "polygon",
                coords=[int(coord) for coord in str(area["coords"]).split(",")],
            )
            for area in ensure_list(image_map.get("area"))
        ],
        width=image_map.get("width"),
        height=image_map.get("height"),
    )


def parse_coordinates(coordinates: dict[str, Any]) -> Coordinates:
    coord = coordinates.get("coord") or {}
    return Coordinates(
        latitude=coordinates["latitude"],
        longitude=coordinates["longitude"],
        type=coord.get("coordType"),
        label=(
            parse_fake_string(coord["coordLabel"])
            if coord.get("coordLabel") is not None
            else None
        ),
    )


def parse_events(events: Any, language: str = DEFAULT_LANGUAGE) -> list[Event]:
    return [
        Event(
            date=parse_datetime(event.get("dateTime")),
            label=parse_string_content(event["label"], language),
            agent=(
                EventAgent(
                    uuid=event["agent"]["uuid"],
                    content=parse_fake_string(event["agent"].get("content")),
                )
                if event.get("agent")
                else None
            ),
        )
        for event in ensure_list(events)
    ]


def parse_periods(periods: Any, language: str = DEFAULT_LANGUAGE) -> list[Period]:
    return [
        Period(
            uuid=period["uuid"],
            publication_datetime=parse_datetime(period.get("publicationDateTime")),
            type=period.get("type"),
            identification=parse_identification(period["identification"], language),
        )
        for period in ensure_list(periods)
    ]
