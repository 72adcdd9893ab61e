"""
Entity assemblers.

Every assembler takes an ``is_nested`` flag. Nested forms are separate models that
do not declare the provenance fields (publication timestamp, license, copyright,
context), so whatever the source carries, an embedded entity never exposes them.
"""

import logging
from typing import Any

from ochre.log_context import log_context
from ochre.models import (
    Concept,
    Interpretation,
    NestedConcept,
    NestedResource,
    NestedSet,
    NestedSpatialUnit,
    NestedTree,
    Observation,
    Resource,
    Set,
    SetItems,
    SpatialUnit,
    Tree,
    TreeItems,
)
from ochre.transform.bibliography import parse_bibliographies
from ochre.transform.common import (
    parse_context,
    parse_coordinates,
    parse_events,
    parse_identification,
    parse_image,
    parse_image_map,
    parse_license,
    parse_periods,
    parse_persons,
)
from ochre.transform.documents import parse_document, parse_notes
from ochre.transform.links import parse_links
from ochre.transform.properties import parse_properties_block
from ochre.transform.strings import (
    DEFAULT_LANGUAGE,
    parse_fake_string,
    parse_string_content,
)
from ochre.util import ensure_list, parse_datetime

_LOGGER = logging.getLogger(__name__)


def _parse_notes_block(block: dict[str, Any] | None, language: str):
    # Some exports send {"rend": "splitNotes"} without any note
    if not block or "note" not in block:
        return []
    return parse_notes(block["note"], language)


def _parse_creators(block: dict[str, Any] | None, language: str):
    if not block:
        return []
    return parse_persons(block.get("creator"), language)


def _parse_description(description: Any, language: str) -> str:
    if not description:
        return ""
    return parse_string_content(description, language)


def parse_observation(
    observation: dict[str, Any], language: str = DEFAULT_LANGUAGE
) -> Observation:
    observers = observation.get("observers")
    return Observation(
        number=observation.get("observationNo"),
        date=parse_datetime(observation.get("date")),
        observers=(
            [
                observer.strip()
                for observer in parse_fake_string(observers).split(";")
            ]
            if observers is not None
            else []
        ),
        notes=_parse_notes_block(observation.get("notes"), language),
        links=parse_links(observation.get("links"), language),
        properties=parse_properties_block(observation.get("properties"), language),
    )


def parse_interpretations(
    interpretations: Any, language: str = DEFAULT_LANGUAGE
) -> list[Interpretation]:
    return [
        Interpretation(
            date=parse_datetime(interpretation.get("date")),
            number=interpretation.get("interpretationNo"),
            properties=parse_properties_block(
                interpretation.get("properties"), language
            ),
        )
        for interpretation in ensure_list(interpretations)
    ]


def parse_resource(
    resource: dict[str, Any],
    is_nested: bool = False,
    language: str = DEFAULT_LANGUAGE,
) -> Resource | NestedResource:
    """
    Assemble a resource.

    Child resources are always assembled in their nested form, which gives a
    resource its own tree shape independently of the container it came from.

    :param dict resource: The raw resource.
    :param bool is_nested: Build the nested form.
    :param str language: The requested 3-letter language code.
    :return Resource | NestedResource: The assembled resource.
    """
    with log_context(resource=resource.get("uuid")):
        document = resource.get("document")
        image_map = resource.get("imagemap")
        cited = resource.get("citedBibliography")
        periods = resource.get("periods")

        fields = dict(
            uuid=resource["uuid"],
            type=resource.get("type"),
            number=resource.get("n"),
            format=resource.get("format"),
            identification=parse_identification(resource["identification"], language),
            date=parse_datetime(resource.get("date")),
            image=(
                parse_image(resource["image"], language)
                if resource.get("image")
                else None
            ),
            creators=_parse_creators(resource.get("creators"), language),
            notes=_parse_notes_block(resource.get("notes"), language),
            description=_parse_description(resource.get("description"), language),
            document=(
                parse_document(document["content"], language) if document else None
            ),
            href=resource.get("href"),
            image_map=parse_image_map(image_map) if image_map else None,
            periods=parse_periods(periods.get("period"), language) if periods else [],
            links=parse_links(resource.get("links"), language),
            reverse_links=parse_links(resource.get("reverseLinks"), language),
            properties=parse_properties_block(resource.get("properties"), language),
            cited_bibliographies=(
                parse_bibliographies(cited.get("reference"), language=language)
                if cited
                else []
            ),
            resources=parse_resources(
                resource.get("resource"), is_nested=True, language=language
            ),
        )

        if is_nested:
            return NestedResource(**fields)

        return Resource(
            **fields,
            publication_datetime=parse_datetime(resource.get("publicationDateTime")),
            context=(
                parse_context(resource["context"]) if resource.get("context") else None
            ),
            license=parse_license(resource.get("availability")),
            copyright=(
                parse_fake_string(resource["copyright"])
                if resource.get("copyright") is not None
                else None
            ),
        )


def parse_resources(
    resources: Any, is_nested: bool = False, language: str = DEFAULT_LANGUAGE
) -> list[Resource] | list[NestedResource]:
    return [
        parse_resource(resource, is_nested, language)
        for resource in ensure_list(resources)
    ]  # type: ignore[return-value]


def parse_spatial_unit(
    spatial_unit: dict[str, Any],
    is_nested: bool = False,
    language: str = DEFAULT_LANGUAGE,
) -> SpatialUnit | NestedSpatialUnit:
    """
    Assemble a spatial unit.

    The nested form drops provenance, observations and events, and carries the
    unit's inline properties instead, which the full form does not have.
    """
    fields = dict(
        uuid=spatial_unit["uuid"],
        type=spatial_unit.get("type"),
        number=spatial_unit.get("n"),
        identification=parse_identification(spatial_unit["identification"], language),
        image=(
            parse_image(spatial_unit["image"], language)
            if spatial_unit.get("image")
            else None
        ),
        description=_parse_description(spatial_unit.get("description"), language),
        coordinates=(
            parse_coordinates(spatial_unit["coordinates"])
            if spatial_unit.get("coordinates")
            else None
        ),
    )

    if is_nested:
        return NestedSpatialUnit(
            **fields,
            properties=parse_properties_block(
                spatial_unit.get("properties"), language
            ),
        )

    if spatial_unit.get("observations"):
        observations = [
            parse_observation(observation, language)
            for observation in ensure_list(
                spatial_unit["observations"].get("observation")
            )
        ]
    elif spatial_unit.get("observation"):
        observations = [parse_observation(spatial_unit["observation"], language)]
    else:
        observations = []

    events = spatial_unit.get("events")

    return SpatialUnit(
        **fields,
        publication_datetime=parse_datetime(spatial_unit.get("publicationDateTime")),
        context=(
            parse_context(spatial_unit["context"])
            if spatial_unit.get("context")
            else None
        ),
        license=parse_license(spatial_unit.get("availability")),
        observations=observations,
        events=parse_events(events.get("event"), language) if events else [],
    )


def parse_spatial_units(
    spatial_units: Any, is_nested: bool = False, language: str = DEFAULT_LANGUAGE
) -> list[SpatialUnit] | list[NestedSpatialUnit]:
    return [
        parse_spatial_unit(spatial_unit, is_nested, language)
        for spatial_unit in ensure_list(spatial_units)
    ]  # type: ignore[return-value]


def parse_concept(
    concept: dict[str, Any],
    is_nested: bool = False,
    language: str = DEFAULT_LANGUAGE,
) -> Concept | NestedConcept:
    interpretations = concept.get("interpretations") or {}
    fields = dict(
        uuid=concept["uuid"],
        number=concept.get("n"),
        identification=parse_identification(concept["identification"], language),
        interpretations=parse_interpretations(
            interpretations.get("interpretation"), language
        ),
    )

    if is_nested:
        return NestedConcept(**fields)

    return Concept(
        **fields,
        publication_datetime=parse_datetime(concept.get("publicationDateTime")),
        context=parse_context(concept["context"]) if concept.get("context") else None,
        license=parse_license(concept.get("availability")),
    )


def parse_concepts(
    concepts: Any, is_nested: bool = False, language: str = DEFAULT_LANGUAGE
) -> list[Concept] | list[NestedConcept]:
    return [
        parse_concept(concept, is_nested, language)
        for concept in ensure_list(concepts)
    ]  # type: ignore[return-value]


def parse_set(
    raw_set: dict[str, Any],
    is_nested: bool = False,
    language: str = DEFAULT_LANGUAGE,
) -> Set | NestedSet:
    """
    Assemble a set. Items of a set are always assembled in their nested form.
    """
    with log_context(set=raw_set.get("uuid")):
        items = raw_set.get("items") or {}
        set_items = SetItems(
            resources=parse_resources(items.get("resource"), True, language),
            spatial_units=parse_spatial_units(items.get("spatialUnit"), True, language),
            concepts=parse_concepts(items.get("concept"), True, language),
        )
        _LOGGER.debug(f"Assembled {len(set_items.resources)} resources of the set")

        fields = dict(
            uuid=raw_set["uuid"],
            type=raw_set.get("type"),
            number=raw_set.get("n"),
            date=parse_datetime(raw_set.get("date")),
            identification=parse_identification(raw_set["identification"], language),
            is_suppressing_blanks=raw_set.get("suppressBlanks", False),
            description=_parse_description(raw_set.get("description"), language),
            creators=_parse_creators(raw_set.get("creators"), language),
            items=set_items,
        )

        if is_nested:
            return NestedSet(**fields)

        return Set(
            **fields,
            publication_datetime=parse_datetime(raw_set.get("publicationDateTime")),
            license=parse_license(raw_set.get("availability")),
        )


def parse_tree(
    tree: dict[str, Any],
    is_nested: bool = False,
    language: str = DEFAULT_LANGUAGE,
) -> Tree | NestedTree:
    """
    Assemble a tree. Unlike sets, tree items are assembled in their full form.
    """
    with log_context(tree=tree.get("uuid")):
        items = tree.get("items") or {}
        fields = dict(
            uuid=tree["uuid"],
            type=tree.get("type"),
            number=tree.get("n"),
            date=parse_datetime(tree.get("date")),
            identification=parse_identification(tree["identification"], language),
            creators=_parse_creators(tree.get("creators"), language),
            items=TreeItems(
                resources=parse_resources(items.get("resource"), False, language),
                spatial_units=parse_spatial_units(
                    items.get("spatialUnit"), False, language
                ),
                concepts=parse_concepts(items.get("concept"), False, language),
            ),
            properties=parse_properties_block(tree.get("properties"), language),
        )

        if is_nested:
            return NestedTree(**fields)

        return Tree(
            **fields,
            publication_datetime=parse_datetime(tree.get("publicationDateTime")),
            license=parse_license(tree.get("availability")),
        )
