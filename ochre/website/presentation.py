"""
Presentation directives.

Website resources describe how they should be displayed through properties
labelled "presentation". The first one whose value is ``page`` or ``element``
gives the resource its role and carries its settings as child properties.
Sibling "presentation" properties valued ``css`` and ``tailwind`` hold styling.
"""

from typing import Any

from pydantic import BaseModel

from ochre.enums import PresentationRole
from ochre.models import Property
from ochre.transform.properties import parse_properties_block
from ochre.transform.strings import DEFAULT_LANGUAGE
from ochre.website.models import Style

PRESENTATION_LABEL = "presentation"


class Presentation(BaseModel):
    role: PresentationRole | None = None
    settings: list[Property] = []
    css_styles: list[Style] = []
    tailwind_classes: list[str] = []


def _first_value(prop: Property) -> str | None:
    return prop.values[0].content if prop.values else None


def _find_presentation(properties: list[Property], value: str) -> Property | None:
    for prop in properties:
        if prop.label == PRESENTATION_LABEL and _first_value(prop) == value:
            return prop
    return None


def decode_presentation(properties: list[Property]) -> Presentation:
    """
    Decode the presentation directive of one resource.

    :param list[Property] properties: The resource's top-level properties.
    :return Presentation: The role (None for fragments), its settings and the
        styling found alongside it.
    """
    role = None
    settings: list[Property] = []
    for prop in properties:
        if prop.label != PRESENTATION_LABEL:
            continue
        value = _first_value(prop)
        if value in (PresentationRole.PAGE.value, PresentationRole.ELEMENT.value):
            role = PresentationRole(value)
            settings = prop.properties
            break

    css = _find_presentation(properties, "css")
    tailwind = _find_presentation(properties, "tailwind")

    return Presentation(
        role=role,
        settings=settings,
        css_styles=[
            Style(label=prop.label, value=_first_value(prop) or "")
            for prop in (css.properties if css else [])
        ],
        tailwind_classes=[
            f"{prop.label}-{_first_value(prop)}"
            for prop in (tailwind.properties if tailwind else [])
        ],
    )


def decode_resource_presentation(
    resource: dict[str, Any], language: str = DEFAULT_LANGUAGE
) -> Presentation:
    return decode_presentation(
        parse_properties_block(resource.get("properties"), language)
    )
