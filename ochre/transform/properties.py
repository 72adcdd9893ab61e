import re
from typing import Any

from ochre.models import Property, PropertyValue
from ochre.transform.strings import (
    DEFAULT_LANGUAGE,
    parse_fake_string,
    parse_string_content,
)
from ochre.util import ensure_list, parse_datetime

_TRAILING_ELLIPSIS = re.compile(r"\s*\.{3}$")


def parse_property_value(
    value: dict[str, Any], language: str = DEFAULT_LANGUAGE
) -> PropertyValue:
    category = value.get("category")
    return PropertyValue(
        content=parse_string_content(value, language),
        type=value["type"],
        category=category if category != "value" else None,
        uuid=value.get("uuid"),
        publication_datetime=parse_datetime(value.get("publicationDateTime")),
    )


def parse_properties(
    properties: Any, language: str = DEFAULT_LANGUAGE
) -> list[Property]:
    """
    Normalize a raw property tree.

    Labels are language-resolved and lose the "..." OCHRE appends to labels of
    properties that expect further values. Child properties recurse until a
    property carries no ``property`` key.

    :param properties: One raw property or a list of them.
    :param str language: The requested 3-letter language code.
    :return list[Property]: The normalized properties, in source order.
    """
    return [
        Property(
            label=_TRAILING_ELLIPSIS.sub(
                "", parse_string_content(prop["label"], language)
            ).strip(),
            values=[
                parse_property_value(value, language)
                for value in ensure_list(prop.get("value"))
            ],
            comment=(
                parse_fake_string(prop["comment"])
                if prop.get("comment") is not None
                else None
            ),
            properties=parse_properties(prop.get("property"), language),
        )
        for prop in ensure_list(properties)
    ]


def parse_properties_block(
    block: dict[str, Any] | None, language: str = DEFAULT_LANGUAGE
) -> list[Property]:
    """Parse a ``{"property": ...}`` wrapper as found on entities."""
    if not block:
        return []
    return parse_properties(block.get("property"), language)


def get_property_by_label(
    properties: list[Property], label: str, search_nested: bool = False
) -> Property | None:
    """
    Find a property by its exact label.

    :param list[Property] properties: The properties at the current level.
    :param str label: The case-sensitive label to match.
    :param bool search_nested: Whether to descend into child properties when the
        current level has no match.
    :return Property | None: The first match, or None if there is none.
    """
    for prop in properties:
        if prop.label == label:
            return prop

    if search_nested:
        for prop in properties:
            found = get_property_by_label(prop.properties, label, search_nested)
            if found is not None:
                return found

    return None


def get_property_values_by_label(
    properties: list[Property], label: str, search_nested: bool = False
) -> list[str] | None:
    prop = get_property_by_label(properties, label, search_nested)
    if prop is None:
        return None
    return [value.content for value in prop.values]


def get_property_value_by_label(
    properties: list[Property], label: str, search_nested: bool = False
) -> str | None:
    """
    Return the content of the first value of the matching property.

    With ``search_nested``, a match without values does not end the search: the
    lookup goes on into every child level until some match carries a value.
    """
    values = get_property_values_by_label(properties, label, search_nested)
    if values:
        return values[0]

    if search_nested:
        for prop in properties:
            found = get_property_value_by_label(prop.properties, label, search_nested)
            if found is not None:
                return found

    return None
