import json
from typing import Any

from ochre.enums import LinkVariant
from ochre.errors import InvalidLinkError
from ochre.models import Bibliography, Link, LinkImage
from ochre.transform.bibliography import parse_bibliographies
from ochre.transform.common import parse_optional_identification
from ochre.transform.strings import DEFAULT_LANGUAGE, parse_fake_string
from ochre.util import ensure_list, parse_datetime

"""
A raw link names its target kind by the single key it carries, there is no
discriminant field. Keys are scanned in this order and the first present one wins.
"""
LINK_VARIANT_KEYS: list[LinkVariant] = [
    LinkVariant.RESOURCE,
    LinkVariant.CONCEPT,
    LinkVariant.SET,
    LinkVariant.TREE,
    LinkVariant.PERSON,
    LinkVariant.BIBLIOGRAPHY,
    LinkVariant.EPIGRAPHIC_UNIT,
]

_IMAGE_DIMENSIONS = ("height", "width", "heightPreview", "widthPreview")


def resolve_link_target(link: dict[str, Any]) -> tuple[LinkVariant, list[dict]]:
    """
    Find which kind of entity a raw link points at.

    :param dict link: The raw link.
    :raises InvalidLinkError: If no known target key is present, or the first one is null.
    :return tuple: The variant and its target items as a list.
    """
    for variant in LINK_VARIANT_KEYS:
        if variant.value in link:
            if link[variant.value] is None:
                break
            return variant, ensure_list(link[variant.value])

    raise InvalidLinkError(f"Invalid link provided: {json.dumps(link, indent=2)}")


def _parse_link_image(item: dict[str, Any]) -> LinkImage | None:
    if any(item.get(dimension) is None for dimension in _IMAGE_DIMENSIONS):
        return None

    return LinkImage(
        is_inline=item.get("rend") == "inline",
        height=item["height"],
        width=item["width"],
        height_preview=item["heightPreview"],
        width_preview=item["widthPreview"],
    )


def parse_link(link: dict[str, Any], language: str = DEFAULT_LANGUAGE) -> list[Link]:
    """
    Build Link records for every target carried by a raw link.

    Bibliography links resolve their targets into full bibliographies as well.

    :param dict link: The raw link.
    :param str language: The requested 3-letter language code.
    :raises InvalidLinkError: If none of the known target keys is present.
    :return list[Link]: One Link per target item.
    """
    variant, items = resolve_link_target(link)

    bibliographies: list[Bibliography] | None = None
    if variant == LinkVariant.BIBLIOGRAPHY:
        bibliographies = parse_bibliographies(items, language=language)  # type: ignore[assignment]

    return [
        Link(
            variant=variant,
            uuid=item["uuid"],
            type=item.get("type"),
            identification=parse_optional_identification(
                item.get("identification"), language
            ),
            content=(
                parse_fake_string(item["content"])
                if item.get("content") is not None
                else None
            ),
            publication_datetime=parse_datetime(item.get("publicationDateTime")),
            image=_parse_link_image(item),
            bibliographies=bibliographies,
        )
        for item in items
    ]


def parse_links(links: Any, language: str = DEFAULT_LANGUAGE) -> list[Link]:
    return [
        parsed
        for link in ensure_list(links)
        for parsed in parse_link(link, language)
    ]
