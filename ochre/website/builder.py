import logging
from typing import Any

from pydantic import ValidationError

from ochre.enums import PageWidth, PresentationRole
from ochre.errors import InvalidConfigurationError
from ochre.extract.connector import Fetcher
from ochre.log_context import log_context
from ochre.models import Property
from ochre.transform.common import parse_identification, parse_license, parse_persons
from ochre.transform.links import parse_links
from ochre.transform.properties import get_property_by_label, parse_properties_block
from ochre.transform.strings import DEFAULT_LANGUAGE, parse_fake_string
from ochre.util import asset_url, ensure_list, parse_datetime, preview_url
from ochre.website.components import parse_web_element, parse_web_elements
from ochre.website.models import (
    WebElement,
    Webpage,
    WebpageProperties,
    Website,
    WebsiteProject,
    WebsiteProperties,
)
from ochre.website.presentation import (
    PRESENTATION_LABEL,
    Presentation,
    decode_resource_presentation,
)

_LOGGER = logging.getLogger(__name__)


def _setting(properties: list[Property], label: str) -> str | None:
    prop = get_property_by_label(properties, label)
    if prop is None or not prop.values:
        return None
    return prop.values[0].content


def _flag(properties: list[Property], label: str, default: bool) -> bool:
    value = _setting(properties, label)
    return default if value is None else value == "Yes"


def parse_website_properties(properties: list[Property]) -> WebsiteProperties:
    """
    Decode the site configuration held under the tree's "presentation" property.

    :param list[Property] properties: The website tree's top-level properties.
    :raises InvalidConfigurationError: If the configuration is missing or any
        value is outside its allowed set.
    :return WebsiteProperties: The validated configuration.
    """
    presentation = get_property_by_label(properties, PRESENTATION_LABEL)
    if presentation is None:
        raise InvalidConfigurationError("Presentation property not found")
    settings = presentation.properties

    website_type = _setting(settings, "webUI")
    if website_type is None:
        raise InvalidConfigurationError("Website type not found")

    status = _setting(settings, "status")
    if status is None:
        raise InvalidConfigurationError("Website status not found")

    logo = get_property_by_label(settings, "logo")
    logo_uuid = logo.values[0].uuid if logo and logo.values else None
    search_collection = get_property_by_label(settings, "search-collection")

    try:
        return WebsiteProperties(
            type=website_type,
            status=status,
            privacy=_setting(settings, "privacy") or "public",
            is_header_displayed=_flag(settings, "navbar-visible", True),
            is_footer_displayed=_flag(settings, "footer-visible", True),
            is_sidebar_displayed=_flag(settings, "sidebar-visible", False),
            logo_url=asset_url(logo_uuid) if logo_uuid else None,
            search_collection_uuid=(
                search_collection.values[0].uuid
                if search_collection and search_collection.values
                else None
            ),
        )
    except ValidationError as e:
        raise InvalidConfigurationError(f"Invalid website properties: {e}") from e


def parse_webpage(
    resource: dict[str, Any],
    presentation: Presentation,
    fetcher: Fetcher,
    language: str = DEFAULT_LANGUAGE,
) -> Webpage:
    """
    Build a page and, depth first, its elements and sub-pages.

    :param dict resource: The raw page resource.
    :param Presentation presentation: The resource's decoded presentation.
    :param Fetcher fetcher: Used by components that dereference linked documents.
    :param str language: The requested 3-letter language code.
    :raises InvalidConfigurationError: If the page has no slug or an invalid width.
    :return Webpage: The page.
    """
    title = parse_identification(resource["identification"], language).label

    raw_slug = resource.get("slug")
    if raw_slug is None:
        raise InvalidConfigurationError(f"Slug not found for page “{title}”")
    # The site root is exported as "/"
    slug = "" if raw_slug == "/" else parse_fake_string(raw_slug)

    with log_context(page=slug):
        links = parse_links(resource.get("links"), language)
        background = next(
            (link for link in links if link.type in ("image", "IIIF")), None
        )

        width = _setting(presentation.settings, "width") or PageWidth.DEFAULT.value
        try:
            page_width = PageWidth(width)
        except ValueError as e:
            raise InvalidConfigurationError(
                f"Invalid width “{width}” for page “{title}”"
            ) from e

        elements: list[WebElement] = []
        webpages: list[Webpage] = []
        for child in ensure_list(resource.get("resource")):
            child_presentation = decode_resource_presentation(child, language)
            match child_presentation.role:
                case PresentationRole.PAGE:
                    webpages.append(
                        parse_webpage(child, child_presentation, fetcher, language)
                    )
                case PresentationRole.ELEMENT:
                    elements.append(
                        parse_web_element(child, child_presentation, fetcher, language)
                    )
                case _:
                    _LOGGER.debug(f"Skipping child {child.get('uuid')} of page {title}")

        _LOGGER.debug(
            f"Built page with {len(elements)} elements and {len(webpages)} sub-pages"
        )

        return Webpage(
            title=title,
            slug=slug,
            properties=WebpageProperties(
                displayed_in_header=_flag(presentation.settings, "header", True),
                width=page_width,
                variant=_setting(presentation.settings, "variant") or "default",
                background_image_url=(
                    preview_url(background.uuid) if background else None
                ),
                css_styles=presentation.css_styles,
                tailwind_classes=presentation.tailwind_classes,
            ),
            elements=elements,
            webpages=webpages,
        )


def parse_website(
    tree: dict[str, Any],
    project_name: Any,
    website_url: Any,
    fetcher: Fetcher,
    language: str = DEFAULT_LANGUAGE,
) -> Website:
    """
    Build a website from its OCHRE tree.

    Top-level resources are pages, global elements, or fragments. A fragment
    (such as the sidebar) has no presentation role of its own, its element
    children become global elements and never enter the page tree.

    :param dict tree: The raw website tree.
    :param project_name: The owning project's name.
    :param website_url: The project's website URL, if any.
    :param Fetcher fetcher: Used by components that dereference linked documents.
    :param str language: The requested 3-letter language code.
    :raises InvalidConfigurationError: If the site configuration or pages are missing.
    :return Website: The website.
    """
    with log_context(website=tree.get("uuid")):
        if not tree.get("properties"):
            raise InvalidConfigurationError("Website properties not found")

        properties = parse_website_properties(
            parse_properties_block(tree["properties"], language)
        )

        items = tree.get("items") or {}
        if "resource" not in items:
            raise InvalidConfigurationError("Website pages not found")

        pages: list[Webpage] = []
        global_elements: list[WebElement] = []
        for resource in ensure_list(items["resource"]):
            presentation = decode_resource_presentation(resource, language)
            match presentation.role:
                case PresentationRole.PAGE:
                    pages.append(
                        parse_webpage(resource, presentation, fetcher, language)
                    )
                case PresentationRole.ELEMENT:
                    global_elements.append(
                        parse_web_element(resource, presentation, fetcher, language)
                    )
                case _:
                    global_elements.extend(
                        parse_web_elements(resource.get("resource"), fetcher, language)
                    )

        _LOGGER.info(
            f"Built website with {len(pages)} pages and "
            f"{len(global_elements)} global elements"
        )

        creators = tree.get("creators")
        return Website(
            uuid=tree["uuid"],
            publication_datetime=parse_datetime(tree.get("publicationDateTime")),
            identification=parse_identification(tree["identification"], language),
            project=WebsiteProject(
                name=parse_fake_string(project_name),
                website=(
                    parse_fake_string(website_url) if website_url is not None else None
                ),
            ),
            creators=(
                parse_persons(creators.get("creator"), language) if creators else []
            ),
            license=parse_license(tree.get("availability")),
            pages=pages,
            global_elements=global_elements,
            properties=properties,
        )
