"""
Component contract registry.

Every web element names a UI component in the ``component`` setting of its
presentation directive. Each component tag has one registered builder, which
checks the properties and links the component requires and produces the typed
component model. Builders only reach the network when they ask for the
element's document and the element has to borrow it from a linked resource.
"""

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable

from returns.result import Failure, Success

from ochre.enums import LinkVariant, PresentationRole
from ochre.errors import (
    InvalidConfigurationError,
    MissingComponentDependencyError,
    UnknownComponentError,
)
from ochre.extract.connector import Fetcher
from ochre.log_context import log_context
from ochre.models import Document, Link, Property
from ochre.transform.common import parse_identification
from ochre.transform.documents import parse_document
from ochre.transform.links import parse_links
from ochre.transform.properties import (
    get_property_by_label,
    get_property_value_by_label,
    get_property_values_by_label,
)
from ochre.transform.strings import DEFAULT_LANGUAGE
from ochre.util import asset_url, ensure_list, preview_url
from ochre.website.models import (
    AnnotatedDocumentComponent,
    AnnotatedImageComponent,
    BibliographyComponent,
    BlogComponent,
    ButtonComponent,
    CollectionComponent,
    Component,
    IIIFViewerComponent,
    ImageComponent,
    ImageGalleryComponent,
    InteractiveChapterTableComponent,
    ItemGalleryComponent,
    MenuComponent,
    MenuItemComponent,
    NColumnsComponent,
    NetworkGraphComponent,
    NRowsComponent,
    TableComponent,
    TextComponent,
    TextImageComponent,
    WebElement,
    WebImage,
)
from ochre.website.presentation import Presentation, decode_resource_presentation

_LOGGER = logging.getLogger(__name__)

COMPONENT_SETTING = "component"


@dataclass
class ElementContext:
    """Everything a component builder may look at for one element."""

    resource: dict[str, Any]
    title: str
    component: str
    settings: list[Property]
    links: list[Link]
    fetcher: Fetcher
    language: str = DEFAULT_LANGUAGE

    def setting(self, label: str, default: str | None = None) -> str | None:
        value = get_property_value_by_label(self.settings, label)
        return value if value is not None else default

    def find_link(
        self,
        variant: LinkVariant | None = None,
        types: tuple[str, ...] | None = None,
    ) -> Link | None:
        for link in self.links:
            if variant is not None and link.variant != variant:
                continue
            if types is not None and link.type not in types:
                continue
            return link
        return None

    def require(self, value: Any, dependency: str) -> Any:
        if value is None:
            raise MissingComponentDependencyError(self.component, self.title, dependency)
        return value

    @cached_property
    def document(self) -> Document | None:
        """
        The element's own document, else the document of the first linked
        internal document, fetched on first access.
        """
        own = self.resource.get("document")
        if own:
            return parse_document(own["content"], self.language)

        link = self.find_link(types=("internalDocument",))
        if link is None:
            return None

        _LOGGER.debug(f"Fetching linked document {link.uuid}")
        match self.fetcher.fetch_by_uuid(link.uuid):
            case Success(envelope):
                linked = envelope.get("resource") or {}
            case Failure(error):
                raise error

        if not linked.get("document"):
            return None
        return parse_document(linked["document"]["content"], self.language)


ComponentBuilder = Callable[[ElementContext], Component]

COMPONENT_REGISTRY: dict[str, ComponentBuilder] = {}


def register_component(name: str) -> Callable[[ComponentBuilder], ComponentBuilder]:
    def decorator(builder: ComponentBuilder) -> ComponentBuilder:
        COMPONENT_REGISTRY[name] = builder
        return builder

    return decorator


def _web_image(link: Link, url: str) -> WebImage:
    return WebImage(
        url=url,
        label=link.identification.label if link.identification else None,
        width=link.image.width if link.image else 0,
        height=link.image.height if link.image else 0,
    )


@register_component("annotated-document")
def build_annotated_document(context: ElementContext) -> AnnotatedDocumentComponent:
    return AnnotatedDocumentComponent(
        document=context.require(context.document, "Document")
    )


@register_component("annotated-image")
def build_annotated_image(context: ElementContext) -> AnnotatedImageComponent:
    link = context.require(context.find_link(types=("image",)), "Image link")
    return AnnotatedImageComponent(
        image_uuid=link.uuid,
        is_searchable=context.setting("is-searchable") == "Yes",
    )


@register_component("bibliography")
def build_bibliography(context: ElementContext) -> BibliographyComponent:
    link = context.require(
        context.find_link(variant=LinkVariant.BIBLIOGRAPHY), "Bibliography link"
    )
    bibliographies = context.require(link.bibliographies or None, "Bibliography")
    return BibliographyComponent(
        bibliographies=bibliographies,
        layout=context.setting("layout", "long"),
    )


@register_component("blog")
def build_blog(context: ElementContext) -> BlogComponent:
    link = context.require(context.find_link(variant=LinkVariant.TREE), "Blog link")
    return BlogComponent(blog_id=link.uuid)


@register_component("button")
def build_button(context: ElementContext) -> ButtonComponent:
    href = context.setting("navigate-to") or context.setting("link-to")
    return ButtonComponent(
        href=context.require(href, "Properties “navigate-to” or “link-to”")
    )


@register_component("collection")
def build_collection(context: ElementContext) -> CollectionComponent:
    variant = context.require(context.setting("variant"), "Property “variant”")
    link = context.require(
        context.find_link(variant=LinkVariant.SET), "Collection link"
    )
    return CollectionComponent(
        variant=variant,
        layout=context.setting("layout", "image-start"),
        collection_id=link.uuid,
    )


@register_component("iiif-viewer")
def build_iiif_viewer(context: ElementContext) -> IIIFViewerComponent:
    link = context.require(context.find_link(types=("IIIF",)), "IIIF link")
    return IIIFViewerComponent(manifest_url=asset_url(link.uuid))


@register_component("image")
def build_image(context: ElementContext) -> ImageComponent:
    link = context.require(context.find_link(types=("image",)), "Image link")
    return ImageComponent(image=_web_image(link, asset_url(link.uuid)))


@register_component("image-gallery")
def build_image_gallery(context: ElementContext) -> ImageGalleryComponent:
    return ImageGalleryComponent()


@register_component("interactive-chapter-table")
def build_interactive_chapter_table(
    context: ElementContext,
) -> InteractiveChapterTableComponent:
    return InteractiveChapterTableComponent()


@register_component("item-gallery")
def build_item_gallery(context: ElementContext) -> ItemGalleryComponent:
    return ItemGalleryComponent()


@register_component("menu")
def build_menu(context: ElementContext) -> MenuComponent:
    return MenuComponent()


@register_component("menu-item")
def build_menu_item(context: ElementContext) -> MenuItemComponent:
    return MenuItemComponent()


@register_component("n-columns")
def build_n_columns(context: ElementContext) -> NColumnsComponent:
    return NColumnsComponent(
        columns=parse_web_elements(
            context.resource.get("resource"), context.fetcher, context.language
        )
    )


@register_component("n-rows")
def build_n_rows(context: ElementContext) -> NRowsComponent:
    return NRowsComponent(
        rows=parse_web_elements(
            context.resource.get("resource"), context.fetcher, context.language
        )
    )


@register_component("network-graph")
def build_network_graph(context: ElementContext) -> NetworkGraphComponent:
    return NetworkGraphComponent()


@register_component("table")
def build_table(context: ElementContext) -> TableComponent:
    link = context.require(context.find_link(variant=LinkVariant.SET), "Table link")
    return TableComponent(
        table_id=link.uuid,
        headers=get_property_values_by_label(context.settings, "headers") or [],
    )


@register_component("text")
def build_text(context: ElementContext) -> TextComponent:
    document = context.require(context.document, "Document")
    return TextComponent(
        variant=context.setting("variant", "block"),
        content=document.content,
    )


@register_component("text-image")
def build_text_image(context: ElementContext) -> TextImageComponent:
    document = context.require(context.document, "Document")
    link = context.require(
        context.find_link(types=("image", "IIIF")), "Image link"
    )
    opacity = context.setting("image-opacity")
    try:
        image_opacity = float(opacity) if opacity is not None else None
    except ValueError as e:
        raise InvalidConfigurationError(
            f"Invalid image opacity “{opacity}” for element “{context.title}”"
        ) from e
    return TextImageComponent(
        variant=context.setting("variant", "block"),
        layout=context.setting("layout", "image-start"),
        caption_layout=context.setting("caption-layout", "bottom"),
        content=document.content,
        image=_web_image(link, preview_url(link.uuid)),
        image_opacity=image_opacity,
    )


def parse_web_element(
    resource: dict[str, Any],
    presentation: Presentation,
    fetcher: Fetcher,
    language: str = DEFAULT_LANGUAGE,
) -> WebElement:
    """
    Build a web element from a resource whose presentation role is ``element``.

    :param dict resource: The raw element resource.
    :param Presentation presentation: The resource's decoded presentation.
    :param Fetcher fetcher: Used to dereference linked documents.
    :param str language: The requested 3-letter language code.
    :raises InvalidConfigurationError: If no component is named, or a setting is malformed.
    :raises UnknownComponentError: If the named component is not registered.
    :raises MissingComponentDependencyError: If the component's contract is not met.
    :return WebElement: The element with its typed component.
    """
    title = parse_identification(resource["identification"], language).label

    with log_context(element=title):
        component_property = get_property_by_label(
            presentation.settings, COMPONENT_SETTING
        )
        if component_property is None or not component_property.values:
            raise InvalidConfigurationError(
                f"Component for element “{title}” not found"
            )

        name = component_property.values[0].content
        builder = COMPONENT_REGISTRY.get(name)
        if builder is None:
            raise UnknownComponentError(name, title)

        context = ElementContext(
            resource=resource,
            title=title,
            component=name,
            settings=component_property.properties,
            links=parse_links(resource.get("links"), language),
            fetcher=fetcher,
            language=language,
        )

        return WebElement(
            uuid=resource["uuid"],
            title=title,
            css_styles=presentation.css_styles,
            tailwind_classes=presentation.tailwind_classes,
            component=builder(context),
        )


def parse_web_elements(
    resources: Any, fetcher: Fetcher, language: str = DEFAULT_LANGUAGE
) -> list[WebElement]:
    """Build the elements among child resources, in order; other children are skipped."""
    elements = []
    for resource in ensure_list(resources):
        presentation = decode_resource_presentation(resource, language)
        if presentation.role != PresentationRole.ELEMENT:
            continue
        elements.append(parse_web_element(resource, presentation, fetcher, language))
    return elements
