import pytest

from ochre.errors import (
    FetchError,
    InvalidConfigurationError,
    MissingComponentDependencyError,
    UnknownComponentError,
)
from ochre.website.components import COMPONENT_REGISTRY, parse_web_element
from ochre.website.models import (
    ButtonComponent,
    CollectionComponent,
    ImageComponent,
    NColumnsComponent,
    Style,
    TextComponent,
    TextImageComponent,
)
from ochre.website.presentation import decode_resource_presentation
from tests.factories import FakeFetcher, element, identification, presentation, prop

DOCUMENT_LINK = {"resource": {"uuid": "d1", "type": "internalDocument"}}
IMAGE_LINK = {
    "resource": {
        "uuid": "i1",
        "type": "image",
        "identification": identification("Photo"),
        "height": 10,
        "width": 20,
        "heightPreview": 5,
        "widthPreview": 10,
    }
}
OWN_DOCUMENT = {"content": {"lang": "eng", "string": "Own text"}}


def build(resource, fetcher=None):
    return parse_web_element(
        resource, decode_resource_presentation(resource), fetcher or FakeFetcher()
    )


def test_every_component_tag_is_registered():
    assert sorted(COMPONENT_REGISTRY) == [
        "annotated-document",
        "annotated-image",
        "bibliography",
        "blog",
        "button",
        "collection",
        "iiif-viewer",
        "image",
        "image-gallery",
        "interactive-chapter-table",
        "item-gallery",
        "menu",
        "menu-item",
        "n-columns",
        "n-rows",
        "network-graph",
        "table",
        "text",
        "text-image",
    ]


def test_button_navigates_to():
    web_element = build(element("e1", "Go", "button", prop("navigate-to", "/about")))

    assert web_element.uuid == "e1"
    assert web_element.title == "Go"
    assert web_element.component == ButtonComponent(href="/about")


def test_button_falls_back_to_link_to():
    web_element = build(
        element("e1", "Go", "button", prop("link-to", "https://example.org"))
    )

    assert web_element.component.href == "https://example.org"


def test_button_without_target_fails_naming_the_component():
    with pytest.raises(MissingComponentDependencyError) as exc_info:
        build(element("e1", "Go", "button"))

    assert exc_info.value.component == "button"
    assert exc_info.value.element == "Go"
    assert "button" in exc_info.value.message


def test_unknown_component_is_fatal():
    with pytest.raises(UnknownComponentError) as exc_info:
        build(element("e1", "Odd", "carousel"))

    assert exc_info.value.component == "carousel"


def test_element_without_component_setting():
    resource = {
        "uuid": "e1",
        "identification": identification("Bare"),
        "properties": {"property": [presentation("element")]},
    }

    with pytest.raises(InvalidConfigurationError):
        build(resource)


def test_text_uses_own_document_without_fetching():
    fetcher = FakeFetcher()

    web_element = build(
        element("e1", "Intro", "text", document=OWN_DOCUMENT, links=[DOCUMENT_LINK]),
        fetcher,
    )

    assert web_element.component == TextComponent(variant="block", content="Own text")
    assert fetcher.calls == []


def test_text_fetches_linked_document():
    fetcher = FakeFetcher(
        {
            "d1": {
                "resource": {
                    "uuid": "d1",
                    "document": {"content": {"lang": "eng", "string": "Fetched text"}},
                }
            }
        }
    )

    web_element = build(
        element("e1", "Intro", "text", prop("variant", "quote"), links=[DOCUMENT_LINK]),
        fetcher,
    )

    assert web_element.component.content == "Fetched text"
    assert web_element.component.variant == "quote"
    assert fetcher.calls == ["d1"]


def test_failed_document_fetch_aborts_the_element():
    with pytest.raises(FetchError):
        build(element("e1", "Intro", "text", links=[DOCUMENT_LINK]))


def test_text_without_document():
    with pytest.raises(MissingComponentDependencyError) as exc_info:
        build(element("e1", "Intro", "text"))

    assert exc_info.value.component == "text"


def test_components_without_documents_do_not_fetch():
    fetcher = FakeFetcher()

    build(
        element("e1", "Go", "button", prop("link-to", "/x"), links=[DOCUMENT_LINK]),
        fetcher,
    )

    assert fetcher.calls == []


def test_collection():
    web_element = build(
        element(
            "e1",
            "Finds",
            "collection",
            prop("variant", "full"),
            links=[{"set": {"uuid": "s1"}}],
        )
    )

    assert web_element.component == CollectionComponent(
        variant="full", layout="image-start", collection_id="s1"
    )


def test_collection_requires_variant_and_set_link():
    with pytest.raises(MissingComponentDependencyError):
        build(element("e1", "Finds", "collection", links=[{"set": {"uuid": "s1"}}]))

    with pytest.raises(MissingComponentDependencyError):
        build(element("e1", "Finds", "collection", prop("variant", "full")))


def test_image_uses_asset_url():
    web_element = build(element("e1", "Photo", "image", links=[IMAGE_LINK]))

    assert isinstance(web_element.component, ImageComponent)
    image = web_element.component.image
    assert image.url == "https://ochre.lib.uchicago.edu/ochre?uuid=i1&load"
    assert image.label == "Photo"
    assert (image.width, image.height) == (20, 10)


def test_text_image():
    web_element = build(
        element(
            "e1",
            "Story",
            "text-image",
            prop("layout", "image-end"),
            prop("image-opacity", "0.5"),
            document=OWN_DOCUMENT,
            links=[IMAGE_LINK],
        )
    )

    component = web_element.component
    assert isinstance(component, TextImageComponent)
    assert component.variant == "block"
    assert component.layout == "image-end"
    assert component.caption_layout == "bottom"
    assert component.content == "Own text"
    assert component.image.url == "https://ochre.lib.uchicago.edu/ochre?uuid=i1&preview"
    assert component.image_opacity == 0.5


def test_text_image_requires_image_link():
    with pytest.raises(MissingComponentDependencyError):
        build(element("e1", "Story", "text-image", document=OWN_DOCUMENT))


def test_text_image_rejects_non_numeric_opacity():
    with pytest.raises(InvalidConfigurationError, match="half"):
        build(
            element(
                "e1",
                "Story",
                "text-image",
                prop("image-opacity", "half"),
                document=OWN_DOCUMENT,
                links=[IMAGE_LINK],
            )
        )


def test_bibliography_component():
    web_element = build(
        element(
            "e1",
            "Sources",
            "bibliography",
            links=[{"bibliography": [{"uuid": "b1"}, {"uuid": "b2"}]}],
        )
    )

    assert web_element.component.layout == "long"
    assert [b.uuid for b in web_element.component.bibliographies] == ["b1", "b2"]


def test_n_columns_recurse_into_child_elements():
    web_element = build(
        element(
            "e1",
            "Columns",
            "n-columns",
            resource=[
                element("e2", "Left", "button", prop("link-to", "/left")),
                {"uuid": "x", "identification": identification("Not an element")},
                element("e3", "Right", "button", prop("link-to", "/right")),
            ],
        )
    )

    assert isinstance(web_element.component, NColumnsComponent)
    assert [column.uuid for column in web_element.component.columns] == ["e2", "e3"]


def test_element_styling():
    resource = element("e1", "Go", "button", prop("link-to", "/x"))
    resource["properties"]["property"].append(
        prop("presentation", "css", children=[prop("margin", "0")])
    )
    resource["properties"]["property"].append(
        prop("presentation", "tailwind", children=[prop("text", "lg")])
    )

    web_element = build(resource)

    assert web_element.css_styles == [Style(label="margin", value="0")]
    assert web_element.tailwind_classes == ["text-lg"]


def test_web_element_serializes_component():
    web_element = build(element("e1", "Go", "button", prop("link-to", "/x")))

    assert web_element.model_dump()["component"] == {
        "component": "button",
        "href": "/x",
    }
