import pytest

from ochre.enums import PageWidth, WebsitePrivacy, WebsiteStatus, WebsiteType
from ochre.errors import InvalidConfigurationError
from ochre.website.builder import parse_website
from tests.factories import FakeFetcher, element, identification, page, prop

IMAGE_LINK = {"resource": {"uuid": "bg1", "type": "IIIF"}}


def website_properties(*settings):
    return {"property": prop("presentation", "website", children=list(settings))}


def default_settings():
    return [
        prop("webUI", "plum"),
        prop("status", "production"),
        prop("navbar-visible", {"content": False, "type": "boolean"}),
        prop("logo", {"content": "Logo", "type": "IDREF", "uuid": "l1"}),
        prop("search-collection", {"content": "Finds", "type": "IDREF", "uuid": "s1"}),
    ]


@pytest.fixture
def raw_tree():
    return {
        "uuid": "w1",
        "publicationDateTime": "2024-03-01T10:00:00Z",
        "identification": identification("My website"),
        "creators": {"creator": {"uuid": "c1", "content": "Editor"}},
        "properties": website_properties(*default_settings()),
        "items": {
            "resource": [
                page("p1", "Home", "/"),
                page(
                    "p2",
                    "About",
                    "about",
                    prop("header", "No"),
                    prop("width", "full"),
                    prop("variant", "dark"),
                    links=IMAGE_LINK,
                    resource=[
                        element("e1", "Contact", "button", prop("link-to", "/contact")),
                        page("p3", "Team", "about/team"),
                    ],
                ),
                element("g1", "Banner", "button", prop("link-to", "/")),
                {
                    "uuid": "sb",
                    "identification": identification("Sidebar"),
                    "resource": [
                        element("s1", "Side link", "button", prop("link-to", "/side"))
                    ],
                },
            ]
        },
    }


def build(raw_tree, fetcher=None):
    return parse_website(
        raw_tree, "Test project", "https://example.org", fetcher or FakeFetcher()
    )


def test_website(raw_tree):
    website = build(raw_tree)

    assert website.uuid == "w1"
    assert website.identification.label == "My website"
    assert website.project.name == "Test project"
    assert website.project.website == "https://example.org"
    assert [creator.uuid for creator in website.creators] == ["c1"]
    assert website.license is None


def test_website_properties(raw_tree):
    properties = build(raw_tree).properties

    assert properties.type == WebsiteType.PLUM
    assert properties.status == WebsiteStatus.PRODUCTION
    assert properties.privacy == WebsitePrivacy.PUBLIC
    assert properties.is_header_displayed is False
    assert properties.is_footer_displayed is True
    assert properties.is_sidebar_displayed is False
    assert properties.logo_url == "https://ochre.lib.uchicago.edu/ochre?uuid=l1&load"
    assert properties.search_collection_uuid == "s1"


def test_pages_and_sub_pages(raw_tree):
    website = build(raw_tree)

    home, about = website.pages
    assert home.slug == ""
    assert home.properties.displayed_in_header is True
    assert home.properties.width == PageWidth.DEFAULT
    assert home.properties.variant == "default"

    assert about.slug == "about"
    assert about.properties.displayed_in_header is False
    assert about.properties.width == PageWidth.FULL
    assert about.properties.variant == "dark"
    assert about.properties.background_image_url == (
        "https://ochre.lib.uchicago.edu/ochre?uuid=bg1&preview"
    )
    assert [e.uuid for e in about.elements] == ["e1"]
    assert [p.slug for p in about.webpages] == ["about/team"]


def test_global_elements_and_fragments_stay_out_of_the_page_tree(raw_tree):
    website = build(raw_tree)

    assert [e.uuid for e in website.global_elements] == ["g1", "s1"]

    def page_element_uuids(pages):
        for webpage in pages:
            yield from (e.uuid for e in webpage.elements)
            yield from page_element_uuids(webpage.webpages)

    assert set(page_element_uuids(website.pages)) == {"e1"}


@pytest.mark.parametrize("raw_slug, slug", [("/", ""), ("about", "about"), ("", "")])
def test_slug(raw_tree, raw_slug, slug):
    raw_tree["items"]["resource"] = [page("p1", "Page", raw_slug)]

    assert build(raw_tree).pages[0].slug == slug


def test_page_without_slug(raw_tree):
    raw_tree["items"]["resource"] = [page("p1", "Page", None)]

    with pytest.raises(InvalidConfigurationError):
        build(raw_tree)


def test_invalid_page_width(raw_tree):
    raw_tree["items"]["resource"] = [page("p1", "Page", "x", prop("width", "huge"))]

    with pytest.raises(InvalidConfigurationError):
        build(raw_tree)


def test_missing_website_properties(raw_tree):
    del raw_tree["properties"]

    with pytest.raises(InvalidConfigurationError):
        build(raw_tree)


@pytest.mark.parametrize("missing", ["webUI", "status"])
def test_missing_required_setting(raw_tree, missing):
    settings = [s for s in default_settings() if s["label"]["content"] != missing]
    raw_tree["properties"] = website_properties(*settings)

    with pytest.raises(InvalidConfigurationError):
        build(raw_tree)


def test_invalid_theme(raw_tree):
    raw_tree["properties"] = website_properties(
        prop("webUI", "birch"), prop("status", "production")
    )

    with pytest.raises(InvalidConfigurationError):
        build(raw_tree)


def test_website_without_pages(raw_tree):
    raw_tree["items"] = {}

    with pytest.raises(InvalidConfigurationError):
        build(raw_tree)
