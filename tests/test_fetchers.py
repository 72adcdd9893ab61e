from unittest.mock import MagicMock

from returns.pipeline import is_successful
from returns.result import Failure, Success

from ochre.errors import FetchError, InvalidConfigurationError
from ochre.fetchers import (
    fetch_bibliography,
    fetch_concept,
    fetch_resource,
    fetch_set,
    fetch_spatial_unit,
    fetch_tree,
    fetch_website,
)
from ochre.models import Resource
from tests.factories import FakeFetcher, identification, page, prop

UUID = "c5e7a4f1-0d1f-4d2e-9b4a-5f1d2b3c4d5e"


def test_fetch_resource_wraps_item_in_data(raw_envelope):
    raw_envelope["resource"] = {
        "uuid": UUID,
        "identification": identification("Report"),
        "description": {
            "content": [
                {"lang": "eng", "string": "English"},
                {"lang": "fra", "string": "Français"},
            ]
        },
    }
    fetcher = FakeFetcher({UUID: raw_envelope})

    result = fetch_resource(UUID, fetcher, language="fra")

    assert is_successful(result)
    data = result.unwrap()
    assert isinstance(data.item, Resource)
    assert data.item.description == "Français"
    assert data.uuid == UUID
    assert data.belongs_to.abbreviation == "ABC"
    assert data.languages == ["eng", "fra"]
    assert data.metadata.project.identification.label == "Test project"
    assert data.metadata.project.identification.website == "https://example.org"
    assert data.metadata.dataset == "Test dataset"


def test_fetch_failure_is_returned(fake_fetcher):
    result = fetch_resource(UUID, fake_fetcher)

    assert not is_successful(result)
    assert isinstance(result.failure(), FetchError)


def test_wrong_item_kind_is_a_failure(raw_envelope):
    raw_envelope["concept"] = {"uuid": UUID, "identification": identification("X")}

    result = fetch_resource(UUID, FakeFetcher({UUID: raw_envelope}))

    assert isinstance(result.failure(), FetchError)


def test_assembly_errors_are_failures(raw_envelope):
    raw_envelope["resource"] = {"uuid": UUID, "identification": {"label": {"content": []}}}

    result = fetch_resource(UUID, FakeFetcher({UUID: raw_envelope}))

    assert not is_successful(result)


def test_each_kind_reads_its_own_key(raw_envelope):
    entity = {"uuid": UUID, "identification": identification("X")}
    fetcher = FakeFetcher(
        {
            UUID: {
                **raw_envelope,
                "spatialUnit": entity,
                "concept": entity,
                "set": entity,
                "tree": entity,
                "bibliography": entity,
            }
        }
    )

    for fetch in (fetch_spatial_unit, fetch_concept, fetch_set, fetch_tree, fetch_bibliography):
        result = fetch(UUID, fetcher)
        assert is_successful(result), fetch.__name__
        assert result.unwrap().item.uuid == UUID


def website_envelope(raw_envelope):
    return {
        **raw_envelope,
        "tree": {
            "uuid": "w1",
            "identification": identification("Website"),
            "properties": {
                "property": prop(
                    "presentation",
                    "website",
                    children=[prop("webUI", "oak"), prop("status", "preview")],
                )
            },
            "items": {"resource": page("p1", "Home", "/")},
        },
    }


def test_fetch_website(raw_envelope):
    connector = MagicMock()
    connector.fetch_website_tree.return_value = Success(website_envelope(raw_envelope))

    result = fetch_website("abc", connector)

    website = result.unwrap()
    assert website.project.name == "Test project"
    assert website.project.website == "https://example.org"
    assert website.pages[0].slug == ""
    connector.fetch_website_tree.assert_called_once_with("abc")
    connector.close.assert_not_called()


def test_fetch_website_configuration_error(raw_envelope):
    envelope = website_envelope(raw_envelope)
    del envelope["tree"]["properties"]
    connector = MagicMock()
    connector.fetch_website_tree.return_value = Success(envelope)

    result = fetch_website("abc", connector)

    assert isinstance(result.failure(), InvalidConfigurationError)


def test_fetch_website_fetch_failure():
    connector = MagicMock()
    connector.fetch_website_tree.return_value = Failure(FetchError("not found"))

    result = fetch_website("abc", connector)

    assert isinstance(result.failure(), FetchError)
