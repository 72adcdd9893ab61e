from typing import Any

import pytest

from tests.factories import FakeFetcher


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def raw_envelope() -> dict[str, Any]:
    return {
        "uuid": "c5e7a4f1-0d1f-4d2e-9b4a-5f1d2b3c4d5e",
        "uuidBelongsTo": "0c0aae37-7246-495b-9547-e25dbf5b99a3",
        "belongsTo": "ABC",
        "publicationDateTime": "2024-03-01T10:00:00Z",
        "languages": "eng;fra",
        "metadata": {
            "dataset": "Test dataset",
            "publisher": "Test publisher",
            "identifier": "abc-1",
            "description": "A test dataset",
            "language": {"content": "eng"},
            "project": {
                "identification": {
                    "label": {"content": "Test project"},
                    "abbreviation": {"content": "tp"},
                    "website": "https://example.org",
                }
            },
        },
    }
