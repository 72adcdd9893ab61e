import pytest

from ochre.errors import MissingContentError
from ochre.transform.formatting import LINE_BREAK
from ochre.transform.strings import (
    parse_fake_string,
    parse_string_content,
    parse_string_item,
    select_language_item,
)


@pytest.fixture
def multilingual_content():
    return {
        "content": [
            {"lang": "fra", "string": "Bonjour"},
            {"lang": "eng", "string": "Hello"},
        ]
    }


@pytest.mark.parametrize(
    "value, expected",
    [
        ("text", "text"),
        (12, "12"),
        (12.0, "12"),
        (1.5, "1.5"),
        (True, "Yes"),
        (False, "No"),
        (None, ""),
        ("d&#39;or", "d'or"),
    ],
)
def test_parse_fake_string(value, expected):
    assert parse_fake_string(value) == expected


def test_language_selection_picks_requested_language(multilingual_content):
    assert parse_string_content(multilingual_content, "eng") == "Hello"
    assert parse_string_content(multilingual_content, "fra") == "Bonjour"


def test_language_selection_falls_back_to_first_item(multilingual_content):
    assert parse_string_content(multilingual_content, "spa") == "Bonjour"


def test_default_language_is_english(multilingual_content):
    assert parse_string_content(multilingual_content) == "Hello"


def test_empty_language_array_raises():
    with pytest.raises(MissingContentError):
        parse_string_content({"content": []})


def test_select_language_item_empty_raises():
    with pytest.raises(MissingContentError):
        select_language_item([], "eng")


def test_scalar_content():
    assert parse_string_content("plain") == "plain"
    assert parse_string_content({"content": 1990}) == "1990"
    assert parse_string_content({"content": {"string": "single"}}) == "single"


def test_spans_are_concatenated_with_formatting():
    item = {
        "lang": "eng",
        "string": [
            {"content": "Bold", "rend": "bold", "whitespace": "trailing"},
            {"content": "and plain", "whitespace": "newline"},
            {"content": "end", "rend": "bold italic"},
        ],
    }
    assert parse_string_item(item) == "**Bold** and plain" + LINE_BREAK + "***end***"


def test_render_applies_before_whitespace():
    item = {"string": {"content": "x", "rend": "italic", "whitespace": "leading"}}
    assert parse_string_item(item) == " *x*"
