import json
from typing import Any

from ochre.errors import MissingContentError
from ochre.transform.formatting import (
    apply_render_options,
    apply_whitespace_options,
    restore_apostrophes,
)
from ochre.util import ensure_list

DEFAULT_LANGUAGE = "eng"

FakeString = str | int | float | bool


def is_fake_string(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def parse_fake_string(value: FakeString | None) -> str:
    """
    Turn an XML-derived scalar into text.

    The API sends text that happens to look like a number or a boolean as JSON
    numbers and booleans, so they are turned back into their written form.

    :param value: The raw scalar.
    :return str: The text, with escaped apostrophes restored.
    """
    if isinstance(value, bool):
        text = "Yes" if value else "No"
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    elif isinstance(value, (int, float)):
        text = str(value)
    elif isinstance(value, str):
        text = value
    else:
        text = ""

    return restore_apostrophes(text)


def select_language_item(
    items: list[dict[str, Any]], language: str = DEFAULT_LANGUAGE
) -> dict[str, Any]:
    """
    Pick the item tagged with the requested language, falling back to the first.

    :param list items: Language-tagged items (each may carry a ``lang`` code).
    :param str language: The requested 3-letter language code.
    :raises MissingContentError: If there are no items to choose from.
    :return dict: The selected item.
    """
    for item in items:
        if isinstance(item, dict) and item.get("lang") == language:
            return item

    if not items:
        raise MissingContentError(
            f"No string item found for language “{language}” in the following content: {json.dumps(items)}."
        )

    return items[0]


def parse_string_item(item: dict[str, Any]) -> str:
    """
    Render a single language item whose payload is a scalar or formatted spans.

    Spans are concatenated in order; each span gets its render options and then
    its whitespace options.
    """
    payload = item.get("string")

    if is_fake_string(payload):
        return parse_fake_string(payload)

    if not isinstance(payload, (dict, list)):
        return ""

    text = ""
    for span in ensure_list(payload):
        span_text = parse_fake_string(span.get("content"))

        if span.get("rend") is not None:
            span_text = apply_render_options(span_text, span["rend"])

        if span.get("whitespace") is not None:
            span_text = apply_whitespace_options(span_text, span["whitespace"])

        text += span_text

    return restore_apostrophes(text)


def parse_string_content(
    content: dict[str, Any] | FakeString, language: str = DEFAULT_LANGUAGE
) -> str:
    """
    Resolve a language-tagged string field to plain text.

    :param content: Either a scalar or a ``{"content": ...}`` wrapper whose content
        is a scalar, one language item or an array of language items.
    :param str language: The requested 3-letter language code.
    :raises MissingContentError: If the content is an empty array.
    :return str: The resolved text.
    """
    if not isinstance(content, dict):
        return parse_fake_string(content)

    value = content.get("content")

    if value is None or is_fake_string(value):
        return parse_fake_string(value)

    if isinstance(value, list):
        return parse_string_item(select_language_item(value, language))

    return parse_string_item(value)
