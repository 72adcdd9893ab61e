"""
Pure string transforms shared by the string resolver and the rich-text renderer.

Formatting options arrive as space-separated tokens (e.g. ``rend="bold italic"``)
and are applied one after the other in the order they appear, so the first token
ends up innermost.
"""

import logging
import re

from pydantic import EmailStr, TypeAdapter, ValidationError

_LOGGER = logging.getLogger(__name__)

LINE_BREAK = "  \n"

RENDER_OPTIONS = {
    "bold": "**{}**",
    "italic": "*{}*",
    "underline": "_{}_",
}

WHITESPACE_OPTIONS = {
    "newline": "{}" + LINE_BREAK,
    "trailing": "{} ",
    "leading": " {}",
}

_EMAIL_ADAPTER = TypeAdapter(EmailStr)
_URL_PATTERN = re.compile(
    r"((([A-Za-z]{3,9}:(?://)?)(?:[\w$&+,:;=-]+@)?[\d.A-Za-z-]+(:\d+)?"
    r"|(?:www.|[\w$&+,:;=-]+@)[\d.A-Za-z-]+)((?:/[%+./~\w-]*)?\??[\w%&+.;=@-]*#?\w*)?)"
)
_BRACKETS_PATTERN = re.compile(r"^[(\[{]+|[)\]}]+$")
_TRAILING_PUNCTUATION_PATTERN = re.compile(r"[!),.:;?\]]$")


def restore_apostrophes(value: str) -> str:
    return value.replace("&#39;", "'")


def escape_markup(value: str) -> str:
    """Escape the characters the markup consumer would read as tags or expressions."""
    return value.replace("<", "\\<").replace("{", "\\{")


def _apply_options(
    text: str, options: str, templates: dict[str, str], kind: str
) -> str:
    tokens = options.split(" ")
    invalid = [token for token in tokens if token not in templates]
    if invalid:
        _LOGGER.warning(f"Invalid {kind} options string provided: “{options}”")
        return text

    for token in tokens:
        text = templates[token].format(text)

    return restore_apostrophes(text)


def apply_render_options(text: str, rend: str) -> str:
    """
    Wrap text in the markdown emphasis named by each render token.

    :param str text: The text to format.
    :param str rend: Space-separated tokens out of bold, italic and underline.
    :return str: The formatted text, or the input unchanged if any token is unknown.
    """
    return _apply_options(text, rend, RENDER_OPTIONS, "render")


def apply_whitespace_options(text: str, whitespace: str) -> str:
    """
    Add the whitespace named by each whitespace token.

    :param str text: The text to pad.
    :param str whitespace: Space-separated tokens out of newline, trailing and leading.
    :return str: The padded text, or the input unchanged if any token is unknown.
    """
    return _apply_options(text, whitespace, WHITESPACE_OPTIONS, "whitespace")


def is_email(value: str) -> bool:
    try:
        _EMAIL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def is_url(value: str) -> bool:
    return bool(value) and bool(_URL_PATTERN.search(value))


def linkify(text: str) -> str:
    """
    Turn bare emails and URLs into ExternalLink markup.

    Each space-separated word is stripped of surrounding brackets and one trailing
    punctuation mark before it is tested; whatever was stripped is kept around the
    generated link.
    """
    words: list[str] = []

    for word in text.split(" "):
        clean = _TRAILING_PUNCTUATION_PATTERN.sub(
            "", _BRACKETS_PATTERN.sub("", word)
        )
        if not clean:
            words.append(word)
            continue

        index = word.find(clean)
        before = word[:index]
        after = word[index + len(clean) :]

        if is_email(clean):
            words.append(
                f'{before}<ExternalLink href="mailto:{clean}">{clean}</ExternalLink>{after}'
            )
        elif is_url(clean):
            words.append(
                f'{before}<ExternalLink href="{clean}">{clean}</ExternalLink>{after}'
            )
        else:
            words.append(word)

    return " ".join(words)


def trim_line_breaks(text: str) -> str:
    """Remove every line-break marker from the start and the end of the text."""
    while text.startswith(LINE_BREAK):
        text = text[len(LINE_BREAK) :]
    while text.endswith(LINE_BREAK):
        text = text[: -len(LINE_BREAK)]
    return text
