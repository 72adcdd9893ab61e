"""
Rich-text rendering.

OCHRE documents are nested lists of nodes. A node is one of:

- a bare scalar, whose emails and URLs get linkified;
- a whitespace-only node, which can only contribute a line break;
- an annotation node, display text plus outbound links;
- a composite node, whose ``string`` holds more nodes;
- a leaf, ``content`` with optional render and whitespace options; only a leaf
  carrying options gets linkified.

Annotations turn into the pseudo-markup tokens (ExternalLink, TooltipSpan,
InlineImage, Footnote) consumed by the website renderer, so the templates below
must stay byte for byte as they are.
"""

from typing import Any

from ochre.enums import LinkVariant
from ochre.errors import InvalidLinkError, MissingContentError
from ochre.models import Document, Footnote, Note
from ochre.transform.formatting import (
    LINE_BREAK,
    apply_render_options,
    apply_whitespace_options,
    escape_markup,
    linkify,
    restore_apostrophes,
    trim_line_breaks,
)
from ochre.transform.links import resolve_link_target
from ochre.transform.strings import (
    DEFAULT_LANGUAGE,
    is_fake_string,
    parse_fake_string,
    parse_string_content,
    select_language_item,
)
from ochre.util import ensure_list, item_href


def _content_attribute(content: str | None) -> str:
    return f'content="{content}"' if content is not None else ""


def _external_link(uuid: str, link_type: str, text: str, attributes: str = "") -> str:
    return f'<ExternalLink href="{item_href(uuid)}" type="{link_type}"{attributes}>{text}</ExternalLink>'


def _tooltip(link_type: str, text: str, attributes: str = "") -> str:
    return f'<TooltipSpan type="{link_type}"{attributes}>{text}</TooltipSpan>'


def _render_document_link(
    link_type: str, target: dict[str, Any], text: str, content: str | None
) -> str:
    attributes = f" {_content_attribute(content)}"
    if target.get("publicationDateTime") is not None:
        return _external_link(target["uuid"], link_type, text, attributes)
    return _tooltip(link_type, text, attributes)


def _render_resource_annotation(
    target: dict[str, Any], text: str, footnotes: list[Footnote]
) -> str:
    content = (
        escape_markup(parse_fake_string(target["content"]))
        if target.get("content") is not None
        else None
    )

    match target.get("type"):
        case "image":
            if target.get("rend") == "inline":
                height = target.get("height")
                width = target.get("width")
                return (
                    f'<InlineImage uuid="{target["uuid"]}" {_content_attribute(content)} '
                    f"height={{{height if height is not None else 'null'}}} "
                    f"width={{{width if width is not None else 'null'}}} />"
                )
            if target.get("publicationDateTime") is not None:
                attributes = f" {_content_attribute(content)}" if content is not None else ""
                return _external_link(target["uuid"], "image", text, attributes)
            return _tooltip("image", text, f" {_content_attribute(content)}")

        case "internalDocument":
            if content is not None and "footnote" in content.lower():
                footnotes.append(Footnote(uuid=target["uuid"], label=text, content=""))
                label = f' label="{text}"' if text else ""
                attributes = f' content="{content}"'
                return f' <Footnote uuid="{target["uuid"]}"{label}{attributes} />'
            return _render_document_link("internalDocument", target, text, content)

        case "externalDocument":
            return _render_document_link("externalDocument", target, text, content)

    return ""


def _render_annotation(
    node: dict[str, Any], footnotes: list[Footnote], language: str
) -> str:
    """
    Render an annotation through its first outbound link.

    Further links on the same node are not rendered.
    """
    text = escape_markup(parse_fake_string(node.get("string")))

    links = ensure_list(node.get("links"))
    if not links:
        raise InvalidLinkError(f"Annotation “{text}” has no links")

    variant, targets = resolve_link_target(links[0])
    if not targets:
        raise InvalidLinkError(f"Annotation “{text}” links to nothing")
    target = targets[0]
    is_published = target.get("publicationDateTime") is not None

    match variant:
        case LinkVariant.RESOURCE:
            return _render_resource_annotation(target, text, footnotes)

        case LinkVariant.CONCEPT | LinkVariant.SET | LinkVariant.BIBLIOGRAPHY:
            if is_published:
                return _external_link(target["uuid"], variant.value, text)
            return _tooltip(variant.value, text)

        case LinkVariant.PERSON:
            content = (
                parse_string_content(target["identification"]["label"], language)
                if target.get("identification")
                else None
            )
            person_type = target.get("type") or "person"
            return _render_document_link(person_type, target, text, content)

    return linkify(parse_fake_string(node.get("string")))


def render_node(
    node: Any, footnotes: list[Footnote], language: str = DEFAULT_LANGUAGE
) -> str:
    """
    Render one rich-text node, recording any footnotes it produces.

    :param node: The raw node.
    :param list[Footnote] footnotes: The footnote list of the current render.
    :param str language: The requested 3-letter language code.
    :return str: The rendered markup.
    """
    if is_fake_string(node):
        return linkify(parse_fake_string(node))

    if not isinstance(node, dict):
        return ""

    if "whitespace" in node and "content" not in node and "string" not in node:
        return LINE_BREAK if node["whitespace"] == "newline" else ""

    if "links" in node:
        return _render_annotation(node, footnotes, language)

    if "string" in node:
        text = "".join(
            render_node(child, footnotes, language)
            for child in ensure_list(node["string"])
        )
        if node.get("whitespace") is not None:
            text = apply_whitespace_options(text, node["whitespace"])
        return restore_apostrophes(text)

    text = parse_fake_string(node.get("content"))
    if node.get("rend") is not None or node.get("whitespace") is not None:
        text = linkify(text)
    if node.get("rend") is not None:
        text = apply_render_options(text, node["rend"])
    if node.get("whitespace") is not None:
        text = apply_whitespace_options(text, node["whitespace"])

    return restore_apostrophes(text)


def _render_payload(payload: Any, footnotes: list[Footnote], language: str) -> str:
    if is_fake_string(payload):
        return linkify(parse_fake_string(payload))

    nodes = ensure_list(payload)
    if not nodes:
        raise MissingContentError("Document does not have any content items")

    return "".join(render_node(node, footnotes, language) for node in nodes)


def parse_document(document: Any, language: str = DEFAULT_LANGUAGE) -> Document:
    """
    Render a language-tagged rich-text document.

    The footnote list is created here, so footnotes never leak between renders.

    :param document: One language-tagged document or an array of them.
    :param str language: The requested 3-letter language code.
    :raises MissingContentError: If no document or no content item is present.
    :return Document: The rendered content and the footnotes found in it.
    """
    selected = select_language_item(ensure_list(document), language)
    footnotes: list[Footnote] = []

    content = _render_payload(selected.get("string"), footnotes, language)

    return Document(content=trim_line_breaks(content), footnotes=footnotes)


def parse_notes(notes: Any, language: str = DEFAULT_LANGUAGE) -> list[Note]:
    """
    Parse resource or observation notes.

    An empty string note is dropped; any other note must resolve to content.
    """
    parsed: list[Note] = []

    for note in ensure_list(notes):
        if isinstance(note, str):
            if note == "":
                continue
            parsed.append(Note(number=-1, content=note))
            continue

        contents = ensure_list(note.get("content"))
        if not contents:
            raise MissingContentError(
                f"Note {note.get('noteNo')} does not have a valid content item"
            )
        selected = select_language_item(contents, language)

        if is_fake_string(selected.get("string")):
            content = linkify(parse_fake_string(selected["string"]))
        else:
            content = parse_document(selected, language).content

        parsed.append(
            Note(
                number=note.get("noteNo", -1),
                title=(
                    parse_fake_string(selected["title"])
                    if selected.get("title") is not None
                    else None
                ),
                content=content,
            )
        )

    return parsed
