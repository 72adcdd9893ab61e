from datetime import datetime
from typing import Any, TypeVar

T = TypeVar("T")

OCHRE_URL = "https://ochre.lib.uchicago.edu/ochre"

# The markup consumer expects the scheme separator escaped, the path untouched.
ESCAPED_OCHRE_URL = "https:\\/\\/ochre.lib.uchicago.edu/ochre"


def ensure_list(value: T | list[T] | None) -> list[T]:
    """
    Wrap a value that the API may send either as a single item or as an array.

    XML-derived JSON collapses one-element arrays into the element itself, so
    every repeatable field has to go through here before it is iterated.

    :param value: A single item, a list of items or None.
    :return list: The items as a list; None becomes an empty list.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def parse_datetime(value: Any) -> datetime | None:
    """
    Parse an OCHRE timestamp or date (YYYY-MM-DD or YYYY-MM-DDThh:mm:ssZ).

    :param value: The raw value, possibly None.
    :return datetime | None: The parsed value or None when absent.
    """
    if value is None or value == "":
        return None
    return datetime.fromisoformat(str(value))


def asset_url(uuid: str) -> str:
    """Return the URL that loads the full asset for an OCHRE item."""
    return f"{OCHRE_URL}?uuid={uuid}&load"


def preview_url(uuid: str) -> str:
    """Return the URL that loads the preview asset for an OCHRE item."""
    return f"{OCHRE_URL}?uuid={uuid}&preview"


def item_href(uuid: str) -> str:
    return f"{ESCAPED_OCHRE_URL}?uuid={uuid}"
