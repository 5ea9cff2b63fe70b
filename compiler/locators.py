"""Identifier extraction from cross-reference locators."""

from __future__ import annotations

import re

from dexdata.errors import MalformedLocator

_TRAILING_ID_RE = re.compile(r"/(?P<digits>[0-9]+)$")


def id_from_locator(locator: str) -> int:
    """Extract the numeric identifier from a locator such as `.../ability/65/`.

    Args:
        locator: Resource URL whose last path segment is the identifier.
            Trailing slashes are ignored.

    Returns:
        The identifier as a non-negative integer.

    Raises:
        MalformedLocator: When the last segment is missing or not all digits.
    """

    if not isinstance(locator, str):
        raise MalformedLocator(repr(locator))
    match = _TRAILING_ID_RE.search(locator.rstrip("/"))
    if match is None:
        raise MalformedLocator(locator)
    return int(match.group("digits"))
