"""Tests for identifier extraction from resource locators."""

from __future__ import annotations

import pytest

from compiler.locators import id_from_locator
from dexdata.errors import MalformedLocator

pytestmark = pytest.mark.unit


def test_id_from_locator_reads_trailing_segment() -> None:
    """Parse the id from a canonical locator with a trailing slash."""

    assert id_from_locator("https://pokeapi.co/api/v2/ability/65/") == 65


def test_id_from_locator_tolerates_missing_or_repeated_trailing_slashes() -> None:
    """Trailing separators are optional and may repeat."""

    assert id_from_locator("https://pokeapi.co/api/v2/move/33") == 33
    assert id_from_locator("/api/v2/move/33//") == 33


@pytest.mark.parametrize(
    "locator",
    [
        "https://pokeapi.co/api/v2/move/tackle/",
        "https://pokeapi.co/api/v2/move/-3/",
        "33",
        "",
        "/",
    ],
)
def test_id_from_locator_rejects_non_numeric_segments(locator: str) -> None:
    """Reject locators whose last segment is not a non-negative integer."""

    with pytest.raises(MalformedLocator):
        id_from_locator(locator)
