"""Move compilation.

Canonical element type and damage category are parsed strictly: a move whose
type only exists after era 3 fails to compile, and the pipeline drops it.

Past values name the release group in which a change *happened*. The old
value was valid through the era before that group, so a change made in
gold-silver yields an overlay valid through era 1. Changes made in era 1 can
never apply to a supported era and are discarded.
"""

from __future__ import annotations

import logging

from dexdata.enums import (
    MIN_ERA,
    ElementType,
    parse_damage_category,
    parse_element_type,
    parse_element_type_lenient,
    valid_through_for_change_group,
)
from dexdata.records import Move, Overlay

from .history import ascending_overlays
from .source import SourceDocument

logger = logging.getLogger(__name__)


def display_name(slug: str) -> str:
    """Title-case a hyphenated source slug (`"thunder-punch"` -> `"Thunder-Punch"`)."""

    return slug.title()


def _past_type_overlays(document: SourceDocument) -> list[Overlay[ElementType]]:
    overlays: list[Overlay[ElementType]] = []
    for entry in document.optional_list("past_values"):
        if not isinstance(entry, dict):
            raise document.fail(f"past_values: expected an object, got {entry!r}")
        past_type = entry.get("type")
        if past_type is None:
            continue
        group = document.resource_name(entry.get("version_group"), context="past_values.version_group")
        valid_through = valid_through_for_change_group(group)
        if valid_through < MIN_ERA:
            continue
        value = parse_element_type_lenient(document.resource_name(past_type, context="past_values.type"))
        if value is ElementType.none:
            logger.debug("%s: skipping past type %r (not an era 1-3 type)", document.origin, past_type)
            continue
        overlays.append(Overlay(valid_through=valid_through, value=value))
    return overlays


def compile_move(document: SourceDocument) -> Move:
    """Compile one raw move document.

    Args:
        document: The move's `index.json`.

    Returns:
        The compiled Move. Missing power, accuracy, or PP compile to 0.

    Raises:
        UnknownEnumValue: When the type or damage class is not an era 1-3 value.
        MalformedSourceDocument: When a required field is missing or mistyped.
    """

    element_type = parse_element_type(document.resource_name(document.require("type"), context="type"))
    category = parse_damage_category(document.resource_name(document.require("damage_class"), context="damage_class"))
    return Move(
        id=document.require_int("id"),
        name=display_name(str(document.require("name"))),
        element_type=element_type,
        category=category,
        power=document.optional_int("power"),
        accuracy=document.optional_int("accuracy"),
        pp=document.optional_int("pp"),
        past_types=ascending_overlays(_past_type_overlays(document)),
    )
