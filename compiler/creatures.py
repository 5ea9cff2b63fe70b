"""Creature compilation.

A creature document is the primary record of a compilation run: any
structural problem in it is fatal. Types use the lenient parser so that a
later-era type (fairy) leaves an empty slot instead of dropping the creature.

Past types are tagged with the generation they were valid through (unlike
move past values, which name the release group of the change). Entries from
generations after era 3 are kept: "valid through generation 5" covers eras
1-3 as well.
"""

from __future__ import annotations

import logging
from typing import Any, Final, Iterator, Mapping

from dexdata.enums import (
    ElementType,
    GameRelease,
    parse_element_type_lenient,
    parse_encounter_method,
    parse_era_full,
    parse_learn_method,
    parse_release,
    releases_for_group,
)
from dexdata.records import (
    NO_TYPES,
    BaseStats,
    Creature,
    LearnedMove,
    Learnset,
    Location,
    Overlay,
    TypePair,
)

from .history import ascending_overlays
from .locators import id_from_locator
from .source import SourceDocument

logger = logging.getLogger(__name__)

STAT_KEYS: Final[dict[str, str]] = {
    "hp": "hp",
    "attack": "attack",
    "defense": "defense",
    "special-attack": "special_attack",
    "special-defense": "special_defense",
    "speed": "speed",
}


def _objects(document: SourceDocument, items: list[Any], *, context: str) -> Iterator[Mapping[str, Any]]:
    """Yield list items, failing on anything that is not a JSON object."""

    for item in items:
        if not isinstance(item, Mapping):
            raise document.fail(f"{context}: expected an object, got {item!r}")
        yield item


def _int_field(document: SourceDocument, item: Mapping[str, Any], key: str, *, context: str) -> int:
    value = item.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise document.fail(f"{context}.{key}: expected an integer, got {value!r}")
    return value


def type_pair(document: SourceDocument, entries: list[Any], *, context: str) -> TypePair:
    """Build a type pair from slot-tagged type entries (lenient parsing).

    Slot 1 fills the first position and slot 2 the second; missing slots and
    unrecognized types stay `ElementType.none`.
    """

    first, second = NO_TYPES
    for entry in _objects(document, entries, context=context):
        element_type = parse_element_type_lenient(document.resource_name(entry.get("type"), context=f"{context}.type"))
        slot = _int_field(document, entry, "slot", context=context)
        if slot == 1:
            first = element_type
        elif slot == 2:
            second = element_type
    return (first, second)


def past_type_overlays(document: SourceDocument) -> tuple[Overlay[TypePair], ...]:
    """Compile `past_types` into ascending overlays; unknown generations are skipped."""

    overlays: list[Overlay[TypePair]] = []
    for entry in _objects(document, document.optional_list("past_types"), context="past_types"):
        generation = document.resource_name(entry.get("generation"), context="past_types.generation")
        era = parse_era_full(generation)
        if era is None:
            logger.debug("%s: skipping past types for unknown generation %r", document.origin, generation)
            continue
        types = entry.get("types")
        if not isinstance(types, list):
            raise document.fail("past_types.types: expected a list")
        overlays.append(Overlay(valid_through=era, value=type_pair(document, types, context="past_types.types")))
    return ascending_overlays(overlays)


def base_stats(document: SourceDocument) -> BaseStats:
    """Read the six base attributes; absent attributes are 0."""

    values: dict[str, int] = {}
    for entry in _objects(document, document.require_list("stats"), context="stats"):
        stat_name = document.resource_name(entry.get("stat"), context="stats.stat")
        field_name = STAT_KEYS.get(stat_name)
        if field_name is not None:
            values[field_name] = _int_field(document, entry, "base_stat", context="stats")
    return BaseStats(**values)


def trait_slots(document: SourceDocument) -> tuple[int, int]:
    """Return the non-hidden trait ids for slots 1 and 2 (0 when empty).

    When several entries claim a slot, the last one in source order wins.
    """

    first = second = 0
    for entry in _objects(document, document.require_list("abilities"), context="abilities"):
        if entry.get("is_hidden"):
            continue
        trait_id = id_from_locator(document.resource_url(entry.get("ability"), context="abilities.ability"))
        slot = _int_field(document, entry, "slot", context="abilities")
        if slot == 1:
            first = trait_id
        elif slot == 2:
            second = trait_id
    return (first, second)


def referenced_trait_ids(document: SourceDocument) -> set[int]:
    """Return every non-hidden trait id the creature references, regardless of slot."""

    return {
        id_from_locator(document.resource_url(entry.get("ability"), context="abilities.ability"))
        for entry in _objects(document, document.require_list("abilities"), context="abilities")
        if not entry.get("is_hidden")
    }


def referenced_move_ids(document: SourceDocument) -> set[int]:
    """Return every move id the creature references in any release group."""

    return {
        id_from_locator(document.resource_url(entry.get("move"), context="moves.move"))
        for entry in _objects(document, document.require_list("moves"), context="moves")
    }


def learnsets(document: SourceDocument) -> tuple[Learnset, ...]:
    """Expand the moves list into per-release learnsets.

    Each (release group, method) detail becomes one entry per individual
    release; groups outside eras 1-3 are dropped. Within a release, entries
    are ordered by level, then move id.
    """

    by_release: dict[GameRelease, list[LearnedMove]] = {}
    for entry in _objects(document, document.require_list("moves"), context="moves"):
        move_id = id_from_locator(document.resource_url(entry.get("move"), context="moves.move"))
        details = entry.get("version_group_details") or []
        for detail in _objects(document, details, context="moves.version_group_details"):
            group = document.resource_name(detail.get("version_group"), context="moves.version_group")
            releases = releases_for_group(group)
            if not releases:
                continue
            method = parse_learn_method(
                document.resource_name(detail.get("move_learn_method"), context="moves.move_learn_method")
            )
            level = _int_field(document, detail, "level_learned_at", context="moves.version_group_details")
            for release in releases:
                by_release.setdefault(release, []).append(LearnedMove(move_id=move_id, method=method, level=level))

    return tuple(
        Learnset(
            release=release,
            moves=tuple(sorted(by_release[release], key=lambda learned: (learned.level, learned.move_id))),
        )
        for release in sorted(by_release)
    )


def locations(document: SourceDocument, encounters: list[Any]) -> tuple[Location, ...]:
    """Flatten encounter entries into one Location per (release, encounter detail).

    Args:
        document: The creature document (used for error reporting).
        encounters: Entries from the side encounter document; empty when absent.
    """

    found: list[Location] = []
    for entry in _objects(document, encounters, context="encounters"):
        area_name = document.resource_name(entry.get("location_area"), context="encounters.location_area")
        for version_detail in _objects(document, entry.get("version_details") or [], context="encounters.version_details"):
            release = parse_release(document.resource_name(version_detail.get("version"), context="encounters.version"))
            if release is None:
                continue
            details = version_detail.get("encounter_details") or []
            for detail in _objects(document, details, context="encounters.encounter_details"):
                found.append(
                    Location(
                        release=release,
                        method=parse_encounter_method(
                            document.resource_name(detail.get("method"), context="encounters.method")
                        ),
                        min_level=_int_field(document, detail, "min_level", context="encounters"),
                        max_level=_int_field(document, detail, "max_level", context="encounters"),
                        chance=_int_field(document, detail, "chance", context="encounters"),
                        area_name=area_name,
                    )
                )
    return tuple(found)


def compile_creature(document: SourceDocument, encounters: list[Any] | None = None) -> Creature:
    """Compile one raw creature document (plus its optional encounter entries).

    Raises:
        MalformedSourceDocument: When a required field is missing or mistyped.
        MalformedLocator: When a move or ability reference carries no id.
    """

    creature = Creature(
        id=document.require_int("id"),
        name=str(document.require("name")),
        types=type_pair(document, document.require_list("types"), context="types"),
        past_types=past_type_overlays(document),
        stats=base_stats(document),
        height=document.optional_int("height"),
        weight=document.optional_int("weight"),
        trait_ids=trait_slots(document),
        learnsets=learnsets(document),
        locations=locations(document, encounters or []),
    )
    if creature.types[0] is ElementType.none:
        logger.warning("%s: creature %s has no era 1-3 primary type", document.origin, creature.id)
    return creature
