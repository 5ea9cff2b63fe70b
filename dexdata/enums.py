"""Closed enumerations and their source-name codecs.

Every enumerated field in the compiled tables is stored as a small integer
code. Source documents name values with lowercase slugs (`"fire"`,
`"gold-silver"`, `"generation-ii"`); this module maps those slugs to codes.

Parsers come in two flavours and call sites pick one explicitly:
- strict parsers raise `UnknownEnumValue` for anything outside the enumeration,
- lenient parsers fold unknown names to a documented fallback.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

from .errors import UnknownEnumValue

MIN_ERA: Final[int] = 1
MAX_ERA: Final[int] = 3
SUPPORTED_ERAS: Final[tuple[int, ...]] = (1, 2, 3)

# Era from which damage categories are assigned per move instead of per type.
CATEGORY_SPLIT_ERA: Final[int] = 3


class ElementType(IntEnum):
    """Element types known to eras 1-3. `none` marks an empty slot."""

    none = 0
    normal = 1
    fire = 2
    water = 3
    grass = 4
    electric = 5
    ice = 6
    fighting = 7
    poison = 8
    ground = 9
    flying = 10
    psychic = 11
    bug = 12
    rock = 13
    ghost = 14
    dragon = 15
    dark = 16
    steel = 17

    @property
    def label(self) -> str:
        """Display label; empty for `none`."""

        return "" if self is ElementType.none else self.name.capitalize()


class DamageCategory(IntEnum):
    """Damage category of a move."""

    physical = 0
    special = 1
    status = 2

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS: Final[dict[DamageCategory, str]] = {
    DamageCategory.physical: "Phys",
    DamageCategory.special: "Spec",
    DamageCategory.status: "Stat",
}


class GameRelease(IntEnum):
    """Individual game releases, in release order."""

    red = 1
    blue = 2
    yellow = 3
    gold = 4
    silver = 5
    crystal = 6
    ruby = 7
    sapphire = 8
    emerald = 9
    firered = 10
    leafgreen = 11

    @property
    def era(self) -> int:
        """Generation the release belongs to."""

        if self <= GameRelease.yellow:
            return 1
        if self <= GameRelease.crystal:
            return 2
        return 3

    @property
    def label(self) -> str:
        return _RELEASE_LABELS[self]


_RELEASE_LABELS: Final[dict[GameRelease, str]] = {
    GameRelease.red: "Red",
    GameRelease.blue: "Blue",
    GameRelease.yellow: "Yellow",
    GameRelease.gold: "Gold",
    GameRelease.silver: "Silver",
    GameRelease.crystal: "Crystal",
    GameRelease.ruby: "Ruby",
    GameRelease.sapphire: "Sapphire",
    GameRelease.emerald: "Emerald",
    GameRelease.firered: "FireRed",
    GameRelease.leafgreen: "LeafGreen",
}


class LearnMethod(IntEnum):
    """How a creature acquires a move."""

    level_up = 0
    machine = 1
    tutor = 2
    egg = 3

    @property
    def label(self) -> str:
        return self.name.replace("_", "-")


class EncounterMethod(IntEnum):
    """How a creature is encountered in the wild."""

    walk = 0
    surf = 1
    old_rod = 2
    good_rod = 3
    super_rod = 4
    rock_smash = 5
    headbutt = 6

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


_ELEMENT_TYPES_BY_NAME: Final[dict[str, ElementType]] = {
    member.name: member for member in ElementType if member is not ElementType.none
}

_CATEGORIES_BY_NAME: Final[dict[str, DamageCategory]] = {member.name: member for member in DamageCategory}

_ERA_NAMES: Final[tuple[str, ...]] = (
    "generation-i",
    "generation-ii",
    "generation-iii",
    "generation-iv",
    "generation-v",
    "generation-vi",
    "generation-vii",
    "generation-viii",
    "generation-ix",
)
_ERAS_BY_NAME: Final[dict[str, int]] = {name: index for index, name in enumerate(_ERA_NAMES, start=1)}

_RELEASES_BY_GROUP: Final[dict[str, tuple[GameRelease, ...]]] = {
    "red-blue": (GameRelease.red, GameRelease.blue),
    "yellow": (GameRelease.yellow,),
    "gold-silver": (GameRelease.gold, GameRelease.silver),
    "crystal": (GameRelease.crystal,),
    "ruby-sapphire": (GameRelease.ruby, GameRelease.sapphire),
    "emerald": (GameRelease.emerald,),
    "firered-leafgreen": (GameRelease.firered, GameRelease.leafgreen),
}

_RELEASES_BY_NAME: Final[dict[str, GameRelease]] = {member.name: member for member in GameRelease}

_LEARN_METHODS_BY_NAME: Final[dict[str, LearnMethod]] = {
    "level-up": LearnMethod.level_up,
    "machine": LearnMethod.machine,
    "tutor": LearnMethod.tutor,
    "egg": LearnMethod.egg,
}

_ENCOUNTER_METHODS_BY_NAME: Final[dict[str, EncounterMethod]] = {
    "walk": EncounterMethod.walk,
    "grass": EncounterMethod.walk,
    "tall-grass": EncounterMethod.walk,
    "surf": EncounterMethod.surf,
    "water": EncounterMethod.surf,
    "old-rod": EncounterMethod.old_rod,
    "good-rod": EncounterMethod.good_rod,
    "super-rod": EncounterMethod.super_rod,
    "rock-smash": EncounterMethod.rock_smash,
    "headbutt": EncounterMethod.headbutt,
    "headbutt-normal": EncounterMethod.headbutt,
    "headbutt-special": EncounterMethod.headbutt,
}


def parse_element_type(name: str) -> ElementType:
    """Parse an element type name, failing on anything outside eras 1-3.

    Args:
        name: Source slug such as `"fire"`.

    Returns:
        The matching ElementType (never `none`).

    Raises:
        UnknownEnumValue: When the name is not one of the 17 known types.
    """

    try:
        return _ELEMENT_TYPES_BY_NAME[name]
    except KeyError:
        raise UnknownEnumValue(domain="element type", value=name) from None


def parse_element_type_lenient(name: str) -> ElementType:
    """Parse an element type name, folding unknown names to `ElementType.none`.

    Used for creature type slots, where a later-era type (e.g. `"fairy"`) has no
    meaning in eras 1-3 and must not drop the record.
    """

    return _ELEMENT_TYPES_BY_NAME.get(name, ElementType.none)


def parse_damage_category(name: str) -> DamageCategory:
    """Parse a damage category name (strict)."""

    try:
        return _CATEGORIES_BY_NAME[name]
    except KeyError:
        raise UnknownEnumValue(domain="damage category", value=name) from None


def parse_era(name: str) -> int:
    """Parse a generation slug restricted to the supported eras.

    Raises:
        UnknownEnumValue: For any generation other than i, ii, or iii.
    """

    era = _ERAS_BY_NAME.get(name)
    if era is None or era > MAX_ERA:
        raise UnknownEnumValue(domain="era", value=name)
    return era


def parse_era_full(name: str) -> int | None:
    """Parse any known generation slug to its number, or None when unknown.

    Only used for locating historical creature types, where an entry from a
    later generation can still describe what was true in eras 1-3.
    """

    return _ERAS_BY_NAME.get(name)


def require_era(era: int) -> int:
    """Return `era` unchanged when it is a supported era; raise otherwise."""

    if era not in SUPPORTED_ERAS:
        raise UnknownEnumValue(domain="era", value=era)
    return era


def releases_for_group(name: str) -> tuple[GameRelease, ...]:
    """Expand a release-group slug into its individual releases.

    Groups outside eras 1-3 (e.g. `"diamond-pearl"`) expand to an empty tuple.
    """

    return _RELEASES_BY_GROUP.get(name, ())


def valid_through_for_change_group(name: str) -> int:
    """Return the last era in which a value replaced in release group `name` applied.

    Move history names the group where a change *happened*; the old value was
    valid through the era before that group's era. Changes made in era 1 (or
    earlier) yield 0, and changes made after era 3 yield 3.
    """

    releases = _RELEASES_BY_GROUP.get(name)
    if not releases:
        return MAX_ERA
    return releases[0].era - 1


def parse_release(name: str) -> GameRelease | None:
    """Parse an individual release slug (e.g. `"firered"`), None when out of scope."""

    return _RELEASES_BY_NAME.get(name)


def parse_learn_method(name: str) -> LearnMethod:
    """Fold a move-learn-method slug; unrecognized methods count as level-up."""

    return _LEARN_METHODS_BY_NAME.get(name, LearnMethod.level_up)


def parse_encounter_method(name: str) -> EncounterMethod:
    """Fold an encounter-method slug; unrecognized methods count as walking."""

    return _ENCOUNTER_METHODS_BY_NAME.get(name, EncounterMethod.walk)
