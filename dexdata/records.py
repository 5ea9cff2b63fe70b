"""Compiled, immutable dex records.

Records are produced once by the compiler and never mutated. Cross-entity
references (learned moves, traits) are stored as identifiers and looked up
through `dexdata.store.DexStore`.

Historical overlays must be strictly ascending by `valid_through` and every
bound must be a supported era; records check this when constructed so the
resolver can take the first matching overlay.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, Sequence, TypeVar

from .enums import (
    MAX_ERA,
    MIN_ERA,
    DamageCategory,
    ElementType,
    EncounterMethod,
    GameRelease,
    LearnMethod,
)
from .errors import OverlayOrderError

T = TypeVar("T")

TypePair = tuple[ElementType, ElementType]

NO_TYPES: TypePair = (ElementType.none, ElementType.none)


@dataclass(frozen=True, slots=True)
class Overlay(Generic[T]):
    """A historical value that applies to every era up to and including `valid_through`.

    Attributes:
        valid_through: Last era the value was true in.
        value: The historical value (same shape as the field it overlays).
    """

    valid_through: int
    value: T


def check_overlay_order(overlays: Sequence[Overlay[Any]], *, owner: str) -> None:
    """Reject overlays that are out of range or not strictly ascending.

    Args:
        overlays: Overlays in stored order.
        owner: Human-readable owner used in the error message.

    Raises:
        OverlayOrderError: When a bound falls outside the supported eras or does
            not exceed the previous bound.
    """

    previous = MIN_ERA - 1
    for overlay in overlays:
        bound = overlay.valid_through
        if not MIN_ERA <= bound <= MAX_ERA:
            raise OverlayOrderError(f"{owner}: overlay bound {bound} is outside eras {MIN_ERA}-{MAX_ERA}.")
        if bound <= previous:
            raise OverlayOrderError(f"{owner}: overlay bounds must be strictly ascending, got {bound} after {previous}.")
        previous = bound


@dataclass(frozen=True, slots=True)
class Move:
    """A compiled move with its present-day facts and historical element types."""

    id: int
    name: str
    element_type: ElementType
    category: DamageCategory
    power: int = 0
    accuracy: int = 0
    pp: int = 0
    past_types: tuple[Overlay[ElementType], ...] = ()

    def __post_init__(self) -> None:
        check_overlay_order(self.past_types, owner=f"move {self.id}")

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        return {
            "id": self.id,
            "name": self.name,
            "type": int(self.element_type),
            "category": int(self.category),
            "power": self.power,
            "accuracy": self.accuracy,
            "pp": self.pp,
            "past_types": [{"through": o.valid_through, "type": int(o.value)} for o in self.past_types],
        }

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> Move:
        """Rebuild a Move from `as_json` output."""

        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            element_type=ElementType(payload["type"]),
            category=DamageCategory(payload["category"]),
            power=int(payload["power"]),
            accuracy=int(payload["accuracy"]),
            pp=int(payload["pp"]),
            past_types=tuple(
                Overlay(valid_through=int(item["through"]), value=ElementType(item["type"]))
                for item in payload.get("past_types", ())
            ),
        )


@dataclass(frozen=True, slots=True)
class Trait:
    """A compiled trait (ability): identifier, name, and English short effect."""

    id: int
    name: str
    short_description: str = ""

    def as_json(self) -> dict[str, object]:
        return {"id": self.id, "name": self.name, "short_description": self.short_description}

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> Trait:
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            short_description=str(payload.get("short_description", "")),
        )


@dataclass(frozen=True, slots=True)
class BaseStats:
    """The six base attributes of a creature."""

    hp: int = 0
    attack: int = 0
    defense: int = 0
    special_attack: int = 0
    special_defense: int = 0
    speed: int = 0

    def as_json(self) -> dict[str, int]:
        return {
            "hp": self.hp,
            "attack": self.attack,
            "defense": self.defense,
            "special_attack": self.special_attack,
            "special_defense": self.special_defense,
            "speed": self.speed,
        }

    @property
    def total(self) -> int:
        return self.hp + self.attack + self.defense + self.special_attack + self.special_defense + self.speed


@dataclass(frozen=True, slots=True)
class LearnedMove:
    """One way a creature learns a move in a single release.

    Attributes:
        move_id: Identifier into the move table (may be absent from it).
        method: Acquisition method.
        level: Level learned at; 0 when the method has no level.
    """

    move_id: int
    method: LearnMethod
    level: int = 0

    def as_json(self) -> dict[str, int]:
        return {"move": self.move_id, "method": int(self.method), "level": self.level}


@dataclass(frozen=True, slots=True)
class Learnset:
    """Moves available in one release, ordered by level then move id."""

    release: GameRelease
    moves: tuple[LearnedMove, ...] = ()


@dataclass(frozen=True, slots=True)
class Location:
    """A single wild encounter definition for one release."""

    release: GameRelease
    method: EncounterMethod
    min_level: int
    max_level: int
    chance: int
    area_name: str

    def as_json(self) -> dict[str, object]:
        return {
            "release": int(self.release),
            "method": int(self.method),
            "min_level": self.min_level,
            "max_level": self.max_level,
            "chance": self.chance,
            "area": self.area_name,
        }


@dataclass(frozen=True, slots=True)
class Creature:
    """A compiled creature.

    Attributes:
        id: Dex number.
        name: Source name (lowercase slug).
        types: Present-day type pair; the second slot is `none` for single-typed creatures.
        past_types: Historical type pairs, strictly ascending by bound.
        stats: Base attributes.
        height: Height in decimetres.
        weight: Weight in hectograms.
        trait_ids: Non-hidden trait ids for slots 1 and 2; 0 means no trait.
        learnsets: Per-release learnsets ordered by release.
        locations: Encounter definitions for in-scope releases.
    """

    id: int
    name: str
    types: TypePair = NO_TYPES
    past_types: tuple[Overlay[TypePair], ...] = ()
    stats: BaseStats = field(default_factory=BaseStats)
    height: int = 0
    weight: int = 0
    trait_ids: tuple[int, int] = (0, 0)
    learnsets: tuple[Learnset, ...] = ()
    locations: tuple[Location, ...] = ()

    def __post_init__(self) -> None:
        check_overlay_order(self.past_types, owner=f"creature {self.id}")

    def learnset_for(self, release: GameRelease) -> tuple[LearnedMove, ...]:
        """Return the moves learned in `release` (empty when the release has none)."""

        for learnset in self.learnsets:
            if learnset.release is release:
                return learnset.moves
        return ()

    def as_json(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""

        return {
            "id": self.id,
            "name": self.name,
            "types": [int(t) for t in self.types],
            "past_types": [
                {"through": o.valid_through, "types": [int(t) for t in o.value]} for o in self.past_types
            ],
            "stats": self.stats.as_json(),
            "height": self.height,
            "weight": self.weight,
            "traits": list(self.trait_ids),
            "learnsets": [
                {"release": int(ls.release), "moves": [m.as_json() for m in ls.moves]} for ls in self.learnsets
            ],
            "locations": [loc.as_json() for loc in self.locations],
        }

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> Creature:
        """Rebuild a Creature from `as_json` output."""

        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            types=_type_pair(payload["types"]),
            past_types=tuple(
                Overlay(valid_through=int(item["through"]), value=_type_pair(item["types"]))
                for item in payload.get("past_types", ())
            ),
            stats=BaseStats(**{key: int(value) for key, value in payload["stats"].items()}),
            height=int(payload.get("height", 0)),
            weight=int(payload.get("weight", 0)),
            trait_ids=(int(payload["traits"][0]), int(payload["traits"][1])),
            learnsets=tuple(
                Learnset(
                    release=GameRelease(item["release"]),
                    moves=tuple(
                        LearnedMove(
                            move_id=int(move["move"]),
                            method=LearnMethod(move["method"]),
                            level=int(move["level"]),
                        )
                        for move in item["moves"]
                    ),
                )
                for item in payload.get("learnsets", ())
            ),
            locations=tuple(
                Location(
                    release=GameRelease(item["release"]),
                    method=EncounterMethod(item["method"]),
                    min_level=int(item["min_level"]),
                    max_level=int(item["max_level"]),
                    chance=int(item["chance"]),
                    area_name=str(item["area"]),
                )
                for item in payload.get("locations", ())
            ),
        )


def _type_pair(raw: Sequence[int]) -> TypePair:
    """Convert a stored two-element code list into a TypePair."""

    first, second = raw
    return (ElementType(first), ElementType(second))
