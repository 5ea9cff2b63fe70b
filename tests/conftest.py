"""Pytest fixtures shared across the dex test suite."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

API = "https://pokeapi.co/api/v2"


def named(kind: str, name: str, identifier: int = 1) -> dict[str, str]:
    """Return a named API resource (`{"name": ..., "url": ...}`)."""

    return {"name": name, "url": f"{API}/{kind}/{identifier}/"}


class DocumentFactory:
    """Build raw snapshot documents shaped like the public `api/v2` payloads."""

    def move(
        self,
        identifier: int,
        name: str,
        *,
        type_name: str = "normal",
        damage_class: str | None = "physical",
        power: int | None = 40,
        accuracy: int | None = 100,
        pp: int | None = 35,
        past_values: Sequence[tuple[str | None, str]] = (),
    ) -> dict[str, Any]:
        """Build a move document; `past_values` holds (old type or None, version group) pairs."""

        return {
            "id": identifier,
            "name": name,
            "power": power,
            "accuracy": accuracy,
            "pp": pp,
            "type": named("type", type_name),
            "damage_class": named("move-damage-class", damage_class) if damage_class else None,
            "past_values": [
                {
                    "type": named("type", old_type) if old_type else None,
                    "power": None,
                    "version_group": named("version-group", group),
                }
                for old_type, group in past_values
            ],
        }

    def trait(self, identifier: int, name: str, *, effects: Sequence[tuple[str, str]] = ()) -> dict[str, Any]:
        """Build an ability document; `effects` holds (language, short effect) pairs."""

        return {
            "id": identifier,
            "name": name,
            "effect_entries": [
                {"language": named("language", language), "short_effect": text, "effect": text}
                for language, text in effects
            ],
        }

    def creature(
        self,
        identifier: int,
        name: str,
        *,
        types: Sequence[str] = ("normal",),
        past_types: Sequence[tuple[str, Sequence[str]]] = (),
        stats: dict[str, int] | None = None,
        abilities: Sequence[tuple[int, int, bool]] = (),
        moves: Sequence[tuple[int, Sequence[tuple[str, str, int]]]] = (),
        height: int = 7,
        weight: int = 69,
    ) -> dict[str, Any]:
        """Build a creature document.

        Args:
            identifier: Dex number.
            name: Source slug.
            types: Type names in slot order.
            past_types: (generation slug, type names in slot order) pairs.
            stats: Stat slug -> base value.
            abilities: (ability id, slot, is_hidden) triples.
            moves: (move id, [(version group, learn method, level), ...]) pairs.
            height: Height in decimetres.
            weight: Weight in hectograms.
        """

        stats = stats if stats is not None else {
            "hp": 45,
            "attack": 49,
            "defense": 49,
            "special-attack": 65,
            "special-defense": 65,
            "speed": 45,
        }
        return {
            "id": identifier,
            "name": name,
            "height": height,
            "weight": weight,
            "types": [{"slot": slot, "type": named("type", t)} for slot, t in enumerate(types, start=1)],
            "past_types": [
                {
                    "generation": named("generation", generation),
                    "types": [{"slot": slot, "type": named("type", t)} for slot, t in enumerate(past, start=1)],
                }
                for generation, past in past_types
            ],
            "stats": [{"base_stat": value, "effort": 0, "stat": named("stat", key)} for key, value in stats.items()],
            "abilities": [
                {"ability": named("ability", f"ability-{ability_id}", ability_id), "slot": slot, "is_hidden": hidden}
                for ability_id, slot, hidden in abilities
            ],
            "moves": [
                {
                    "move": named("move", f"move-{move_id}", move_id),
                    "version_group_details": [
                        {
                            "level_learned_at": level,
                            "move_learn_method": named("move-learn-method", method),
                            "version_group": named("version-group", group),
                        }
                        for group, method, level in details
                    ],
                }
                for move_id, details in moves
            ],
        }

    def encounter(
        self,
        area: str,
        versions: Sequence[tuple[str, Sequence[tuple[str, int, int, int]]]],
    ) -> dict[str, Any]:
        """Build one encounter entry; versions hold (release, [(method, min, max, chance), ...])."""

        return {
            "location_area": named("location-area", area),
            "version_details": [
                {
                    "max_chance": sum(chance for *_, chance in details),
                    "version": named("version", version),
                    "encounter_details": [
                        {
                            "chance": chance,
                            "min_level": min_level,
                            "max_level": max_level,
                            "method": named("encounter-method", method),
                            "condition_values": [],
                        }
                        for method, min_level, max_level, chance in details
                    ],
                }
                for version, details in versions
            ],
        }


class SnapshotBuilder:
    """Write documents into an `api/v2`-shaped directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def _write(self, parts: Sequence[str], payload: Any) -> Path:
        path = self.root.joinpath(*parts, "index.json")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def add_creature(self, document: dict[str, Any], encounters: list[dict[str, Any]] | None = None) -> Path:
        path = self._write(("pokemon", str(document["id"])), document)
        if encounters is not None:
            self._write(("pokemon", str(document["id"]), "encounters"), encounters)
        return path

    def add_move(self, document: dict[str, Any]) -> Path:
        return self._write(("move", str(document["id"])), document)

    def add_trait(self, document: dict[str, Any]) -> Path:
        return self._write(("ability", str(document["id"])), document)


@pytest.fixture
def factory() -> DocumentFactory:
    """Return a builder for raw snapshot documents."""

    return DocumentFactory()


@pytest.fixture
def snapshot(tmp_path: Path) -> SnapshotBuilder:
    """Return an empty snapshot rooted under a temporary directory."""

    return SnapshotBuilder(tmp_path / "api" / "v2")


@pytest.fixture
def populated_snapshot(snapshot: SnapshotBuilder, factory: DocumentFactory) -> SnapshotBuilder:
    """Return a small snapshot with three creatures, their moves, and traits.

    - #1 bulbasaur: grass/poison, traits 65 (slot 1) and 34 (hidden), Tackle + Vine Whip.
    - #25 pikachu: electric, Thunder Shock, plus a reference to fairy-only move 584.
    - #35 clefairy: fairy today, normal through generation v; no encounter document.
    """

    snapshot.add_creature(
        factory.creature(
            1,
            "bulbasaur",
            types=("grass", "poison"),
            abilities=((65, 1, False), (34, 3, True)),
            moves=(
                (33, (("red-blue", "level-up", 1), ("firered-leafgreen", "level-up", 1))),
                (22, (("red-blue", "level-up", 13), ("firered-leafgreen", "level-up", 10))),
            ),
        ),
        encounters=[
            factory.encounter(
                "pallet-town-area",
                (("red", (("gift", 5, 5, 100),)), ("x", (("walk", 10, 10, 100),))),
            )
        ],
    )
    snapshot.add_creature(
        factory.creature(
            25,
            "pikachu",
            types=("electric",),
            abilities=((9, 1, False), (31, 3, True)),
            stats={"hp": 35, "attack": 55, "defense": 40, "special-attack": 50, "special-defense": 50, "speed": 90},
            moves=(
                (84, (("red-blue", "level-up", 1), ("gold-silver", "level-up", 1))),
                (584, (("sun-moon", "egg", 0),)),
            ),
        ),
        encounters=[
            factory.encounter(
                "viridian-forest-area",
                (("red", (("walk", 3, 5, 5),)), ("blue", (("walk", 3, 5, 5),))),
            )
        ],
    )
    snapshot.add_creature(
        factory.creature(
            35,
            "clefairy",
            types=("fairy",),
            past_types=(("generation-v", ("normal",)),),
            abilities=((56, 1, False), (98, 2, False)),
            moves=((33, (("yellow", "level-up", 1),)),),
        )
    )
    snapshot.add_move(factory.move(33, "tackle", type_name="normal", power=35, accuracy=95, pp=35))
    snapshot.add_move(factory.move(22, "vine-whip", type_name="grass", power=35, accuracy=100, pp=10))
    snapshot.add_move(factory.move(84, "thunder-shock", type_name="electric", damage_class="special", power=40, pp=30))
    snapshot.add_move(factory.move(584, "fairy-wind", type_name="fairy", damage_class="special", power=40, pp=30))
    snapshot.add_trait(factory.trait(65, "overgrow", effects=(("de", "Stärkt Pflanze"), ("en", "Strengthens grass moves."))))
    snapshot.add_trait(factory.trait(9, "static", effects=(("en", "Has a 30% chance of paralyzing attackers."),)))
    snapshot.add_trait(factory.trait(56, "cute-charm", effects=(("en", "Contact may cause infatuation."),)))
    snapshot.add_trait(factory.trait(98, "magic-guard", effects=(("en", "Only damaged by attacks."),)))
    return snapshot


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests over in-memory documents and records.
    - `integration`: tests touching snapshot directories, compiled tables, or commands.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
