"""Tests for compiled record invariants and table encoding."""

from __future__ import annotations

import pytest

from dexdata.enums import DamageCategory, ElementType, EncounterMethod, GameRelease, LearnMethod
from dexdata.errors import OverlayOrderError
from dexdata.records import (
    BaseStats,
    Creature,
    LearnedMove,
    Learnset,
    Location,
    Move,
    Overlay,
)

pytestmark = pytest.mark.unit


def test_overlays_must_be_strictly_ascending() -> None:
    """Reject overlays stored out of order or with repeated bounds."""

    with pytest.raises(OverlayOrderError):
        Move(
            id=1,
            name="Bad",
            element_type=ElementType.normal,
            category=DamageCategory.physical,
            past_types=(Overlay(2, ElementType.fire), Overlay(1, ElementType.water)),
        )
    with pytest.raises(OverlayOrderError):
        Creature(
            id=1,
            name="bad",
            past_types=(Overlay(1, (ElementType.fire, ElementType.none)),) * 2,
        )


@pytest.mark.parametrize("bound", [0, 4])
def test_overlay_bounds_must_be_supported_eras(bound: int) -> None:
    """Reject bounds outside eras 1-3 at construction time."""

    with pytest.raises(OverlayOrderError):
        Move(
            id=1,
            name="Bad",
            element_type=ElementType.normal,
            category=DamageCategory.physical,
            past_types=(Overlay(bound, ElementType.fire),),
        )


def test_creature_json_encoding_preserves_every_field() -> None:
    """Decode the table encoding of a fully populated creature back to an equal record."""

    creature = Creature(
        id=81,
        name="magnemite",
        types=(ElementType.electric, ElementType.steel),
        past_types=(Overlay(1, (ElementType.electric, ElementType.none)),),
        stats=BaseStats(hp=25, attack=35, defense=70, special_attack=95, special_defense=55, speed=45),
        height=3,
        weight=60,
        trait_ids=(42, 5),
        learnsets=(
            Learnset(
                release=GameRelease.red,
                moves=(LearnedMove(33, LearnMethod.level_up, 1), LearnedMove(85, LearnMethod.machine, 0)),
            ),
        ),
        locations=(Location(GameRelease.red, EncounterMethod.walk, 21, 23, 25, "power-plant-area"),),
    )
    assert Creature.from_json(creature.as_json()) == creature


def test_creature_learnset_for_missing_release_is_empty() -> None:
    """A release without data yields an empty learnset rather than an error."""

    creature = Creature(id=1, name="x", learnsets=(Learnset(GameRelease.red, (LearnedMove(1, LearnMethod.egg),)),))
    assert creature.learnset_for(GameRelease.red) == (LearnedMove(1, LearnMethod.egg),)
    assert creature.learnset_for(GameRelease.emerald) == ()
