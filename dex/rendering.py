"""Plain-text rendering of a creature as it was in one release.

Every era-sensitive value (types, move type, move category) goes through the
resolver for the release's era. Traits only exist from era 3 on.
"""

from __future__ import annotations

from dexdata.enums import GameRelease, LearnMethod
from dexdata.overlays import resolve_category, resolve_element_type, resolve_element_types
from dexdata.records import Creature, LearnedMove, Trait
from dexdata.store import DexStore

TRAITS_INTRODUCED_ERA = 3


def humanize(slug: str) -> str:
    """Turn a source slug into a display label (`"rock-head"` -> `"Rock Head"`)."""

    return " ".join(word.capitalize() for word in slug.replace("-", " ").split())


def _types_label(types: tuple) -> str:
    return " / ".join(t.label for t in types if t.label) or "-"


def _trait_label(trait: Trait | None) -> str:
    return humanize(trait.name) if trait is not None else ""


def _acquisition_label(learned: LearnedMove) -> str:
    if learned.method is LearnMethod.level_up:
        return f"Lv{max(learned.level, 1):3d}"
    if learned.method is LearnMethod.machine:
        return "TM"
    return learned.method.label.capitalize()


def render_header(creature: Creature, release: GameRelease) -> list[str]:
    era = release.era
    return [
        f"#{creature.id:03d} {humanize(creature.name)}  [Gen {era} / {release.label}]",
        f"  Types:    {_types_label(resolve_element_types(creature, era))}",
        f"  Height:   {creature.height}  Weight: {creature.weight}",
    ]


def render_traits(store: DexStore, creature: Creature, release: GameRelease) -> list[str]:
    if release.era < TRAITS_INTRODUCED_ERA:
        return ["  Ability:  (introduced in Gen 3)"]
    labels = [label for label in map(_trait_label, store.traits_for(creature)) if label]
    return [f"  Ability:  {' / '.join(labels) if labels else '-'}"]


def render_stats(creature: Creature, release: GameRelease) -> list[str]:
    stats = creature.stats
    rows = [
        ("HP   ", stats.hp),
        ("Atk  ", stats.attack),
        ("Def  ", stats.defense),
        ("SpAtk", stats.special_attack),
        ("SpDef", stats.special_defense),
        ("Speed", stats.speed),
    ]
    lines = []
    for label, value in rows:
        note = " (= Spc in Gen 1)" if release.era < 2 and label in {"SpAtk", "SpDef"} else ""
        lines.append(f"  {label}  {value:3d}{note}")
    lines.append(f"  Total  {stats.total:3d}")
    return lines


def render_moves(store: DexStore, creature: Creature, release: GameRelease) -> list[str]:
    """Render the release's learnset; moves missing from the store are listed as unavailable."""

    learnset = store.learnset(creature, release)
    if not learnset:
        return ["  No moves for this version"]

    era = release.era
    lines = [f"  {'Name':<14} {'Type':<8} {'Cat':<5} {'Pwr':>3} {'Acc':>3} {'PP':>3}  Lv/TM"]
    for learned, move in learnset:
        if move is None:
            lines.append(f"  {'(unavailable)':<14} {'':<8} {'':<5} {'':>3} {'':>3} {'':>3}  {_acquisition_label(learned)}")
            continue
        power = f"{move.power:3d}" if move.power > 0 else "-"
        accuracy = f"{move.accuracy:3d}" if move.accuracy > 0 else "-"
        lines.append(
            f"  {move.name:<14} {resolve_element_type(move, era).label:<8} {resolve_category(move, era).label:<5} "
            f"{power:>3} {accuracy:>3} {move.pp:3d}  {_acquisition_label(learned)}"
        )
    return lines


def render_locations(creature: Creature, release: GameRelease) -> list[str]:
    found = [loc for loc in creature.locations if loc.release is release]
    if not found:
        return ["  Not found in the wild for this version"]
    lines = [f"  {'Area':<30} {'Method':<12} {'Levels':<8} Chance"]
    for loc in found:
        levels = f"{loc.min_level}-{loc.max_level}"
        lines.append(f"  {loc.area_name:<30} {loc.method.label:<12} {levels:<8} {loc.chance}%")
    return lines


def render_entry(store: DexStore, creature: Creature, release: GameRelease) -> str:
    """Render the full entry for `creature` as seen in `release`."""

    sections = [
        render_header(creature, release),
        render_traits(store, creature, release),
        ["Stats:"] + render_stats(creature, release),
        [f"Moves ({release.label}):"] + render_moves(store, creature, release),
        [f"Locations ({release.label}):"] + render_locations(creature, release),
    ]
    return "\n".join("\n".join(section) for section in sections) + "\n"
