"""Era-aware resolution of compiled facts.

A compiled field carries its present-day (canonical) value plus a list of
historical overlays. For a queried era the first overlay whose bound is at or
after that era wins; otherwise the canonical value applies. Records guarantee
ascending bounds at construction, so "first match" is also "nearest bound".

These functions are pure: they read compiled records and the requested era
and never touch the store.
"""

from __future__ import annotations

from typing import Final, Sequence, TypeVar

from .enums import CATEGORY_SPLIT_ERA, DamageCategory, ElementType, require_era
from .records import Creature, Move, Overlay, TypePair

T = TypeVar("T")

# Before the category split, a damaging move's category followed its type.
LEGACY_PHYSICAL_TYPES: Final[frozenset[ElementType]] = frozenset(
    {
        ElementType.normal,
        ElementType.fighting,
        ElementType.poison,
        ElementType.ground,
        ElementType.flying,
        ElementType.bug,
        ElementType.rock,
        ElementType.ghost,
        ElementType.dark,
        ElementType.steel,
    }
)


def resolve(canonical: T, overlays: Sequence[Overlay[T]], era: int) -> T:
    """Return the value of `canonical` as it was in `era`.

    Args:
        canonical: Present-day value.
        overlays: Historical overlays, ascending by `valid_through`.
        era: Queried era.

    Returns:
        The value of the first overlay with `valid_through >= era`, or
        `canonical` when no overlay covers the era.
    """

    for overlay in overlays:
        if era <= overlay.valid_through:
            return overlay.value
    return canonical


def resolve_element_types(creature: Creature, era: int) -> TypePair:
    """Return the creature's type pair in `era`."""

    return resolve(creature.types, creature.past_types, require_era(era))


def resolve_element_type(move: Move, era: int) -> ElementType:
    """Return the move's element type in `era`."""

    return resolve(move.element_type, move.past_types, require_era(era))


def legacy_category(element_type: ElementType) -> DamageCategory:
    """Return the damage category a type implied before the category split."""

    if element_type in LEGACY_PHYSICAL_TYPES:
        return DamageCategory.physical
    return DamageCategory.special


def resolve_category(move: Move, era: int) -> DamageCategory:
    """Return the move's damage category in `era`.

    Status moves are status in every era. From `CATEGORY_SPLIT_ERA` on, the
    stored category applies. Earlier, the category is derived from the move's
    element type *for that era* via `LEGACY_PHYSICAL_TYPES`; the stored
    category is ignored.
    """

    if move.category is DamageCategory.status:
        return DamageCategory.status
    if require_era(era) >= CATEGORY_SPLIT_ERA:
        return move.category
    return legacy_category(resolve_element_type(move, era))
