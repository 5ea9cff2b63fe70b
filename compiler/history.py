"""Helpers for building historical overlay lists."""

from __future__ import annotations

from typing import Iterable, TypeVar

from dexdata.enums import MAX_ERA
from dexdata.records import Overlay

T = TypeVar("T")


def ascending_overlays(overlays: Iterable[Overlay[T]]) -> tuple[Overlay[T], ...]:
    """Order overlays by bound, clamp late bounds, and keep one overlay per bound.

    Overlays are ordered by their original bound first, so the nearest one
    wins when several late bounds clamp to the last supported era. Ties on
    the original bound keep source order.
    """

    by_bound: dict[int, Overlay[T]] = {}
    for overlay in sorted(overlays, key=lambda item: item.valid_through):
        bound = min(overlay.valid_through, MAX_ERA)
        by_bound.setdefault(bound, Overlay(valid_through=bound, value=overlay.value))
    return tuple(by_bound.values())
