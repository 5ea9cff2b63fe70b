"""The read-only compiled dataset.

`DexStore` replaces process-wide tables: construct it once (from compiled
records or from a directory of serialized tables) and pass it to whatever
needs lookups. It is never mutated after construction, so concurrent readers
need no synchronization.

References between records are weak: a creature may name a move or trait id
that was dropped during compilation, and lookups return None for it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Final, Iterable, Iterator, Sequence, TypeVar

from .enums import GameRelease
from .errors import TableFormatError
from .records import Creature, LearnedMove, Move, Trait

logger = logging.getLogger(__name__)

TABLE_FORMAT: Final[int] = 1
CREATURES_TABLE: Final[str] = "creatures"
MOVES_TABLE: Final[str] = "moves"
TRAITS_TABLE: Final[str] = "traits"
TABLE_KINDS: Final[tuple[str, ...]] = (CREATURES_TABLE, MOVES_TABLE, TRAITS_TABLE)

R = TypeVar("R", Creature, Move, Trait)


def table_filename(kind: str) -> str:
    """Return the file name a table of `kind` is serialized to."""

    return f"{kind}.json"


def _dense(records: Iterable[R], *, kind: str) -> tuple[R | None, ...]:
    """Index records by id into a dense tuple with None at gaps."""

    by_id: dict[int, R] = {}
    for record in records:
        if record.id <= 0:
            raise TableFormatError(f"{kind}: identifiers must be positive, got {record.id}.")
        if record.id in by_id:
            raise TableFormatError(f"{kind}: duplicate identifier {record.id}.")
        by_id[record.id] = record
    size = max(by_id, default=0) + 1
    return tuple(by_id.get(index) for index in range(size))


class DexStore:
    """Immutable, identifier-indexed creature, move, and trait tables."""

    __slots__ = ("_creatures", "_moves", "_traits", "_creatures_by_name")

    def __init__(
        self,
        *,
        creatures: Iterable[Creature] = (),
        moves: Iterable[Move] = (),
        traits: Iterable[Trait] = (),
    ) -> None:
        """Build the store.

        Args:
            creatures: Compiled creatures, in any order.
            moves: Compiled moves, in any order.
            traits: Compiled traits, in any order.

        Raises:
            TableFormatError: On duplicate or non-positive identifiers.
        """

        self._creatures = _dense(creatures, kind=CREATURES_TABLE)
        self._moves = _dense(moves, kind=MOVES_TABLE)
        self._traits = _dense(traits, kind=TRAITS_TABLE)
        self._creatures_by_name = {c.name: c for c in self._creatures if c is not None}

    @staticmethod
    def _lookup(table: Sequence[R | None], identifier: int) -> R | None:
        if 0 < identifier < len(table):
            return table[identifier]
        return None

    def creature(self, identifier: int) -> Creature | None:
        return self._lookup(self._creatures, identifier)

    def move(self, identifier: int) -> Move | None:
        return self._lookup(self._moves, identifier)

    def trait(self, identifier: int) -> Trait | None:
        return self._lookup(self._traits, identifier)

    def creature_by_name(self, name: str) -> Creature | None:
        """Return the creature with this exact (case-insensitive) source name."""

        return self._creatures_by_name.get(name.strip().casefold())

    def creatures(self) -> Iterator[Creature]:
        """Iterate creatures in ascending id order."""

        return (c for c in self._creatures if c is not None)

    def moves(self) -> Iterator[Move]:
        return (m for m in self._moves if m is not None)

    def traits(self) -> Iterator[Trait]:
        return (t for t in self._traits if t is not None)

    def traits_for(self, creature: Creature) -> tuple[Trait | None, Trait | None]:
        """Resolve a creature's two trait slots; empty or dropped slots are None."""

        first, second = creature.trait_ids
        return (self.trait(first), self.trait(second))

    def learnset(self, creature: Creature, release: GameRelease) -> tuple[tuple[LearnedMove, Move | None], ...]:
        """Pair each move learned in `release` with its compiled Move, or None when absent."""

        return tuple((learned, self.move(learned.move_id)) for learned in creature.learnset_for(release))

    def __len__(self) -> int:
        return sum(1 for _ in self.creatures())

    def __repr__(self) -> str:
        return (
            f"DexStore(creatures={len(self)}, moves={sum(1 for _ in self.moves())}, "
            f"traits={sum(1 for _ in self.traits())})"
        )


def _read_rows(directory: Path, kind: str) -> list[Any]:
    """Read and validate the envelope of one serialized table."""

    path = directory / table_filename(kind)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise TableFormatError(f"Missing compiled table: {path}.") from exc
    except json.JSONDecodeError as exc:
        raise TableFormatError(f"Compiled table {path} is not valid JSON: {exc}.") from exc

    if not isinstance(payload, dict) or payload.get("kind") != kind:
        raise TableFormatError(f"Compiled table {path} is not a {kind} table.")
    if payload.get("format") != TABLE_FORMAT:
        raise TableFormatError(f"Compiled table {path} has format {payload.get('format')!r}, expected {TABLE_FORMAT}.")
    rows = payload.get("rows")
    if not isinstance(rows, list):
        raise TableFormatError(f"Compiled table {path} has no rows.")
    return rows


def _decode_rows(rows: list[Any], decode: Callable[[Any], R], *, kind: str) -> list[R]:
    records: list[R] = []
    for index, row in enumerate(rows):
        if row is None:
            continue
        try:
            record = decode(row)
        except (KeyError, TypeError, ValueError) as exc:
            raise TableFormatError(f"{kind}: row {index} cannot be decoded: {exc}.") from exc
        if record.id != index:
            raise TableFormatError(f"{kind}: row {index} holds identifier {record.id}.")
        records.append(record)
    return records


def load_store(directory: Path | str) -> DexStore:
    """Load a `DexStore` from serialized tables written by the compiler.

    Args:
        directory: Directory holding `creatures.json`, `moves.json`, and `traits.json`.

    Returns:
        A fully initialized, read-only store.

    Raises:
        TableFormatError: When a table is missing, malformed, or of the wrong format.
    """

    directory = Path(directory)
    store = DexStore(
        creatures=_decode_rows(_read_rows(directory, CREATURES_TABLE), Creature.from_json, kind=CREATURES_TABLE),
        moves=_decode_rows(_read_rows(directory, MOVES_TABLE), Move.from_json, kind=MOVES_TABLE),
        traits=_decode_rows(_read_rows(directory, TRAITS_TABLE), Trait.from_json, kind=TRAITS_TABLE),
    )
    logger.debug("Loaded %r from %s", store, directory)
    return store
