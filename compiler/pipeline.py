"""Compile a whole snapshot into creature, move, and trait tables.

The run works in two passes over the working creature set:
1) read every creature document and gather the move ids and non-hidden trait
   ids it references,
2) compile each creature, move, and trait exactly once.

Creatures are primary: any error compiling one aborts the run. Moves and
traits are auxiliary: one that cannot be compiled (typically a post-era-3
type) is logged and left out of its table, and creatures keep referencing
its id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Final, Iterable, TypeVar

from dexdata.errors import DexDataError, MalformedSourceDocument
from dexdata.records import Creature, Move, Trait
from dexdata.store import DexStore

from .creatures import compile_creature, referenced_move_ids, referenced_trait_ids
from .moves import compile_move
from .source import SnapshotReader, SourceDocument
from .traits import compile_trait

logger = logging.getLogger(__name__)

DEFAULT_MAX_ID: Final[int] = 386

R = TypeVar("R", Move, Trait)


@dataclass(frozen=True, slots=True)
class CompiledTables:
    """Result of a compilation run.

    Attributes:
        creatures: Compiled creatures, ascending by id.
        moves: Compiled moves, ascending by id.
        traits: Compiled traits, ascending by id.
        dropped_moves: Referenced move ids that could not be compiled.
        dropped_traits: Referenced trait ids that could not be compiled.
    """

    creatures: tuple[Creature, ...]
    moves: tuple[Move, ...]
    traits: tuple[Trait, ...]
    dropped_moves: tuple[int, ...] = ()
    dropped_traits: tuple[int, ...] = ()

    def to_store(self) -> DexStore:
        """Build a read-only store over these tables."""

        return DexStore(creatures=self.creatures, moves=self.moves, traits=self.traits)


@dataclass(frozen=True, slots=True)
class References:
    """Move and trait ids referenced by the working creature set."""

    move_ids: frozenset[int]
    trait_ids: frozenset[int]


def discover_creature_ids(
    reader: SnapshotReader,
    ids: Iterable[int] | None = None,
    *,
    max_id: int = DEFAULT_MAX_ID,
) -> list[int]:
    """Return the working creature set.

    Args:
        reader: Snapshot reader.
        ids: Explicit ids to consider; when None, scan 1..`max_id`.
        max_id: Upper bound of the default scan.

    Returns:
        Sorted, de-duplicated ids whose creature document exists.
    """

    candidates = range(1, max_id + 1) if ids is None else sorted(set(ids))
    found = [identifier for identifier in candidates if reader.has_creature(identifier)]
    if ids is not None:
        missing = sorted(set(candidates) - set(found))
        if missing:
            logger.warning("No creature document for requested ids %s", missing)
    return found


def collect_references(reader: SnapshotReader, creature_ids: Iterable[int]) -> References:
    """First pass: gather every move id and non-hidden trait id referenced by the creatures."""

    move_ids: set[int] = set()
    trait_ids: set[int] = set()
    for identifier in creature_ids:
        document = reader.read_creature(identifier)
        move_ids |= referenced_move_ids(document)
        trait_ids |= referenced_trait_ids(document)
    return References(move_ids=frozenset(move_ids), trait_ids=frozenset(trait_ids))


def _check_identifier(document: SourceDocument, expected: int) -> None:
    actual = document.require_int("id")
    if actual != expected:
        raise MalformedSourceDocument(document.origin, f"document id {actual} does not match its location id {expected}")


def _compile_auxiliary(
    identifiers: Iterable[int],
    *,
    kind: str,
    read: Callable[[int], SourceDocument],
    compile_one: Callable[[SourceDocument], R],
) -> tuple[tuple[R, ...], tuple[int, ...]]:
    """Compile referenced moves or traits, dropping the ones that fail."""

    compiled: list[R] = []
    dropped: list[int] = []
    for identifier in sorted(identifiers):
        try:
            document = read(identifier)
            _check_identifier(document, identifier)
            compiled.append(compile_one(document))
        except DexDataError as exc:
            logger.warning("Dropping %s %s: %s", kind, identifier, exc)
            dropped.append(identifier)
    return tuple(compiled), tuple(dropped)


def compile_creatures(reader: SnapshotReader, creature_ids: Iterable[int]) -> tuple[Creature, ...]:
    """Compile the primary creature records; errors propagate to the caller."""

    creatures: list[Creature] = []
    for identifier in sorted(creature_ids):
        document = reader.read_creature(identifier)
        _check_identifier(document, identifier)
        creatures.append(compile_creature(document, reader.read_encounters(identifier)))
    return tuple(creatures)


def compile_snapshot(
    source_dir: Path | str,
    ids: Iterable[int] | None = None,
    *,
    max_id: int = DEFAULT_MAX_ID,
) -> CompiledTables:
    """Compile a snapshot directory into the three dex tables.

    Args:
        source_dir: Snapshot root (the `api/v2` directory).
        ids: Optional explicit creature ids; defaults to scanning 1..`max_id`.
        max_id: Upper bound of the default scan.

    Returns:
        CompiledTables with every table sorted by id.

    Raises:
        DexDataError: When any creature in the working set cannot be compiled.
    """

    reader = SnapshotReader(Path(source_dir))
    creature_ids = discover_creature_ids(reader, ids, max_id=max_id)
    logger.info("Compiling %d creatures from %s", len(creature_ids), reader.root)

    references = collect_references(reader, creature_ids)
    moves, dropped_moves = _compile_auxiliary(
        references.move_ids, kind="move", read=reader.read_move, compile_one=compile_move
    )
    traits, dropped_traits = _compile_auxiliary(
        references.trait_ids, kind="trait", read=reader.read_trait, compile_one=compile_trait
    )
    creatures = compile_creatures(reader, creature_ids)

    logger.info(
        "Compiled creatures=%d moves=%d traits=%d (dropped moves=%d traits=%d)",
        len(creatures),
        len(moves),
        len(traits),
        len(dropped_moves),
        len(dropped_traits),
    )
    return CompiledTables(
        creatures=creatures,
        moves=moves,
        traits=traits,
        dropped_moves=dropped_moves,
        dropped_traits=dropped_traits,
    )
