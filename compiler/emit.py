"""Serialize compiled tables deterministically.

Each table is one JSON document whose `rows` list is indexed by identifier
(`rows[id]`, null at gaps), written in canonical form so identical input
produces byte-identical files. A `manifest.json` records the SHA-256 of each
table; `--check` runs compare against it instead of rewriting files.
"""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Literal, Mapping, Sequence

from dexdata.records import Creature, Move, Trait
from dexdata.store import (
    CREATURES_TABLE,
    MOVES_TABLE,
    TABLE_FORMAT,
    TABLE_KINDS,
    TRAITS_TABLE,
    table_filename,
)

from .pipeline import CompiledTables

logger = logging.getLogger(__name__)

MANIFEST_FILENAME: Final[str] = "manifest.json"

TableStatus = Literal["added", "changed", "unchanged"]


def canonical_json(payload: object) -> str:
    """Dump `payload` in the canonical form used for tables and hashes."""

    return json.dumps(payload, sort_keys=True, ensure_ascii=False, separators=(",", ":"))


def compute_content_hash(text: str) -> str:
    """Return the lowercase SHA-256 hex digest of UTF-8 `text`."""

    return hashlib.sha256(text.encode("utf-8")).hexdigest()


@dataclass(frozen=True, slots=True)
class RenderedTable:
    """One serialized table ready to be written.

    Attributes:
        kind: Table kind (`creatures`, `moves`, or `traits`).
        text: Serialized document, newline-terminated.
        content_hash: SHA-256 of `text`.
        row_count: Number of non-null rows.
    """

    kind: str
    text: str
    content_hash: str
    row_count: int

    @property
    def filename(self) -> str:
        return table_filename(self.kind)


def render_table(kind: str, records: Sequence[Creature | Move | Trait]) -> RenderedTable:
    """Serialize records into a dense, identifier-indexed table document."""

    by_id = {record.id: record.as_json() for record in records}
    size = max(by_id, default=0) + 1
    text = canonical_json(
        {
            "format": TABLE_FORMAT,
            "kind": kind,
            "rows": [by_id.get(index) for index in range(size)],
        }
    )
    text += "\n"
    return RenderedTable(kind=kind, text=text, content_hash=compute_content_hash(text), row_count=len(by_id))


def render_tables(tables: CompiledTables) -> dict[str, RenderedTable]:
    """Render the three tables of a compilation run, keyed by kind."""

    return {
        CREATURES_TABLE: render_table(CREATURES_TABLE, tables.creatures),
        MOVES_TABLE: render_table(MOVES_TABLE, tables.moves),
        TRAITS_TABLE: render_table(TRAITS_TABLE, tables.traits),
    }


def render_manifest(rendered: Mapping[str, RenderedTable]) -> str:
    payload = {
        "format": TABLE_FORMAT,
        "tables": {kind: {"sha256": table.content_hash, "rows": table.row_count} for kind, table in rendered.items()},
    }
    return json.dumps(payload, sort_keys=True, indent=2) + "\n"


def read_manifest_hashes(output_dir: Path) -> dict[str, str]:
    """Return `{kind: sha256}` from an existing manifest; empty when absent or unreadable."""

    path = output_dir / MANIFEST_FILENAME
    if not path.is_file():
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return {kind: str(entry["sha256"]) for kind, entry in payload["tables"].items()}
    except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable manifest %s: %s", path, exc)
        return {}


def diff_tables(output_dir: Path, rendered: Mapping[str, RenderedTable]) -> dict[str, TableStatus]:
    """Classify each rendered table against what is already on disk.

    Args:
        output_dir: Directory holding a previous build (may not exist).
        rendered: Freshly rendered tables.

    Returns:
        Mapping of kind -> "added", "changed", or "unchanged".
    """

    previous = read_manifest_hashes(output_dir)
    statuses: dict[str, TableStatus] = {}
    for kind in TABLE_KINDS:
        table = rendered[kind]
        if kind not in previous or not (output_dir / table.filename).is_file():
            statuses[kind] = "added"
        elif previous[kind] != table.content_hash:
            statuses[kind] = "changed"
        else:
            statuses[kind] = "unchanged"
    return statuses


def write_tables(output_dir: Path, rendered: Mapping[str, RenderedTable]) -> list[Path]:
    """Write every table and then the manifest; return the written paths."""

    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for kind in TABLE_KINDS:
        table = rendered[kind]
        path = output_dir / table.filename
        path.write_text(table.text, encoding="utf-8")
        written.append(path)
    manifest_path = output_dir / MANIFEST_FILENAME
    manifest_path.write_text(render_manifest(rendered), encoding="utf-8")
    written.append(manifest_path)
    logger.info("Wrote %d files to %s", len(written), output_dir)
    return written
