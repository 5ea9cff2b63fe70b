"""Reading raw snapshot documents.

A snapshot is a directory in the public `api/v2` layout:

    <root>/pokemon/<id>/index.json
    <root>/pokemon/<id>/encounters/index.json   (optional)
    <root>/move/<id>/index.json
    <root>/ability/<id>/index.json

Documents are loosely typed. The helpers below pull required fields out of
them and turn structural problems into `MalformedSourceDocument` so callers
decide, per entity kind, whether a bad document is fatal.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from dexdata.errors import MalformedSourceDocument, MissingSourceFile

_INDEX = "index.json"


def read_json_document(path: Path) -> Any:
    """Load one JSON document.

    Raises:
        MissingSourceFile: When `path` does not exist.
        MalformedSourceDocument: When the file is not valid UTF-8 JSON.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MissingSourceFile(path) from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedSourceDocument(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc


@dataclass(frozen=True, slots=True)
class SnapshotReader:
    """Locate and load per-entity documents under a snapshot root."""

    root: Path

    def creature_path(self, identifier: int) -> Path:
        return self.root / "pokemon" / str(identifier) / _INDEX

    def encounters_path(self, identifier: int) -> Path:
        return self.root / "pokemon" / str(identifier) / "encounters" / _INDEX

    def move_path(self, identifier: int) -> Path:
        return self.root / "move" / str(identifier) / _INDEX

    def trait_path(self, identifier: int) -> Path:
        return self.root / "ability" / str(identifier) / _INDEX

    def has_creature(self, identifier: int) -> bool:
        return self.creature_path(identifier).is_file()

    def read_creature(self, identifier: int) -> SourceDocument:
        return SourceDocument.load(self.creature_path(identifier))

    def read_move(self, identifier: int) -> SourceDocument:
        return SourceDocument.load(self.move_path(identifier))

    def read_trait(self, identifier: int) -> SourceDocument:
        return SourceDocument.load(self.trait_path(identifier))

    def read_encounters(self, identifier: int) -> list[Any]:
        """Return the creature's encounter entries; a missing document means none."""

        path = self.encounters_path(identifier)
        if not path.is_file():
            return []
        payload = read_json_document(path)
        if not isinstance(payload, list):
            raise MalformedSourceDocument(path, "expected a list of encounter entries")
        return payload


@dataclass(frozen=True, slots=True)
class SourceDocument:
    """A loaded JSON object plus where it came from, for error messages."""

    origin: str
    data: Mapping[str, Any]

    @classmethod
    def load(cls, path: Path) -> SourceDocument:
        payload = read_json_document(path)
        if not isinstance(payload, dict):
            raise MalformedSourceDocument(path, "expected a JSON object")
        return cls(origin=str(path), data=payload)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, origin: str = "<memory>") -> SourceDocument:
        return cls(origin=origin, data=data)

    def fail(self, detail: str) -> MalformedSourceDocument:
        """Build the error to raise for a structural problem in this document."""

        return MalformedSourceDocument(self.origin, detail)

    def require(self, key: str) -> Any:
        """Return a field that must be present and non-null."""

        value = self.data.get(key)
        if value is None:
            raise self.fail(f"missing required field {key!r}")
        return value

    def require_int(self, key: str) -> int:
        value = self.require(key)
        if isinstance(value, bool) or not isinstance(value, int):
            raise self.fail(f"field {key!r} must be an integer, got {value!r}")
        return value

    def optional_int(self, key: str) -> int:
        """Return an integer field, treating absence or null as 0."""

        value = self.data.get(key)
        if value is None:
            return 0
        if isinstance(value, bool) or not isinstance(value, int):
            raise self.fail(f"field {key!r} must be an integer, got {value!r}")
        return value

    def require_list(self, key: str) -> list[Any]:
        value = self.require(key)
        if not isinstance(value, list):
            raise self.fail(f"field {key!r} must be a list")
        return value

    def optional_list(self, key: str) -> list[Any]:
        value = self.data.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise self.fail(f"field {key!r} must be a list")
        return value

    def resource_name(self, resource: Any, *, context: str) -> str:
        """Return `resource["name"]` for a named API resource."""

        if not isinstance(resource, Mapping) or not isinstance(resource.get("name"), str):
            raise self.fail(f"{context}: expected a named resource, got {resource!r}")
        return resource["name"]

    def resource_url(self, resource: Any, *, context: str) -> str:
        """Return `resource["url"]` for a named API resource."""

        if not isinstance(resource, Mapping) or not isinstance(resource.get("url"), str):
            raise self.fail(f"{context}: expected a resource locator, got {resource!r}")
        return resource["url"]
