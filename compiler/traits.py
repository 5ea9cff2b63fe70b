"""Trait (ability) compilation."""

from __future__ import annotations

from typing import Final

from dexdata.records import Trait

from .source import SourceDocument

DESCRIPTION_LANGUAGE: Final[str] = "en"


def compile_trait(document: SourceDocument) -> Trait:
    """Compile one raw ability document.

    The description is the `short_effect` of the first effect entry in
    `DESCRIPTION_LANGUAGE`, or an empty string when there is none.

    Raises:
        MalformedSourceDocument: When an effect entry is not a JSON object.
    """

    description = ""
    for entry in document.optional_list("effect_entries"):
        if not isinstance(entry, dict):
            raise document.fail(f"effect_entries: expected an object, got {entry!r}")
        language = entry.get("language")
        if isinstance(language, dict) and language.get("name") == DESCRIPTION_LANGUAGE:
            description = str(entry.get("short_effect") or "")
            break
    return Trait(
        id=document.require_int("id"),
        name=str(document.require("name")),
        short_description=description,
    )
