"""Print one creature's entry as it was in a given release or era."""

from __future__ import annotations

from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from dex.rendering import render_entry
from dexdata.enums import GameRelease, parse_release
from dexdata.errors import DexDataError
from dexdata.store import load_store


class Command(BaseCommand):
    """Resolve and print a creature entry from compiled dex tables."""

    help = "Print a creature's types, stats, abilities, moves, and locations for one release."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("creature", help="Creature id or exact name.")
        parser.add_argument(
            "--release",
            choices=[release.name for release in GameRelease],
            default=None,
            help="Game release to view (e.g. red, crystal, emerald).",
        )
        parser.add_argument(
            "--era",
            type=int,
            choices=(1, 2, 3),
            default=None,
            help="Generation to view; picks the era's first release when --release is omitted.",
        )
        parser.add_argument(
            "--tables",
            default=None,
            help="Directory of compiled tables (defaults to settings.DEX_OUTPUT_DIR).",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        release = self._select_release(release_name=options["release"], era=options["era"])
        tables = Path(options["tables"] or settings.DEX_OUTPUT_DIR)
        try:
            store = load_store(tables)
        except DexDataError as exc:
            raise CommandError(str(exc)) from exc

        query: str = options["creature"].strip()
        creature = store.creature(int(query)) if query.isdigit() else store.creature_by_name(query)
        if creature is None:
            raise CommandError(f"No creature matches {query!r}.")

        self.stdout.write(render_entry(store, creature, release), ending="")
        return None

    @staticmethod
    def _select_release(*, release_name: str | None, era: int | None) -> GameRelease:
        """Pick the release to render from --release / --era."""

        if release_name is not None:
            release = parse_release(release_name)
            if release is None:
                raise CommandError(f"Unknown release {release_name!r}.")
            if era is not None and release.era != era:
                raise CommandError(f"Release {release.label} belongs to Gen {release.era}, not Gen {era}.")
            return release
        target_era = era if era is not None else 3
        return next(release for release in GameRelease if release.era == target_era)
