"""Compile a reference-data snapshot into the dex tables.

This command orchestrates:
1) a full compilation of the snapshot (creatures, then referenced moves and traits),
2) comparison of the rendered tables against the previous build's manifest,
3) writing tables and manifest when `--write` is given.

Every run is a full rebuild; there is no incremental mode.
"""

from __future__ import annotations

from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from compiler.emit import diff_tables, render_tables, write_tables
from compiler.pipeline import compile_snapshot
from dexdata.errors import DexDataError


class Command(BaseCommand):
    """Compile snapshot JSON documents into creature, move, and trait tables."""

    help = "Compile a reference-data snapshot into generation-aware dex tables."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--source",
            default=None,
            help="Snapshot root in the api/v2 layout (defaults to settings.DEX_SOURCE_DIR).",
        )
        parser.add_argument(
            "--output",
            default=None,
            help="Directory for compiled tables (defaults to settings.DEX_OUTPUT_DIR).",
        )
        parser.add_argument(
            "--id",
            type=int,
            action="append",
            dest="ids",
            help="Creature id to compile (repeatable). When omitted, scan 1..--max-id.",
        )
        parser.add_argument(
            "--max-id",
            type=int,
            default=None,
            help="Upper bound of the default id scan (defaults to settings.DEX_DEFAULT_MAX_ID).",
        )
        parser.add_argument(
            "--check",
            action="store_true",
            help="Dry-run: compile and report which tables would change without writing.",
        )
        parser.add_argument(
            "--write",
            action="store_true",
            help="Write the compiled tables and manifest.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        check: bool = options["check"]
        write: bool = options["write"]
        if check and write:
            raise CommandError("Use either --check or --write, not both.")
        if not check and not write:
            raise CommandError("Refusing to write without explicit intent; pass --check or --write.")

        source = Path(options["source"] or settings.DEX_SOURCE_DIR)
        output = Path(options["output"] or settings.DEX_OUTPUT_DIR)
        max_id: int = settings.DEX_DEFAULT_MAX_ID if options["max_id"] is None else options["max_id"]
        if max_id < 1:
            raise CommandError(f"--max-id must be at least 1, got {max_id}.")
        ids: list[int] | None = options["ids"]

        if not source.is_dir():
            raise CommandError(f"Snapshot directory does not exist: {source}")

        mode = "CHECK" if check else "WRITE"
        self.stdout.write(f"[{mode}] compiling snapshot {source}...")
        try:
            tables = compile_snapshot(source, ids, max_id=max_id)
        except DexDataError as exc:
            raise CommandError(f"Compilation failed: {exc}") from exc

        if not tables.creatures:
            raise CommandError(f"No creature documents found under {source}.")

        rendered = render_tables(tables)
        statuses = diff_tables(output, rendered)
        for kind, table in rendered.items():
            self.stdout.write(f"[{mode}] table={kind} rows={table.row_count} status={statuses[kind]}")
        if tables.dropped_moves:
            self.stdout.write(f"[{mode}] dropped moves={list(tables.dropped_moves)}")
        if tables.dropped_traits:
            self.stdout.write(f"[{mode}] dropped traits={list(tables.dropped_traits)}")

        if write:
            write_tables(output, rendered)
            self.stdout.write(f"[{mode}] wrote tables to {output}")
        return None
