"""Integration tests for the build_dex management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

pytestmark = pytest.mark.integration


def test_build_dex_requires_explicit_mode(populated_snapshot, tmp_path) -> None:
    """Refuse to run without exactly one of --check / --write."""

    with pytest.raises(CommandError):
        call_command("build_dex", source=str(populated_snapshot.root), output=str(tmp_path / "out"))
    with pytest.raises(CommandError):
        call_command("build_dex", "--check", "--write", source=str(populated_snapshot.root))


def test_build_dex_check_does_not_write(populated_snapshot, tmp_path) -> None:
    """A dry run reports table statuses and leaves the output directory untouched."""

    output = tmp_path / "out"
    stdout = StringIO()
    call_command("build_dex", "--check", source=str(populated_snapshot.root), output=str(output), max_id=50, stdout=stdout)

    text = stdout.getvalue()
    assert "[CHECK] table=creatures rows=3 status=added" in text
    assert "[CHECK] dropped moves=[584]" in text
    assert not output.exists()


def test_build_dex_write_is_idempotent(populated_snapshot, tmp_path) -> None:
    """Writing twice produces identical bytes and a second run reports no changes."""

    output = tmp_path / "out"
    call_command("build_dex", "--write", source=str(populated_snapshot.root), output=str(output), max_id=50, stdout=StringIO())
    first = {path.name: path.read_bytes() for path in output.iterdir()}

    stdout = StringIO()
    call_command("build_dex", "--write", source=str(populated_snapshot.root), output=str(output), max_id=50, stdout=stdout)
    second = {path.name: path.read_bytes() for path in output.iterdir()}

    assert first == second
    assert "status=changed" not in stdout.getvalue()
    assert "status=added" not in stdout.getvalue()


def test_build_dex_honours_explicit_ids(populated_snapshot, tmp_path) -> None:
    """Only the requested creatures (and what they reference) are compiled."""

    stdout = StringIO()
    call_command(
        "build_dex",
        "--check",
        "--id",
        "35",
        source=str(populated_snapshot.root),
        output=str(tmp_path / "out"),
        stdout=stdout,
    )
    text = stdout.getvalue()
    assert "table=creatures rows=1" in text
    assert "table=moves rows=1" in text
    assert "table=traits rows=2" in text


def test_build_dex_fails_on_a_broken_primary_record(populated_snapshot, tmp_path) -> None:
    """A malformed creature document becomes a CommandError."""

    (populated_snapshot.root / "pokemon" / "1" / "index.json").write_text("[]", encoding="utf-8")
    with pytest.raises(CommandError, match="Compilation failed"):
        call_command("build_dex", "--write", source=str(populated_snapshot.root), output=str(tmp_path / "out"), max_id=50)


def test_build_dex_rejects_missing_source(tmp_path) -> None:
    """Report a missing snapshot directory clearly."""

    with pytest.raises(CommandError, match="does not exist"):
        call_command("build_dex", "--check", source=str(tmp_path / "missing"))


def test_build_dex_rejects_non_positive_max_id(populated_snapshot, tmp_path) -> None:
    """An explicit --max-id of 0 is an error, not a request for the default scan."""

    with pytest.raises(CommandError, match="--max-id must be at least 1"):
        call_command(
            "build_dex", "--check", "--max-id", "0", source=str(populated_snapshot.root), output=str(tmp_path / "out")
        )
