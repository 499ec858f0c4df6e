from __future__ import annotations

import errno
import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dottrack.cli import app
from dottrack.manifest import Manifest

runner = CliRunner()


def _invoke(store: Path, *args: str):
    return runner.invoke(app, ["--manifest", str(store / ".dot.toml"), "--store", str(store), *args])


def test_cli_track_and_list_sorted(tmp_path: Path, store: Path, fake_home: Path) -> None:
    for name in ["Zeta", "alpha", "Beta"]:
        source = tmp_path / f"{name}.rc"
        source.write_text(name)
        result = _invoke(store, "track", name, str(source))
        assert result.exit_code == 0
        assert "Tracked" in result.stdout

    list_result = _invoke(store, "list")
    assert list_result.exit_code == 0
    assert list_result.stdout.splitlines() == ["alpha", "Beta", "Zeta"]


def test_cli_aliases(tmp_path: Path, store: Path, fake_home: Path) -> None:
    source = tmp_path / "rc"
    source.write_text("one\n")

    assert _invoke(store, "t", "rc", str(source)).exit_code == 0
    source.write_text("two\n")
    assert _invoke(store, "i", "rc").exit_code == 0
    assert (store / "rc").read_text() == "two\n"

    source.unlink()
    assert _invoke(store, "e", "rc").exit_code == 0
    assert source.read_text() == "two\n"

    assert _invoke(store, "ls").stdout.splitlines() == ["rc"]
    assert _invoke(store, "u", "rc").exit_code == 0
    assert _invoke(store, "list").stdout.strip() == ""


def test_cli_track_existing_name_reports_and_keeps_entry(tmp_path: Path, store: Path, fake_home: Path) -> None:
    first = tmp_path / "first"
    first.write_text("first\n")
    second = tmp_path / "second"
    second.write_text("second\n")

    _invoke(store, "track", "rc", str(first))
    result = _invoke(store, "track", "rc", str(second))

    assert result.exit_code == 0
    assert "already tracked" in result.stdout
    data = tomllib.loads((store / ".dot.toml").read_text())
    assert data["rc"]["path"] == str(first)


@pytest.mark.parametrize("command", ["export", "import"])
def test_cli_missing_entry_exits_non_zero(store: Path, fake_home: Path, command: str) -> None:
    result = _invoke(store, command, "ghost")

    assert result.exit_code == 1
    assert "No entry named 'ghost'" in result.stdout


def test_cli_track_directory_is_unsupported(tmp_path: Path, store: Path, fake_home: Path) -> None:
    directory = tmp_path / "nvim"
    directory.mkdir()

    result = _invoke(store, "track", "nvim", str(directory))

    assert result.exit_code == 1
    assert "Unsupported" in result.stdout
    assert list(Manifest.load(store / ".dot.toml", base_dir=store).entries()) == []


def test_cli_track_missing_file_fails(tmp_path: Path, store: Path, fake_home: Path) -> None:
    result = _invoke(store, "track", "ghost", str(tmp_path / "nope"))

    assert result.exit_code == 1
    assert "Failed to copy" in result.stdout


def test_cli_invalid_name(tmp_path: Path, store: Path, fake_home: Path) -> None:
    source = tmp_path / "rc"
    source.write_text("rc\n")

    result = _invoke(store, "track", "../escape", str(source))

    assert result.exit_code == 1
    assert "path separators" in result.stdout


def test_cli_untrack_purge(tmp_path: Path, store: Path, fake_home: Path) -> None:
    source = tmp_path / "rc"
    source.write_text("rc\n")
    _invoke(store, "track", "rc", str(source))

    result = _invoke(store, "untrack", "rc", "--purge")

    assert result.exit_code == 0
    assert "deleted its stored copy" in result.stdout
    assert not (store / "rc").exists()


def test_cli_untrack_unknown_name_is_not_an_error(store: Path, fake_home: Path) -> None:
    result = _invoke(store, "untrack", "ghost")

    assert result.exit_code == 0
    assert "was not tracked" in result.stdout


def test_cli_list_long(tmp_path: Path, store: Path, fake_home: Path) -> None:
    source = tmp_path / "rc"
    source.write_text("rc\n")
    _invoke(store, "track", "rc", str(source))

    result = _invoke(store, "list", "--long")

    assert result.exit_code == 0
    assert "Name" in result.stdout
    assert "rc" in result.stdout


def test_cli_uses_environment_overrides(tmp_path: Path, store: Path, fake_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = tmp_path / "rc"
    source.write_text("rc\n")
    monkeypatch.setenv("DOT_STORE", str(store))

    result = runner.invoke(app, ["track", "rc", str(source)])

    assert result.exit_code == 0
    assert (store / "rc").read_text() == "rc\n"
    assert "rc" in tomllib.loads((store / ".dot.toml").read_text())


def test_cli_unusable_manifest_location_exits_non_zero(tmp_path: Path, fake_home: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    result = runner.invoke(
        app,
        ["--manifest", str(blocker / "manifest.toml"), "--store", str(tmp_path / "store"), "list"],
    )

    assert result.exit_code == 1
    assert "Failed to create manifest directory" in result.stdout


def test_cli_handles_permission_error(monkeypatch: pytest.MonkeyPatch, store: Path, fake_home: Path) -> None:
    class DummyManager:
        def export(self, *_args, **_kwargs):  # noqa: ANN001
            raise PermissionError("mocked")

    monkeypatch.setattr("dottrack.cli._load_manager", lambda _ctx: DummyManager())

    result = _invoke(store, "export", "rc")
    assert result.exit_code == 1
    assert "Permission denied" in result.stdout


def test_cli_lists_names_verbatim(tmp_path: Path, store: Path, fake_home: Path) -> None:
    source = tmp_path / "x"
    source.write_text("x\n")

    track_result = _invoke(store, "track", ":smile:", str(source))
    assert track_result.exit_code == 0
    assert "Tracked ':smile:'" in track_result.stdout

    list_result = _invoke(store, "list")
    assert list_result.stdout.splitlines() == [":smile:"]

    long_result = _invoke(store, "list", "--long")
    assert ":smile:" in long_result.stdout


def test_cli_rejects_name_of_manifest_file(tmp_path: Path, store: Path, fake_home: Path) -> None:
    source = tmp_path / "x"
    source.write_bytes(b"USER BYTES\n")

    result = _invoke(store, "track", ".dot.toml", str(source))

    assert result.exit_code == 1
    assert "would overwrite the manifest" in result.stdout
    assert (store / ".dot.toml").read_bytes() == b""


def test_cli_save_failure_exits_non_zero(tmp_path: Path, store: Path, fake_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = tmp_path / "rc"
    source.write_text("rc\n")
    _invoke(store, "track", "rc", str(source))
    manifest_path = store / ".dot.toml"
    original_open = Path.open

    def guarded_open(self: Path, mode: str = "r", *args, **kwargs):  # noqa: ANN002, ANN003
        if self == manifest_path and "w" in mode:
            raise OSError(errno.EROFS, "Read-only file system")
        return original_open(self, mode, *args, **kwargs)

    monkeypatch.setattr(Path, "open", guarded_open)

    result = _invoke(store, "untrack", "rc")

    assert result.exit_code == 1
    assert "Failed to save manifest" in result.stdout
