"""Manifest persistence for dottrack."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, StrictBool, StrictStr, ValidationError
from tomli_w import dump as toml_dump

from .errors import EntryNotFoundError, InvalidEntryNameError, ManifestError, UnsupportedOperationError
from .models import Entry, TrackAction, TrackResult, UntrackAction, UntrackResult
from .transfer import copy_file, remove_path

logger = logging.getLogger(__name__)


class EntryRecord(BaseModel):
    """On-disk shape of a single manifest table."""

    local_file: StrictStr
    path: StrictStr
    dir: StrictBool

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryRecord":
        return cls(local_file=str(entry.stored_path), path=str(entry.original_path), dir=entry.is_directory)

    def to_entry(self, name: str) -> Entry:
        return Entry(
            name=name,
            original_path=Path(self.path),
            stored_path=Path(self.local_file),
            is_directory=self.dir,
        )


def _ensure_exists(path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ManifestError(f"Failed to create manifest directory '{path.parent}': {exc}") from exc

    try:
        path.touch(exist_ok=True)
    except OSError as exc:
        logger.debug("Could not create manifest file '%s': %s", path, exc)


def validate_name(name: str) -> None:
    """Reject names that would not map to a single file under the storage directory."""

    if not name or name in {".", ".."}:
        raise InvalidEntryNameError(f"'{name}' is not a valid entry name")
    if "/" in name or "\\" in name or "\0" in name:
        raise InvalidEntryNameError(f"Entry name '{name}' must not contain path separators")


class Manifest:
    """Tracks the mapping from names to stored copies."""

    def __init__(self, path: Path, base_dir: Path, entries: dict[str, Entry] | None = None) -> None:
        self.path = path
        self.base_dir = base_dir
        self._entries: dict[str, Entry] = entries or {}

    @classmethod
    def load(cls, path: Path, *, base_dir: Path) -> "Manifest":
        """Load the manifest at ``path``, falling back to an empty one.

        The file and its parent directories are created when missing. A file
        that cannot be read, is not valid TOML, or does not match the entry
        schema produces an empty manifest; the reason is logged. Only a
        failure to create the parent directories is raised.
        """

        _ensure_exists(path)

        try:
            with path.open("rb") as handle:
                data = tomllib.load(handle)
            entries = {name: EntryRecord.model_validate(raw).to_entry(name) for name, raw in data.items()}
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError, ValidationError) as exc:
            logger.warning("Ignoring unreadable manifest '%s', starting empty: %s", path, exc)
            entries = {}

        logger.debug("Loaded %d entries from '%s'", len(entries), path)
        return cls(path, base_dir, entries)

    def save(self) -> None:
        _ensure_exists(self.path)
        payload = {
            name: EntryRecord.from_entry(entry).model_dump() for name, entry in self._entries.items()
        }
        try:
            with self.path.open("wb") as handle:
                toml_dump(payload, handle)
        except OSError as exc:
            raise ManifestError(f"Failed to save manifest '{self.path}': {exc}") from exc

    def entry(self, name: str) -> Entry | None:
        return self._entries.get(name)

    def require(self, name: str) -> Entry:
        entry = self._entries.get(name)
        if entry is None:
            raise EntryNotFoundError(name)
        return entry

    def stored_path_for(self, name: str) -> Path:
        return self.base_dir / name

    def add_entry(self, name: str, original_path: Path) -> TrackResult:
        """Copy ``original_path`` into storage and record it under ``name``.

        Adding a name that is already tracked leaves the existing entry as it
        is and copies nothing. The copy runs before the entry is recorded, so
        a failed copy never leaves an entry behind.
        """

        existing = self._entries.get(name)
        if existing is not None:
            return TrackResult(entry=existing, action=TrackAction.ALREADY_TRACKED)

        validate_name(name)
        stored_path = self.stored_path_for(name)
        if stored_path.resolve(strict=False) == self.path.resolve(strict=False):
            raise InvalidEntryNameError(f"Entry name '{name}' would overwrite the manifest '{self.path}'")
        is_directory = original_path.is_dir()
        copy_file(original_path, stored_path, is_directory)

        entry = Entry(
            name=name,
            original_path=original_path,
            stored_path=stored_path,
            is_directory=is_directory,
        )
        self._entries[name] = entry
        self.save()
        return TrackResult(entry=entry, action=TrackAction.TRACKED)

    def drop_entry(self, name: str, *, purge: bool = False) -> UntrackResult:
        """Forget ``name`` and save.

        The stored copy stays on disk unless ``purge`` is set.
        """

        entry = self._entries.get(name)
        if entry is not None and purge:
            self._check_purgeable(entry)

        self._entries.pop(name, None)
        self.save()

        if entry is None:
            return UntrackResult(name=name, action=UntrackAction.NOT_TRACKED)

        purged = remove_path(entry.stored_path, recursive=entry.is_directory) if purge else False
        return UntrackResult(name=name, action=UntrackAction.REMOVED, purged=purged)

    def _check_purgeable(self, entry: Entry) -> None:
        stored = entry.stored_path.resolve(strict=False)
        base = self.base_dir.resolve(strict=False)
        if base not in stored.parents:
            raise ManifestError(f"Refusing to delete '{entry.stored_path}' outside the storage directory '{self.base_dir}'")
        if stored == self.path.resolve(strict=False):
            raise ManifestError(f"Refusing to delete the manifest '{self.path}'")
        if stored.is_dir() and not entry.is_directory:
            raise UnsupportedOperationError(f"Stored copy '{entry.stored_path}' is a directory but '{entry.name}' is tracked as a file")

    def names(self) -> list[str]:
        return sorted(self._entries, key=str.casefold)

    def entries(self) -> Iterable[Entry]:
        return [self._entries[name] for name in self.names()]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
