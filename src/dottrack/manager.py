"""High level orchestration for dottrack operations."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .config import Settings
from .errors import UnsupportedOperationError
from .manifest import Manifest
from .models import Entry, TrackResult, TransferDirection, TransferResult, UntrackResult
from .transfer import copy_file

logger = logging.getLogger(__name__)


class DotManager:
    """Runs a single operation against the manifest for one invocation."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.manifest = Manifest.load(settings.manifest_path, base_dir=settings.base_dir)

    def track(self, name: str, path: Path | str) -> TrackResult:
        source = Path(os.path.abspath(Path(path).expanduser()))
        result = self.manifest.add_entry(name, source)
        logger.debug("track %s: %s", name, result.action.value)
        return result

    def untrack(self, name: str, *, purge: bool = False) -> UntrackResult:
        return self.manifest.drop_entry(name, purge=purge)

    def export(self, name: str) -> TransferResult:
        entry = self.manifest.require(name)
        return self._transfer(entry, entry.stored_path, entry.original_path, TransferDirection.EXPORT)

    def import_(self, name: str) -> TransferResult:
        entry = self.manifest.require(name)
        return self._transfer(entry, entry.original_path, entry.stored_path, TransferDirection.IMPORT)

    def names(self) -> list[str]:
        return self.manifest.names()

    def entries(self) -> list[Entry]:
        return list(self.manifest.entries())

    # ------------------------------------------------------------------
    # Internal helpers

    def _transfer(
        self,
        entry: Entry,
        source: Path,
        destination: Path,
        direction: TransferDirection,
    ) -> TransferResult:
        if entry.is_directory:
            raise UnsupportedOperationError(f"Entry '{entry.name}' is a directory; directory transfers are not supported yet")
        copy_file(source, destination, entry.is_directory)
        return TransferResult(entry=entry, source=source, destination=destination, direction=direction)
