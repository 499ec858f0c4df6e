"""Shared models and enums for dottrack."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Entry:
    """A tracked file and the location of its stored copy."""

    name: str
    original_path: Path
    stored_path: Path
    is_directory: bool = False


class TrackAction(str, Enum):
    """Outcome of tracking a name."""

    TRACKED = "tracked"
    ALREADY_TRACKED = "already_tracked"


@dataclass(frozen=True, slots=True)
class TrackResult:
    entry: Entry
    action: TrackAction


class UntrackAction(str, Enum):
    """Outcome of untracking a name."""

    REMOVED = "removed"
    NOT_TRACKED = "not_tracked"


@dataclass(frozen=True, slots=True)
class UntrackResult:
    name: str
    action: UntrackAction
    purged: bool = False


class TransferDirection(str, Enum):
    """Which way a copy runs between disk and storage."""

    EXPORT = "export"
    IMPORT = "import"


@dataclass(frozen=True, slots=True)
class TransferResult:
    """Result emitted after copying an entry."""

    entry: Entry
    source: Path
    destination: Path
    direction: TransferDirection
