"""Core package for the dottrack project."""

from .cli import app, run
from .config import ConfigError, Settings
from .errors import (
    DotError,
    EntryNotFoundError,
    InvalidEntryNameError,
    ManifestError,
    TransferError,
    UnsupportedOperationError,
)
from .manager import DotManager
from .manifest import Manifest
from .models import (
    Entry,
    TrackAction,
    TrackResult,
    TransferDirection,
    TransferResult,
    UntrackAction,
    UntrackResult,
)

__all__ = [
    "Settings",
    "ConfigError",
    "DotError",
    "EntryNotFoundError",
    "InvalidEntryNameError",
    "ManifestError",
    "TransferError",
    "UnsupportedOperationError",
    "DotManager",
    "Manifest",
    "Entry",
    "TrackAction",
    "TrackResult",
    "TransferDirection",
    "TransferResult",
    "UntrackAction",
    "UntrackResult",
    "app",
    "run",
]
