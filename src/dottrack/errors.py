"""Error types raised by dottrack."""

from __future__ import annotations


class DotError(RuntimeError):
    """Raised when dottrack encounters an unrecoverable state."""


class ManifestError(DotError):
    """Raised when the manifest file cannot be created or written."""


class EntryNotFoundError(DotError):
    """Raised when a name is not tracked in the manifest."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No entry named '{name}' is tracked")
        self.name = name


class UnsupportedOperationError(DotError):
    """Raised for transfers dottrack does not implement, such as directories."""


class TransferError(DotError):
    """Raised when copying a file between disk and storage fails."""


class InvalidEntryNameError(DotError):
    """Raised when a name cannot be used as a storage file name."""
