"""Resolution of the storage directory and manifest location."""

from __future__ import annotations

import os
from pathlib import Path

import typer
from pydantic import BaseModel, ConfigDict

from .errors import DotError

APP_NAME = "dot"
DEFAULT_MANIFEST_FILENAME = ".dot.toml"


class ConfigError(DotError):
    """Raised when the manifest or storage location is unusable."""


def _expand_path(raw: str | os.PathLike[str] | Path) -> Path:
    """Return an absolute ``Path`` by expanding env vars and user segments."""

    expanded = Path(os.path.expandvars(str(raw))).expanduser()
    return Path(os.path.abspath(expanded))


def default_base_dir() -> Path:
    """Return the per-user config directory that holds stored copies."""

    return Path(typer.get_app_dir(APP_NAME))


class Settings(BaseModel):
    """Locations used for a single invocation."""

    model_config = ConfigDict(frozen=True)

    base_dir: Path
    manifest_path: Path

    @classmethod
    def resolve(
        cls,
        manifest: str | os.PathLike[str] | None = None,
        base_dir: str | os.PathLike[str] | None = None,
    ) -> "Settings":
        """Build settings from optional overrides.

        Args:
            manifest: Explicit manifest file. Defaults to ``.dot.toml`` inside the
                base directory.
            base_dir: Explicit storage directory. Defaults to the user's config
                directory for ``dot``.
        """

        base = _expand_path(base_dir) if base_dir is not None else default_base_dir()
        manifest_path = _expand_path(manifest) if manifest is not None else base / DEFAULT_MANIFEST_FILENAME

        if manifest_path.is_dir():
            raise ConfigError(f"Manifest path '{manifest_path}' is a directory")
        if base.exists() and not base.is_dir():
            raise ConfigError(f"Storage path '{base}' exists and is not a directory")

        return cls(base_dir=base, manifest_path=manifest_path)
