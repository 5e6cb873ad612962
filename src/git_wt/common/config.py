"""Persisted layout settings for worktree placement."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from git_wt.common.errors import ConfigError
from git_wt.common.logging_config import get_logger

logger = get_logger(__name__)

DIRECTORY_FORMAT_SUBDIRECTORY = "subdirectory"
DIRECTORY_FORMAT_SIBLING = "sibling"
DIRECTORY_FORMATS = (DIRECTORY_FORMAT_SUBDIRECTORY, DIRECTORY_FORMAT_SIBLING)

PICKERS = ("auto", "fzf", "inquirer", "prompt")

DEFAULT_DIRECTORY_FORMAT = DIRECTORY_FORMAT_SUBDIRECTORY
DEFAULT_SUBDIRECTORY_PREFIX = "."
DEFAULT_SUBDIRECTORY_SUFFIX = "-wt"
DEFAULT_PICKER = "auto"

# Dotted keys exposed by `wt config`, mapped to LayoutSettings attributes
CONFIG_KEYS: dict[str, str] = {
    "worktree.directory_format": "directory_format",
    "worktree.subdirectory_prefix": "subdirectory_prefix",
    "worktree.subdirectory_suffix": "subdirectory_suffix",
    "ui.picker": "picker",
}


@dataclass
class LayoutSettings:
    """Worktree layout settings with validation."""

    directory_format: str = DEFAULT_DIRECTORY_FORMAT
    subdirectory_prefix: str = DEFAULT_SUBDIRECTORY_PREFIX
    subdirectory_suffix: str = DEFAULT_SUBDIRECTORY_SUFFIX
    picker: str = DEFAULT_PICKER

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        self._validate_directory_format()
        self._validate_subdirectory_suffix()
        self._validate_picker()

    def _validate_directory_format(self) -> None:
        if self.directory_format not in DIRECTORY_FORMATS:
            raise ConfigError(
                f"Invalid directory_format: {self.directory_format!r} "
                f"(must be {DIRECTORY_FORMAT_SUBDIRECTORY!r} "
                f"or {DIRECTORY_FORMAT_SIBLING!r})"
            )

    def _validate_subdirectory_suffix(self) -> None:
        suffix = self.subdirectory_suffix
        if suffix and not suffix.startswith("-"):
            raise ConfigError(
                f"subdirectory_suffix must start with '-', got {suffix!r}"
            )

    def _validate_picker(self) -> None:
        if self.picker not in PICKERS:
            raise ConfigError(
                f"Invalid picker: {self.picker!r} (must be one of {', '.join(PICKERS)})"
            )

    @property
    def is_subdirectory(self) -> bool:
        return self.directory_format == DIRECTORY_FORMAT_SUBDIRECTORY

    def container_name(self, project_name: str) -> str:
        """Name of the directory that holds worktrees in subdirectory mode."""
        return f"{self.subdirectory_prefix}{project_name}{self.subdirectory_suffix}"

    def get(self, key: str) -> str:
        """Get a value by its dotted config key."""
        attr = CONFIG_KEYS.get(key)
        if attr is None:
            raise ConfigError(f"Unknown config key: {key}")
        return str(getattr(self, attr))

    def with_value(self, key: str, value: str) -> LayoutSettings:
        """Return a copy with one dotted key changed, validated."""
        attr = CONFIG_KEYS.get(key)
        if attr is None:
            raise ConfigError(f"Unknown config key: {key}")
        data = self.to_dict()
        section, name = key.split(".", 1)
        data[section][name] = value
        return settings_from_dict(data)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            "worktree": {
                "directory_format": self.directory_format,
                "subdirectory_prefix": self.subdirectory_prefix,
                "subdirectory_suffix": self.subdirectory_suffix,
            },
            "ui": {"picker": self.picker},
        }


def settings_from_dict(data: dict[str, Any]) -> LayoutSettings:
    """Build settings from the parsed YAML mapping, filling in defaults."""
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping")

    worktree = data.get("worktree") or {}
    ui = data.get("ui") or {}
    if not isinstance(worktree, dict) or not isinstance(ui, dict):
        raise ConfigError("Config sections 'worktree' and 'ui' must be mappings")

    # A null prefix/suffix in YAML means "empty", not "default"
    prefix = worktree.get("subdirectory_prefix", DEFAULT_SUBDIRECTORY_PREFIX)
    suffix = worktree.get("subdirectory_suffix", DEFAULT_SUBDIRECTORY_SUFFIX)

    return LayoutSettings(
        directory_format=str(
            worktree.get("directory_format", DEFAULT_DIRECTORY_FORMAT)
        ),
        subdirectory_prefix="" if prefix is None else str(prefix),
        subdirectory_suffix="" if suffix is None else str(suffix),
        picker=str(ui.get("picker", DEFAULT_PICKER)),
    )


def default_config_path() -> Path:
    """Get the config file path.

    WT_CONFIG wins, then $XDG_CONFIG_HOME/wt/config.yaml,
    then ~/.config/wt/config.yaml.
    """
    override = os.environ.get("WT_CONFIG")
    if override:
        return Path(override).expanduser()

    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "wt" / "config.yaml"
    return Path.home() / ".config" / "wt" / "config.yaml"


def load_settings(path: Path | None = None) -> LayoutSettings:
    """Load settings from a YAML file, or defaults if it doesn't exist.

    Raises ConfigError if the file can't be read, parsed or validated.
    """
    if path is None:
        path = default_config_path()

    if not path.exists():
        logger.debug("Config file %s not found, using defaults", path)
        return LayoutSettings()

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file {path}: {e}") from e

    return settings_from_dict(raw)


def load_settings_or_default(path: Path | None = None) -> LayoutSettings:
    """Load settings, falling back to defaults when the file is unusable."""
    try:
        return load_settings(path)
    except ConfigError as e:
        logger.warning("%s; using default settings", e)
        return LayoutSettings()


def save_settings(settings: LayoutSettings, path: Path | None = None) -> Path:
    """Validate and write settings as YAML. Returns the path written."""
    if path is None:
        path = default_config_path()

    # Fields may have been mutated since construction
    settings.__post_init__()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(settings.to_dict(), f, default_flow_style=False)
    except OSError as e:
        raise ConfigError(f"Failed to write config file {path}: {e}") from e
    return path


def reset_settings(path: Path | None = None) -> bool:
    """Remove the config file. Returns True if a file was removed."""
    if path is None:
        path = default_config_path()

    if not path.exists():
        return False
    try:
        path.unlink()
    except OSError as e:
        raise ConfigError(f"Failed to remove config file {path}: {e}") from e
    return True
