"""Config file locations, value clean-up, and where settings came from."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from frz import app_dirs


def sanitize_extensions(values: list[str]) -> list[str]:
    """Normalise file extensions and drop empties and duplicates, keeping order."""
    cleaned: list[str] = []
    seen: set[str] = set()
    for value in values:
        normalized = value.strip().lstrip(".").lower()
        if normalized and normalized not in seen:
            seen.add(normalized)
            cleaned.append(normalized)
    return cleaned


def sanitize_headers(headers: list[str]) -> list[str]:
    """Trim headers and drop the empty ones."""
    return [stripped for stripped in (header.strip() for header in headers) if stripped]


def default_title_for(root: str | os.PathLike[str]) -> str:
    """Default UI title for a root: shortened with ``~`` when under HOME."""
    path = Path(root)
    home = os.environ.get("HOME")
    if home is not None:
        try:
            relative = path.relative_to(Path(home))
        except ValueError:
            pass
        else:
            if not relative.parts:
                return "~"
            return f"~{os.sep}{relative}"
    return str(path)


def default_config_files() -> list[Path]:
    """Default configuration files to consult, in order."""
    files: list[Path] = []
    try:
        files.append(app_dirs.get_config_dir() / "config.toml")
    except (OSError, RuntimeError):
        pass
    try:
        current = Path.cwd()
    except OSError:
        return files
    files.append(current / ".frz.toml")
    files.append(current / "frz.toml")
    return files


class SourceKind(Enum):
    """Kind of place a setting came from."""

    CLI_FLAG = "cli_flag"
    ENVIRONMENT = "environment"
    CONFIG_KEY = "config_key"


@dataclass(frozen=True)
class SettingSource:
    """Where a setting's value came from: a flag, a variable or a config key."""

    kind: SourceKind
    name: str

    def __str__(self) -> str:
        if self.kind is SourceKind.CLI_FLAG:
            return f"CLI flag `{self.name}`"
        if self.kind is SourceKind.ENVIRONMENT:
            return f"environment variable `{self.name}`"
        return f"configuration key `{self.name}`"


@dataclass
class ConfigSources:
    """Origins of the settings that validation may complain about."""

    filesystem_threads: SettingSource | None = None
    filesystem_max_depth: SettingSource | None = None

    def source_for_threads(self) -> SettingSource:
        return self.filesystem_threads or SettingSource(
            SourceKind.CONFIG_KEY, "filesystem.threads"
        )

    def source_for_max_depth(self) -> SettingSource:
        return self.filesystem_max_depth or SettingSource(
            SourceKind.CONFIG_KEY, "filesystem.max_depth"
        )


class ConfigError(ValueError):
    """A configuration value is invalid."""

    def __init__(self, key: str, value: str, origin: SettingSource, reason: str) -> None:
        self.key = key
        self.value = str(value)
        self.origin = origin
        self.reason = reason
        super().__init__(
            f"invalid value for {key} from {origin}: {reason} (value: {self.value})"
        )