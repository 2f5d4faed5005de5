"""Filesystem settings, the resolved configuration, its validation and summary."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from frz.plugins.descriptors import SearchMode
from frz.settings.sources import (
    ConfigError,
    ConfigSources,
    SettingSource,
    SourceKind,
    sanitize_extensions,
)


@dataclass
class FilesystemOptions:
    """Options controlling how the filesystem is scanned."""

    include_hidden: bool = True
    follow_symlinks: bool = False
    respect_ignore_files: bool = True
    git_ignore: bool = True
    git_global: bool = True
    git_exclude: bool = True
    threads: int | None = None
    max_depth: int | None = None
    allowed_extensions: list[str] | None = None
    context_label: str | None = None
    global_ignores: list[str] = field(default_factory=list)


# (attribute on the CLI arguments, attribute on the section)
_CLI_FIELDS = (
    ("root", "root"),
    ("hidden", "include_hidden"),
    ("follow_symlinks", "follow_symlinks"),
    ("respect_ignore_files", "respect_ignore_files"),
    ("git_ignore", "git_ignore"),
    ("git_global", "git_global"),
    ("git_exclude", "git_exclude"),
    ("threads", "threads"),
    ("max_depth", "max_depth"),
    ("extensions", "allowed_extensions"),
    ("global_ignores", "global_ignores"),
    ("context_label", "context_label"),
)


@dataclass
class FilesystemSection:
    """Filesystem settings as read from configuration, before defaults."""

    root: Path | None = None
    include_hidden: bool | None = None
    follow_symlinks: bool | None = None
    respect_ignore_files: bool | None = None
    git_ignore: bool | None = None
    git_global: bool | None = None
    git_exclude: bool | None = None
    threads: int | None = None
    max_depth: int | None = None
    allowed_extensions: list[str] | None = None
    global_ignores: list[str] | None = None
    context_label: str | None = None

    def apply_cli_overrides(self, cli: Any) -> None:
        """Overwrite each setting that the command line gave a value for."""
        for cli_name, name in _CLI_FIELDS:
            value = getattr(cli, cli_name, None)
            if value is None:
                continue
            if isinstance(value, list):
                value = list(value)
            elif name == "root":
                value = Path(value)
            setattr(self, name, value)

    def resolve(self) -> tuple[Path, FilesystemOptions]:
        """Resolve the root directory and fill in defaults.

        Raises OSError if the root cannot be found and NotADirectoryError if
        it is not a directory.
        """
        root = Path(self.root) if self.root is not None else Path.cwd()
        if not root.is_absolute():
            root = Path.cwd() / root
        try:
            canonical = root.resolve(strict=True)
        except OSError as err:
            raise FileNotFoundError(
                f"failed to canonicalize filesystem root {root}: {err}"
            ) from err
        if not canonical.is_dir():
            raise NotADirectoryError("filesystem root must be a directory")

        extensions = (
            sanitize_extensions(self.allowed_extensions)
            if self.allowed_extensions is not None
            else None
        )
        options = FilesystemOptions(
            include_hidden=_or(self.include_hidden, True),
            follow_symlinks=_or(self.follow_symlinks, False),
            respect_ignore_files=_or(self.respect_ignore_files, True),
            git_ignore=_or(self.git_ignore, True),
            git_global=_or(self.git_global, True),
            git_exclude=_or(self.git_exclude, True),
            threads=self.threads,
            max_depth=self.max_depth,
            allowed_extensions=extensions or None,
            context_label=self.context_label,
            global_ignores=list(self.global_ignores or []),
        )
        return canonical, options


def _or(value: bool | None, default: bool) -> bool:
    return default if value is None else value


def detect_source(
    cli_present: bool,
    value_present: bool,
    env_var: str,
    cli_flag: str,
    key: str,
) -> SettingSource | None:
    """Work out where a present setting came from: flag, environment or file."""
    if not value_present:
        return None
    if cli_present:
        return SettingSource(SourceKind.CLI_FLAG, cli_flag)
    if env_var in os.environ:
        return SettingSource(SourceKind.ENVIRONMENT, env_var)
    return SettingSource(SourceKind.CONFIG_KEY, key)


def bool_to_word(value: bool) -> str:
    return "yes" if value else "no"


@dataclass
class ResolvedConfig:
    """Application-ready configuration."""

    root: Path
    filesystem: FilesystemOptions = field(default_factory=FilesystemOptions)
    input_title: str | None = None
    initial_query: str = ""
    theme: str | None = None
    start_mode: SearchMode | None = None
    ui: Any = None
    facet_headers: list[str] | None = None
    file_headers: list[str] | None = None

    def validate(self, sources: ConfigSources) -> None:
        """Raise ConfigError if a setting has an invalid value."""
        validate(self, sources)

    def summary(self) -> str:
        """Return a human readable summary of the effective configuration."""
        fs = self.filesystem
        lines = [
            "Effective configuration:",
            f"  Root: {self.root}",
            f"  Include hidden: {bool_to_word(fs.include_hidden)}",
            f"  Follow symlinks: {bool_to_word(fs.follow_symlinks)}",
            f"  Respect ignore files: {bool_to_word(fs.respect_ignore_files)}",
            f"  Git ignore: {bool_to_word(fs.git_ignore)}",
            f"  Git global: {bool_to_word(fs.git_global)}",
            f"  Git exclude: {bool_to_word(fs.git_exclude)}",
            f"  Max depth: {fs.max_depth if fs.max_depth is not None else 'unlimited'}",
        ]
        if fs.allowed_extensions:
            lines.append(f"  Allowed extensions: {', '.join(fs.allowed_extensions)}")
        else:
            lines.append("  Allowed extensions: (all)")
        if fs.threads is not None:
            lines.append(f"  Threads: {fs.threads}")
        if fs.context_label is not None:
            lines.append(f"  Context label: {fs.context_label}")
        if fs.global_ignores:
            lines.append(f"  Global ignores: {', '.join(fs.global_ignores)}")
        lines.append(
            f"  UI theme: {self.theme if self.theme is not None else '(use the library default)'}"
        )
        start = self.start_mode.id() if self.start_mode is not None else "(auto)"
        lines.append(f"  Start mode: {start}")
        if self.input_title is not None:
            lines.append(f"  Prompt title: {self.input_title}")
        if self.initial_query:
            lines.append(f"  Initial query: {self.initial_query}")
        if self.facet_headers is not None:
            lines.append(f"  attribute headers: {', '.join(self.facet_headers)}")
        if self.file_headers is not None:
            lines.append(f"  File headers: {', '.join(self.file_headers)}")
        return "\n".join(lines)

    def print_summary(self) -> None:
        """Print the summary of the effective configuration."""
        print(self.summary())


def validate(config: ResolvedConfig, sources: ConfigSources) -> None:
    """Raise ConfigError for a zero thread count or a zero maximum depth."""
    threads = config.filesystem.threads
    if threads is not None and threads == 0:
        raise ConfigError(
            "filesystem.threads",
            str(threads),
            sources.source_for_threads(),
            "must be greater than zero",
        )
    max_depth = config.filesystem.max_depth
    if max_depth is not None and max_depth == 0:
        raise ConfigError(
            "filesystem.max_depth",
            str(max_depth),
            sources.source_for_max_depth(),
            "must be at least 1",
        )