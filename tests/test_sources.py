import os
from pathlib import Path

import pytest

from frz.settings.sources import (
    ConfigError,
    ConfigSources,
    SettingSource,
    SourceKind,
    default_config_files,
    default_title_for,
    sanitize_extensions,
    sanitize_headers,
)


def test_extensions_are_cleaned_and_deduplicated():
    assert sanitize_extensions([" .RS ", "rs", "", ".Txt"]) == ["rs", "txt"]


def test_headers_are_trimmed_and_filtered():
    assert sanitize_headers([" foo ", "", "bar"]) == ["foo", "bar"]


def test_default_title_prefers_home_relative_paths(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    inside = tmp_path / "projects" / "foo"
    title = default_title_for(inside)
    assert title.startswith("~")
    assert title == f"~{os.sep}{Path('projects', 'foo')}"


def test_default_title_for_home_itself(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert default_title_for(tmp_path) == "~"


def test_default_title_outside_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    other = tmp_path / "elsewhere"
    assert default_title_for(other) == str(other)


def test_default_files_include_current_directory_variants():
    files = default_config_files()
    assert any(path.name == ".frz.toml" for path in files)
    assert any(path.name == "frz.toml" for path in files)


def test_default_files_start_with_config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("FRZ_CONFIG_DIR", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    files = default_config_files()
    assert files[0] == tmp_path / "config.toml"
    assert files[1:] == [Path.cwd() / ".frz.toml", Path.cwd() / "frz.toml"]


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        (SettingSource(SourceKind.CLI_FLAG, "--threads"), "CLI flag `--threads`"),
        (
            SettingSource(SourceKind.ENVIRONMENT, "FRZ__FILESYSTEM__THREADS"),
            "environment variable `FRZ__FILESYSTEM__THREADS`",
        ),
        (
            SettingSource(SourceKind.CONFIG_KEY, "filesystem.threads"),
            "configuration key `filesystem.threads`",
        ),
    ],
)
def test_setting_source_display(source, expected):
    assert str(source) == expected


def test_config_sources_fall_back_to_config_keys():
    sources = ConfigSources()
    assert sources.source_for_threads() == SettingSource(
        SourceKind.CONFIG_KEY, "filesystem.threads"
    )
    assert sources.source_for_max_depth() == SettingSource(
        SourceKind.CONFIG_KEY, "filesystem.max_depth"
    )


def test_config_sources_use_recorded_origin():
    flag = SettingSource(SourceKind.CLI_FLAG, "--max-depth")
    sources = ConfigSources(filesystem_max_depth=flag)
    assert sources.source_for_max_depth() is flag


def test_config_error_message():
    error = ConfigError(
        "filesystem.threads",
        "0",
        SettingSource(SourceKind.CLI_FLAG, "--threads"),
        "must be greater than zero",
    )
    assert error.key == "filesystem.threads"
    assert str(error) == (
        "invalid value for filesystem.threads from CLI flag `--threads`: "
        "must be greater than zero (value: 0)"
    )
    with pytest.raises(ValueError, match="value: 0"):
        raise error