from itertools import product
from pathlib import Path, PurePath

import pytest

from frz.search.data import OsFs, SearchData
from frz.search.rows import AttributeRow, FileRow


class StaticFs:
    def __init__(self, entries):
        self.entries = [PurePath(entry) for entry in entries]

    def walk(self, root):
        return iter(self.entries)


class HugeFs:
    def __init__(self, branching, depth):
        self.branching = branching
        self.depth = depth

    def walk(self, root):
        for indices in product(range(self.branching), repeat=self.depth):
            parts = [f"n{level}_{idx}" for level, idx in enumerate(indices)]
            yield PurePath(*parts, "node.txt")


def _walked(root):
    return {path.as_posix() for path in OsFs().walk(root)}


def test_builder_methods_replace_data():
    attributes = [AttributeRow("tag", 1)]
    files = [FileRow("file", [])]
    data = (
        SearchData()
        .with_context("context")
        .with_initial_query("query")
        .with_attributes(attributes)
        .with_files(files)
    )
    assert data.context_label == "context"
    assert data.initial_query == "query"
    assert data.attributes[0].name == "tag"
    assert data.files[0].path == "file"


def test_collects_files_from_static_fs():
    fs = StaticFs(["a/b.txt", "x/y.rs", "notes.md"])
    data = SearchData.from_filesystem_with(fs, Path("/virtual"))
    assert data.context_label == str(Path("/virtual"))
    assert len(data.files) == 3
    assert data.files[0].path == "a/b.txt"
    assert any(attr.name == "*.txt" for attr in data.attributes)
    assert any(attr.name == "a" for attr in data.attributes)


def test_attribute_counts_are_sorted_and_counted():
    fs = StaticFs(["a/one.txt", "a/two.txt", "b/three.rs"])
    data = SearchData.from_filesystem_with(fs, Path("/virtual"))
    assert [(a.name, a.count) for a in data.attributes] == [
        ("*.rs", 1),
        ("*.txt", 2),
        ("a", 2),
        ("b", 1),
    ]


def test_walks_tempdir_fixture(tmp_path):
    (tmp_path / "a" / "b").mkdir(parents=True)
    (tmp_path / "a" / "b" / "file.txt").write_bytes(b"hello")
    (tmp_path / "x" / "y" / "z").mkdir(parents=True)
    (tmp_path / "x" / "y" / "z" / "another.rs").write_bytes(b"fn main() {}")

    data = SearchData.from_filesystem(tmp_path)

    assert any(f.path.endswith("file.txt") for f in data.files)
    assert any(attr.name == "*.txt" for attr in data.attributes)
    assert any(attr.name == "a" for attr in data.attributes)
    assert data.root == tmp_path


def test_synthetic_huge_tree():
    data = SearchData.from_filesystem_with(HugeFs(10, 4), Path("/"))
    assert len(data.files) == 10**4
    assert data.files[0].path.startswith("n0_0")
    assert any(attr.name == "*.txt" for attr in data.attributes)
    assert any(attr.name == "n0_0" for attr in data.attributes)


def test_stress_filesystem(tmp_path):
    for d in range(200):
        dir_path = tmp_path / f"d{d:04}"
        dir_path.mkdir()
        for f in range(50):
            (dir_path / f"f{f:04}.txt").write_bytes(b"")
    data = SearchData.from_filesystem(tmp_path)
    assert len(data.files) >= 10_000


def test_resolve_file_path_joins_root_for_relative_paths():
    data = SearchData().with_root("/root")
    file = FileRow.filesystem("dir/file.txt", [])
    assert data.resolve_file_path(file) == Path("/root/dir/file.txt")


def test_resolve_file_path_preserves_absolute_paths():
    data = SearchData()
    absolute = Path("/tmp/file.txt").resolve()
    file = FileRow.filesystem(str(absolute), [])
    assert data.resolve_file_path(file) == absolute


def test_files_are_sorted_by_path(tmp_path):
    for name in ["c.txt", "a.txt", "b.txt"]:
        (tmp_path / name).write_text("x")
    data = SearchData.from_filesystem(tmp_path)
    assert [f.path for f in data.files] == ["a.txt", "b.txt", "c.txt"]


def test_gitignore_respected_inside_repository(tmp_path):
    (tmp_path / ".git").mkdir()
    (tmp_path / ".gitignore").write_text("*.zzlog\nbuild/\n!keep.zzlog\n")
    (tmp_path / "a.zzlog").write_text("x")
    (tmp_path / "keep.zzlog").write_text("x")
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "out.txt").write_text("x")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.rs").write_text("x")

    walked = _walked(tmp_path)

    assert "src/main.rs" in walked
    assert "keep.zzlog" in walked
    assert ".gitignore" in walked
    assert "a.zzlog" not in walked
    assert "build/out.txt" not in walked


def test_gitignore_ignored_outside_repository(tmp_path):
    (tmp_path / ".gitignore").write_text("*.zzlog\n")
    (tmp_path / "a.zzlog").write_text("x")
    assert "a.zzlog" in _walked(tmp_path)


def test_ignore_file_applies_without_repository(tmp_path):
    (tmp_path / ".ignore").write_text("secret_dir/\n")
    (tmp_path / "secret_dir").mkdir()
    (tmp_path / "secret_dir" / "f.txt").write_text("x")
    (tmp_path / "visible.txt").write_text("x")
    walked = _walked(tmp_path)
    assert "visible.txt" in walked
    assert "secret_dir/f.txt" not in walked


def test_anchored_pattern_only_matches_at_root(tmp_path):
    (tmp_path / ".ignore").write_text("/top.txt\n")
    (tmp_path / "top.txt").write_text("x")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "top.txt").write_text("x")
    walked = _walked(tmp_path)
    assert "top.txt" not in walked
    assert "sub/top.txt" in walked


def test_nested_ignore_file_applies_to_its_directory(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / ".ignore").write_text("*.tmp\n")
    (tmp_path / "sub" / "x.tmp").write_text("x")
    (tmp_path / "y.tmp").write_text("x")
    walked = _walked(tmp_path)
    assert "sub/x.tmp" not in walked
    assert "y.tmp" in walked


def test_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        SearchData.from_filesystem(tmp_path / "missing")