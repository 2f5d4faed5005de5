"""Search data shown in the interface, and the filesystem walker that fills it."""

from __future__ import annotations

import os
import re
from collections import Counter
from dataclasses import dataclass, field, replace
from pathlib import Path, PurePath
from typing import Iterable, Iterator, Protocol

from frz.search.rows import AttributeRow, FileRow, tags_for_relative_path


class _Walker(Protocol):
    def walk(self, root: Path) -> Iterable[str | PurePath]: ...


@dataclass
class SearchData:
    """Data displayed in the search interface: attributes and files."""

    context_label: str | None = None
    root: Path | None = None
    initial_query: str = ""
    attributes: list[AttributeRow] = field(default_factory=list)
    files: list[FileRow] = field(default_factory=list)

    def with_context(self, label: str) -> "SearchData":
        """Return a copy labelled with the current search context."""
        return replace(self, context_label=str(label))

    def with_root(self, root: str | os.PathLike[str]) -> "SearchData":
        """Return a copy whose relative file paths resolve against ``root``."""
        return replace(self, root=Path(root))

    def with_initial_query(self, query: str) -> "SearchData":
        """Return a copy with the query shown when the UI starts."""
        return replace(self, initial_query=str(query))

    def with_attributes(self, attributes: Iterable[AttributeRow]) -> "SearchData":
        """Return a copy with the attribute rows replaced."""
        return replace(self, attributes=list(attributes))

    def with_files(self, files: Iterable[FileRow]) -> "SearchData":
        """Return a copy with the file rows replaced."""
        return replace(self, files=list(files))

    def resolve_file_path(self, file: FileRow) -> Path:
        """Resolve a file row to a path on disk, joining the root when relative."""
        candidate = Path(file.path)
        if candidate.is_absolute() or self.root is None:
            return candidate
        return self.root / candidate

    @classmethod
    def from_filesystem(cls, root: str | os.PathLike[str]) -> "SearchData":
        """Build search data by walking the filesystem under ``root``.

        Raises OSError when the walk fails.
        """
        return cls.from_filesystem_with(OsFs(), root)

    @classmethod
    def from_filesystem_with(
        cls, fs: _Walker, root: str | os.PathLike[str]
    ) -> "SearchData":
        """Build search data from the relative paths a walker yields for ``root``."""
        root_path = Path(root)
        files: list[FileRow] = []
        counts: Counter[str] = Counter()

        for relative in fs.walk(root_path):
            display = str(relative).replace("\\", "/")
            row = FileRow.filesystem(display, tags_for_relative_path(relative))
            counts.update(row.tags)
            files.append(row)

        files.sort(key=lambda row: row.path)
        attributes = [AttributeRow(name, counts[name]) for name in sorted(counts)]

        return cls(
            context_label=str(root_path),
            root=root_path,
            initial_query="",
            attributes=attributes,
            files=files,
        )


@dataclass(frozen=True)
class _Rule:
    regex: re.Pattern[str]
    negated: bool
    dir_only: bool
    anchored: bool


def _glob_to_regex(glob: str) -> str:
    out: list[str] = []
    i = 0
    n = len(glob)
    while i < n:
        c = glob[i]
        if glob.startswith("**", i):
            at_start = i == 0 or glob[i - 1] == "/"
            after = i + 2
            if at_start and after == n:
                out.append(".*")
                i = after
                continue
            if at_start and glob[after] == "/":
                out.append("(?:.*/)?")
                i = after + 1
                continue
            out.append("[^/]*")
            i = after
            continue
        if c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "\\" and i + 1 < n:
            i += 1
            out.append(re.escape(glob[i]))
        elif c == "[":
            end = glob.find("]", i + 1)
            if end == -1:
                out.append(re.escape(c))
            else:
                content = glob[i + 1 : end]
                negate = content[:1] in ("!", "^")
                if negate:
                    content = content[1:]
                body = content.replace("\\", "\\\\").replace("[", "\\[")
                out.append(f"[{'^' if negate else ''}{body}]")
                i = end
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)


def _parse_line(line: str) -> _Rule | None:
    line = line.rstrip("\r\n")
    if not line or line.startswith("#"):
        return None
    pattern = line.rstrip(" ")
    if pattern.endswith("\\") and len(pattern) < len(line):
        pattern += " "
    negated = False
    if pattern.startswith("!"):
        negated = True
        pattern = pattern[1:]
    elif pattern.startswith("\\"):
        pattern = pattern[1:]
    dir_only = pattern.endswith("/")
    pattern = pattern.rstrip("/")
    if not pattern:
        return None
    anchored = "/" in pattern
    pattern = pattern.lstrip("/")
    if not pattern:
        return None
    return _Rule(re.compile(_glob_to_regex(pattern)), negated, dir_only, anchored)


class _IgnoreFile:
    """Rules of one ignore file, relative to the directory they apply from."""

    def __init__(self, base: Path, rules: list[_Rule]) -> None:
        self.base = base
        self.rules = rules

    @classmethod
    def load(cls, path: Path, base: Path) -> "_IgnoreFile | None":
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return None
        rules = [rule for rule in map(_parse_line, text.splitlines()) if rule]
        return cls(base, rules) if rules else None

    def decide(self, path: Path, is_dir: bool) -> bool | None:
        """Return True if ignored, False if whitelisted, None if no rule matched."""
        try:
            relative = path.relative_to(self.base).as_posix()
        except ValueError:
            return None
        for rule in reversed(self.rules):
            if rule.dir_only and not is_dir:
                continue
            target = relative if rule.anchored else path.name
            if rule.regex.fullmatch(target):
                return not rule.negated
        return None


def _find_repo_root(path: Path) -> Path | None:
    for candidate in (path, *path.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def _global_ignore_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "git" / "ignore"


def _load_level(directory: Path, use_git: bool) -> list[_IgnoreFile]:
    names = [".ignore", ".gitignore"] if use_git else [".ignore"]
    loaded = (_IgnoreFile.load(directory / name, directory) for name in names)
    return [matcher for matcher in loaded if matcher is not None]


def _is_ignored(
    path: Path,
    is_dir: bool,
    levels: list[list[_IgnoreFile]],
    fallback: list[_IgnoreFile],
) -> bool:
    for level in reversed(levels):
        for matcher in level:
            decision = matcher.decide(path, is_dir)
            if decision is not None:
                return decision
    for matcher in fallback:
        decision = matcher.decide(path, is_dir)
        if decision is not None:
            return decision
    return False


def _within(path: Path, ancestor: Path) -> bool:
    try:
        path.relative_to(ancestor)
    except ValueError:
        return False
    return True


class OsFs:
    """Walks the real filesystem, honouring ignore files.

    Hidden files are included and symbolic links are not followed. ``.ignore``
    files always apply; ``.gitignore``, the repository's exclude file and the
    global git ignore file apply inside a git repository. Ignore files in the
    parents of the root apply too.
    """

    def walk(self, root: str | os.PathLike[str]) -> Iterator[Path]:
        """Yield the paths of regular files under ``root``, relative to it."""
        root_abs = Path(root).resolve()
        repo = _find_repo_root(root_abs)

        fallback: list[_IgnoreFile] = []
        if repo is not None:
            git_dir = repo / ".git"
            if git_dir.is_dir():
                exclude = _IgnoreFile.load(git_dir / "info" / "exclude", repo)
                if exclude is not None:
                    fallback.append(exclude)
            global_rules = _IgnoreFile.load(_global_ignore_path(), repo)
            if global_rules is not None:
                fallback.append(global_rules)

        levels: list[list[_IgnoreFile]] = []
        for ancestor in reversed(root_abs.parents):
            use_git = repo is not None and _within(ancestor, repo)
            levels.append(_load_level(ancestor, use_git))
        levels.append(_load_level(root_abs, repo is not None))

        stack: list[tuple[Path, list[list[_IgnoreFile]]]] = [(root_abs, levels)]
        while stack:
            directory, current = stack.pop()
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
            for entry in entries:
                if entry.is_symlink():
                    continue
                path = Path(entry.path)
                is_dir = entry.is_dir(follow_symlinks=False)
                if _is_ignored(path, is_dir, current, fallback):
                    continue
                if is_dir:
                    stack.append(
                        (path, current + [_load_level(path, repo is not None)])
                    )
                elif entry.is_file(follow_symlinks=False):
                    yield path.relative_to(root_abs)