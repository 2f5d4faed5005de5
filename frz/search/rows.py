"""Row types displayed in the search tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Iterable


class TruncationStyle(str, Enum):
    """Controls how a path should be truncated before it is rendered."""

    LEFT = "left"
    RIGHT = "right"


@dataclass
class AttributeRow:
    """A single attribute with its label and the number of matching files."""

    name: str
    count: int


@dataclass(init=False)
class FileRow:
    """A row in the file results table."""

    path: str
    tags: list[str]
    display_tags: str
    truncation_style: TruncationStyle
    _search_text: str

    def __init__(
        self,
        path: str,
        tags: Iterable[str] = (),
        *,
        truncation_style: TruncationStyle = TruncationStyle.RIGHT,
    ) -> None:
        sorted_tags = sorted(str(tag) for tag in tags)
        self.path = str(path)
        self.tags = sorted_tags
        self.display_tags = ", ".join(sorted_tags)
        self.truncation_style = truncation_style
        self._search_text = (
            f"{self.path} {self.display_tags}" if self.display_tags else self.path
        )

    @classmethod
    def filesystem(cls, path: str, tags: Iterable[str] = ()) -> "FileRow":
        """Build a row for a filesystem entry, truncated from the left."""
        return cls(path, tags, truncation_style=TruncationStyle.LEFT)

    def search_text(self) -> str:
        """Return the text matched against queries: the path and its tags."""
        return self._search_text


def _extension(name: str) -> str | None:
    dot = name.rfind(".")
    if dot <= 0:
        return None
    return name[dot + 1 :]


def tags_for_relative_path(relative: str | PurePath) -> list[str]:
    """Derive tags for a path relative to the search root."""
    path = PurePath(relative)
    tags: set[str] = set()

    parent = path.parent
    for part in parent.parts:
        if part in ("..", ".") or part == parent.anchor:
            continue
        if part:
            tags.add(part)

    ext = _extension(path.name)
    if ext:
        tags.add(f"*.{ext}")

    return sorted(tags)