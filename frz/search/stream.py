"""Result streaming between search workers and the UI, and search outcomes."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from frz.search.rows import AttributeRow, FileRow

if TYPE_CHECKING:
    from frz.plugins.descriptors import SearchMode

PREFILTER_ENABLE_THRESHOLD = 1_000
MAX_RENDERED_RESULTS = 2_000
MATCH_CHUNK_SIZE = 512
EMPTY_QUERY_BATCH = 128


@dataclass
class SearchResult:
    """A batch of results for one query."""

    id: int
    mode: "SearchMode"
    indices: list[int]
    scores: list[int]
    complete: bool


class ResultChannel:
    """Thread-safe queue of search results that can be closed by the receiver."""

    def __init__(self) -> None:
        self._items: deque[SearchResult] = deque()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, result: SearchResult) -> bool:
        """Queue a result; return False when the channel is closed."""
        with self._lock:
            if self._closed:
                return False
            self._items.append(result)
            return True

    def try_receive(self) -> SearchResult | None:
        """Return the oldest queued result, or None when none is waiting."""
        with self._lock:
            return self._items.popleft() if self._items else None

    def close(self) -> None:
        """Stop accepting results."""
        with self._lock:
            self._closed = True


@dataclass(frozen=True)
class SearchStream:
    """Handle used by plugins to stream results for one query."""

    channel: ResultChannel
    id: int
    mode: "SearchMode"

    def send(self, indices: list[int], scores: list[int], complete: bool) -> bool:
        """Send a batch of results; return False when nobody is listening."""
        return self.channel.send(
            SearchResult(
                id=self.id,
                mode=self.mode,
                indices=list(indices),
                scores=list(scores),
                complete=complete,
            )
        )


class QueryTracker:
    """Thread-safe holder of the identifier of the latest query."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def load(self) -> int:
        with self._lock:
            return self._value

    def store(self, value: int) -> None:
        with self._lock:
            self._value = value

    def increment(self) -> int:
        """Advance to a new query identifier and return it."""
        with self._lock:
            self._value += 1
            return self._value


@dataclass(frozen=True)
class PluginSelection:
    """Selection returned by a custom plugin."""

    mode: "SearchMode"
    index: int


SearchSelection = Union[AttributeRow, FileRow, PluginSelection]


@dataclass
class SearchOutcome:
    """The outcome of a search interaction."""

    accepted: bool
    selection: SearchSelection | None = None
    query: str = field(default="")

    def selected_file(self) -> FileRow | None:
        return self.selection if isinstance(self.selection, FileRow) else None

    def selected_attribute(self) -> AttributeRow | None:
        return self.selection if isinstance(self.selection, AttributeRow) else None

    def selected_plugin(self) -> PluginSelection | None:
        return self.selection if isinstance(self.selection, PluginSelection) else None