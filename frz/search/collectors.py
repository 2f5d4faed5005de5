"""Collectors that keep the best results of a query and stream them out."""

from __future__ import annotations

import heapq
from functools import total_ordering
from typing import Callable

from frz.search.stream import MAX_RENDERED_RESULTS, SearchStream


class ScoreAggregator:
    """Keeps the highest scoring matches for a query and streams them.

    Ties in score favour the lower index.
    """

    def __init__(self, stream: SearchStream) -> None:
        self._stream = stream
        # Min-heap of (score, -index): the weakest retained match is on top.
        self._heap: list[tuple[int, int]] = []
        self._dirty = False
        self._sent_any = False

    def push(self, index: int, score: int) -> None:
        """Offer a scored match; the set is marked changed if it was kept."""
        entry = (score, -index)
        if len(self._heap) < MAX_RENDERED_RESULTS:
            heapq.heappush(self._heap, entry)
            self._dirty = True
        elif self._heap and entry > self._heap[0]:
            heapq.heapreplace(self._heap, entry)
            self._dirty = True

    def flush_partial(self) -> bool:
        """Emit an incremental update if new matches were kept."""
        if not self._dirty:
            return True
        return self.emit(False)

    def finish(self) -> bool:
        """Emit the final result set for the query."""
        return self.emit(True)

    def emit(self, complete: bool) -> bool:
        """Send the current matches, best first; False if the stream is closed."""
        if not self._heap and not complete and self._sent_any:
            self._dirty = False
            return True

        ranked = sorted(self._heap, key=lambda entry: (-entry[0], -entry[1]))
        indices = [-neg_index for _, neg_index in ranked]
        scores = [score for score, _ in ranked]

        if self._stream.send(indices, scores, complete):
            self._sent_any = True
            self._dirty = False
            return True
        return False


@total_ordering
class _Largest:
    """Heap entry ordered in reverse so that heapq keeps the largest on top."""

    __slots__ = ("key", "index")

    def __init__(self, key: str, index: int) -> None:
        self.key = key
        self.index = index

    def as_tuple(self) -> tuple[str, int]:
        return (self.key, self.index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Largest):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __lt__(self, other: "_Largest") -> bool:
        return self.as_tuple() > other.as_tuple()


class AlphabeticalCollector:
    """Collects the lexicographically smallest entries for an empty query."""

    def __init__(
        self,
        stream: SearchStream,
        total: int,
        key_for_index: Callable[[int], str],
    ) -> None:
        self._stream = stream
        self._limit = min(MAX_RENDERED_RESULTS, total)
        self._key_for_index = key_for_index
        self._heap: list[_Largest] = []
        self._dirty = False
        self._sent_any = False

    def insert(self, index: int) -> None:
        """Offer a candidate index; it is kept while it ranks among the smallest."""
        if self._limit == 0:
            return
        entry = _Largest(self._key_for_index(index), index)
        if len(self._heap) < self._limit:
            heapq.heappush(self._heap, entry)
            self._dirty = True
        elif entry.as_tuple() < self._heap[0].as_tuple():
            heapq.heapreplace(self._heap, entry)
            self._dirty = True

    def flush_partial(self) -> bool:
        """Emit an incremental update if new entries were kept."""
        if not self._dirty:
            return True
        return self._emit(False)

    def finish(self) -> bool:
        """Emit the final alphabetical set."""
        return self._emit(True)

    def _emit(self, complete: bool) -> bool:
        if self._limit == 0:
            return self._stream.send([], [], complete)

        ordered = sorted(self._heap, key=_Largest.as_tuple)
        indices = [entry.index for entry in ordered]
        scores = [0] * len(indices)

        if self._stream.send(indices, scores, complete):
            self._sent_any = True
            self._dirty = False
            return True
        return False