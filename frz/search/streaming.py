"""Fuzzy matching and streaming of attribute and file matches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

from frz.search.collectors import AlphabeticalCollector, ScoreAggregator
from frz.search.query_config import MatchOptions, config_for_query
from frz.search.stream import (
    EMPTY_QUERY_BATCH,
    MATCH_CHUNK_SIZE,
    QueryTracker,
    SearchStream,
)

if TYPE_CHECKING:
    from frz.search.data import SearchData

_MATCH_SCORE = 12
_MISMATCH_PENALTY = 6
_NEEDLE_GAP_PENALTY = 5
_HAYSTACK_GAP_PENALTY = 1
_PREFIX_BONUS = 12
_DELIMITER_BONUS = 4
_CAPITALIZATION_BONUS = 4
_MATCHING_CASE_BONUS = 4
_EXACT_MATCH_BONUS = 8
_MAX_SCORE = 0xFFFF

_DELIMITERS = frozenset(" /\\_-.:,")


@dataclass(frozen=True)
class Match:
    """A haystack that matched a query, with its score and position."""

    score: int
    index_in_haystack: int
    exact: bool = False


def _position_bonus(needle_char: str, haystack: str, j: int) -> int:
    char = haystack[j]
    bonus = _MATCHING_CASE_BONUS if needle_char == char else 0
    if j == 0:
        return bonus + _PREFIX_BONUS
    previous = haystack[j - 1]
    if previous in _DELIMITERS:
        return bonus + _DELIMITER_BONUS
    if char.isupper() and previous.islower():
        return bonus + _CAPITALIZATION_BONUS
    return bonus


def _score(needle: str, haystack: str) -> tuple[int, int]:
    """Return (local alignment score, typo count) for needle against haystack."""
    needle_lower = [c.lower() for c in needle]
    hay_lower = [c.lower() for c in haystack]
    width = len(hay_lower) + 1
    prev_score = [0] * width
    prev_common = [0] * width
    best = 0

    for i, nc in enumerate(needle_lower):
        cur_score = [0]
        cur_common = [0]
        for j, hc in enumerate(hay_lower):
            if nc == hc:
                diagonal = prev_score[j] + _MATCH_SCORE + _position_bonus(needle[i], haystack, j)
                common = prev_common[j] + 1
            else:
                diagonal = prev_score[j] - _MISMATCH_PENALTY
                common = max(prev_common[j + 1], cur_common[j])
            value = max(
                0,
                diagonal,
                prev_score[j + 1] - _NEEDLE_GAP_PENALTY,
                cur_score[j] - _HAYSTACK_GAP_PENALTY,
            )
            cur_score.append(value)
            cur_common.append(common)
            best = max(best, value)
        prev_score, prev_common = cur_score, cur_common

    typos = len(needle) - (prev_common[-1] if needle else 0)
    return best, typos


def _passes_prefilter(needle: str, haystack: str, max_typos: int) -> bool:
    present = {c.lower() for c in haystack}
    missing = sum(1 for c in needle if c.lower() not in present)
    return missing <= max_typos


def match_list(query: str, haystacks: Sequence[str], options: MatchOptions) -> list[Match]:
    """Fuzzy-match the query against each haystack.

    Haystacks with more typos than ``options.max_typos`` are left out; with no
    limit every haystack is returned, possibly with a score of zero.
    """
    max_typos = options.max_typos
    matches: list[Match] = []
    for index, haystack in enumerate(haystacks):
        if (
            options.prefilter
            and max_typos is not None
            and not _passes_prefilter(query, haystack, max_typos)
        ):
            continue
        score, typos = _score(query, haystack)
        if max_typos is not None and typos > max_typos:
            continue
        exact = bool(query) and query.lower() == haystack.lower()
        if exact and score > 0:
            score += _EXACT_MATCH_BONUS
        matches.append(Match(min(score, _MAX_SCORE), index, exact))

    if options.sort:
        matches.sort(key=lambda m: (-m.score, m.index_in_haystack))
    return matches


def _should_abort(query_id: int, latest_query_id: QueryTracker) -> bool:
    return latest_query_id.load() != query_id


def _stream_scored(
    texts: Sequence[str],
    query: str,
    stream: SearchStream,
    latest_query_id: QueryTracker,
) -> bool:
    query_id = stream.id
    options = config_for_query(query, len(texts))
    aggregator = ScoreAggregator(stream)

    for offset in range(0, len(texts), MATCH_CHUNK_SIZE):
        if _should_abort(query_id, latest_query_id):
            return True
        chunk = texts[offset : offset + MATCH_CHUNK_SIZE]
        for entry in match_list(query, chunk, options):
            if entry.score == 0:
                continue
            aggregator.push(offset + entry.index_in_haystack, entry.score)
        if _should_abort(query_id, latest_query_id):
            return True
        if not aggregator.flush_partial():
            return False

    if _should_abort(query_id, latest_query_id):
        return True
    return aggregator.finish()


def _stream_alphabetical(
    total: int,
    key_for_index: Callable[[int], str],
    stream: SearchStream,
    latest_query_id: QueryTracker,
) -> bool:
    query_id = stream.id
    collector = AlphabeticalCollector(stream, total, key_for_index)

    for processed, index in enumerate(range(total), start=1):
        if _should_abort(query_id, latest_query_id):
            return True
        collector.insert(index)
        if processed % EMPTY_QUERY_BATCH == 0:
            if _should_abort(query_id, latest_query_id):
                return True
            if not collector.flush_partial():
                return False

    if _should_abort(query_id, latest_query_id):
        return True
    return collector.finish()


def stream_attributes(
    data: "SearchData",
    query: str,
    stream: SearchStream,
    latest_query_id: QueryTracker,
) -> bool:
    """Stream attribute matches for the query.

    Returns False only when the receiving side has gone away; a query that was
    superseded stops early and still returns True.
    """
    trimmed = query.strip()
    attributes = data.attributes
    if not trimmed:
        return _stream_alphabetical(
            len(attributes), lambda i: attributes[i].name, stream, latest_query_id
        )
    names = [attribute.name for attribute in attributes]
    return _stream_scored(names, trimmed, stream, latest_query_id)


def stream_files(
    data: "SearchData",
    query: str,
    stream: SearchStream,
    latest_query_id: QueryTracker,
) -> bool:
    """Stream file matches for the query, matching paths together with tags."""
    trimmed = query.strip()
    files = data.files
    if not trimmed:
        return _stream_alphabetical(
            len(files), lambda i: files[i].path, stream, latest_query_id
        )
    texts = [file.search_text() for file in files]
    return _stream_scored(texts, trimmed, stream, latest_query_id)