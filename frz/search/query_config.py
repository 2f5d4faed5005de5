"""Fuzzy matching options derived from a query and the dataset size."""

from __future__ import annotations

from dataclasses import dataclass

from frz.search.stream import PREFILTER_ENABLE_THRESHOLD


@dataclass
class MatchOptions:
    """Options controlling the fuzzy matcher."""

    prefilter: bool = True
    max_typos: int | None = 0
    sort: bool = True


def _typos_for_length(length: int) -> int:
    if length <= 1:
        return 0
    if length <= 4:
        return 1
    if length <= 7:
        return 2
    if length <= 12:
        return 3
    return 4


def config_for_query(query: str, dataset_len: int) -> MatchOptions:
    """Build fuzzy matching options for the query and dataset size."""
    length = len(query)
    allowed_typos = min(_typos_for_length(length), max(length - 1, 0))

    if dataset_len >= PREFILTER_ENABLE_THRESHOLD:
        return MatchOptions(prefilter=True, max_typos=allowed_typos, sort=False)
    return MatchOptions(prefilter=False, max_typos=None, sort=False)