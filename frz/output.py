"""Printing of a search outcome as plain text or JSON."""

from __future__ import annotations

import json
from typing import Any

from frz.search.rows import AttributeRow, FileRow
from frz.search.stream import PluginSelection, SearchOutcome


def print_plain(outcome: SearchOutcome) -> None:
    """Print a plain-text representation of the outcome."""
    if not outcome.accepted:
        print(f"Search cancelled (query: '{outcome.query}')")
        return

    selection = outcome.selection
    if isinstance(selection, FileRow):
        print(selection.path)
    elif isinstance(selection, AttributeRow):
        print(f"attribute: {selection.name}")
    elif isinstance(selection, PluginSelection):
        print(f"Plugin selection: {selection.mode.id()} @ {selection.index}")
    else:
        print("No selection")


def _selection_payload(selection: Any) -> Any:
    if isinstance(selection, FileRow):
        return {
            "type": "file",
            "path": selection.path,
            "tags": list(selection.tags),
            "display_tags": selection.display_tags,
        }
    if isinstance(selection, AttributeRow):
        return {"type": "attribute", "name": selection.name, "count": selection.count}
    if isinstance(selection, PluginSelection):
        return {"type": "plugin", "mode": selection.mode.id(), "index": selection.index}
    return None


def format_outcome_json(outcome: SearchOutcome) -> str:
    """Format the outcome as pretty-printed JSON."""
    payload = {
        "accepted": outcome.accepted,
        "query": outcome.query,
        "selection": _selection_payload(outcome.selection),
    }
    return json.dumps(payload, indent=2)


def print_json(outcome: SearchOutcome) -> None:
    """Print the JSON representation of the outcome."""
    print(format_outcome_json(outcome))