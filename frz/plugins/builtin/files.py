"""Built-in plugin searching the file dataset, with a file preview."""

from __future__ import annotations

from collections.abc import Iterator
from copy import copy
from typing import TYPE_CHECKING

from frz.plugins.capabilities import Capability, PluginBundle
from frz.plugins.descriptors import (
    PluginDataset,
    PluginDescriptor,
    PluginQueryContext,
    PluginSelectionContext,
    PluginUiDefinition,
    SearchMode,
)
from frz.plugins.plugin import SearchPlugin
from frz.preview import FilePreviewer
from frz.search.rows import FileRow
from frz.search.streaming import stream_files

if TYPE_CHECKING:
    from frz.search.data import SearchData
    from frz.search.stream import SearchStream

DATASET_KEY = "files"


class FileDataset(PluginDataset):
    """The file rows of the search data."""

    def key(self) -> str:
        return DATASET_KEY

    def total_count(self, data: "SearchData") -> int:
        return len(data.files)


FILE_DESCRIPTOR = PluginDescriptor(
    id=DATASET_KEY,
    ui=PluginUiDefinition(
        tab_label="Files",
        mode_title="File search",
        hint="Type to filter files.",
        table_title="Matching files",
        count_label="Files",
    ),
    dataset=FileDataset(),
)


def descriptor() -> PluginDescriptor:
    """Return the descriptor of the files plugin."""
    return FILE_DESCRIPTOR


def mode() -> SearchMode:
    """Return the search mode of the files tab."""
    return SearchMode(descriptor())


class FilePlugin(SearchPlugin):
    """Fuzzy-searches file paths together with their tags."""

    def descriptor(self) -> PluginDescriptor:
        return descriptor()

    def stream(
        self, query: str, stream: "SearchStream", context: PluginQueryContext
    ) -> bool:
        return stream_files(context.data, query, stream, context.latest_query_id)

    def selection(self, context: PluginSelectionContext, index: int) -> FileRow | None:
        files = context.data.files
        if 0 <= index < len(files):
            return copy(files[index])
        return None


class FilePluginBundle(PluginBundle):
    """Bundle contributing the files search tab and its preview split."""

    def __init__(self) -> None:
        self._capabilities = (
            Capability.search_tab(descriptor(), FilePlugin()),
            Capability.preview_split(descriptor(), FilePreviewer()),
        )

    def capabilities(self) -> Iterator[Capability]:
        return iter(self._capabilities)


def bundle() -> FilePluginBundle:
    """Create the files plugin bundle."""
    return FilePluginBundle()