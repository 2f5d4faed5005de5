"""Built-in plugin searching the attribute (tag) dataset."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
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
from frz.search.rows import AttributeRow
from frz.search.streaming import stream_attributes

if TYPE_CHECKING:
    from frz.search.data import SearchData
    from frz.search.stream import SearchStream

DATASET_KEY = "attributes"


class AttributeDataset(PluginDataset):
    """The attribute rows of the search data."""

    def key(self) -> str:
        return DATASET_KEY

    def total_count(self, data: "SearchData") -> int:
        return len(data.attributes)


ATTRIBUTE_DESCRIPTOR = PluginDescriptor(
    id=DATASET_KEY,
    ui=PluginUiDefinition(
        tab_label="Tags",
        mode_title="attribute search",
        hint="Type to filter attribute.",
        table_title="Matching attributes",
        count_label="attributes",
    ),
    dataset=AttributeDataset(),
)


def descriptor() -> PluginDescriptor:
    """Return the descriptor of the attributes plugin."""
    return ATTRIBUTE_DESCRIPTOR


def mode() -> SearchMode:
    """Return the search mode of the attributes tab."""
    return SearchMode(descriptor())


class AttributePlugin(SearchPlugin):
    """Fuzzy-searches attribute names."""

    def descriptor(self) -> PluginDescriptor:
        return descriptor()

    def stream(
        self, query: str, stream: "SearchStream", context: PluginQueryContext
    ) -> bool:
        return stream_attributes(context.data, query, stream, context.latest_query_id)

    def selection(
        self, context: PluginSelectionContext, index: int
    ) -> AttributeRow | None:
        attributes = context.data.attributes
        if 0 <= index < len(attributes):
            return replace(attributes[index])
        return None


class AttributePluginBundle(PluginBundle):
    """Bundle contributing the attributes search tab."""

    def __init__(self) -> None:
        self._capability = Capability.search_tab(descriptor(), AttributePlugin())

    def capabilities(self) -> Iterator[Capability]:
        return iter((self._capability,))


def bundle() -> AttributePluginBundle:
    """Create the attributes plugin bundle."""
    return AttributePluginBundle()