"""The search plugin interface and the registry's record of a plugin."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from frz.plugins.descriptors import (
    PluginDataset,
    PluginDescriptor,
    PluginQueryContext,
    PluginSelectionContext,
    SearchMode,
)

if TYPE_CHECKING:
    from frz.search.stream import SearchSelection, SearchStream


class SearchPlugin(ABC):
    """A pluggable search component that provides results for a tab."""

    @abstractmethod
    def descriptor(self) -> PluginDescriptor:
        """Static descriptor advertising the plugin's metadata."""

    def mode(self) -> SearchMode:
        """Identifier of the tab this plugin serves."""
        return SearchMode(self.descriptor())

    @abstractmethod
    def stream(
        self, query: str, stream: "SearchStream", context: PluginQueryContext
    ) -> bool:
        """Run a query and stream results; False when nobody is listening."""

    @abstractmethod
    def selection(
        self, context: PluginSelectionContext, index: int
    ) -> "SearchSelection | None":
        """Turn a row index into a selection for the caller."""


@dataclass(frozen=True)
class RegisteredPlugin:
    """A descriptor and the plugin implementation registered for it."""

    descriptor: PluginDescriptor
    plugin: SearchPlugin

    def mode(self) -> SearchMode:
        return SearchMode(self.descriptor)

    def dataset(self) -> PluginDataset:
        return self.descriptor.dataset