"""Registry of all search plugins contributing to the UI."""

from __future__ import annotations

from collections.abc import Iterator

from frz.plugins.capabilities import (
    Capability,
    CapabilityInstallContext,
    CapabilityRegistry,
    PluginBundle,
    PreviewSplit,
    PreviewSplitStore,
    SearchTabStore,
)
from frz.plugins.descriptors import PluginDescriptor, SearchMode
from frz.plugins.plugin import RegisteredPlugin, SearchPlugin


class PluginRegistry:
    """Registry of search tabs and their capabilities, in insertion order."""

    def __init__(self) -> None:
        self._search_tabs = SearchTabStore()
        self._capabilities = CapabilityRegistry()

    def _install(self, capability: Capability) -> None:
        capability.install(
            CapabilityInstallContext(self._search_tabs, self._capabilities)
        )

    def register(self, plugin: SearchPlugin) -> None:
        """Register a plugin for its declared mode; raises PluginRegistryError."""
        self._install(Capability.search_tab(plugin.descriptor(), plugin))

    def register_bundle(self, bundle: PluginBundle) -> None:
        """Install every capability of a bundle, stopping at the first conflict."""
        for capability in bundle.capabilities():
            self._install(capability)

    def plugin(self, mode: SearchMode) -> SearchPlugin | None:
        return self._search_tabs.plugin(mode)

    def __iter__(self) -> Iterator[RegisteredPlugin]:
        return iter(self._search_tabs)

    def __len__(self) -> int:
        return len(self._search_tabs)

    def descriptors(self) -> Iterator[PluginDescriptor]:
        return self._search_tabs.descriptors()

    def mode_by_id(self, id: str) -> SearchMode | None:
        return self._search_tabs.mode_by_id(id)

    def plugin_by_id(self, id: str) -> SearchPlugin | None:
        return self._search_tabs.plugin_by_id(id)

    def deregister(self, mode: SearchMode) -> RegisteredPlugin | None:
        """Remove the plugin for a mode along with its capabilities."""
        removed = self._search_tabs.remove(mode)
        if removed is not None:
            self._capabilities.remove_mode(mode)
        return removed

    def deregister_by_id(self, id: str) -> RegisteredPlugin | None:
        """Remove the plugin with this identifier along with its capabilities."""
        found = self._search_tabs.remove_by_id(id)
        if found is None:
            return None
        mode, plugin = found
        self._capabilities.remove_mode(mode)
        return plugin

    def contains_mode(self, mode: SearchMode) -> bool:
        return self._search_tabs.contains_mode(mode)

    def preview_split(self, mode: SearchMode) -> PreviewSplit | None:
        store = self._capabilities.storage(PreviewSplitStore)
        return store.get(mode) if store is not None else None