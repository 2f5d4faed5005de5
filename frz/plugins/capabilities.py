"""Capabilities contributed by plugin bundles and the stores that hold them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Sequence
from copy import copy as _shallow_copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from frz.plugins.descriptors import (
    CapabilityConflictError,
    DuplicateIdError,
    DuplicateModeError,
    PluginDescriptor,
    SearchMode,
)
from frz.plugins.plugin import RegisteredPlugin, SearchPlugin

if TYPE_CHECKING:
    from frz.search.data import SearchData

T = TypeVar("T")

CleanupHandler = Callable[[Any, SearchMode], None]


@dataclass(frozen=True)
class PreviewSplitContext:
    """What a preview renderer is given when it draws the preview area."""

    data: "SearchData"
    filtered: Sequence[int] = field(default_factory=tuple)
    scores: Sequence[int] = field(default_factory=tuple)
    selected: int | None = None
    query: str = ""
    bat_theme: str | None = None

    def selected_row_index(self) -> int | None:
        """Map the selected position in the filtered list to a data row index."""
        if self.selected is None or not 0 <= self.selected < len(self.filtered):
            return None
        return self.filtered[self.selected]


class PreviewSplit(ABC):
    """Renderer that draws a preview of the selected row."""

    @abstractmethod
    def render_preview(self, width: int, height: int, context: PreviewSplitContext) -> Any:
        """Render the preview for an area of the given size."""


class PreviewSplitStore:
    """Preview renderers registered by plugins, one per mode."""

    def __init__(self) -> None:
        self._splits: dict[SearchMode, PreviewSplit] = {}

    def __copy__(self) -> "PreviewSplitStore":
        clone = PreviewSplitStore()
        clone._splits = dict(self._splits)
        return clone

    def register(self, mode: SearchMode, preview: PreviewSplit) -> None:
        """Register a renderer; raise CapabilityConflictError if one exists."""
        if mode in self._splits:
            raise CapabilityConflictError("preview split", mode)
        self._splits[mode] = preview

    def get(self, mode: SearchMode) -> PreviewSplit | None:
        return self._splits.get(mode)

    def remove(self, mode: SearchMode) -> None:
        self._splits.pop(mode, None)


class SearchTabStore:
    """Registered search tabs, kept in insertion order."""

    def __init__(self) -> None:
        self._plugins: dict[SearchMode, RegisteredPlugin] = {}
        self._id_index: dict[str, SearchMode] = {}

    def __copy__(self) -> "SearchTabStore":
        clone = SearchTabStore()
        clone._plugins = dict(self._plugins)
        clone._id_index = dict(self._id_index)
        return clone

    def ensure_available(self, descriptor: PluginDescriptor) -> None:
        """Raise if the descriptor's mode or identifier is already taken."""
        mode = SearchMode(descriptor)
        if mode in self._plugins:
            raise DuplicateModeError(mode)
        if descriptor.id in self._id_index:
            raise DuplicateIdError(descriptor.id)

    def insert(self, plugin: RegisteredPlugin) -> None:
        mode = plugin.mode()
        self._plugins[mode] = plugin
        self._id_index[plugin.descriptor.id] = mode

    def plugin(self, mode: SearchMode) -> SearchPlugin | None:
        registered = self._plugins.get(mode)
        return registered.plugin if registered is not None else None

    def __iter__(self) -> Iterator[RegisteredPlugin]:
        return iter(list(self._plugins.values()))

    def __len__(self) -> int:
        return len(self._plugins)

    def descriptors(self) -> Iterator[PluginDescriptor]:
        return (registered.descriptor for registered in list(self._plugins.values()))

    def mode_by_id(self, id: str) -> SearchMode | None:
        return self._id_index.get(id)

    def plugin_by_id(self, id: str) -> SearchPlugin | None:
        mode = self.mode_by_id(id)
        return self.plugin(mode) if mode is not None else None

    def remove(self, mode: SearchMode) -> RegisteredPlugin | None:
        removed = self._plugins.pop(mode, None)
        if removed is not None:
            self._id_index.pop(removed.descriptor.id, None)
        return removed

    def remove_by_id(self, id: str) -> tuple[SearchMode, RegisteredPlugin] | None:
        mode = self._id_index.pop(id, None)
        if mode is None:
            return None
        plugin = self._plugins.pop(mode, None)
        if plugin is None:
            return None
        return mode, plugin

    def contains_mode(self, mode: SearchMode) -> bool:
        return mode in self._plugins


class CapabilityRegistry:
    """Capability-specific stores, keyed by store type, with cleanup hooks."""

    def __init__(self) -> None:
        self._stores: dict[type, Any] = {}
        self._cleanup: dict[type, CleanupHandler] = {}

    def storage_mut(self, store_type: type[T]) -> T:
        """Return the store of this type, creating it if needed."""
        store = self._stores.get(store_type)
        if store is None:
            store = store_type()
            self._stores[store_type] = store
        return store

    def storage(self, store_type: type[T]) -> T | None:
        """Return the store of this type if it exists."""
        return self._stores.get(store_type)

    def register_cleanup(
        self, store_type: type[T], cleanup: Callable[[T, SearchMode], None]
    ) -> None:
        """Register a hook run on the store when a mode is removed; first one wins."""
        self.storage_mut(store_type)
        self._cleanup.setdefault(store_type, cleanup)

    def remove_mode(self, mode: SearchMode) -> None:
        """Run every cleanup hook for the removed mode."""
        for store_type, handler in self._cleanup.items():
            store = self._stores.get(store_type)
            if store is not None:
                handler(store, mode)

    def copy(self) -> "CapabilityRegistry":
        """Return a registry whose stores are copies of these."""
        clone = CapabilityRegistry()
        clone._stores = {key: _shallow_copy(store) for key, store in self._stores.items()}
        clone._cleanup = dict(self._cleanup)
        return clone


class CapabilityInstallContext:
    """Mutable view into the registry used while installing capabilities."""

    def __init__(self, search_tabs: SearchTabStore, registry: CapabilityRegistry) -> None:
        self._search_tabs = search_tabs
        self._registry = registry

    def ensure_mode_available(self, descriptor: PluginDescriptor) -> None:
        """Raise if the descriptor cannot be registered."""
        self._search_tabs.ensure_available(descriptor)

    def register_search_tab(self, plugin: RegisteredPlugin) -> None:
        """Register a search tab implementation."""
        self._search_tabs.ensure_available(plugin.descriptor)
        self._search_tabs.insert(plugin)

    def storage_mut(self, store_type: type[T]) -> T:
        return self._registry.storage_mut(store_type)

    def storage(self, store_type: type[T]) -> T | None:
        return self._registry.storage(store_type)

    def register_cleanup(
        self, store_type: type[T], cleanup: Callable[[T, SearchMode], None]
    ) -> None:
        self._registry.register_cleanup(store_type, cleanup)


@dataclass(frozen=True)
class _SearchTabSpec:
    descriptor: PluginDescriptor
    plugin: SearchPlugin

    def install(self, context: CapabilityInstallContext) -> None:
        context.register_search_tab(RegisteredPlugin(self.descriptor, self.plugin))


@dataclass(frozen=True)
class _PreviewSplitSpec:
    descriptor: PluginDescriptor
    preview: PreviewSplit

    def install(self, context: CapabilityInstallContext) -> None:
        mode = SearchMode(self.descriptor)
        context.storage_mut(PreviewSplitStore).register(mode, self.preview)
        context.register_cleanup(PreviewSplitStore, PreviewSplitStore.remove)


@dataclass(frozen=True)
class Capability:
    """A capability contributed by a bundle."""

    _spec: _SearchTabSpec | _PreviewSplitSpec

    @classmethod
    def search_tab(cls, descriptor: PluginDescriptor, plugin: SearchPlugin) -> "Capability":
        """Create a search tab capability."""
        return cls(_SearchTabSpec(descriptor, plugin))

    @classmethod
    def preview_split(
        cls, descriptor: PluginDescriptor, preview: PreviewSplit
    ) -> "Capability":
        """Create a preview split capability."""
        return cls(_PreviewSplitSpec(descriptor, preview))

    def install(self, context: CapabilityInstallContext) -> None:
        """Install into the context; raises PluginRegistryError on conflict."""
        self._spec.install(context)


class PluginBundle(ABC):
    """A collection of capabilities contributed together."""

    @abstractmethod
    def capabilities(self) -> Iterable[Capability]:
        """Return the capabilities of this bundle."""