"""Plugin descriptors, search modes, registry errors and plugin contexts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from frz.search.data import SearchData
    from frz.search.stream import QueryTracker


@dataclass(frozen=True)
class PluginUiDefinition:
    """Declarative description of the UI contributed by a plugin."""

    tab_label: str
    mode_title: str
    hint: str
    table_title: str
    count_label: str


class PluginDataset(ABC):
    """Behavioural definition of a dataset served by a plugin."""

    @abstractmethod
    def key(self) -> str:
        """Stable key describing the dataset, used for progress reporting."""

    @abstractmethod
    def total_count(self, data: "SearchData") -> int:
        """Return the total number of rows available for this dataset."""


@dataclass(frozen=True, eq=False)
class PluginDescriptor:
    """Static metadata describing a plugin; equality is identity."""

    id: str
    ui: PluginUiDefinition
    dataset: PluginDataset


class SearchMode:
    """Identifies one tab of the search UI by the descriptor behind it."""

    __slots__ = ("_descriptor",)

    def __init__(self, descriptor: PluginDescriptor) -> None:
        self._descriptor = descriptor

    @property
    def descriptor(self) -> PluginDescriptor:
        return self._descriptor

    def id(self) -> str:
        """Return the identifier of this mode."""
        return self._descriptor.id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchMode):
            return NotImplemented
        return self._descriptor is other._descriptor

    def __hash__(self) -> int:
        return hash(id(self._descriptor))

    def __repr__(self) -> str:
        return f"SearchMode({self._descriptor.id!r})"


class PluginRegistryError(Exception):
    """Raised when the plugin registry cannot be changed as requested."""


class DuplicateIdError(PluginRegistryError):
    """A plugin tried to register an identifier that already exists."""

    def __init__(self, id: str) -> None:
        self.id = id
        super().__init__(f"plugin id '{id}' is already registered")


class DuplicateModeError(PluginRegistryError):
    """A plugin tried to register a descriptor that is already present."""

    def __init__(self, mode: SearchMode) -> None:
        self.mode = mode
        super().__init__(f"plugin for mode {mode!r} is already registered")


class CapabilityConflictError(PluginRegistryError):
    """A capability is already registered for the mode."""

    def __init__(self, capability: str, mode: SearchMode) -> None:
        self.capability = capability
        self.mode = mode
        super().__init__(
            f"{capability} capability for mode {mode!r} is already registered"
        )


@dataclass(frozen=True)
class PluginSelectionContext:
    """Inputs given to plugins when turning an index into a selection."""

    data: "SearchData"


@dataclass(frozen=True)
class PluginQueryContext:
    """Inputs given to plugins when they stream search results."""

    data: "SearchData"
    latest_query_id: "QueryTracker"

    def selection_context(self) -> PluginSelectionContext:
        """Build a selection context sharing this context's data."""
        return PluginSelectionContext(self.data)