"""Registration of the built-in plugins."""

from __future__ import annotations

from frz.plugins.builtin import attributes, files
from frz.plugins.descriptors import PluginDescriptor
from frz.plugins.registry import PluginRegistry

_BUILTIN_DESCRIPTORS = (attributes.ATTRIBUTE_DESCRIPTOR, files.FILE_DESCRIPTOR)


def register_builtin_plugins(registry: PluginRegistry) -> None:
    """Register the attributes and files bundles; raises PluginRegistryError."""
    registry.register_bundle(attributes.bundle())
    registry.register_bundle(files.bundle())


def descriptors() -> tuple[PluginDescriptor, ...]:
    """Return the descriptors of the built-in plugins, in registration order."""
    return _BUILTIN_DESCRIPTORS