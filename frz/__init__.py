"""Fuzzy finder core: file indexing, plugin registry, ranked result streaming and settings."""

__version__ = "0.4.0"