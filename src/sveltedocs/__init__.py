"""Cached, fallback-aware retrieval of shadcn-svelte documentation."""

__version__ = "0.1.0"
