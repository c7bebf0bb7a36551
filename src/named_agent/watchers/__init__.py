"""Watcher implementations used by the named agent."""

from .file import FileSourceWatcher  # noqa: F401

__all__ = ["FileSourceWatcher"]
