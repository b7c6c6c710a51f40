"""Storage module for Little Journey.

Provides the journal store used by the command-line tool to load
entries, milestones and child profiles.
"""

from typing import Optional

from ..config import Settings, settings as default_settings
from .interface import EntryStore, StorageError
from .filesystem import FilesystemEntryStore


def get_entry_store(config: Optional[Settings] = None) -> EntryStore:
    """Create the entry store configured by settings.storage_path."""
    config = config or default_settings
    return FilesystemEntryStore(config.storage_path)


__all__ = ["EntryStore", "StorageError", "FilesystemEntryStore", "get_entry_store"]
