"""Abstract journal store interface for Little Journey."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models.journal_entry import JournalEntry
from ..models.milestone import ChildProfile, Milestone


class EntryStore(ABC):
    """Read access to a child's journal, plus writes for seeding data.

    Curation never writes back through this interface; it works over the
    snapshots returned by the load methods.
    """

    @abstractmethod
    async def load_entries(self, child_id: str) -> List[JournalEntry]:
        """Load every journal entry of a child.

        Args:
            child_id: Child identifier

        Returns:
            Entries in stored order, empty if the child has none

        Raises:
            StorageError: If stored data cannot be read or parsed
        """
        pass

    @abstractmethod
    async def load_milestones(self, child_id: str) -> List[Milestone]:
        """Load the milestone records of a child.

        Raises:
            StorageError: If stored data cannot be read or parsed
        """
        pass

    @abstractmethod
    async def load_child(self, child_id: str) -> Optional[ChildProfile]:
        """Load the child profile, None if unknown.

        Raises:
            StorageError: If stored data cannot be read or parsed
        """
        pass

    @abstractmethod
    async def save_entries(self, child_id: str, entries: Sequence[JournalEntry]) -> None:
        """Replace the stored entries of a child.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def save_milestones(self, child_id: str, milestones: Sequence[Milestone]) -> None:
        pass

    @abstractmethod
    async def save_child(self, child: ChildProfile) -> None:
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
