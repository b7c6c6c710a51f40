"""Filesystem journal store implementation."""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

import aiofiles
import aiofiles.os
from pydantic import BaseModel, ValidationError

from ..models.journal_entry import JournalEntry
from ..models.milestone import ChildProfile, Milestone
from .interface import EntryStore, StorageError
from .utils import CHILD_FILE, ENTRIES_FILE, MILESTONES_FILE, is_within, validate_child_id


logger = logging.getLogger(__name__)


class FilesystemEntryStore(EntryStore):
    """JSON-file journal store.

    Layout::

        <base>/children/<child_id>/entries.json     list of journal entries
        <base>/children/<child_id>/milestones.json  list of milestone records
        <base>/children/<child_id>/child.json       child profile
    """

    def __init__(self, base_path: str):
        """Initialize filesystem store.

        Args:
            base_path: Base directory holding the children/ tree
        """
        self.base_path = Path(base_path).resolve()

    def _child_dir(self, child_id: str) -> Path:
        if not validate_child_id(child_id):
            raise StorageError(f"Invalid child id: {child_id!r}")

        path = self.base_path / "children" / child_id
        if not is_within(self.base_path, path):
            raise StorageError(f"Path escapes storage directory: {child_id}")
        return path

    async def _read_json(self, path: Path) -> Optional[Any]:
        """Read and parse a JSON file, None if it does not exist."""
        if not await aiofiles.os.path.exists(path):
            return None
        try:
            async with aiofiles.open(path, 'r', encoding='utf-8') as f:
                return json.loads(await f.read())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageError(f"Malformed JSON in {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    async def _write_json(self, path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

        # Write to temporary file first (atomic operation)
        temp_path = path.with_suffix(path.suffix + '.tmp')
        try:
            async with aiofiles.open(temp_path, 'w', encoding='utf-8') as f:
                await f.write(json.dumps(data, indent=2, ensure_ascii=False))
            await aiofiles.os.replace(temp_path, path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise StorageError(f"Failed to write {path}: {e}") from e

    async def _load_list(self, child_id: str, filename: str, model: type) -> list:
        path = self._child_dir(child_id) / filename
        data = await self._read_json(path)
        if data is None:
            return []
        if not isinstance(data, list):
            raise StorageError(f"Expected a JSON list in {path}")
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as e:
            raise StorageError(f"Invalid record in {path}: {e}") from e

    @staticmethod
    def _dump(models: Sequence[BaseModel]) -> List[dict]:
        return [m.model_dump(mode="json") for m in models]

    async def load_entries(self, child_id: str) -> List[JournalEntry]:
        entries = await self._load_list(child_id, ENTRIES_FILE, JournalEntry)
        logger.debug(f"Loaded {len(entries)} entries for {child_id}")
        return entries

    async def load_milestones(self, child_id: str) -> List[Milestone]:
        return await self._load_list(child_id, MILESTONES_FILE, Milestone)

    async def load_child(self, child_id: str) -> Optional[ChildProfile]:
        path = self._child_dir(child_id) / CHILD_FILE
        data = await self._read_json(path)
        if data is None:
            return None
        try:
            return ChildProfile.model_validate(data)
        except ValidationError as e:
            raise StorageError(f"Invalid child profile in {path}: {e}") from e

    async def save_entries(self, child_id: str, entries: Sequence[JournalEntry]) -> None:
        await self._write_json(self._child_dir(child_id) / ENTRIES_FILE, self._dump(entries))

    async def save_milestones(self, child_id: str, milestones: Sequence[Milestone]) -> None:
        await self._write_json(self._child_dir(child_id) / MILESTONES_FILE, self._dump(milestones))

    async def save_child(self, child: ChildProfile) -> None:
        await self._write_json(self._child_dir(child.id) / CHILD_FILE, child.model_dump(mode="json"))
