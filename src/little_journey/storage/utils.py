"""Utility functions for storage operations."""

import re
from pathlib import Path

# Child ids become directory names
CHILD_ID_PATTERN = re.compile(r'^[A-Za-z0-9][A-Za-z0-9_\-]{0,127}$')

ENTRIES_FILE = "entries.json"
MILESTONES_FILE = "milestones.json"
CHILD_FILE = "child.json"


def validate_child_id(child_id: str) -> bool:
    """Check a child id is safe to use as a single path segment.

    Args:
        child_id: Identifier to validate

    Returns:
        True if the id is safe, False otherwise
    """
    if not child_id or not isinstance(child_id, str):
        return False
    return bool(CHILD_ID_PATTERN.match(child_id))


def is_within(base: Path, path: Path) -> bool:
    """Whether path resolves inside base."""
    try:
        path.resolve().relative_to(base.resolve())
        return True
    except ValueError:
        return False
