"""API path helpers for drive items."""
from typing import Optional
from urllib.parse import quote


def escape(segment: str) -> str:
    """Percent-encode a single path segment."""
    return quote(segment, safe='')


def drive_path(drive_id: Optional[str] = None) -> str:
    """Path of the given drive, or of the user's default drive."""
    if drive_id:
        return f"me/drives/{escape(drive_id)}"
    return "me/drive"


def item_path(item_id: str, drive_id: Optional[str] = None) -> str:
    """Path of an item addressed by id."""
    return f"{drive_path(drive_id)}/items/{escape(item_id)}"


def child_path(parent_id: str, name: str, drive_id: Optional[str] = None) -> str:
    """Path of a named child of a folder, in path-addressing syntax."""
    return f"{item_path(parent_id, drive_id)}:/{escape(name)}:"
