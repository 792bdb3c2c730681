"""
exif_query.py - Find image files whose EXIF metadata matches a tag/value pair

Walks a directory tree depth-first and keeps the candidate images that have
a field with the requested tag and the exact display value.
"""

import logging
from pathlib import Path

from exif_reader import MetadataError, read_metadata
from exif_tags import Tag, is_candidate

log = logging.getLogger(__name__)


class ScanError(OSError):
    """A directory could not be listed during the walk."""


def walk(root: Path) -> list[Path]:
    """
    Collect candidate images under root, depth-first pre-order.

    Entries are visited in the order the filesystem lists them; a
    subdirectory is fully walked before its later siblings.

    Raises:
        ScanError: If root or any subdirectory can't be listed
    """
    found = []
    try:
        entries = list(root.iterdir())
    except OSError as e:
        raise ScanError(f"Could not read directory {root}: {e}") from e

    for entry in entries:
        if entry.is_dir():
            found.extend(walk(entry))
        elif is_candidate(entry):
            found.append(entry)
    return found


def matches(path: Path, tag: Tag, value: str) -> bool:
    """Check if any field of the file has the tag and exactly this value."""
    try:
        fields = read_metadata(path)
    except MetadataError as e:
        log.warning("Skipping %s: %s", path, e)
        return False
    return any(field.tag is tag and field.value == value for field in fields)


def query(root: Path, tag: Tag, value: str) -> list[Path]:
    """Return every image under root matching tag/value, in walk order."""
    images = walk(root)
    found = [path for path in images if matches(path, tag, value)]
    log.debug("%d of %d images under %s have %s = %r", len(found), len(images), root, tag, value)
    return found
