"""
exif_reader.py - Read EXIF fields from an image file

Wraps exifread so the rest of the tool sees a plain, ordered list of
(key, tag, display value) fields.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import exifread

from exif_tags import Tag, format_value, from_key

log = logging.getLogger(__name__)

# exifread reports every file without an EXIF header at warning level
logging.getLogger("exifread").setLevel(logging.ERROR)


class MetadataError(Exception):
    """The file could not be read or its metadata container is malformed."""


@dataclass(frozen=True)
class MetadataField:
    """One parsed EXIF field."""
    key: str
    tag: Tag | None
    value: str


def read_metadata(path: Path) -> list[MetadataField]:
    """
    Read every EXIF field of an image, in the order the parser reports them.

    Raises:
        MetadataError: If the file can't be opened, has no EXIF block,
            or parsing fails
    """
    try:
        with open(path, "rb") as f:
            tags = exifread.process_file(f, details=False)
    except OSError as e:
        raise MetadataError(f"Could not open {path}: {e}") from e
    except Exception as e:
        raise MetadataError(f"Could not parse exif from {path}: {e}") from e

    if not tags:
        raise MetadataError(f"No exif data in {path}")

    fields = []
    for key, ifd_tag in tags.items():
        # Thumbnail blobs come back as raw bytes rather than tag objects
        if not hasattr(ifd_tag, "printable"):
            continue
        tag = from_key(key)
        value = format_value(tag, str(ifd_tag.printable).strip(), getattr(ifd_tag, "values", None))
        fields.append(MetadataField(key=key, tag=tag, value=value))

    log.debug("Read %d exif fields from %s", len(fields), path)
    return fields
