"""
exif_tags.py - Recognized EXIF tags and image file classification

The tag registry is closed: only the tags listed in Tag can be viewed or
queried. Parser keys look like "EXIF ColorSpace" or "Image Model".
"""

from enum import Enum
from pathlib import Path


class Tag(Enum):
    """Recognized tags, valued by their canonical display name."""

    MODEL = "Model"
    DATE_TIME = "DateTime"
    EXPOSURE_TIME = "ExposureTime"
    F_NUMBER = "FNumber"
    SHUTTER_SPEED_VALUE = "ShutterSpeedValue"
    APERTURE_VALUE = "ApertureValue"
    EXPOSURE_BIAS_VALUE = "ExposureBiasValue"
    FLASH = "Flash"
    FOCAL_LENGTH = "FocalLength"
    COLOR_SPACE = "ColorSpace"
    EXPOSURE_MODE = "ExposureMode"
    WHITE_BALANCE = "WhiteBalance"
    CAMERA_OWNER_NAME = "CameraOwnerName"
    LENS_MODEL = "LensModel"
    IMAGE_DESCRIPTION = "ImageDescription"

    def __str__(self) -> str:
        return self.value


# Not case-normalized: "Jpg" and "Tiff" are deliberately absent.
IMAGE_FILE_TYPES = frozenset({
    "TIFF", "JPEG", "HEIF", "PNG", "WebP", "JPG",
    "tiff", "jpg", "jpeg", "heif", "png", "WEBP", "webp",
})

# IFD prefixes exifread puts in front of tag names that we look at
KNOWN_IFDS = frozenset({"Image", "Thumbnail", "EXIF"})

# Display format for tags that carry a unit
UNIT_FORMATS = {
    Tag.EXPOSURE_TIME: "{} s",
    Tag.F_NUMBER: "f/{}",
    Tag.SHUTTER_SPEED_VALUE: "{} EV",
    Tag.APERTURE_VALUE: "{} EV",
    Tag.EXPOSURE_BIAS_VALUE: "{} EV",
    Tag.FOCAL_LENGTH: "{} mm",
}

# Rational tags shown as decimals rather than fractions
DECIMAL_TAGS = frozenset({
    Tag.F_NUMBER,
    Tag.SHUTTER_SPEED_VALUE,
    Tag.APERTURE_VALUE,
    Tag.EXPOSURE_BIAS_VALUE,
    Tag.FOCAL_LENGTH,
})

_TAGS_BY_NAME = {tag.value: tag for tag in Tag}


def resolve(name: str) -> Tag | None:
    """Look up a tag by its display name. Exact and case-sensitive."""
    name = name.strip()
    for tag in Tag:
        if tag.value.strip() == name:
            return tag
    return None


def from_key(key: str) -> Tag | None:
    """Map an exifread key like "EXIF FNumber" to a registry tag."""
    ifd, _, name = key.partition(" ")
    if ifd not in KNOWN_IFDS:
        return None
    return _TAGS_BY_NAME.get(name)


def format_value(tag: Tag | None, printable: str, values=None) -> str:
    """
    Render a field's display value, with its unit when the tag has one.

    `values` are the raw parsed values; a single rational on a decimal tag
    is shown as e.g. "2.8" instead of "14/5".
    """
    text = printable
    if tag in DECIMAL_TAGS and values is not None and len(values) == 1:
        try:
            text = f"{float(values[0]):g}"
        except (TypeError, ValueError, ZeroDivisionError):
            text = printable
    fmt = UNIT_FORMATS.get(tag)
    return fmt.format(text) if fmt else text


def is_candidate(path: Path) -> bool:
    """Check if a path looks like an image, going by its extension only."""
    suffix = path.suffix
    if not suffix:
        return False
    return suffix[1:] in IMAGE_FILE_TYPES
