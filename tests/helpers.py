"""
Helpers for building image fixtures with Pillow.
"""

from pathlib import Path

from PIL import ExifTags, Image
from PIL.TiffImagePlugin import IFDRational

# EXIF tag ids used by the fixtures
MAKE = 0x010F
MODEL = 0x0110
EXPOSURE_TIME = 0x829A
F_NUMBER = 0x829D
FOCAL_LENGTH = 0x920A
COLOR_SPACE = 0xA001

SRGB = 1
UNCALIBRATED = 0xFFFF


def write_jpeg(path: Path, tags: dict | None = None, color=(128, 128, 128),
               exif_ifd: dict | None = None) -> Path:
    """
    Write a tiny JPEG.

    `tags` go into IFD0 (exifread reports them as "Image ..."), `exif_ifd`
    into the EXIF sub-IFD ("EXIF ...").
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.new("RGB", (8, 8), color=color)
    if tags or exif_ifd:
        exif = Image.Exif()
        for tag_id, value in (tags or {}).items():
            exif[tag_id] = value
        if exif_ifd:
            exif[ExifTags.IFD.Exif] = dict(exif_ifd)
        image.save(path, format="JPEG", exif=exif)
    else:
        image.save(path, format="JPEG")
    return path


def write_camera_jpeg(path: Path) -> Path:
    """A JPEG shot at 1/200 s, f/2.8, 50 mm, sRGB, all in the EXIF sub-IFD."""
    return write_jpeg(path, {MODEL: "TestCam"}, exif_ifd={
        EXPOSURE_TIME: IFDRational(1, 200),
        F_NUMBER: IFDRational(28, 10),
        FOCAL_LENGTH: IFDRational(50, 1),
        COLOR_SPACE: SRGB,
    })
