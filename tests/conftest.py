"""
Pytest fixtures for exif-sift tests.

Builds small JPEG/PNG files on the fly with Pillow, with whatever EXIF
fields a test needs.
"""

from pathlib import Path

import pytest
from PIL import Image

from helpers import COLOR_SPACE, MAKE, MODEL, SRGB, UNCALIBRATED, write_camera_jpeg, write_jpeg


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for testing."""
    return tmp_path


@pytest.fixture
def color_space_images(temp_dir: Path) -> dict:
    """
    Three JPEGs: two tagged sRGB, one Uncalibrated.

    Returns a dict with "srgb" and "other" lists of paths.
    """
    return {
        "srgb": [
            write_jpeg(temp_dir / "a.jpg", {COLOR_SPACE: SRGB, MODEL: "TestCam"}),
            write_jpeg(temp_dir / "nested" / "b.jpg", {COLOR_SPACE: SRGB}),
        ],
        "other": [
            write_jpeg(temp_dir / "c.jpg", {COLOR_SPACE: UNCALIBRATED}),
        ],
    }


@pytest.fixture
def make_only_image(temp_dir: Path) -> Path:
    """A JPEG whose only EXIF field is one the registry doesn't know."""
    return write_jpeg(temp_dir / "make.jpg", {MAKE: "Acme"})


@pytest.fixture
def bare_image(temp_dir: Path) -> Path:
    """A JPEG without any EXIF block."""
    return write_jpeg(temp_dir / "bare.jpg")


@pytest.fixture
def gray_png(temp_dir: Path):
    """Factory for single-color grayscale PNGs."""
    def make(name: str, level: int, size=(100, 100)) -> Path:
        path = temp_dir / name
        Image.new("L", size, color=level).save(path, format="PNG")
        return path
    return make


@pytest.fixture
def camera_image(temp_dir: Path) -> Path:
    """A JPEG with exposure settings in the EXIF sub-IFD."""
    return write_camera_jpeg(temp_dir / "shot.jpg")
