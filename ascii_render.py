"""
ascii_render.py - Render an image as ASCII art

Samples the luminance on a grid about RENDER_WIDTH cells across and maps each
sample to a character from a density ramp.
"""

from pathlib import Path

from PIL import Image

RENDER_WIDTH = 50

# Characters ranked from darkest to lightest on a light background
DENSITY_RAMP = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/|()1{}[]?-_+~<>i!lI;:,^`'."

# Terminals are usually dark, so the densest glyph stands for the brightest pixel
ASCII_RAMP = DENSITY_RAMP[::-1]

# Glyphs are roughly three times as tall as they are wide
CHAR_REPEAT = 3


class RenderError(Exception):
    """The image could not be decoded."""


def luma_to_char(luma: int) -> str:
    """Map a 0-255 brightness value onto the ramp."""
    index = luma * len(ASCII_RAMP) // 256
    if 0 <= index < len(ASCII_RAMP):
        return ASCII_RAMP[index]
    return ASCII_RAMP[-1]


def render_image(image: Image.Image) -> str:
    gray = image.convert("L")
    width, height = gray.size

    # Never step by zero on images smaller than the render grid
    width_step = max(1, width // RENDER_WIDTH)
    height_step = max(1, height // RENDER_WIDTH)

    rows = []
    for y in range(0, height, height_step):
        row = "".join(
            luma_to_char(gray.getpixel((x, y))) * CHAR_REPEAT
            for x in range(0, width, width_step)
        )
        rows.append(row + "\n")
    return "".join(rows)


def render(path: Path) -> str:
    """
    Decode the image at path and return its ASCII rendering.

    Raises:
        RenderError: If the file can't be opened as an image
    """
    try:
        with Image.open(path) as image:
            return render_image(image)
    except OSError as e:
        raise RenderError(f"Could not render image at {path}: {e}") from e
