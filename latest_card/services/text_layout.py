"""Mixed CJK/Latin text layout with per-character font switching and wrapping."""

import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import ImageDraw, ImageFont

logger = logging.getLogger(__name__)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def is_cjk(char: str) -> bool:
    """True for CJK unified ideographs (U+4E00..U+9FA5)."""
    return "\u4e00" <= char <= "\u9fa5"


@dataclass
class PlacedGlyph:
    """A single character positioned on a baseline."""

    char: str
    font: Font
    x: float
    y: float


class FontPair:
    """
    A CJK font and a Latin font at one pixel size.

    Falls back to the CJK font when the Latin file is missing, and to Pillow's
    bundled default font when neither file exists.
    """

    def __init__(self, cjk_path: Path | None, latin_path: Path | None, size: int):
        self.size = size
        cjk = _load_font(cjk_path, size)
        latin = _load_font(latin_path, size)
        if cjk is None and latin is None:
            cjk = latin = ImageFont.load_default(size=size)
        self.cjk = cjk or latin
        self.latin = latin or cjk

    def for_char(self, char: str) -> Font:
        return self.cjk if is_cjk(char) else self.latin


def _load_font(path: Path | None, size: int) -> ImageFont.FreeTypeFont | None:
    if path is None or not path.exists():
        return None
    try:
        return ImageFont.truetype(str(path), size)
    except OSError as e:
        logger.warning("Cannot load font %s: %s", path, e)
        return None


def layout_text(
    text: str,
    fonts: FontPair,
    x: float,
    y: float,
    max_width: float,
    line_height: float,
) -> list[PlacedGlyph]:
    """
    Place each character of `text` starting at baseline (x, y).

    A character that would cross `x + max_width` starts a new line, unless it
    is the first character on its line.
    """
    glyphs: list[PlacedGlyph] = []
    pen_x = x
    for char in text:
        font = fonts.for_char(char)
        width = font.getlength(char)
        if pen_x > x and pen_x + width > x + max_width:
            y += line_height
            pen_x = x
        glyphs.append(PlacedGlyph(char, font, pen_x, y))
        pen_x += width
    return glyphs


def measure_text(text: str, fonts: FontPair) -> float:
    """Advance width of `text` on a single line."""
    return sum(fonts.for_char(char).getlength(char) for char in text)


def draw_text(
    draw: ImageDraw.ImageDraw,
    text: str,
    fonts: FontPair,
    x: float,
    y: float,
    max_width: float,
    line_height: float,
    fill: str | int | tuple[int, ...],
) -> float:
    """Draw wrapped mixed-script text and return the baseline of its last line."""
    glyphs = layout_text(text, fonts, x, y, max_width, line_height)
    for glyph in glyphs:
        draw.text((glyph.x, glyph.y), glyph.char, font=glyph.font, fill=fill, anchor="ls")
    return glyphs[-1].y if glyphs else y
