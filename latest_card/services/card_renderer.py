"""Card renderer - draws article metadata onto a gradient PNG card with Pillow."""

import logging
import random
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageChops, ImageColor, ImageDraw, ImageFilter

from latest_card.constants import card_defaults as card
from latest_card.schemas.article import ArticleMeta
from latest_card.services.text_layout import FontPair, draw_text, measure_text

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)


def pt_to_px(size_pt: float) -> int:
    return round(size_pt * card.PT_TO_PX)


def gradient_lut(stops: list[tuple[float, str]]) -> list[tuple[int, int, int]]:
    """Sample a multi-stop color gradient at 256 evenly spaced positions."""
    colors = [(offset, ImageColor.getrgb(color)) for offset, color in stops]
    lut = []
    for level in range(256):
        t = level / 255
        for (start, c0), (end, c1) in zip(colors, colors[1:]):
            if t <= end:
                f = (t - start) / (end - start) if end > start else 0.0
                break
        lut.append(tuple(round(a + (b - a) * f) for a, b in zip(c0[:3], c1[:3])))
    return lut


def diagonal_gradient(width: int, height: int, stops: list[tuple[float, str]]) -> Image.Image:
    """
    Linear gradient running from the bottom-right corner (offset 0) to the
    top-left corner (offset 1).
    """
    diag = width * width + height * height
    x_ramp = Image.new("L", (width, 1))
    x_ramp.putdata([int(255 * (width - x) * width / diag) for x in range(width)])
    y_ramp = Image.new("L", (1, height))
    y_ramp.putdata([int(255 * (height - y) * height / diag) for y in range(height)])

    offsets = ImageChops.add(
        x_ramp.resize((width, height), Image.Resampling.NEAREST),
        y_ramp.resize((width, height), Image.Resampling.NEAREST),
    )
    lut = gradient_lut(stops)
    channels = [offsets.point([color[i] for color in lut]) for i in range(3)]
    return Image.merge("RGB", channels)


class CardRenderer:
    """
    Renders the 1000x500 latest-article card.

    Fonts, icons and the logo are read from `assets_dir`; anything missing is
    skipped and the card is still produced.
    """

    def __init__(self, assets_dir: Path, seed: int | None = None):
        self.assets_dir = Path(assets_dir)
        self.rng = random.Random(seed)
        self._fonts: dict[int, FontPair] = {}

    def fonts(self, size_pt: float) -> FontPair:
        size = pt_to_px(size_pt)
        if size not in self._fonts:
            self._fonts[size] = FontPair(
                self.assets_dir / card.FONT_CJK_FILE,
                self.assets_dir / card.FONT_LATIN_FILE,
                size,
            )
        return self._fonts[size]

    def render(self, meta: ArticleMeta, updated_at: str) -> bytes:
        """Draw the card and return it as PNG bytes."""
        img = self._background()
        y = self._draw_title(img, meta.title)
        self._draw_meta_rows(img, meta, y)
        self._draw_footer(img, updated_at)
        self._draw_logo(img)
        self._draw_signature(img)

        buf = BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    def _background(self) -> Image.Image:
        size = (card.WIDTH, card.HEIGHT)
        img = diagonal_gradient(card.WIDTH, card.HEIGHT, card.GRADIENT_STOPS)
        white = Image.new("RGB", size, WHITE)

        # Frosted glass: wash, speckle, wash
        img = Image.blend(img, white, card.FROST_FIRST_ALPHA)
        draw = ImageDraw.Draw(img, "RGBA")
        noise_fill = (255, 255, 255, round(255 * card.FROST_NOISE_ALPHA))
        for _ in range(card.NOISE_COUNT):
            x = self.rng.random() * card.WIDTH
            y = self.rng.random() * card.HEIGHT
            side = self.rng.random() * 2 + 1
            draw.rectangle([x, y, x + side, y + side], fill=noise_fill)
        return Image.blend(img, white, card.FROST_SECOND_ALPHA)

    def _draw_title(self, img: Image.Image, title: str) -> float:
        """Draw the title over a blurred drop shadow and return the first meta row baseline."""
        style = card.TITLE
        fonts = self.fonts(style["size_pt"])
        max_width = card.WIDTH - 2 * style["x"]
        dx, dy = style["shadow_offset"]

        shadow = Image.new("L", img.size, 0)
        draw_text(
            ImageDraw.Draw(shadow), title, fonts,
            style["x"] + dx, style["y"] + dy, max_width, style["line_height"],
            fill=style["shadow_alpha"],
        )
        shadow = shadow.filter(ImageFilter.GaussianBlur(style["shadow_blur"] / 2))
        img.paste(style["shadow_color"], mask=shadow)

        last_baseline = draw_text(
            ImageDraw.Draw(img), title, fonts,
            style["x"], style["y"], max_width, style["line_height"],
            fill=style["color"],
        )
        return last_baseline + style["line_height"] + card.TITLE_GAP

    def _draw_meta_rows(self, img: Image.Image, meta: ArticleMeta, y: float) -> None:
        style = card.META
        fonts = self.fonts(style["size_pt"])
        draw = ImageDraw.Draw(img)
        icon_size = style["icon_size"]
        text_x = style["icon_x"] + icon_size + style["icon_gap"]
        max_width = card.WIDTH - text_x - card.RIGHT_MARGIN

        for field, icon in card.META_ICONS:
            value = getattr(meta, field)
            if not value:
                continue
            if field == "read_time":
                value += card.READ_TIME_SUFFIX
            icon_y = y - icon_size / 2 - style["icon_lift"]
            self._paste_icon(img, icon, style["icon_x"], icon_y, icon_size)
            draw_text(draw, value, fonts, text_x, y, max_width, style["line_height"], fill=style["color"])
            y += style["line_height"] + style["row_gap"]

    def _paste_icon(self, img: Image.Image, name: str, x: float, y: float, size: int) -> None:
        path = self.assets_dir / card.ICONS_DIR / f"{name}.png"
        try:
            with Image.open(path) as icon:
                icon = icon.convert("RGBA").resize((size, size), Image.Resampling.LANCZOS)
        except OSError:
            logger.debug("Icon %s not available, skipping", path)
            return
        img.paste(icon, (round(x), round(y)), icon)

    def _draw_footer(self, img: Image.Image, updated_at: str) -> None:
        style = card.FOOTER
        draw_text(
            ImageDraw.Draw(img), style["label"] + updated_at, self.fonts(style["size_pt"]),
            style["x"], card.HEIGHT - style["bottom"], card.WIDTH, 0,
            fill=style["color"],
        )

    def _draw_logo(self, img: Image.Image) -> None:
        path = self.assets_dir / card.LOGO_FILE
        try:
            with Image.open(path) as logo:
                logo = logo.convert("RGBA")
        except OSError:
            logger.debug("Logo %s not available, skipping", path)
            return

        # Fit into a square box keeping the aspect ratio
        box = card.LOGO_BOX
        aspect = logo.width / logo.height
        if aspect > 1:
            draw_w, draw_h = box, box / aspect
        else:
            draw_w, draw_h = box * aspect, box
        logo = logo.resize((max(1, round(draw_w)), max(1, round(draw_h))), Image.Resampling.LANCZOS)
        left = card.WIDTH - card.LOGO_RIGHT_MARGIN - logo.width
        top = card.HEIGHT // 2 - logo.height // 2
        img.paste(logo, (left, top), logo)

    def _draw_signature(self, img: Image.Image) -> None:
        """Right-aligned motto and site address in the bottom-right corner."""
        draw = ImageDraw.Draw(img)
        right = card.WIDTH - card.RIGHT_MARGIN
        for text, size_pt, bottom in (
            (card.MOTTO, card.MOTTO_SIZE_PT, card.MOTTO_BOTTOM),
            (card.SITE_URL, card.SITE_URL_SIZE_PT, card.SITE_URL_BOTTOM),
        ):
            fonts = self.fonts(size_pt)
            width = measure_text(text, fonts)
            draw_text(
                draw, text, fonts, right - width, card.HEIGHT - bottom,
                card.WIDTH, 0, fill=card.LIGHT_TEXT_COLOR,
            )
