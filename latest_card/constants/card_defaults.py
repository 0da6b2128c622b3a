"""Fixed geometry, colors and strings for the card image."""

from typing import Any

WIDTH = 1000
HEIGHT = 500

# Canvas font sizes are given in points; Pillow wants pixels.
PT_TO_PX = 4 / 3

GRADIENT_STOPS: list[tuple[float, str]] = [
    (0.0, "#5E72E4"),
    (0.4, "#8A9BFF"),
    (1.0, "#E8ECFF"),
]

# Frosted-glass layers: (alpha of first wash, alpha of noise, alpha of second wash)
FROST_FIRST_ALPHA = 0.15
FROST_NOISE_ALPHA = 0.08
FROST_SECOND_ALPHA = 0.10
NOISE_COUNT = 200

TITLE: dict[str, Any] = {
    "size_pt": 28,
    "color": "#222222",
    "x": 40,
    "y": 80,
    "line_height": 34,
    "shadow_color": (0, 0, 0),
    "shadow_alpha": 77,  # 0.3 opacity
    "shadow_offset": (2, 2),
    "shadow_blur": 4,
}
TITLE_GAP = 20

META: dict[str, Any] = {
    "size_pt": 18,
    "color": "#444444",
    "icon_x": 60,
    "icon_size": 24,
    "icon_gap": 10,
    "line_height": 32,
    "row_gap": 6,
    "icon_lift": 8,
}

# Field name -> icon file stem, in drawing order
META_ICONS: list[tuple[str, str]] = [
    ("created_at", "clock"),
    ("views", "eye"),
    ("tags", "tag"),
    ("comments", "comment"),
    ("words", "pen-to-square"),
    ("read_time", "hourglass"),
]
READ_TIME_SUFFIX = " 分钟"

FOOTER: dict[str, Any] = {
    "size_pt": 12,
    "color": "#888888",
    "x": 40,
    "bottom": 40,
    "label": "更新时间: ",
}

LOGO_FILE = "logo.png"
LOGO_BOX = 220
LOGO_RIGHT_MARGIN = 80

LIGHT_TEXT_COLOR = "#F8F1F1"
RIGHT_MARGIN = 40
MOTTO = "惟有忍耐到底的，必然得救"
MOTTO_SIZE_PT = 15
MOTTO_BOTTOM = 80
SITE_URL = "https://modcxblog.cn/"
SITE_URL_SIZE_PT = 12
SITE_URL_BOTTOM = 40

FONT_CJK_FILE = "fonts/SourceHanSansSC-Regular.otf"
FONT_LATIN_FILE = "fonts/Roboto-Regular.ttf"
ICONS_DIR = "icons"
