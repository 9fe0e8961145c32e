"""
Color Palette & Theme System — All colors in BGR format (OpenCV convention).

Design principles:
  - One theme styles both surfaces: the raster surface reads the BGR
    tuples directly, the SVG surface receives them as a CSS stylesheet
  - Light theme mirrors the classic browser look (dark ink on white)
  - Dark/midnight themes for dashboards and screenshots
"""

from __future__ import annotations

from dataclasses import dataclass


BGR = tuple[int, int, int]


@dataclass(frozen=True)
class Theme:
    """Complete color theme for the chart."""

    name: str

    # Background & structural elements
    bg: BGR
    foreground: BGR          # resolves "currentColor"
    grid: BGR                # tick lines (gridlines)
    domain: BGR              # axis domain path

    # Text
    tick_text: BGR
    axis_label: BGR

    # Data points
    point: BGR

    # Font sizes (px) for the SVG stylesheet
    tick_font_size: int = 10
    label_font_size: int = 16

    def stylesheet(self) -> str:
        """CSS equivalent of this theme for SVG output."""
        return "\n".join((
            f".tick line {{ stroke: {to_css(self.grid)}; }}",
            f".tick text {{ fill: {to_css(self.tick_text)}; }}",
            f".domain {{ stroke: {to_css(self.domain)}; }}",
            f".axis-label {{ fill: {to_css(self.axis_label)}; "
            f"font-size: {self.label_font_size}px; font-family: sans-serif; }}",
            f"circle {{ fill: {to_css(self.point)}; }}",
        ))

    def resolve(self, kind: str, classes: frozenset[str]) -> BGR:
        """Color for a primitive given its kind and inherited classes."""
        if kind == "circle":
            return self.point
        if "axis-label" in classes:
            return self.axis_label
        if "domain" in classes:
            return self.domain
        if "tick" in classes:
            return self.grid if kind == "line" else self.tick_text
        return self.foreground


def to_css(color: BGR) -> str:
    """BGR tuple → '#rrggbb'."""
    b, g, r = color
    return f"#{r:02x}{g:02x}{b:02x}"


# ────────────────────────────────────────────────────────────
# Built-in Themes
# ────────────────────────────────────────────────────────────

LIGHT_THEME = Theme(
    name="light",
    bg=(255, 255, 255),
    foreground=(0, 0, 0),
    grid=(187, 192, 192),
    domain=(0, 0, 0),
    tick_text=(99, 99, 99),
    axis_label=(51, 51, 51),
    point=(0, 0, 0),
)

DARK_THEME = Theme(
    name="dark",
    bg=(24, 18, 18),
    foreground=(200, 200, 220),
    grid=(55, 45, 45),
    domain=(65, 50, 50),
    tick_text=(160, 140, 140),
    axis_label=(220, 200, 200),
    point=(255, 100, 255),
)

MIDNIGHT_THEME = Theme(
    name="midnight",
    bg=(12, 8, 4),
    foreground=(180, 195, 210),
    grid=(35, 30, 25),
    domain=(45, 38, 30),
    tick_text=(120, 130, 140),
    axis_label=(180, 195, 210),
    point=(255, 180, 80),
)

# Registry of all themes
THEMES: dict[str, Theme] = {
    "light": LIGHT_THEME,
    "dark": DARK_THEME,
    "midnight": MIDNIGHT_THEME,
}


def get_theme(name: str) -> Theme:
    """Get a theme by name. Raises KeyError if not found."""
    if name not in THEMES:
        available = ', '.join(THEMES.keys())
        raise KeyError(f"Theme '{name}' not found. Available: {available}")
    return THEMES[name]


def register_theme(theme: Theme) -> None:
    """Register a custom theme."""
    THEMES[theme.name] = theme
