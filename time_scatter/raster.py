"""
Raster surface — Display list rasterized with OpenCV onto a numpy canvas.

Architecture:
=============
    group()/circle()/line()/path()/text()
        │  record Primitive(kind, group, matrix, attrs)
        ▼
    display list (document order)
        │  to_image()
        ▼
    _canvas (H×W×3 uint8 BGR)  ──►  save_png()

Group transforms compose as 3×3 affine matrices, exactly like nested SVG
transforms, so a primitive's canvas position is matrix @ (x, y, 1).
Presentation attributes (text-anchor, font-size, fill-opacity) inherit
through the group chain at rasterization time; colors come from the
theme by primitive kind and class, mirroring the SVG stylesheet.

Sub-pixel precision:
    OpenCV draws integer coordinates. Points are scaled by 2^SHIFT and
    passed with shift=SHIFT so a tick at x=225.5 lands between pixels
    instead of snapping.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import cv2
import numpy as np

from .colors import Theme, get_theme
from .surface import Point, svg_attr_name


logger = logging.getLogger(__name__)

SHIFT = 4
_ONE = 1 << SHIFT

_FONT = cv2.FONT_HERSHEY_SIMPLEX
_FONT_PX_AT_SCALE_1 = 22.0       # getTextSize height of HERSHEY_SIMPLEX at scale 1

_INHERITED = ("text-anchor", "font-size", "fill-opacity", "fill")

_PATH_COMMAND = re.compile(r"([A-Za-z])([^A-Za-z]*)")
_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def affine(translate: Optional[Point] = None, rotate: Optional[float] = None) -> np.ndarray:
    """3×3 matrix for SVG 'translate(tx,ty) rotate(deg)'."""
    m = np.eye(3)
    if translate is not None:
        m[0, 2], m[1, 2] = translate
    if rotate is not None:
        a = math.radians(rotate)
        c, s = math.cos(a), math.sin(a)
        m = m @ np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
    return m


def parse_path(d: str) -> list[list[Point]]:
    """Absolute M/L/H/V/Z path data → list of polylines."""
    subpaths: list[list[Point]] = []
    current: list[Point] = []
    x = y = 0.0
    for cmd, args in _PATH_COMMAND.findall(d):
        nums = [float(n) for n in _NUMBER.findall(args)]
        if cmd == "M":
            if len(current) > 1:
                subpaths.append(current)
            x, y = nums[0], nums[1]
            current = [(x, y)]
            # Extra coordinate pairs after M are implicit L commands
            for i in range(2, len(nums) - 1, 2):
                x, y = nums[i], nums[i + 1]
                current.append((x, y))
        elif cmd == "L":
            for i in range(0, len(nums) - 1, 2):
                x, y = nums[i], nums[i + 1]
                current.append((x, y))
        elif cmd == "H":
            for n in nums:
                x = n
                current.append((x, y))
        elif cmd == "V":
            for n in nums:
                y = n
                current.append((x, y))
        elif cmd == "Z":
            if current:
                current.append(current[0])
        else:
            raise ValueError(f"Unsupported path command '{cmd}' in {d!r}")
    if len(current) > 1:
        subpaths.append(current)
    return subpaths


def _em(value: Any, font_px: float) -> float:
    if value is None:
        return 0.0
    text = str(value).strip()
    if text.endswith("em"):
        return float(text[:-2]) * font_px
    if text.endswith("px"):
        text = text[:-2]
    return float(text)


@dataclass
class Primitive:
    """One recorded drawing call."""
    kind: str
    group: "RasterGroup"
    matrix: np.ndarray
    attrs: dict[str, Any]
    classes: frozenset[str] = field(default_factory=frozenset)

    def attr(self, name: str, default: Any = None) -> Any:
        """Own attribute, else inherited from the group chain."""
        if name in self.attrs:
            return self.attrs[name]
        return self.group.inherited(name, default)

    def position(self, x: float, y: float) -> tuple[float, float]:
        px, py, _ = self.matrix @ (x, y, 1.0)
        return float(px), float(py)


class RasterGroup:
    """Group protocol recording into a RasterSurface display list."""

    def __init__(self, surface: "RasterSurface", parent: Optional["RasterGroup"],
                 matrix: np.ndarray, attrs: dict[str, Any]):
        self._surface = surface
        self._parent = parent
        self.matrix = matrix
        self.attrs = attrs

    @property
    def classes(self) -> frozenset[str]:
        own = frozenset(str(self.attrs.get("class", "")).split())
        return own | self._parent.classes if self._parent is not None else own

    def inherited(self, name: str, default: Any = None) -> Any:
        if name in self.attrs and name in _INHERITED:
            return self.attrs[name]
        if self._parent is not None:
            return self._parent.inherited(name, default)
        return default

    def _record(self, kind: str, attrs: dict[str, Any],
                matrix: Optional[np.ndarray] = None) -> Primitive:
        attrs = {svg_attr_name(k): v for k, v in attrs.items()}
        prim = Primitive(
            kind=kind,
            group=self,
            matrix=self.matrix if matrix is None else matrix,
            attrs=attrs,
            classes=frozenset(str(attrs.get("class", "")).split()) | self.classes,
        )
        self._surface._items.append(prim)
        return prim

    def group(self, translate: Optional[Point] = None,
              rotate: Optional[float] = None, **attrs: Any) -> "RasterGroup":
        return RasterGroup(
            self._surface, self,
            self.matrix @ affine(translate, rotate),
            {svg_attr_name(k): v for k, v in attrs.items()},
        )

    def circle(self, cx: float, cy: float, r: float, **attrs: Any) -> None:
        self._record("circle", {**attrs, "cx": cx, "cy": cy, "r": r})

    def line(self, x1: float = 0, y1: float = 0,
             x2: float = 0, y2: float = 0, **attrs: Any) -> None:
        self._record("line", {**attrs, "x1": x1, "y1": y1, "x2": x2, "y2": y2})

    def path(self, d: str, **attrs: Any) -> None:
        self._record("path", {**attrs, "d": d})

    def text(self, content: str, x: float = 0, y: float = 0,
             rotate: Optional[float] = None, **attrs: Any) -> None:
        style = attrs.pop("style", None) or {}
        matrix = self.matrix @ affine(rotate=rotate) if rotate is not None else None
        self._record("text", {**attrs, **style, "x": x, "y": y, "content": content}, matrix)

    def set_attrs(self, **attrs: Any) -> None:
        self.attrs.update({svg_attr_name(k): v for k, v in attrs.items()})


class RasterSurface:
    """Surface protocol over a numpy BGR canvas."""

    def __init__(self, width: int = 960, height: int = 500,
                 theme: Optional[Theme] = None, antialiased: bool = True):
        self._width = width
        self._height = height
        self.theme = theme or get_theme("light")
        self._line_type = cv2.LINE_AA if antialiased else cv2.LINE_8
        self._items: list[Primitive] = []
        self._root = RasterGroup(self, None, np.eye(3), {})

    # ── Surface protocol ──
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def root(self) -> RasterGroup:
        return self._root

    def clear(self) -> None:
        if self._items:
            logger.debug(f"Cleared {len(self._items)} primitive(s) from raster surface")
        self._items.clear()
        self._root = RasterGroup(self, None, np.eye(3), {})

    # ── Inspection ──
    def primitives(self, kind: Optional[str] = None,
                   class_: Optional[str] = None) -> list[Primitive]:
        return [
            p for p in self._items
            if (kind is None or p.kind == kind)
            and (class_ is None or class_ in p.classes)
        ]

    # ──────────────────────────────────────────────────────
    # Rasterization
    # ──────────────────────────────────────────────────────
    def to_image(self) -> np.ndarray:
        """Rasterize the display list. Returns canvas (H×W×3 uint8 BGR)."""
        canvas = np.zeros((self._height, self._width, 3), dtype=np.uint8)
        canvas[:] = self.theme.bg

        for prim in self._items:
            if prim.kind == "circle":
                self._draw_circle(canvas, prim)
            elif prim.kind == "line":
                self._draw_line(canvas, prim)
            elif prim.kind == "path":
                self._draw_path(canvas, prim)
            elif prim.kind == "text":
                self._draw_text(canvas, prim)
        return canvas

    def save_png(self, path: Union[str, Path]) -> str:
        """Rasterize and write a PNG. Returns the path written."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not cv2.imwrite(str(path), self.to_image()):
            raise RuntimeError(f"OpenCV could not write image to {path}")
        logger.info(f"Saved raster chart to {path}")
        return str(path)

    def _stroke(self, prim: Primitive) -> Optional[tuple[int, int, int]]:
        if prim.attr("stroke") == "none":
            return None
        return self.theme.resolve(prim.kind, prim.classes)

    def _draw_circle(self, canvas: np.ndarray, prim: Primitive) -> None:
        if prim.attrs.get("fill") == "none":
            return
        cx, cy = prim.position(float(prim.attrs["cx"]), float(prim.attrs["cy"]))
        scale = math.sqrt(abs(np.linalg.det(prim.matrix[:2, :2])))
        r = float(prim.attrs["r"]) * scale
        alpha = float(prim.attr("fill-opacity", 1.0))
        color = self.theme.resolve("circle", prim.classes)

        # Blend only the circle's bounding box
        x0, y0 = max(int(cx - r) - 1, 0), max(int(cy - r) - 1, 0)
        x1 = min(int(math.ceil(cx + r)) + 2, self._width)
        y1 = min(int(math.ceil(cy + r)) + 2, self._height)
        if x0 >= x1 or y0 >= y1:
            return

        roi = canvas[y0:y1, x0:x1]
        overlay = roi.copy()
        cv2.circle(overlay,
                   (round((cx - x0) * _ONE), round((cy - y0) * _ONE)),
                   round(r * _ONE), color, -1, self._line_type, SHIFT)
        canvas[y0:y1, x0:x1] = cv2.addWeighted(overlay, alpha, roi, 1.0 - alpha, 0)

    def _draw_line(self, canvas: np.ndarray, prim: Primitive) -> None:
        color = self._stroke(prim)
        if color is None:
            return
        a = prim.position(float(prim.attrs["x1"]), float(prim.attrs["y1"]))
        b = prim.position(float(prim.attrs["x2"]), float(prim.attrs["y2"]))
        cv2.line(canvas,
                 (round(a[0] * _ONE), round(a[1] * _ONE)),
                 (round(b[0] * _ONE), round(b[1] * _ONE)),
                 color, 1, self._line_type, SHIFT)

    def _draw_path(self, canvas: np.ndarray, prim: Primitive) -> None:
        color = self._stroke(prim)
        if color is None:
            return
        polylines = []
        for sub in parse_path(str(prim.attrs["d"])):
            pts = [prim.position(x, y) for x, y in sub]
            polylines.append(np.round(np.array(pts) * _ONE).astype(np.int32))
        if polylines:
            cv2.polylines(canvas, polylines, False, color, 1, self._line_type, SHIFT)

    def _draw_text(self, canvas: np.ndarray, prim: Primitive) -> None:
        # Hershey fonts are ASCII-only
        content = str(prim.attrs["content"]).replace("−", "-")
        if not content:
            return

        if "axis-label" in prim.classes:
            font_px = float(self.theme.label_font_size)
        else:
            font_px = float(prim.attr("font-size", self.theme.tick_font_size))
        scale = font_px / _FONT_PX_AT_SCALE_1
        (w, h), baseline = cv2.getTextSize(content, _FONT, scale, 1)

        anchor = prim.attr("text-anchor", "start")
        x = float(prim.attrs["x"]) - {"middle": w / 2, "end": w}.get(anchor, 0.0)
        y = float(prim.attrs["y"]) + _em(prim.attrs.get("dy"), font_px)

        # Render upright into a mask, then warp it through the full transform
        patch = np.zeros((h + baseline + 2, w + 2), dtype=np.uint8)
        cv2.putText(patch, content, (1, h + 1), _FONT, scale, 255, 1, self._line_type)
        m = prim.matrix @ affine(translate=(x - 1, y - h - 1))
        mask = cv2.warpAffine(patch, m[:2], (self._width, self._height),
                              flags=cv2.INTER_LINEAR)

        a = (mask.astype(np.float32) / 255.0)[..., None]
        color = np.array(self.theme.resolve("text", prim.classes), dtype=np.float32)
        canvas[:] = (canvas * (1.0 - a) + color * a).astype(np.uint8)
