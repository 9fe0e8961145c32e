"""
SVG surface — Draws straight into an lxml element tree.

    surface = SvgSurface(960, 500)                 # new <svg>
    surface = SvgSurface.wrap(existing_svg_el)     # draw into a host document

Wrapping an element adopts its namespace, so children of an un-namespaced
<svg> (parsed from plain HTML) stay un-namespaced too. The surface size is
read from the element's width/height attributes on every access, the same
way a browser would read them at render time.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

from lxml import etree

from .colors import Theme, to_css
from .errors import InvalidSurfaceError
from .surface import Point, format_attr, svg_attr_name, transform_attr


logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"


def _namespace(element: etree._Element) -> Optional[str]:
    return etree.QName(element).namespace


def local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


class SvgGroup:
    """Group protocol over one lxml element."""

    def __init__(self, element: etree._Element):
        self.element = element

    def _append(self, tag: str, attrs: dict[str, Any]) -> etree._Element:
        ns = _namespace(self.element)
        child = etree.SubElement(self.element, f"{{{ns}}}{tag}" if ns else tag)
        for key, value in attrs.items():
            if value is not None:
                child.set(svg_attr_name(key), format_attr(value))
        return child

    def group(self, translate: Optional[Point] = None,
              rotate: Optional[float] = None, **attrs: Any) -> "SvgGroup":
        child = self._append("g", {"transform": transform_attr(translate, rotate), **attrs})
        return SvgGroup(child)

    def circle(self, cx: float, cy: float, r: float, **attrs: Any) -> None:
        self._append("circle", {"cx": cx, "cy": cy, **attrs, "r": r})

    def line(self, x1: float = 0, y1: float = 0,
             x2: float = 0, y2: float = 0, **attrs: Any) -> None:
        coords = {k: v for k, v in (("x1", x1), ("y1", y1), ("x2", x2), ("y2", y2)) if v}
        self._append("line", {**attrs, **coords})

    def path(self, d: str, **attrs: Any) -> None:
        self._append("path", {**attrs, "d": d})

    def text(self, content: str, x: float = 0, y: float = 0,
             rotate: Optional[float] = None, **attrs: Any) -> None:
        style = attrs.pop("style", None)
        el = self._append("text", {**attrs, "x": x, "y": y,
                                   "transform": transform_attr(rotate=rotate)})
        if style:
            el.set("style", "; ".join(f"{svg_attr_name(k)}: {v}" for k, v in style.items()))
        el.text = content

    def set_attrs(self, **attrs: Any) -> None:
        for key, value in attrs.items():
            self.element.set(svg_attr_name(key), format_attr(value))


class SvgSurface:
    """Surface protocol over an <svg> element."""

    def __init__(self, width: Union[int, float] = 960, height: Union[int, float] = 500,
                 theme: Optional[Theme] = None):
        element = etree.Element(f"{{{SVG_NS}}}svg", nsmap={None: SVG_NS})
        element.set("width", format_attr(width))
        element.set("height", format_attr(height))
        self._init(element, theme)

    @classmethod
    def wrap(cls, element: etree._Element, theme: Optional[Theme] = None) -> "SvgSurface":
        """Bind to an existing element (e.g. <svg id="chart"> in a page)."""
        obj = cls.__new__(cls)
        obj._init(element, theme)
        return obj

    @classmethod
    def from_string(cls, svg_text: str, theme: Optional[Theme] = None) -> "SvgSurface":
        return cls.wrap(etree.fromstring(svg_text.encode("utf-8")), theme)

    def _init(self, element: etree._Element, theme: Optional[Theme]) -> None:
        self.element = element
        self.theme = theme
        self._style: Optional[etree._Element] = None
        if theme is not None:
            self._install_theme(theme)

    def _install_theme(self, theme: Theme) -> None:
        ns = _namespace(self.element)
        style = etree.Element(f"{{{ns}}}style" if ns else "style")
        style.text = "\n" + theme.stylesheet() + "\n"
        self.element.insert(0, style)
        self._style = style
        # currentColor inherits from the CSS `color` property
        self.element.set("color", to_css(theme.foreground))
        self.element.set("style", f"background-color: {to_css(theme.bg)}")

    # ── Surface protocol ──
    @property
    def width(self) -> float:
        return self._dimension("width")

    @property
    def height(self) -> float:
        return self._dimension("height")

    def _dimension(self, name: str) -> float:
        raw = self.element.get(name)
        if raw is None:
            raise InvalidSurfaceError(f"SVG element has no '{name}' attribute")
        text = raw.strip()
        if text.endswith("px"):
            text = text[:-2]
        try:
            return float(text)
        except ValueError:
            raise InvalidSurfaceError(
                f"SVG '{name}' attribute is not a pixel size: {raw!r}"
            ) from None

    def root(self) -> SvgGroup:
        return SvgGroup(self.element)

    def clear(self) -> None:
        """Remove everything drawn so far; keeps the theme stylesheet."""
        removed = 0
        for child in list(self.element):
            if child is not self._style:
                self.element.remove(child)
                removed += 1
        if removed:
            logger.debug(f"Cleared {removed} element(s) from SVG surface")

    # ── Inspection / output ──
    def find_all(self, tag: str, class_: Optional[str] = None) -> list[etree._Element]:
        """All descendants with this local tag name (and class, if given)."""
        found = []
        for el in self.element.iter():
            if not isinstance(el.tag, str) or el is self.element:
                continue
            if local_name(el) != tag:
                continue
            if class_ is not None and class_ not in (el.get("class") or "").split():
                continue
            found.append(el)
        return found

    def to_string(self, pretty: bool = True) -> str:
        return etree.tostring(self.element, pretty_print=pretty, encoding="unicode")

    def save(self, path: Union[str, Path], pretty: bool = True) -> str:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_string(pretty=pretty), encoding="utf-8")
        logger.info(f"Saved SVG chart to {path}")
        return str(path)
