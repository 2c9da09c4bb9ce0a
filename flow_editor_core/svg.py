"""
SVG draw surface and geometry helpers.

A DrawSurface is owned by the caller: renderers append primitives to it and
never clear it. Redrawing a node without leaking overlays is the caller's job
(``surface.clear()`` before the second draw).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple
from xml.sax.saxutils import quoteattr


XLINK_NS = "http://www.w3.org/1999/xlink"
SVG_NS = "http://www.w3.org/2000/svg"


def fmt(value: Any) -> str:
    """Format a number for an SVG attribute, dropping a trailing .0."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class SvgElement:
    """A single SVG primitive: tag name plus attributes in insertion order."""
    tag: str
    attrs: Tuple[Tuple[str, Any], ...] = ()

    @classmethod
    def create(cls, tag: str, **attrs) -> 'SvgElement':
        return cls(tag, tuple((name.replace('_', '-'), value) for name, value in attrs.items()))

    def get(self, name: str, default: Any = None) -> Any:
        for key, value in self.attrs:
            if key == name:
                return value
        return default

    def to_dict(self) -> Dict[str, Any]:
        return {'tag': self.tag, 'attrs': dict(self.attrs)}

    def to_svg(self) -> str:
        rendered = " ".join(f"{key}={quoteattr(fmt(value))}" for key, value in self.attrs)
        return f"<{self.tag} {rendered}/>" if rendered else f"<{self.tag}/>"


@dataclass
class DrawSurface:
    """Caller-owned, ordered container of drawn primitives."""
    elements: List[SvgElement] = field(default_factory=list)

    def append(self, element: SvgElement) -> SvgElement:
        self.elements.append(element)
        return element

    def clear(self):
        self.elements.clear()

    def __iter__(self) -> Iterator[SvgElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def to_svg(self, width: float = None, height: float = None) -> str:
        """Serialize the surface as a standalone SVG document."""
        size = ""
        if width is not None and height is not None:
            size = f' width="{fmt(width)}" height="{fmt(height)}"'
        body = "".join(element.to_svg() for element in self.elements)
        return f'<svg xmlns="{SVG_NS}" xmlns:xlink="{XLINK_NS}"{size}>{body}</svg>'


# =============================================================================
# BOUNDARY PATHS: absolute coordinates, used for connection anchors
# =============================================================================

def rect_path(x: float, y: float, width: float, height: float) -> str:
    return (f"M{fmt(x)},{fmt(y)}l{fmt(width)},0l0,{fmt(height)}"
            f"l{fmt(-width)},0z")


def circle_path(x: float, y: float, width: float, height: float) -> str:
    cx, cy = x + width / 2, y + height / 2
    radius = width / 2
    return (f"M{fmt(cx)},{fmt(cy)}m0,{fmt(-radius)}"
            f"a{fmt(radius)},{fmt(radius)},0,1,1,0,{fmt(2 * radius)}"
            f"a{fmt(radius)},{fmt(radius)},0,1,1,0,{fmt(-2 * radius)}z")


def diamond_path(x: float, y: float, width: float, height: float) -> str:
    half_w, half_h = width / 2, height / 2
    return (f"M{fmt(x + half_w)},{fmt(y)}l{fmt(half_w)},{fmt(half_h)}"
            f"l{fmt(-half_w)},{fmt(half_h)}l{fmt(-half_w)},{fmt(-half_h)}z")


def diamond_points(width: float, height: float) -> List[Tuple[float, float]]:
    """Vertices of the diamond inscribed in a width x height box, clockwise from top."""
    cx, cy = width / 2, height / 2
    return [(cx, 0), (width, cy), (cx, height), (0, cy)]


def points_attr(points: List[Tuple[float, float]]) -> str:
    return " ".join(f"{fmt(px)},{fmt(py)}" for px, py in points)
