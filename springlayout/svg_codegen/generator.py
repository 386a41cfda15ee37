"""SVG renderer for finished layouts."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union
from xml.sax.saxutils import escape

import numpy as np

from ..logging_utils import debug_log_call
from ..model import Node, Relation

logger = logging.getLogger(__name__)

STROKE_STYLE = 'stroke="black" stroke-width="2px"'
LABEL_FONT_SIZE = 12

svg_tpl = """<svg width="%s" height="%s" xmlns="http://www.w3.org/2000/svg">
%s
</svg>
"""


@dataclass(frozen=True)
class Bounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def union(self, other: "Bounds") -> "Bounds":
        return Bounds(
            min(self.min_x, other.min_x),
            max(self.max_x, other.max_x),
            min(self.min_y, other.min_y),
            max(self.max_y, other.max_y),
        )


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float

    def bounds(self) -> Bounds:
        return Bounds(self.x - self.radius, self.x + self.radius, self.y - self.radius, self.y + self.radius)


@dataclass(frozen=True)
class Line:
    start: Tuple[float, float]
    stop: Tuple[float, float]

    def bounds(self) -> Bounds:
        xs = (self.start[0], self.stop[0])
        ys = (self.start[1], self.stop[1])
        return Bounds(min(xs), max(xs), min(ys), max(ys))


@dataclass(frozen=True)
class Tag:
    x: float
    y: float
    text: str

    def bounds(self) -> Bounds:
        return Bounds(self.x, self.x, self.y, self.y)


Element = Union[Circle, Line, Tag]


@dataclass(frozen=True)
class _Transform:
    x_scale: float
    x_offset: float
    y_scale: float
    y_offset: float

    def apply(self, x: float, y: float) -> Tuple[str, str]:
        return (
            _format_float((x - self.x_offset) * self.x_scale),
            _format_float((y - self.y_offset) * self.y_scale),
        )


class SvgRenderer:
    """Collects elements and fits them onto a fixed-size canvas."""

    def __init__(self) -> None:
        self.elements: List[Element] = []
        self.bounds: Optional[Bounds] = None

    def add_element(self, element: Element) -> None:
        box = element.bounds()
        self.bounds = box if self.bounds is None else self.bounds.union(box)
        self.elements.append(element)

    def render(self, width: float, height: float) -> str:
        transform = self._transform(width, height)
        body = "\n".join(_emit(element, transform) for element in self.elements)
        return svg_tpl % (_format_float(width), _format_float(height), body)

    def _transform(self, width: float, height: float) -> _Transform:
        if self.bounds is None:
            return _Transform(1.0, 0.0, 1.0, 0.0)
        spans = np.array(
            [self.bounds.max_x - self.bounds.min_x, self.bounds.max_y - self.bounds.min_y],
            dtype=float,
        )
        if not np.all(np.isfinite(spans)):
            raise ValueError("Cannot render a layout with non-finite coordinates")
        x_span, y_span = spans.tolist()
        x_scale = width / x_span if x_span > 0.0 else 1.0
        y_scale = height / y_span if y_span > 0.0 else 1.0
        return _Transform(x_scale, self.bounds.min_x, y_scale, self.bounds.min_y)


def _emit(element: Element, transform: _Transform) -> str:
    if isinstance(element, Circle):
        cx, cy = transform.apply(element.x, element.y)
        return f'<circle {STROKE_STYLE} cx="{cx}" cy="{cy}" r="{_format_float(element.radius)}" />'
    if isinstance(element, Line):
        x1, y1 = transform.apply(*element.start)
        x2, y2 = transform.apply(*element.stop)
        return f'<line {STROKE_STYLE} x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" />'
    x, y = transform.apply(element.x, element.y)
    return f'<text x="{x}" y="{y}" font-size="{LABEL_FONT_SIZE}">{escape(element.text)}</text>'


def elements_from_graph(
    nodes: Sequence[Node], relations: Iterable[Relation], *, labels: bool = False
) -> List[Element]:
    elements: List[Element] = []
    for node in nodes:
        loc = node.loc
        elements.append(Circle(loc.x, loc.y, node.weight))
        if labels:
            elements.append(Tag(loc.x, loc.y, str(node.id)))
    for relation in relations:
        elements.append(Line(relation.source.loc.as_tuple(), relation.target.loc.as_tuple()))
    return elements


@debug_log_call(logger, name="generate_svg_document", log_result=False)
def generate_svg_document(
    nodes: Sequence[Node],
    relations: Iterable[Relation],
    width: float,
    height: float,
    *,
    labels: bool = False,
) -> str:
    """Render nodes as circles sized by weight and relations as lines."""

    renderer = SvgRenderer()
    for element in elements_from_graph(nodes, relations, labels=labels):
        renderer.add_element(element)
    logger.info("Rendering %d SVG element(s) at %sx%s", len(renderer.elements), width, height)
    return renderer.render(width, height)


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for SVG output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted
