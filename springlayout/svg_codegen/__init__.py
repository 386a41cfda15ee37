"""Layout → SVG code generation helpers."""

from .generator import (
    Bounds,
    Circle,
    Line,
    SvgRenderer,
    Tag,
    elements_from_graph,
    generate_svg_document,
)

__all__ = [
    "Bounds",
    "Circle",
    "Line",
    "SvgRenderer",
    "Tag",
    "elements_from_graph",
    "generate_svg_document",
]
