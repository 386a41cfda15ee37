import math
import re

import pytest

from springlayout.model import Node, Relation
from springlayout.svg_codegen import (
    Circle,
    Line,
    SvgRenderer,
    Tag,
    elements_from_graph,
    generate_svg_document,
)


def _graph():
    a = Node(1, 0.0, 0.0, 1.0)
    b = Node(2, 10.0, 0.0, 2.0)
    c = Node(3, 10.0, 20.0, 1.0)
    relations = [Relation(1.0, a, b), Relation(1.0, b, c)]
    for relation in relations:
        relation.register()
    return [a, b, c], relations


def test_generate_svg_document_emits_circles_and_lines():
    nodes, relations = _graph()

    document = generate_svg_document(nodes, relations, 100.0, 200.0)

    assert document.startswith('<svg width="100" height="200" xmlns="http://www.w3.org/2000/svg">')
    assert document.rstrip().endswith("</svg>")
    assert document.count("<circle") == 3
    assert document.count("<line") == 2
    assert "<text" not in document


def test_circle_radius_is_node_weight():
    nodes, relations = _graph()

    document = generate_svg_document(nodes, relations, 100.0, 100.0)

    radii = sorted(float(r) for r in re.findall(r' r="([^"]+)"', document))
    assert radii == [1.0, 1.0, 2.0]


def test_bounds_include_circle_extent():
    renderer = SvgRenderer()
    renderer.add_element(Circle(0.0, 0.0, 1.0))
    renderer.add_element(Circle(10.0, 5.0, 2.0))
    renderer.add_element(Line((0.0, 0.0), (10.0, 5.0)))

    assert renderer.bounds.min_x == -1.0
    assert renderer.bounds.max_x == 12.0
    assert renderer.bounds.min_y == -1.0
    assert renderer.bounds.max_y == 7.0


def test_render_scales_into_canvas():
    renderer = SvgRenderer()
    renderer.add_element(Line((2.0, 4.0), (6.0, 12.0)))

    document = renderer.render(100.0, 50.0)

    assert '<line stroke="black" stroke-width="2px" x1="0" y1="0" x2="100" y2="50" />' in document


def test_single_point_does_not_divide_by_zero():
    renderer = SvgRenderer()
    renderer.add_element(Tag(3.0, 3.0, "A & B"))

    document = renderer.render(10.0, 10.0)

    assert '<text x="0" y="0" font-size="12">A &amp; B</text>' in document


def test_labels_add_tags():
    nodes, relations = _graph()

    elements = elements_from_graph(nodes, relations, labels=True)

    tags = [element for element in elements if isinstance(element, Tag)]
    assert [tag.text for tag in tags] == ["1", "2", "3"]


def test_non_finite_layout_is_rejected():
    renderer = SvgRenderer()
    renderer.add_element(Circle(math.nan, 0.0, 1.0))
    renderer.add_element(Circle(1.0, math.inf, 1.0))
    with pytest.raises(ValueError):
        renderer.render(10.0, 10.0)


def test_empty_document():
    document = SvgRenderer().render(10.0, 10.0)
    assert document == '<svg width="10" height="10" xmlns="http://www.w3.org/2000/svg">\n\n</svg>\n'
