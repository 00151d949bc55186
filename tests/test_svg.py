"""Test SVG document conversion to primitives."""

from __future__ import annotations

import json
import pathlib

import pytest
from svgprim import svg
from svgprim.css import Color
from svgprim.errors import (
    InvalidUnit,
    MalformedTransform,
    SVGParseError,
    UnsupportedPathCommand,
)
from svgprim.path import Begin, BezierTo, ClosePath, LineTo, MoveTo
from svgprim.prim import Circle, Document, Ellipse, Group, Path, Rect, Text

TESTDIR = pathlib.Path(__file__).parent
DRAWING_FILE = TESTDIR / 'files/drawing.svg'

SVG_HEAD = '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100">'
SVG_TAIL = '</svg>'

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)
BLACK = Color(0, 0, 0)


def _convert(body: str, **options: str) -> Document:
    return svg.from_string(SVG_HEAD + body + SVG_TAIL, **options)


def _prims(body: str, **options: str) -> tuple:
    return _convert(body, **options).root.children


def test_rect() -> None:
    (prim,) = _prims('<rect x="10" y="10" width="100" height="100"/>')
    assert prim == Rect(100.0, 100.0, (('t', (10.0, 10.0)),))


def test_circle_fill_opacity() -> None:
    (prim,) = _prims(
        '<circle cx="5" cy="6" r="7"'
        ' style="fill:#ad1c1c;fill-opacity:0.71"/>'
    )
    assert prim == Circle(
        7.0, (('fill', Color(173, 28, 28, 181)), ('t', (5.0, 6.0)))
    )


def test_ellipse() -> None:
    (prim,) = _prims(
        '<ellipse cx="1" cy="2" rx="3" ry="4" transform="rotate(30)"'
        ' stroke="blue" stroke-width="2"/>'
    )
    assert prim == Ellipse(
        3.0,
        4.0,
        (('rotate', 30.0), ('stroke', (2, BLUE)), ('t', (1.0, 2.0))),
    )


def test_translation_accumulates() -> None:
    (prim,) = _prims(
        '<rect x="10" y="0" width="1" height="1" transform="translate(5,5)"/>'
    )
    assert prim.options == (('t', (15.0, 5.0)),)


def test_repeated_transform() -> None:
    (prim,) = _prims(
        '<rect x="1" y="2" width="1" height="1"'
        ' transform="scale(2) scale(2)"/>'
    )
    (key, matrix), t = prim.options
    assert key == 'matrix'
    assert [c for row in matrix for c in row] == pytest.approx(
        [4.0, 0.0, 0.0, 0.0, 4.0, 0.0]
    )
    assert t == ('t', (1.0, 2.0))

    (prim,) = _prims('<g transform="rotate(45) rotate(45)"/>')
    ((key, matrix),) = prim.options
    assert key == 'matrix'
    assert [c for row in matrix for c in row] == pytest.approx(
        [0.0, -1.0, 0.0, 1.0, 0.0, 0.0]
    )


def test_unknown_elements_skipped() -> None:
    prims = _prims(
        '<!-- comment --><defs><rect width="1" height="1"/></defs>'
        '<metadata/><rect width="2" height="3"/>'
    )
    assert prims == (Rect(2.0, 3.0, (('t', (0.0, 0.0)),)),)


def test_path() -> None:
    (prim,) = _prims(
        '<path d="M 0,0 10,0 10,10 z" fill="red" transform="scale(2)"/>'
    )
    assert prim == Path(
        (
            Begin(),
            MoveTo(0.0, 0.0),
            LineTo(10.0, 0.0),
            LineTo(10.0, 10.0),
            ClosePath(),
        ),
        (('fill', RED), ('scale', (2.0, 2.0))),
    )


def test_text() -> None:
    (prim,) = _prims(
        '<text x="10" y="20" transform="translate(3,3) scale(2)"'
        ' style="font-size:12px" text-anchor="end">Hello</text>'
    )
    assert prim == Text(
        'Hello',
        (
            ('font', 'roboto'),
            ('font_size', 12),
            ('t', (20, 40)),
            ('text_align', 'right'),
        ),
    )


def test_text_builder_options() -> None:
    (prim,) = _prims('<text>Hi</text>', font='serif', text_align='center')
    assert prim == Text(
        'Hi',
        (('font', 'serif'), ('t', (0, 0)), ('text_align', 'center')),
    )


def test_text_tspans() -> None:
    (prim,) = _prims(
        '<text x="1" y="2" style="font-size:10px" fill="red">'
        '<tspan x="5">A</tspan>'
        '<tspan y="7" font-size="20px" fill="blue">B</tspan>'
        '</text>'
    )
    assert prim == Group(
        (
            Text(
                'A',
                (
                    ('fill', RED),
                    ('font', 'roboto'),
                    ('font_size', 10),
                    ('t', (5, 2)),
                    ('text_align', 'left'),
                ),
            ),
            Text(
                'B',
                (
                    ('fill', BLUE),
                    ('font', 'roboto'),
                    ('font_size', 20),
                    ('t', (1, 7)),
                    ('text_align', 'left'),
                ),
            ),
        )
    )


def test_group() -> None:
    (prim,) = _prims(
        '<g fill="red" transform="scale(2)">'
        '<rect fill="red" width="1" height="1"/>'
        '<circle fill="blue" r="1"/>'
        '</g>'
    )
    assert prim == Group(
        (
            Rect(1.0, 1.0, (('t', (0.0, 0.0)),)),
            Circle(1.0, (('fill', BLUE), ('t', (0.0, 0.0)))),
        ),
        (('fill', RED), ('scale', (2.0, 2.0))),
    )


def test_group_style_inherited() -> None:
    (group,) = _prims(
        '<g style="stroke:black"><g stroke-width="3">'
        '<rect width="1" height="1"/></g></g>'
    )
    # The inner group completes the stroke, the outer has no stroke option.
    assert group.options == ()
    (inner,) = group.children
    assert inner.options == (('stroke', (3, BLACK)),)
    (rect,) = inner.children
    assert rect.options == (('t', (0.0, 0.0)),)


def test_document_size() -> None:
    document = svg.from_string(
        '<svg xmlns="http://www.w3.org/2000/svg" width="210mm" height="297.5mm"/>'
    )
    assert (document.width, document.height) == (210, 297)
    assert document.root == Group()


def test_drawing_file() -> None:
    with DRAWING_FILE.open('rb') as f:
        document = svg.parse(f)
    assert (document.width, document.height) == (210, 297)
    layer, text = document.root.children
    assert layer == Group(
        (
            Rect(100.0, 50.0, (('t', (10.0, 10.0)),)),
            Circle(
                20.0,
                (('fill', Color(173, 28, 28, 181)), ('t', (50.0, 120.0))),
            ),
            Path(
                (
                    Begin(),
                    MoveTo(10.0, 200.0),
                    LineTo(60.0, 200.0),
                    LineTo(60.0, 220.0),
                    BezierTo(60.0, 230.0, 50.0, 240.0, 40.0, 240.0),
                    ClosePath(),
                ),
                (('t', (5.0, 5.0)),),
            ),
        ),
        (('fill', Color(0, 0, 128)), ('stroke', (1, BLACK))),
    )
    grey = Color(51, 51, 51)
    assert text == Group(
        (
            Text(
                'Hello',
                (
                    ('fill', grey),
                    ('font', 'roboto'),
                    ('font_size', 16),
                    ('t', (20, 280)),
                    ('text_align', 'center'),
                ),
            ),
            Text(
                'World',
                (
                    ('fill', grey),
                    ('font', 'roboto'),
                    ('font_size', 12),
                    ('t', (20, 290)),
                    ('text_align', 'center'),
                ),
            ),
        )
    )


def test_deterministic() -> None:
    data = DRAWING_FILE.read_bytes()
    assert svg.from_string(data) == svg.from_string(data)


def test_to_spec() -> None:
    document = _convert(
        '<g transform="matrix(1,2,3,4,5,6)">'
        '<circle r="2" fill="#ad1c1c" fill-opacity="0.71"/>'
        '<path d="M0,0 L1,1 Z" stroke="black" stroke-width="1"/>'
        '</g>'
    )
    spec = document.to_spec()
    assert spec == {
        'width': 200,
        'height': 100,
        'root': [
            'group',
            [
                [
                    'group',
                    [
                        [
                            'circle',
                            2.0,
                            [['fill', [173, 28, 28, 181]], ['t', [0.0, 0.0]]],
                        ],
                        [
                            'path',
                            [
                                'begin',
                                ['move_to', 0.0, 0.0],
                                ['line_to', 1.0, 1.0],
                                'close_path',
                            ],
                            [['stroke', [1, [0, 0, 0]]]],
                        ],
                    ],
                    [
                        [
                            'matrix',
                            [1.0, 3.0, 5.0, 0.0, 2.0, 4.0, 6.0, 0.0]
                            + [0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0],
                        ]
                    ],
                ],
            ],
            [],
        ],
    }
    # Plain data only
    assert json.loads(json.dumps(spec)) == spec


def test_path_error_located() -> None:
    with pytest.raises(UnsupportedPathCommand) as excinfo:
        _convert('<g id="layer"><path id="p1" d="M 0,0 A 1,1 0 0 1 2,2"/></g>')
    error = excinfo.value
    assert error.element == 'path id="p1"'
    assert error.attribute == 'd'
    assert str(error).startswith('<path id="p1"> @d: ')


def test_transform_error_located() -> None:
    with pytest.raises(MalformedTransform) as excinfo:
        _convert('<rect width="1" height="1" transform="skewX(30)"/>')
    assert excinfo.value.element == 'rect'
    assert excinfo.value.attribute == 'transform'


def test_font_size_error_located() -> None:
    with pytest.raises(InvalidUnit) as excinfo:
        _convert('<text><tspan id="s1" font-size="12pt">A</tspan></text>')
    assert excinfo.value.element == 'tspan id="s1"'
    assert excinfo.value.attribute == 'font-size'


def test_parse_errors() -> None:
    with pytest.raises(SVGParseError):
        svg.from_string('<svg width="1"')
    with pytest.raises(SVGParseError):
        svg.from_string('<html/>')


def test_scalar_value() -> None:
    assert svg.scalar_value('15.3in') == 15.3
    assert svg.scalar_value(' 10 20 30') == 10.0
    assert svg.scalar_value('-1e2px') == -100.0
    assert svg.scalar_value(None) == 0.0
    assert svg.scalar_value('auto', 5.0) == 5.0
