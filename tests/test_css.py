"""Test CSS color and inline style parsing."""

from __future__ import annotations

import pytest
from svgprim import css
from svgprim.css import Color

HEX_COLORS = (
    ('#fff', Color(255, 255, 255)),
    ('#000', Color(0, 0, 0)),
    ('#f00a', Color(255, 0, 0, 170)),
    ('#ad1c1c', Color(173, 28, 28)),
    ('#AD1C1C', Color(173, 28, 28)),
    ('#ad1c1c80', Color(173, 28, 28, 128)),
)

NAMED_COLORS = (
    ('red', Color(255, 0, 0)),
    ('White', Color(255, 255, 255)),
    ('Dark Blue', Color(0, 0, 139)),
    ('  navy ', Color(0, 0, 128)),
    ('rebeccapurple', Color(102, 51, 153)),
)

NO_COLORS = (None, '', 'none', 'None', 'notacolor', '#12', '#12345', '#ggg')


@pytest.mark.parametrize(('value', 'expected'), HEX_COLORS)
def test_hex_color(value: str, expected: Color) -> None:
    assert css.parse_color(value) == expected


@pytest.mark.parametrize(('value', 'expected'), NAMED_COLORS)
def test_named_color(value: str, expected: Color) -> None:
    assert css.parse_color(value) == expected


@pytest.mark.parametrize('value', NO_COLORS)
def test_no_color(value: str | None) -> None:
    assert css.parse_color(value) is None


def test_color_simplify() -> None:
    assert Color(1, 2, 3).simplify() == (1, 2, 3)
    assert Color(1, 2, 3, 4).simplify() == (1, 2, 3, 4)


def test_opacity() -> None:
    assert css.parse_opacity(None) is None
    assert css.parse_opacity('junk') is None
    assert css.parse_opacity('0.5') == 0.5
    assert css.parse_opacity('50%') == 0.5
    assert css.parse_opacity('2') == 1.0
    assert css.parse_opacity('-1') == 0.0


def test_opacity_compose() -> None:
    color = css.parse_color('#ad1c1c')
    assert css.opacity_compose(color, 0.71) == Color(173, 28, 28, 181)
    assert css.opacity_compose(color, None) == color
    assert css.opacity_compose(None, 0.5) is None
    # Alpha already present is scaled, not replaced
    assert css.opacity_compose(Color(0, 0, 0, 128), 0.5) == Color(0, 0, 0, 64)


def test_inline_style() -> None:
    style = css.inline_style_to_dict(
        'fill:#ad1c1c; fill-opacity : 0.71;;stroke:;font-family:a:b'
    )
    assert style == {
        'fill': '#ad1c1c',
        'fill-opacity': '0.71',
        'font-family': 'a:b',
    }
    assert css.inline_style_to_dict(None) == {}
    assert css.inline_style_to_dict('') == {}
