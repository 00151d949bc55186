"""Test transform attribute parsing."""

from __future__ import annotations

import pytest
from svgprim import transform
from svgprim.errors import MalformedTransform

TRANSFORMS = (
    ('translate(10, 20)', [('t', (10.0, 20.0))]),
    ('translate(10)', [('t', (10.0, 0.0))]),
    ('scale(2)', [('scale', (2.0, 2.0))]),
    ('scale(2 3)', [('scale', (2.0, 3.0))]),
    ('rotate(45)', [('rotate', 45.0)]),
    (
        'matrix(1,2,3,4,5,6)',
        [('matrix', ((1.0, 3.0, 5.0), (2.0, 4.0, 6.0)))],
    ),
    (
        ' translate(5,5) scale(.5),rotate(-90) ',
        [('t', (5.0, 5.0)), ('scale', (0.5, 0.5)), ('rotate', -90.0)],
    ),
    ('', []),
    (None, []),
)

MALFORMED = (
    'translate(10',
    'translate 10 20',
    'skewX(30)',
    'rotate(45, 10, 10)',
    'matrix(1 2 3)',
    'scale(a)',
    'scale()',
)


def _flat(matrix: tuple) -> list[float]:
    return [c for row in matrix for c in row]


@pytest.mark.parametrize(('value', 'expected'), TRANSFORMS)
def test_parse_transform(value: str | None, expected: list) -> None:
    assert transform.parse_transform(value) == expected


@pytest.mark.parametrize('value', MALFORMED)
def test_malformed_transform(value: str) -> None:
    with pytest.raises(MalformedTransform) as excinfo:
        transform.parse_transform(value)
    assert excinfo.value.attribute == 'transform'


def test_matrix4() -> None:
    ((_, matrix),) = transform.parse_transform('matrix(1,2,3,4,5,6)')
    assert transform.matrix4(matrix) == [
        [1.0, 3.0, 5.0, 0.0],
        [2.0, 4.0, 6.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
    ]


def test_to_matrix() -> None:
    assert transform.to_matrix([]) == transform.IDENTITY_MATRIX

    ops = transform.parse_transform('translate(10,20) scale(2)')
    matrix = transform.to_matrix(ops)
    expected = ((2.0, 0.0, 10.0), (0.0, 2.0, 20.0))
    assert _flat(matrix) == pytest.approx(_flat(expected))

    ops = transform.parse_transform('rotate(90)')
    matrix = transform.to_matrix(ops)
    assert _flat(matrix) == pytest.approx([0.0, -1.0, 0.0, 1.0, 0.0, 0.0])


def test_scale_factors() -> None:
    ops = transform.parse_transform('translate(5) scale(2,3) rotate(9) scale(2)')
    assert transform.scale_factors(ops) == (4.0, 6.0)
    assert transform.scale_factors([]) == (1.0, 1.0)


def test_transform_options() -> None:
    assert transform.transform_options('translate(1,2) scale(3)') == [
        ('t', (1.0, 2.0)),
        ('scale', (3.0, 3.0)),
    ]
    assert transform.transform_options(None) == []


def test_transform_options_repeated() -> None:
    ((key, matrix),) = transform.transform_options('scale(2) scale(2)')
    assert key == 'matrix'
    assert _flat(matrix) == pytest.approx([4.0, 0.0, 0.0, 0.0, 4.0, 0.0])

    ((key, matrix),) = transform.transform_options(
        'translate(10,0) rotate(45) rotate(45)'
    )
    assert key == 'matrix'
    assert _flat(matrix) == pytest.approx([0.0, -1.0, 10.0, 1.0, 0.0, 0.0])
