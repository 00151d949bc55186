"""Parse SVG transform attributes into transform options.

Transforms are kept as an ordered list of options rather than
collapsed into a single matrix so that a renderer can apply
translation, scale, and rotation natively.
:func:`to_matrix` composes them when a single matrix is needed.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Any

from geom2d import transform2d

from .errors import MalformedTransform

if TYPE_CHECKING:
    from collections.abc import Iterable

    from geom2d.transform2d import TMatrix
    from typing_extensions import TypeAlias

    TransformOp: TypeAlias = tuple[str, Any]

# Pre-compiled RE for a single transform function in a transform list.
_TRANSFORM_RE = re.compile(r'\s*([A-Za-z]+)\s*\(([^)]*)\)\s*,?')
_ARGS_SEP_RE = re.compile(r'[\s,]+')

IDENTITY_MATRIX = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0))

# Allowed argument counts per transform function
_TRANSFORM_NARGS = {
    'translate': (1, 2),
    'scale': (1, 2),
    'rotate': (1,),
    'matrix': (6,),
}


def parse_transform(stransform: str | None) -> list[TransformOp]:
    """Parse an SVG transform attribute.

    Args:
        stransform: A string containing the SVG transform list.

    Returns:
        A list of transform options in document order. One of:
        `('t', (x, y))`, `('scale', (sx, sy))`, `('rotate', degrees)`,
        or `('matrix', ((a, c, e), (b, d, f)))`.

    Raises:
        MalformedTransform: If the transform list can't be parsed.
    """
    if not stransform:
        return []
    stransform = stransform.strip()
    ops: list[TransformOp] = []
    pos = 0
    while pos < len(stransform):
        m = _TRANSFORM_RE.match(stransform, pos)
        if not m:
            raise MalformedTransform(
                f'Unparsable transform: "{stransform[pos:]}"',
                attribute='transform',
            )
        ops.append(_parse_transform_function(m.group(1), m.group(2)))
        pos = m.end()
    return ops


def _parse_transform_function(name: str, args: str) -> TransformOp:
    nargs = _TRANSFORM_NARGS.get(name)
    if nargs is None:
        raise MalformedTransform(
            f'Unsupported transform function: {name}', attribute='transform'
        )
    try:
        values = [float(n) for n in _ARGS_SEP_RE.split(args.strip()) if n]
    except ValueError as e:
        raise MalformedTransform(
            f'Invalid {name} arguments: "{args}"', attribute='transform'
        ) from e
    if len(values) not in nargs:
        raise MalformedTransform(
            f'{name} takes {" or ".join(str(n) for n in nargs)} arguments,'
            f' got {len(values)}',
            attribute='transform',
        )

    if name == 'translate':
        x = values[0]
        y = values[1] if len(values) > 1 else 0.0
        return ('t', (x, y))
    if name == 'scale':
        x = values[0]
        y = values[1] if len(values) > 1 else x
        return ('scale', (x, y))
    if name == 'rotate':
        return ('rotate', values[0])
    # matrix
    a, b, c, d, e, f = values
    return ('matrix', ((a, c, e), (b, d, f)))


def transform_options(stransform: str | None) -> list[TransformOp]:
    """Parse an SVG transform attribute into mergeable options.

    A transform list that repeats a `scale`, `rotate`, or `matrix`
    can't be expressed with one option per key, so the whole list
    is composed into a single `matrix` option.

    Raises:
        MalformedTransform: If the transform list can't be parsed.
    """
    ops = parse_transform(stransform)
    keys = [op for op, _value in ops if op != 't']
    if len(keys) == len(set(keys)):
        return ops
    return [('matrix', to_matrix(ops))]


def matrix4(matrix: TMatrix) -> list[list[float]]:
    """Expand a 2D affine matrix to a 4x4 row-major matrix.

    Args:
        matrix: A 2x3 transform matrix ((a, c, e), (b, d, f)).

    Returns:
        The rows [a, c, e, 0], [b, d, f, 0], [0, 0, 1, 0], [0, 0, 0, 0].
    """
    (a, c, e), (b, d, f) = matrix
    return [
        [a, c, e, 0.0],
        [b, d, f, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 0.0],
    ]


def to_matrix(ops: Iterable[TransformOp]) -> TMatrix:
    """Compose a list of transform options into a single matrix.

    Options are applied in SVG transform list order,
    i.e. the right-most transform is applied to a point first.

    Args:
        ops: Transform options as returned by :func:`parse_transform`.

    Returns:
        A 2x3 transform matrix. The identity matrix if `ops` is empty.
    """
    result_matrix: TMatrix = IDENTITY_MATRIX
    for op, value in ops:
        if op == 't':
            matrix = transform2d.matrix_translate(*value)
        elif op == 'scale':
            matrix = transform2d.matrix_scale(*value)
        elif op == 'rotate':
            matrix = transform2d.matrix_rotate(math.radians(value))
        elif op == 'matrix':
            matrix = value
        else:
            raise ValueError(f'Not a transform option: {op}')
        result_matrix = transform2d.compose_transform(result_matrix, matrix)
    return result_matrix


def scale_factors(ops: Iterable[TransformOp]) -> tuple[float, float]:
    """Get the combined X and Y scale of the `scale` options only."""
    sx, sy = 1.0, 1.0
    for op, value in ops:
        if op == 'scale':
            sx *= value[0]
            sy *= value[1]
    return (sx, sy)
