"""Drawing primitives produced from SVG elements.

A primitive is one of :class:`Rect`, :class:`Circle`, :class:`Ellipse`,
:class:`Text`, :class:`Path`, or :class:`Group`. Each carries its
geometry and a normalized tuple of `(key, value)` options:

    fill        Color
    stroke      (width, Color)
    font_size   int (px)
    font        font identifier
    text_align  'left', 'center', or 'right'
    t           (x, y) translation
    scale       (sx, sy)
    rotate      angle in degrees
    matrix      2x3 affine matrix ((a, c, e), (b, d, f))

Option tuples are sorted by key and have at most one entry per key.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from operator import itemgetter
from typing import TYPE_CHECKING, Any, ClassVar, Union

from .errors import DuplicateOption
from .path import Begin, ClosePath
from .transform import matrix4

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from typing_extensions import TypeAlias

    from .path import PathCommand

    Option: TypeAlias = tuple[str, Any]


@dataclass(frozen=True)
class Rect:
    """Rectangle of size (width, height) at the origin."""

    kind: ClassVar[str] = 'rect'

    width: float
    height: float
    options: tuple[Option, ...] = ()


@dataclass(frozen=True)
class Circle:
    """Circle centered at the origin."""

    kind: ClassVar[str] = 'circle'

    radius: float
    options: tuple[Option, ...] = ()


@dataclass(frozen=True)
class Ellipse:
    """Axis-aligned ellipse centered at the origin."""

    kind: ClassVar[str] = 'ellipse'

    radius_x: float
    radius_y: float
    options: tuple[Option, ...] = ()


@dataclass(frozen=True)
class Text:
    """Text drawn at the origin."""

    kind: ClassVar[str] = 'text'

    text: str
    options: tuple[Option, ...] = ()


@dataclass(frozen=True)
class Path:
    """Path made of absolute drawing commands."""

    kind: ClassVar[str] = 'path'

    commands: tuple[PathCommand, ...]
    options: tuple[Option, ...] = ()


@dataclass(frozen=True)
class Group:
    """Ordered list of child primitives.

    Children are drawn in order so later children overlay
    earlier ones.
    """

    kind: ClassVar[str] = 'group'

    children: tuple[Primitive, ...] = ()
    options: tuple[Option, ...] = ()


Primitive: TypeAlias = Union[Rect, Circle, Ellipse, Text, Path, Group]


@dataclass(frozen=True)
class Document:
    """A converted SVG document.

    Attributes:
        width: Document width from the root `svg` element.
        height: Document height from the root `svg` element.
        root: A group containing the top level primitives.
    """

    width: int
    height: int
    root: Group

    def to_spec(self) -> dict[str, Any]:
        """Convert the document to plain (JSON serializable) data."""
        return {
            'width': self.width,
            'height': self.height,
            'root': to_spec(self.root),
        }


def normalize_options(*raw_options: Any) -> tuple[Option, ...]:  # noqa: ANN401
    """Normalize a raw, possibly nested, list of options.

    Nested lists of options are flattened and None entries
    are dropped. Translations (`t`) are summed component-wise.
    Any other option must appear only once.

    Args:
        raw_options: Options, None, or lists of options.

    Returns:
        A tuple of (key, value) options sorted by key.

    Raises:
        DuplicateOption: If a non-`t` option appears more than once.
    """
    grouped: dict[str, list[Any]] = {}
    for key, value in _flatten_options(raw_options):
        if value is not None:
            grouped.setdefault(key, []).append(value)

    options: list[Option] = []
    for key, values in grouped.items():
        if key == 't':
            value = (sum(v[0] for v in values), sum(v[1] for v in values))
        elif len(values) > 1:
            raise DuplicateOption(f'More than one "{key}" option: {values}')
        else:
            value = values[0]
        options.append((key, value))
    return tuple(sorted(options, key=itemgetter(0)))


def _is_option(item: Any) -> bool:  # noqa: ANN401
    return (
        isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str)  # noqa: PLR2004
    )


def _flatten_options(items: Iterable[Any]) -> Iterator[Option]:
    for item in items:
        if item is None:
            continue
        if _is_option(item):
            yield item
        elif isinstance(item, (list, tuple)):
            yield from _flatten_options(item)
        else:
            raise TypeError(f'Not an option: {item!r}')


def to_spec(prim: Primitive) -> list[Any]:
    """Convert a primitive tree to plain data for a renderer.

    Each primitive becomes `[kind, geometry, options]` where
    options is a list of `[key, value]` pairs. Opaque colors are
    simplified to RGB and matrices are flattened to 16
    coefficients (4x4, row-major).
    """
    geometry: Any
    if isinstance(prim, Group):
        geometry = [to_spec(child) for child in prim.children]
    elif isinstance(prim, Path):
        geometry = [_command_spec(cmd) for cmd in prim.commands]
    elif isinstance(prim, Rect):
        geometry = [prim.width, prim.height]
    elif isinstance(prim, Ellipse):
        geometry = [prim.radius_x, prim.radius_y]
    elif isinstance(prim, Circle):
        geometry = prim.radius
    elif isinstance(prim, Text):
        geometry = prim.text
    else:
        raise TypeError(f'Not a primitive: {prim!r}')
    options = [[key, _option_spec(key, value)] for key, value in prim.options]
    return [prim.kind, geometry, options]


def _command_spec(cmd: PathCommand) -> Any:  # noqa: ANN401
    if isinstance(cmd, (Begin, ClosePath)):
        return cmd.name
    return [cmd.name, *dataclasses.astuple(cmd)]


def _option_spec(key: str, value: Any) -> Any:  # noqa: ANN401
    if key == 'fill':
        return list(value.simplify())
    if key == 'stroke':
        width, color = value
        return [width, list(color.simplify())]
    if key == 'matrix':
        return [c for row in matrix4(value) for c in row]
    if isinstance(value, tuple):
        return list(value)
    return value
