"""Convert SVG documents to a tree of drawing primitives."""

from __future__ import annotations

import logging
import re
import sys
from typing import TYPE_CHECKING, Any

from lxml import etree

from .errors import SVGParseError, SVGPrimError
from .path import parse_path
from .prim import (
    Circle,
    Document,
    Ellipse,
    Group,
    Path,
    Rect,
    Text,
    normalize_options,
)
from .style import (
    fill_from_style,
    font_size_from_style,
    resolve_style,
    stroke_from_style,
    text_align_from_style,
)
from .transform import parse_transform, scale_factors, transform_options

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import BinaryIO, TextIO

    from typing_extensions import TypeAlias

    from .prim import Option, Primitive

logger = logging.getLogger(__name__)

# : SVG Namespaces
SVG_NS = {
    '': 'http://www.w3.org/2000/svg',
    'svg': 'http://www.w3.org/2000/svg',
    'xlink': 'http://www.w3.org/1999/xlink',
}

DEFAULT_FONT = 'roboto'
DEFAULT_TEXT_ALIGN = 'left'

TDocument: TypeAlias = (
    etree._ElementTree  # noqa: SLF001 pylint: disable=protected-access
)
TElement: TypeAlias = (
    etree._Element  # noqa: SLF001 pylint: disable=protected-access
)

_RE_FLOAT = re.compile(
    r'\s*(([-+]?[0-9]+(\.[0-9]*)?|[-+]?\.[0-9]+)([eE][-+]?[0-9]+)?)'
)


def strip_ns(tag: str) -> str:
    """Strip the namespace part from the tag if any."""
    return tag.rpartition('}')[2]


def scalar_value(scalar: str | None, default: float = 0.0) -> float:
    """Get the numeric part of an SVG/CSS scalar size value.

    For example: 15.3 from '15.3in', or 10 from the
    coordinate list '10 20 30'.
    """
    if scalar:
        m = _RE_FLOAT.match(scalar)
        if m:
            return float(m.group(1))
    return default


def element_tag(element: TElement) -> str | None:
    """Get the element tag stripped of namespace.

    Returns:
        The local tag name, or None if the node is not an element
        (i.e. a comment or processing instruction).
    """
    if not isinstance(element.tag, str):
        return None
    return strip_ns(element.tag)


def describe_element(element: TElement) -> str:
    """Element tag and id (if any) for error messages."""
    tag = element_tag(element) or str(element.tag)
    element_id = element.get('id')
    if element_id:
        return f'{tag} id="{element_id}"'
    return tag


def parse(
    stream: BinaryIO | TextIO | None = None,
    huge_tree: bool = True,
    **options: Any,  # noqa: ANN401
) -> Document:
    """Parse an SVG file (or stdin) and convert it to primitives.

    Args:
        stream: The input stream to parse. If this is None
            stdin will be read by default.
        huge_tree: Disable security restrictions and
            support very deep trees.
        options: Builder options. See :class:`PrimitiveBuilder`.

    Returns:
        A Document.

    Raises:
        SVGParseError: If the input isn't well formed XML.
        SVGPrimError: If the SVG content can't be converted.
    """
    parser = etree.XMLParser(huge_tree=huge_tree)
    if stream is None:
        stream = sys.stdin.buffer
    try:
        document = etree.parse(stream, parser=parser)
    except etree.XMLSyntaxError as e:
        raise SVGParseError(f'Unable to parse SVG: {e}') from e
    return document_from_root(document.getroot(), **options)


def from_string(
    svg_data: str | bytes,
    huge_tree: bool = True,
    **options: Any,  # noqa: ANN401
) -> Document:
    """Convert an SVG document string to primitives.

    Args:
        svg_data: The SVG document text.
        huge_tree: Disable security restrictions and
            support very deep trees.
        options: Builder options. See :class:`PrimitiveBuilder`.

    Returns:
        A Document.
    """
    if isinstance(svg_data, str):
        # lxml refuses str input that has an encoding declaration.
        svg_data = svg_data.encode('utf-8')
    parser = etree.XMLParser(huge_tree=huge_tree)
    try:
        root = etree.fromstring(svg_data, parser=parser)
    except etree.XMLSyntaxError as e:
        raise SVGParseError(f'Unable to parse SVG: {e}') from e
    return document_from_root(root, **options)


def document_from_root(
    root: TElement,
    **options: Any,  # noqa: ANN401
) -> Document:
    """Convert a parsed SVG root element to a Document.

    The document width and height are the numeric parts of the
    root `width` and `height` attributes, truncated to integers.
    """
    if element_tag(root) != 'svg':
        raise SVGParseError(f'Root element is not <svg>: {root.tag}')
    width = int(scalar_value(root.get('width')))
    height = int(scalar_value(root.get('height')))
    logger.debug('SVG document size: %d x %d', width, height)
    return Document(width, height, PrimitiveBuilder(**options).build(root))


def build(
    root: TElement,
    font: str = DEFAULT_FONT,
    text_align: str = DEFAULT_TEXT_ALIGN,
) -> Group:
    """Build the primitive tree of an SVG root element.

    Args:
        root: The root `svg` element.
        font: Font id of text primitives.
        text_align: Default text alignment when there is
            no `text-anchor`.

    Returns:
        A group containing the primitives of the root's children.
    """
    return PrimitiveBuilder(font=font, text_align=text_align).build(root)


class PrimitiveBuilder:
    """Converts SVG elements to primitives.

    Supported elements are `rect`, `circle`, `ellipse`, `text`
    (with optional `tspan` children), `g`, and `path`.
    Anything else is skipped.

    Style cascades explicitly: each element resolves its style map
    on top of its parent group's resolved map. A child does not
    repeat a fill or stroke option that its group already carries.
    """

    font: str
    text_align: str

    def __init__(
        self, font: str = DEFAULT_FONT, text_align: str = DEFAULT_TEXT_ALIGN
    ) -> None:
        """New primitive builder.

        Args:
            font: Font id of text primitives.
            text_align: Default text alignment when there is
                no `text-anchor`.
        """
        self.font = font
        self.text_align = text_align

    def build(self, root: TElement) -> Group:
        """Build the primitive tree of an SVG root element."""
        return Group(self._children(root, None))

    def element_to_prim(
        self, element: TElement, inherited: Mapping[str, str] | None = None
    ) -> Primitive | None:
        """Convert an SVG element to a primitive.

        Args:
            element: An SVG element.
            inherited: Resolved style map of the enclosing group, if any.

        Returns:
            A primitive, or None if the element isn't supported.

        Raises:
            SVGPrimError: If the element content is malformed.
                The error is tagged with the element.
        """
        tag = element_tag(element)
        try:
            if tag == 'rect':
                return self._rect(element, inherited)
            if tag in {'circle', 'ellipse'}:
                return self._circle_or_ellipse(tag, element, inherited)
            if tag == 'text':
                return self._text(element, inherited)
            if tag == 'g':
                return self._group(element, inherited)
            if tag == 'path':
                return self._path(element, inherited)
        except SVGPrimError as e:
            e.locate(describe_element(element))
            raise
        if tag is not None:
            logger.debug('Skipping unsupported element: %s', tag)
        return None

    def _children(
        self, element: TElement, inherited: Mapping[str, str] | None
    ) -> tuple[Primitive, ...]:
        prims = (self.element_to_prim(child, inherited) for child in element)
        return tuple(prim for prim in prims if prim is not None)

    def _rect(
        self, element: TElement, inherited: Mapping[str, str] | None
    ) -> Rect:
        style = resolve_style(element, inherited)
        x = scalar_value(element.get('x'))
        y = scalar_value(element.get('y'))
        width = scalar_value(element.get('width'))
        height = scalar_value(element.get('height'))
        options = normalize_options(
            self._paint_options(style, inherited),
            transform_options(element.get('transform')),
            ('t', (x, y)),
        )
        return Rect(width, height, options)

    def _circle_or_ellipse(
        self, tag: str, element: TElement, inherited: Mapping[str, str] | None
    ) -> Circle | Ellipse:
        style = resolve_style(element, inherited)
        cx = scalar_value(element.get('cx'))
        cy = scalar_value(element.get('cy'))
        options = normalize_options(
            self._paint_options(style, inherited),
            transform_options(element.get('transform')),
            ('t', (cx, cy)),
        )
        if tag == 'circle':
            return Circle(scalar_value(element.get('r')), options)
        rx = scalar_value(element.get('rx'))
        ry = scalar_value(element.get('ry'))
        return Ellipse(rx, ry, options)

    def _text(
        self, element: TElement, inherited: Mapping[str, str] | None
    ) -> Text | Group:
        text_style = resolve_style(element, inherited)
        # Only scaling applies to text, and only to its position.
        scale = scale_factors(parse_transform(element.get('transform')))
        tspans = [child for child in element if element_tag(child) == 'tspan']
        if not tspans:
            return self._text_span(element, element, text_style, scale, inherited)
        return Group(
            tuple(
                self._text_span(
                    tspan,
                    element,
                    resolve_style(tspan, text_style),
                    scale,
                    inherited,
                )
                for tspan in tspans
            )
        )

    def _text_span(
        self,
        node: TElement,
        text_element: TElement,
        style: Mapping[str, str],
        scale: tuple[float, float],
        inherited: Mapping[str, str] | None,
    ) -> Text:
        x = scalar_value(node.get('x'), scalar_value(text_element.get('x')))
        y = scalar_value(node.get('y'), scalar_value(text_element.get('y')))
        try:
            font_size = font_size_from_style(style)
        except SVGPrimError as e:
            e.locate(describe_element(node))
            raise
        options = normalize_options(
            self._paint_options(style, inherited),
            font_size,
            text_align_from_style(style, self.text_align),
            ('font', self.font),
            ('t', (int(scale[0] * x), int(scale[1] * y))),
        )
        return Text(''.join(node.itertext()), options)

    def _group(
        self, element: TElement, inherited: Mapping[str, str] | None
    ) -> Group:
        style = resolve_style(element, inherited)
        children = self._children(element, style)
        # Group style and transform apply to the group only,
        # children inherit them from the group when drawn.
        options = normalize_options(
            self._paint_options(style, inherited),
            transform_options(element.get('transform')),
        )
        return Group(children, options)

    def _path(
        self, element: TElement, inherited: Mapping[str, str] | None
    ) -> Path:
        style = resolve_style(element, inherited)
        commands = parse_path(element.get('d'))
        options = normalize_options(
            self._paint_options(style, inherited),
            transform_options(element.get('transform')),
        )
        return Path(tuple(commands), options)

    def _paint_options(
        self, style: Mapping[str, str], inherited: Mapping[str, str] | None
    ) -> list[Option | None]:
        """Get fill and stroke options that differ from the inherited ones."""
        fill = fill_from_style(style)
        stroke = stroke_from_style(style)
        if inherited is not None:
            if fill == fill_from_style(inherited):
                fill = None
            if stroke == stroke_from_style(inherited):
                stroke = None
        return [fill, stroke]
