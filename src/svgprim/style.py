"""Resolve element style and extract drawing options from it.

An element's style map is built from its inline `style` attribute
overlaid with its presentation attributes. Note that a presentation
attribute overrides the same property in the `style` attribute,
which is the reverse of the CSS cascade.

Ancestor style is only merged in when passed explicitly as
`inherited`. The element's own properties win.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from . import css
from .errors import InvalidUnit

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .css import Color
    from .prim import Option
    from .svg import TElement

logger = logging.getLogger(__name__)

# Presentation attributes that are copied into the style map.
PRESENTATION_ATTRIBUTES = (
    'fill',
    'fill-opacity',
    'fill-rule',
    'stroke',
    'stroke-opacity',
    'stroke-width',
    'font-size',
    'font-family',
    'font-weight',
    'text-anchor',
)

# text-anchor to text_align option values
_TEXT_ANCHOR_ALIGN = {
    'start': 'left',
    'middle': 'center',
    'end': 'right',
}

_RE_LENGTH = re.compile(
    r'([-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?)\s*([a-zA-Z%]*)'
)


def resolve_style(
    element: TElement, inherited: Mapping[str, str] | None = None
) -> dict[str, str]:
    """Resolve the style map of an element.

    Args:
        element: An SVG element.
        inherited: Optional resolved style map of an ancestor.
            It is not modified.

    Returns:
        A new style map with the element's own properties
        overlaid on the inherited ones.
    """
    style_map = dict(inherited) if inherited else {}
    style_map.update(element_style(element))
    return style_map


def element_style(element: TElement) -> dict[str, str]:
    """Get the style properties specified on the element itself.

    Presentation attributes override declarations in the `style`
    attribute. Empty attribute values are ignored.
    """
    style_map = css.inline_style_to_dict(element.get('style'))
    for name in PRESENTATION_ATTRIBUTES:
        value = element.get(name)
        if value is not None:
            value = value.strip()
            if value:
                style_map[name] = value
    return style_map


def fill_from_style(style: Mapping[str, str]) -> Option | None:
    """Get the `fill` option, with `fill-opacity` applied.

    Returns:
        ('fill', Color) or None if there is no fill color.
    """
    color = _style_color(style, 'fill')
    if color is None:
        return None
    return ('fill', color)


def stroke_from_style(style: Mapping[str, str]) -> Option | None:
    """Get the `stroke` option, with `stroke-opacity` applied.

    Both a stroke color and a numeric stroke width must be
    specified. The width is truncated to an integer.

    Returns:
        ('stroke', (width, Color)) or None.
    """
    color = _style_color(style, 'stroke')
    width = _parse_px(style.get('stroke-width'))
    if color is None or width is None:
        return None
    return ('stroke', (int(width), color))


def font_size_from_style(style: Mapping[str, str]) -> Option | None:
    """Get the `font_size` option.

    Returns:
        ('font_size', int) or None if there is no font size.

    Raises:
        InvalidUnit: If the font size isn't a number with a `px` suffix.
    """
    value = style.get('font-size')
    if value is None:
        return None
    m = _RE_LENGTH.fullmatch(value.strip())
    if not m or m.group(2) != 'px':
        raise InvalidUnit(
            f'Expected a font size in px: "{value}"', attribute='font-size'
        )
    return ('font_size', int(float(m.group(1))))


def text_align_from_style(
    style: Mapping[str, str], default: str = 'left'
) -> Option:
    """Get the `text_align` option from `text-anchor`."""
    anchor = style.get('text-anchor')
    return ('text_align', _TEXT_ANCHOR_ALIGN.get(anchor or '', default))


def _style_color(style: Mapping[str, str], name: str) -> Color | None:
    value = style.get(name)
    color = css.parse_color(value)
    if color is None:
        if value and value != 'none':
            logger.debug('Unresolved %s color: %s', name, value)
        return None
    opacity = css.parse_opacity(style.get(f'{name}-opacity'))
    return css.opacity_compose(color, opacity)


def _parse_px(value: str | None) -> float | None:
    """Parse a number with an optional `px` suffix."""
    if value is None:
        return None
    m = _RE_LENGTH.fullmatch(value.strip())
    if not m or m.group(2) not in {'', 'px'}:
        return None
    return float(m.group(1))
