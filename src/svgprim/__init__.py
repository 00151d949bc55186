"""Convert SVG documents to abstract vector drawing primitives.

An SVG document is converted to a tree of primitives (rect, circle,
ellipse, text, path, and group) with resolved geometry, fill and
stroke colors, and transform options, suitable for feeding a
scene graph or immediate mode renderer.

Only the subset of SVG commonly produced by vector drawing editors
is supported: basic shapes, text and tspans, groups, and paths made
of lines and cubic Beziers. Inline styles and presentation attributes
are supported, style sheets are not.
"""

import importlib.metadata

__version__ = importlib.metadata.version('utl-svgprim')
