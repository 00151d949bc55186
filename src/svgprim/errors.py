"""Exceptions raised while converting an SVG document to primitives.

All of these are fatal for the document being converted.
Soft cases (missing attributes, unknown colors, unknown elements)
never raise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing_extensions import Self


class SVGPrimError(Exception):
    """Base class for SVG to primitive conversion errors.

    Attributes:
        element: Description of the element being converted when
            the error occurred (tag and optional id), or None.
        attribute: Name of the offending attribute, or None.
    """

    element: str | None = None
    attribute: str | None = None

    def __init__(
        self,
        message: str,
        element: str | None = None,
        attribute: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.element = element
        self.attribute = attribute

    def locate(self, element: str, attribute: str | None = None) -> Self:
        """Tag the error with the input region it came from.

        The innermost location wins, so an error raised in a nested
        element keeps that element when it propagates up through
        its parents.
        """
        if self.element is None:
            self.element = element
            if self.attribute is None:
                self.attribute = attribute
        return self

    def __str__(self) -> str:
        where = []
        if self.element:
            where.append(f'<{self.element}>')
        if self.attribute:
            where.append(f'@{self.attribute}')
        if where:
            return f'{" ".join(where)}: {self.message}'
        return self.message


class MalformedTransform(SVGPrimError):
    """Unparsable `transform` attribute."""


class InvalidPathToken(SVGPrimError):
    """Unparsable path data."""


class UnsupportedPathCommand(SVGPrimError):
    """Path data uses a command or number syntax that isn't handled."""


class InvalidUnit(SVGPrimError):
    """A length value has a unit other than the expected one."""


class DuplicateOption(SVGPrimError):
    """More than one value for an option that can't be merged."""


class SVGParseError(SVGPrimError):
    """The input is not a parsable SVG document."""
