"""Parse SVG path data into absolute drawing commands.

Parsing is done in two passes: :func:`tokenize` splits the path data
into opcode and number tokens, and :func:`reduce_tokens` folds the
token stream into a list of drawing commands with absolute coordinates.

Supported commands are M, L, H, V, C, and Z plus their relative
(lower case) variants. Shorthand, quadratic, and arc commands are not
supported.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, NamedTuple, Union

from .errors import InvalidPathToken, UnsupportedPathCommand

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from typing_extensions import TypeAlias

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Begin:
    """Start of a path."""

    name: ClassVar[str] = 'begin'


@dataclass(frozen=True)
class MoveTo:
    """Start a new sub-path at (x, y)."""

    name: ClassVar[str] = 'move_to'

    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    """Straight line from the current point to (x, y)."""

    name: ClassVar[str] = 'line_to'

    x: float
    y: float


@dataclass(frozen=True)
class BezierTo:
    """Cubic Bezier curve from the current point to (x, y)."""

    name: ClassVar[str] = 'bezier_to'

    c1x: float
    c1y: float
    c2x: float
    c2y: float
    x: float
    y: float


@dataclass(frozen=True)
class ClosePath:
    """Close the current sub-path."""

    name: ClassVar[str] = 'close_path'


PathCommand: TypeAlias = Union[Begin, MoveTo, LineTo, BezierTo, ClosePath]

COMMA_WSP = ', \t\n\r\f\v'
DRAWTO_COMMAND = 'MmZzLlHhVvCc'
UNSUPPORTED_COMMAND = 'AaQqTtSs'
NUMBER_START = '+-.0123456789'

_RE_FLOAT = re.compile(
    r'[-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?'
)

# Number of operands consumed by each (upper case) command.
_OPERAND_COUNT = {
    'M': 2,
    'L': 2,
    'H': 1,
    'V': 1,
    'C': 6,
    'Z': 0,
}


class _PathState(NamedTuple):
    """Reducer state: current point and active opcode."""

    x: float
    y: float
    op: str | None


def parse_path(path_data: str | None) -> list[PathCommand]:
    """Parse an SVG path definition string.

    Relative coordinates are converted to absolute and
    H/V are converted to line-to commands.

    Args:
        path_data: The 'd' attribute value of a SVG path element.

    Returns:
        A list of path commands. The first command is always `Begin()`.

    Raises:
        InvalidPathToken: If the path data is malformed.
        UnsupportedPathCommand: If the path data contains a command
            that isn't supported.
    """
    if not path_data:
        logger.debug('Empty path data')
        return [Begin()]
    return reduce_tokens(tokenize(path_data))


def tokenize(path_data: str) -> Iterator[tuple[str | float, bool]]:
    """Tokenize SVG path data.

    A generator that yields tuples containing a
    command token or a numeric parameter token
    followed by a boolean flag that is True if the token
    is a command and False if the token is a number.

    Args:
        path_data: The 'd' attribute of an SVG path.

    Yields:
        A 2-tuple with token and token type hint.

    Raises:
        InvalidPathToken: If a token is neither a command or a number.
        UnsupportedPathCommand: On arc/quadratic/shorthand commands or
            numbers that are not separated from the following number.
    """
    pos = 0
    end = len(path_data)
    while pos < end:
        char = path_data[pos]
        if char in COMMA_WSP:
            pos += 1
        elif char in DRAWTO_COMMAND:
            yield (char, True)
            pos += 1
        elif char in UNSUPPORTED_COMMAND:
            raise UnsupportedPathCommand(
                f'Unsupported path command "{char}" at {pos}', attribute='d'
            )
        else:
            m = _RE_FLOAT.match(path_data, pos)
            if not m:
                raise InvalidPathToken(
                    f'Invalid path data at {pos}: "{path_data[pos:pos + 16]}"',
                    attribute='d',
                )
            pos = m.end()
            if pos < end and path_data[pos] in NUMBER_START:
                raise UnsupportedPathCommand(
                    f'Unseparated numbers at {pos}:'
                    f' "{path_data[m.start() : pos + 16]}"',
                    attribute='d',
                )
            yield (float(m.group()), False)


def reduce_tokens(tokens: Iterable[tuple[str | float, bool]]) -> list[PathCommand]:
    """Reduce path tokens to a list of absolute path commands.

    Each complete group of operands emits one command. Operand groups
    that follow without an opcode repeat the previous opcode, except
    that extra coordinate pairs after a move-to are line-tos.

    Args:
        tokens: Tokens as yielded by :func:`tokenize`.

    Returns:
        A list of path commands starting with `Begin()`.
    """
    commands: list[PathCommand] = [Begin()]
    state = _PathState(0.0, 0.0, None)
    operands: list[float] = []
    for token, is_command in tokens:
        if is_command:
            if operands:
                raise InvalidPathToken(
                    f'Incomplete operands for "{state.op}": {operands}',
                    attribute='d',
                )
            if token in 'Zz':
                commands.append(ClosePath())
                # Note: the current point goes back to the origin,
                # not to the start of the sub-path.
                state = _PathState(0.0, 0.0, None)
            else:
                state = state._replace(op=token)
            continue

        op = state.op
        if op is None:
            raise InvalidPathToken(
                f'Number without a command: {token}', attribute='d'
            )
        operands.append(float(token))
        if len(operands) == _OPERAND_COUNT[op.upper()]:
            command, state = _reduce_operands(state, op, operands)
            commands.append(command)
            operands = []

    if operands:
        raise InvalidPathToken(
            f'Incomplete operands for "{state.op}": {operands}', attribute='d'
        )
    return commands


def _reduce_operands(
    state: _PathState, op: str, operands: Sequence[float]
) -> tuple[PathCommand, _PathState]:
    """Create the command for one operand group and the next state."""
    cmd = op.upper()
    # Origin for relative coordinates
    if op.islower():
        ox, oy = state.x, state.y
    else:
        ox, oy = 0.0, 0.0

    if cmd == 'M':
        x = ox + operands[0]
        y = oy + operands[1]
        # Any subsequent coordinate pairs are an implicit LineTo
        next_op = 'l' if op.islower() else 'L'
        return MoveTo(x, y), _PathState(x, y, next_op)
    if cmd == 'L':
        x = ox + operands[0]
        y = oy + operands[1]
        return LineTo(x, y), _PathState(x, y, op)
    if cmd == 'H':
        x = ox + operands[0]
        return LineTo(x, state.y), _PathState(x, state.y, op)
    if cmd == 'V':
        y = oy + operands[0]
        return LineTo(state.x, y), _PathState(state.x, y, op)
    # cmd == 'C'
    bezier = BezierTo(
        ox + operands[0],
        oy + operands[1],
        ox + operands[2],
        oy + operands[3],
        ox + operands[4],
        oy + operands[5],
    )
    return bezier, _PathState(bezier.x, bezier.y, op)
