"""Command line tool to dump the primitive tree of an SVG document."""

from __future__ import annotations

import argparse
import datetime
import gettext
import json
import logging
import os
import pathlib
import sys
import time
from typing import Any

from . import svg
from .errors import SVGPrimError

_ = gettext.gettext
logger = logging.getLogger(__name__)

_TEXT_ALIGNS = ('left', 'center', 'right')


def errormsg(
    *args: Any,  # noqa: ANN401
    exit_status: int | None = None,
    **kwargs: Any,  # noqa: ANN401
) -> None:
    """Write an error msg to stderr."""
    print(*args, file=sys.stderr, **kwargs)  # noqa: T201
    if exit_status is not None:
        sys.exit(exit_status)


def main(argv: list[str] | None = None) -> None:
    """Convert an SVG document and write its primitives as JSON.

    Args:
        argv: Command line options, default is sys.argv[1:]
    """
    options = _process_options(argv)

    if options.log_create:
        _create_log(options.log_filename, options.log_level)
        logger.info('Invocation: %s', ' '.join(argv or sys.argv))

    t_start = time.time()
    try:
        if options.input_file:
            with options.input_file.open('rb') as f:
                document = svg.parse(
                    f, font=options.font, text_align=options.text_align
                )
        else:
            document = svg.parse(
                sys.stdin.buffer,
                font=options.font,
                text_align=options.text_align,
            )
    except OSError as e:
        errormsg(f'Unable to read SVG input: {e}', exit_status=1)
        return
    except SVGPrimError as e:
        errormsg(str(e), exit_status=1)
        return
    logger.info('Conversion time: %fs', time.time() - t_start)

    indent = options.indent if options.indent > 0 else None
    data = json.dumps(document.to_spec(), indent=indent)
    try:
        if options.output_file:
            with options.output_file.open('w', encoding='utf8') as f:
                f.write(data)
                f.write('\n')
        else:
            sys.stdout.write(data)
            sys.stdout.write('\n')
    except OSError as e:
        errormsg(f'Unable to write output: {e}', exit_status=1)


def _process_options(argv: list[str] | None) -> argparse.Namespace:
    """Set up option spec and parse command line options."""
    parser = argparse.ArgumentParser(
        prog='svgprim',
        description=_('Convert an SVG document to drawing primitives.'),
    )
    parser.add_argument(
        '--output-file', '-o', type=pathlib.Path, help=_('Output file.')
    )
    parser.add_argument(
        '--font',
        default=svg.DEFAULT_FONT,
        help=_('Font id of text primitives'),
    )
    parser.add_argument(
        '--text-align',
        default=svg.DEFAULT_TEXT_ALIGN,
        choices=_TEXT_ALIGNS,
        help=_('Default text alignment'),
    )
    parser.add_argument(
        '--indent',
        type=int,
        default=2,
        help=_('JSON indent. Zero for compact output.'),
    )
    parser.add_argument(
        '--log-create',
        action='store_true',
        help=_('Create log file'),
    )
    parser.add_argument('--log-level', default='DEBUG', help=_('Log level'))
    parser.add_argument(
        '--log-filename',
        default=None,
        help=_('Full pathname of log file'),
    )
    parser.add_argument(
        'input_file',
        nargs='?',
        type=pathlib.Path,
        help=_('Path name of input file. Default is stdin.'),
    )
    return parser.parse_args(argv)


def _create_log(
    log_path: str | os.PathLike | None,
    log_level: str | None,
) -> None:
    """Create a log file for debug output.

    Args:
        log_path: Path to log file. If None or empty
            the log file will be `svgprim.log` in the user's
            home directory.
        log_level: Log level:
            'DEBUG', 'INFO', 'WARNING', 'ERROR', or 'CRITICAL'.
            Default is 'INFO'.
    """
    if not log_path:
        log_path = pathlib.Path.home() / 'svgprim.log'
    if not log_level:
        log_level = 'INFO'
    logging.basicConfig(
        filename=log_path,
        filemode='w',
        level=log_level.upper(),
    )
    logger.info(
        'Log started %s, level=%s',
        datetime.datetime.now(tz=datetime.timezone.utc),
        logging.getLevelName(logger.getEffectiveLevel()),
    )
    logger.info('Python version: %s', sys.version)


if __name__ == '__main__':
    main()
