"""
pegmark [-t FORMAT] [-o OPTION ...] [FILE ...]

Convert markdown from the given files, or standard input, and write the
result to standard output.

"""

import io
import sys
import logging
import argparse

from .converter import convert
from .exceptions import UnknownWriterError
from .writers import WRITERS, get_writer

EXIT_UNKNOWN_WRITER = 3


def parse_writer_options(values):
    """
    Turn ``-o name`` / ``-o no-name`` flags into writer keyword arguments.
    """
    options = {'minimize': False, 'blanklines': False}
    for value in values:
        if value.startswith('no-'):
            options[value[3:]] = False
        else:
            options[value] = True
    return options


def read_input(filenames):
    if not filenames:
        return sys.stdin.read()
    buf = []
    for filename in filenames:
        with io.open(filename, encoding='utf-8') as f:
            buf.append(f.read())
    return '\n'.join(buf)


def main(argv=None):

    parser = argparse.ArgumentParser(
        prog='pegmark', description='Convert text from markdown.')
    parser.add_argument('files', nargs='*', metavar='FILE')
    parser.add_argument('-t', '--to', default='html', metavar='FORMAT',
                        help='target format: {0}'.format(
                            ', '.join(sorted(WRITERS))))
    parser.add_argument('-o', '--option', action='append', default=[],
                        metavar='OPTION',
                        help='writer option, e.g. containers or no-blanklines')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        writer = get_writer(args.to, **parse_writer_options(args.option))
    except UnknownWriterError as e:
        print(e, file=sys.stderr)
        return EXIT_UNKNOWN_WRITER

    sys.stdout.write(convert(read_input(args.files), writer))
    return 0


if __name__ == '__main__':
    sys.exit(main())
