"""
Conversion entry point: normalize the input, prescan it for reference
definitions, then run the block grammar with a writer.

"""

import logging

from .blocks import BlockParser
from .exceptions import NestingError, UnknownWriterError
from .references import ReferenceParser, ReferenceTable
from .text import expand_tabs
from .writers import Writer, get_writer

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class Converter(object):
    """
    Converts markdown with one writer.  A Converter holds no state between
    calls, so one instance may serve several threads.
    """

    def __init__(self, writer='html', **options):
        super(Converter, self).__init__()
        if isinstance(writer, Writer):
            if options:
                raise ValueError('Options apply only to writers given by name')
            self.writer = writer
        elif isinstance(writer, str):
            self.writer = get_writer(writer, **options)
        else:
            raise UnknownWriterError('Unknown writer: {0!r}'.format(writer))

    def convert(self, text):
        """ Convert markdown text, returning the rendered document.
        """
        refmap = ReferenceTable()
        normalized = expand_tabs(text)
        logger.debug('Converting %d characters with %s', len(normalized),
                     self.writer.__class__.__name__)
        try:
            ReferenceParser(refmap).parse(normalized)
            body = BlockParser(self.writer, refmap).parse(normalized)
        except RecursionError:
            raise NestingError('Input is nested too deeply to convert')
        return self.writer.start_document() + body + self.writer.stop_document()


def convert(text, writer='html', **options):
    """
    Convert markdown text with writer, either a Writer instance or the name
    of an output format (options then configure the new writer).

    """
    return Converter(writer, **options).convert(text)
