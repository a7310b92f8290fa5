"""
Output formats, looked up by name.
"""

from ..exceptions import UnknownWriterError
from .base import Writer
from .groff import GroffWriter
from .html import Html5Writer, HtmlWriter
from .tex import TexWriter

WRITERS = {
    'html': HtmlWriter,
    'html5': Html5Writer,
    'tex': TexWriter,
    'latex': TexWriter,
    'groff': GroffWriter,
    'man': GroffWriter,
}


def get_writer(name, **options):
    """
    Return a new writer for the format called name, configured with
    options.  Raises UnknownWriterError if there is no such format.

    """
    if not name or name.lower() not in WRITERS:
        raise UnknownWriterError('Unknown writer: {0}'.format(name))
    return WRITERS[name.lower()](**options)


__all__ = ['Writer', 'HtmlWriter', 'Html5Writer', 'TexWriter', 'GroffWriter',
           'WRITERS', 'get_writer']
