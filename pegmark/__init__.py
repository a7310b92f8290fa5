"""
Markdown to HTML, LaTeX and groff converter that renders while it parses.
Copyright (c) 2014 Brendan Abel
License: BSD3

    >>> from pegmark import convert
    >>> convert('*hello*')
    '<p><em>hello</em></p>\\n'

"""

from .converter import Converter, convert
from .exceptions import NestingError, ParseError, UnknownWriterError
from .references import Reference, ReferenceTable
from .text import detab_line, expand_tabs, normalize_reference
from .writers import WRITERS, Writer, get_writer

__version__ = '0.1.0'

__all__ = ['Converter', 'convert', 'ParseError', 'NestingError',
           'UnknownWriterError', 'Reference', 'ReferenceTable', 'detab_line',
           'expand_tabs', 'normalize_reference', 'WRITERS', 'Writer',
           'get_writer']
