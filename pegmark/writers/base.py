"""
The operations every writer provides.  The grammar calls one of them for
each construct it recognizes, always with the already rendered fragments
of the construct's children, and composes the results without looking
inside them.

The base class renders plain text and is a complete writer on its own;
format specific writers override what they need.

"""

import logging
from html.entities import name2codepoint

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def codepoint_char(n):
    """ The character for code point n, or U+FFFD if there is none.
    """
    if 0 < n <= 0x10FFFF:
        return chr(n)
    return '\ufffd'


class Writer(object):

    #: Options understood by every writer.  ``minimize`` drops the
    #: separators between blocks, ``blanklines`` separates blocks with an
    #: empty line, ``containers`` wraps each section in a container and
    #: ``startnum`` keeps the number of the first ordered list item.
    default_options = {
        'minimize': False,
        'blanklines': True,
        'containers': False,
        'startnum': True,
    }

    def __init__(self, **options):
        super(Writer, self).__init__()
        self.options = dict(self.default_options)
        for key in options:
            if key not in self.default_options:
                logger.debug('%s ignores option %r',
                             self.__class__.__name__, key)
        self.options.update(options)

    @property
    def interblocksep(self):
        if self.options['minimize']:
            return ''
        elif self.options['blanklines']:
            return '\n\n'
        return '\n'

    @property
    def containersep(self):
        return '' if self.options['minimize'] else '\n'

    def start_document(self):
        return ''

    def stop_document(self):
        return '\n'

    # INLINES

    def string(self, s):
        return s

    def code(self, s):
        return self.string(s)

    def space(self):
        return ' '

    def linebreak(self):
        return '\n'

    def emphasis(self, s):
        return s

    def strong(self, s):
        return s

    def link(self, label, url, title):
        return label

    def image(self, label, url, title):
        return label

    def url_link(self, url):
        return self.link(self.string(url), url, '')

    def email_link(self, address):
        return self.link(self.string(address), 'mailto:' + address, '')

    def inline_html(self, s):
        return ''

    def display_html(self, s):
        return ''

    def hex_entity(self, s):
        return self.string(codepoint_char(int(s, 16)))

    def dec_entity(self, s):
        return self.string(codepoint_char(int(s)))

    def tag_entity(self, s):
        codepoint = name2codepoint.get(s)
        if codepoint is None:
            logger.debug('Unknown entity &%s;', s)
            return self.string('&{0};'.format(s))
        return self.string(chr(codepoint))

    def escaped_char(self, c):
        return self.string(c)

    # BLOCKS

    def paragraph(self, s):
        return s

    def heading(self, s, level, contents):
        if contents:
            return s + self.interblocksep + contents
        return s

    def blockquote(self, s):
        return s

    def verbatim(self, s):
        return s

    def listitem(self, s):
        return s

    def bulletlist(self, items, tight):
        return self.containersep.join(items)

    def orderedlist(self, items, tight, startnum=1):
        return self.containersep.join(items)

    def hrule(self):
        return ''
