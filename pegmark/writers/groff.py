"""
groff writer using the man macros.  Raw HTML is dropped.
"""

import re

from .base import Writer


_escaped = {
    '\\': '\\\\',
    "'": '\\[aq]',
    '\u201c': '\\[lq]',
    '\u201d': '\\[rq]',
    '\u2018': '`',
    '\u2019': "'",
    '\u2014': '\\[em]',
    '\u2013': '\\[en]',
    '\u00a0': '\\ ',
}
ESCAPE_TABLE = str.maketrans(_escaped)

def protect_requests(s):
    """ Keep text lines that start with a period from reading as requests.
    """
    return re.sub(r'^\.', r'\\&.', s, flags=re.M)

class GroffWriter(Writer):

    @property
    def interblocksep(self):
        return '\n'

    def string(self, s):
        return s.translate(ESCAPE_TABLE)

    def code(self, s):
        return '\\f[C]{0}\\f[]'.format(self.string(s))

    def linebreak(self):
        return '\n.br\n'

    def emphasis(self, s):
        return '\\f[I]{0}\\f[]'.format(s)

    def strong(self, s):
        return '\\f[B]{0}\\f[]'.format(s)

    def link(self, label, url, title):
        if label == self.string(url):
            return label
        return '{0} ({1})'.format(label, self.string(url))

    def email_link(self, address):
        return self.string(address)

    def image(self, label, url, title):
        return '[IMAGE: {0}]'.format(label)

    def paragraph(self, s):
        return '.PP\n' + protect_requests(s)

    def heading(self, s, level, contents):
        if level == 1:
            result = '.SH ' + s
        elif level == 2:
            result = '.SS ' + s
        else:
            result = '.PP\n\\f[B]{0}\\f[]'.format(s)
        if contents:
            result += self.interblocksep + contents
        return result

    def blockquote(self, s):
        return '.RS\n{0}\n.RE'.format(s)

    def verbatim(self, s):
        return '.IP\n.nf\n\\f[C]\n{0}\\f[]\n.fi'.format(self.string(s))

    def listitem(self, s):
        return protect_requests(s)

    def bulletlist(self, items, tight):
        return '\n'.join('.IP \\[bu] 2\n' + item for item in items)

    def orderedlist(self, items, tight, startnum=1):
        if not self.options['startnum']:
            startnum = 1
        return '\n'.join('.IP "{0}." 4\n{1}'.format(startnum + i, item)
                         for i, item in enumerate(items))

    def hrule(self):
        return '.PP\n\\ \\ \\ \\ \\ * * * * *'
