"""
LaTeX writer.  Produces body markup only; raw HTML is dropped.
"""

from .base import Writer


_escaped = {
    '{': '\\{',
    '}': '\\}',
    '$': '\\$',
    '%': '\\%',
    '&': '\\&',
    '_': '\\_',
    '#': '\\#',
    '^': '\\^{}',
    '\\': '\\char92{}',
    '~': '\\char126{}',
    '|': '\\char124{}',
    '<': '\\char60{}',
    '>': '\\char62{}',
    '[': '{[}',  # avoids reading as an optional argument
    ']': '{]}',
    '\u201c': '``',
    '\u201d': "''",
    '\u2018': '`',
    '\u2019': "'",
    '\u2014': '---',
    '\u2013': '--',
    '\u00a0': '~',
}
ESCAPE_TABLE = str.maketrans(_escaped)

SECTIONS = ['section', 'subsection', 'subsubsection', 'paragraph',
            'subparagraph']

class TexWriter(Writer):

    @property
    def interblocksep(self):
        # Paragraphs are separated by blank lines in TeX whatever the options.
        return '\n\n'

    def string(self, s):
        return s.translate(ESCAPE_TABLE)

    def code(self, s):
        return '\\texttt{{{0}}}'.format(self.string(s))

    def linebreak(self):
        return '\\\\\n'

    def emphasis(self, s):
        return '\\emph{{{0}}}'.format(s)

    def strong(self, s):
        return '\\textbf{{{0}}}'.format(s)

    def link(self, label, url, title):
        url = url.replace('\\', '\\\\').replace('%', '\\%').replace('#', '\\#')
        return '\\href{{{0}}}{{{1}}}'.format(url, label)

    def image(self, label, url, title):
        return '\\includegraphics{{{0}}}'.format(url)

    def heading(self, s, level, contents):
        command = SECTIONS[min(level, len(SECTIONS)) - 1]
        result = '\\{0}{{{1}}}'.format(command, s)
        if contents:
            result += self.interblocksep + contents
        return result

    def blockquote(self, s):
        return '\\begin{{quote}}\n{0}\n\\end{{quote}}'.format(s)

    def verbatim(self, s):
        return '\\begin{{verbatim}}\n{0}\\end{{verbatim}}'.format(s)

    def listitem(self, s):
        return '\\item ' + s

    def bulletlist(self, items, tight):
        return '\\begin{{itemize}}\n{0}\n\\end{{itemize}}'.format(
            '\n'.join(items))

    def orderedlist(self, items, tight, startnum=1):
        counter = ''
        if self.options['startnum'] and startnum != 1:
            counter = '\\setcounter{{enumi}}{{{0}}}\n'.format(startnum - 1)
        return '\\begin{{enumerate}}\n{0}{1}\n\\end{{enumerate}}'.format(
            counter, '\n'.join(items))

    def hrule(self):
        return '\\begin{center}\\rule{3in}{0.4pt}\\end{center}'
