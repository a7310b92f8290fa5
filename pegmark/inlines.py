"""
The inline grammar.  An ordered choice over inline spans whose rules return
the active writer's fragment for whatever they recognized, or None when they
do not match (in which case the cursor is left untouched).

"""

import re
import logging

from .exceptions import ParseError
from .scanner import Scanner
from .text import ESCAPABLE, SPECIAL_CHARS, reInlineHtml

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def _anyescaped_except(chars):
    esc = re.escape(ESCAPABLE)
    return r'(?:[^{0}\\]|\\[{1}]|\\(?![{1}]))'.format(re.escape(chars), esc)


# Matches a run of characters with no special meaning in markdown.
reStr = re.compile('[^' + re.escape(SPECIAL_CHARS) + ' \t\n]+')
reSpaceRun = re.compile('[ \t]+')
reSpaces = re.compile('[ \t]*')
# A line ending that continues the paragraph: not before a blank line, the
# end of input, a block quote, an ATX heading or a Setext underlined line.
reEndline = re.compile(
    r'\n(?![ \t]*\n|\Z|>|#|[^\n]*\n(?:={3,}|-{3,})[ \t]*\n)')
reUlOrStarLine = re.compile(r'\*{4,}|_{4,}')
reAutoLinkUrl = re.compile(
    '<([A-Za-z0-9]+://' + _anyescaped_except('\n>') + '+)>')
reAutoLinkEmail = re.compile(
    '<([A-Za-z0-9._+-]+@' + _anyescaped_except('\n>') + '+)>')
reHexEntity = re.compile('&#[Xx]([0-9A-Fa-f]+);')
reDecEntity = re.compile('&#([0-9]+);')
reTagEntity = re.compile('&([A-Za-z0-9]+);')
reEscaped = re.compile(r'\\([' + re.escape(ESCAPABLE) + '])')
# A delimiter that could close emphasis, or the blank line ending the text.
reCloser = dict(
    (delim, re.compile('(?<=[^ \t\n])' + re.escape(delim) + r'|\n[ \t]*\n'))
    for delim in ('**', '__', '*', '_'))

# Emphasis attempts open inside each other at most this deep.
MAX_DELIMITER_DEPTH = 32


class InlineParser(Scanner):

    def __init__(self, writer, refmap, subject=''):
        super(InlineParser, self).__init__(subject)
        self.writer = writer
        self.refmap = refmap
        self._memo = {}
        self._depth = 0

    def reset(self, s):
        self.subject = s
        self.pos = 0
        self._memo = {}

    def inlines(self, s):
        """ Render s with a fresh inline parser sharing writer and refmap.
        """
        return InlineParser(self.writer, self.refmap).parse(s)

    def parse(self, s):
        """
        Parse s as a run of inlines.  Line endings that cannot be soft
        breaks render as nothing.
        """
        self.reset(s)
        result = []
        while not self.at_end():
            r = self.parse_inline()
            if r is not None:
                result.append(r)
            elif self.peek() == '\n':
                self.pos += 1
            else:
                raise ParseError('Inline grammar stopped at {0!r}'.format(
                    self.subject[self.pos:self.pos + 20]))
        return ''.join(result)

    def parse_inline(self):
        """
        Parse the next inline element in subject, advancing subject position
        and returning its fragment.  Results are memoized by position, which
        keeps nested emphasis attempts from going exponential.

        """
        startpos = self.pos
        if startpos in self._memo:
            r, self.pos = self._memo[startpos]
            return r

        c = self.peek()
        if c is None:
            rules = ()
        elif c in ' \t':
            rules = (self.parse_space,)
        elif c == '\n':
            rules = (self.parse_endline,)
        elif c == '*' or c == '_':
            rules = (self.parse_ul_or_star_line, self.parse_strong,
                     self.parse_emph, self.parse_symbol)
        elif c == '[' or c == '!':
            rules = (self.parse_link, self.parse_symbol)
        elif c == '`':
            rules = (self.parse_code, self.parse_symbol)
        elif c == '<':
            rules = (self.parse_autolink_url, self.parse_autolink_email,
                     self.parse_inline_html, self.parse_symbol)
        elif c == '&':
            rules = (self.parse_entity, self.parse_symbol)
        elif c == '\\':
            rules = (self.parse_escaped, self.parse_symbol)
        else:
            rules = (self.parse_str, self.parse_symbol)

        r = None
        for rule in rules:
            r = rule()
            if r is not None:
                break
        if r is None:
            self.pos = startpos
        self._memo[startpos] = (r, self.pos)
        return r

    def parse_str(self):
        m = self.match(reStr)
        if m:
            return self.writer.string(m)
        return None

    def at_endline(self):
        return self.lookahead(reEndline)

    def parse_space(self):
        """
        Parse spaces and an optional soft line ending.  Two or more spaces
        before a line ending make a hard break; trailing spaces at the end
        of input render as nothing.

        """
        startpos = self.pos
        self.pos += 1
        if self.match(reSpaceRun) and self.at_endline():
            self.pos += 1
            self.match(reSpaces)
            return self.writer.linebreak()

        self.pos = startpos + 1
        self.match(reSpaces)
        if self.at_endline():
            self.pos += 1
        if self.at_end():
            return ''
        self.match(reSpaces)
        return self.writer.space()

    def parse_endline(self):
        if self.at_endline():
            self.pos += 1
            self.match(reSpaces)
            return self.writer.space()
        return None

    def parse_ul_or_star_line(self):
        m = self.match(reUlOrStarLine)
        if m:
            return self.writer.string(m)
        return None

    def _closes(self, delim):
        s = self.subject
        return (s.startswith(delim, self.pos) and self.pos > 0 and
                s[self.pos - 1] not in ' \t\n')

    def _closer_ahead(self, delim):
        m = reCloser[delim].search(self.subject, self.pos + 1)
        return m is not None and m.group(0) == delim

    def parse_between(self, delim):
        """
        Parse inlines enclosed in delim.  The opener must be followed by a
        non-space character and the closer preceded by one; the closest
        valid closer after at least one inline ends the span.

        """
        startpos = self.pos
        if not self.subject.startswith(delim, self.pos):
            return None
        self.pos += len(delim)
        c = self.peek()
        if (c is None or c in ' \t\n' or not self._closer_ahead(delim) or
                self._depth >= MAX_DELIMITER_DEPTH):
            self.pos = startpos
            return None

        contents = []
        self._depth += 1
        try:
            while True:
                if contents and self._closes(delim):
                    self.pos += len(delim)
                    return ''.join(contents)
                r = self.parse_inline()
                if r is None:
                    self.pos = startpos
                    return None
                contents.append(r)
        finally:
            self._depth -= 1

    def parse_strong(self):
        for delim in ('**', '__'):
            r = self.parse_between(delim)
            if r is not None:
                return self.writer.strong(r)
        return None

    def parse_emph(self):
        for delim in ('*', '_'):
            r = self.parse_between(delim)
            if r is not None:
                return self.writer.emphasis(r)
        return None

    def parse_link(self):
        """
        Attempt to parse a link or, when preceded by ``!``, an image.
        Direct links are tried first, then reference links.

        """
        startpos = self.pos
        img = self.peek() == '!'
        if img:
            self.pos += 1
        afterimg = self.pos

        r = self.parse_direct_link(img)
        if r is not None:
            return r
        self.pos = afterimg

        label = self.parse_link_label()
        if label is None:
            self.pos = startpos
            return None
        savepos = self.pos
        sps = self.spnl()
        tag = self.parse_link_label()
        if tag is None:
            self.pos = savepos
            sps = None
        return self.indirect_link(img, label, sps, tag)

    def parse_direct_link(self, img):
        label = self.parse_link_label()
        if label is None:
            return None
        self.spnl()
        if self.peek() != '(':
            return None
        self.pos += 1
        url = self.parse_link_destination()
        if url is None:
            url = ''
        title = self.parse_optional_title()
        if self.peek() != ')':
            return None
        self.pos += 1
        if img:
            return self.writer.image(self.inlines(label), url, title)
        return self.writer.link(self.inlines(label), url, title)

    def indirect_link(self, img, label, sps, tag):
        """
        Look up a reference link and render it, or, if the reference is not
        found, render the brackets and labels as literal text.

        """
        w = self.writer
        if tag is None:
            tag = label
            tagpart = ''
        elif tag == '':
            tag = label
            tagpart = w.string('[]')
        else:
            tagpart = w.string('[') + self.inlines(tag) + w.string(']')
        if sps:
            tagpart = w.string(sps) + tagpart

        ref = self.refmap.lookup(tag)
        if ref is not None:
            if img:
                return w.image(self.inlines(label), ref.url, ref.title)
            return w.link(self.inlines(label), ref.url, ref.title)

        logger.debug('Unresolved reference [%s]', tag)
        prefix = w.string('!') if img else ''
        return (prefix + w.string('[') + self.inlines(label) +
                w.string(']') + tagpart)

    def parse_code(self):
        code = self.scan_code_span()
        if code is not None:
            return self.writer.code(code)
        return None

    def parse_autolink_url(self):
        m = reAutoLinkUrl.match(self.subject, self.pos)
        if m:
            self.pos = m.end()
            return self.writer.url_link(m.group(1))
        return None

    def parse_autolink_email(self):
        m = reAutoLinkEmail.match(self.subject, self.pos)
        if m:
            self.pos = m.end()
            return self.writer.email_link(m.group(1))
        return None

    def parse_inline_html(self):
        m = self.match(reInlineHtml)
        if m:
            return self.writer.inline_html(m)
        return None

    def parse_entity(self):
        for regex, render in ((reHexEntity, self.writer.hex_entity),
                              (reDecEntity, self.writer.dec_entity),
                              (reTagEntity, self.writer.tag_entity)):
            m = regex.match(self.subject, self.pos)
            if m:
                self.pos = m.end()
                return render(m.group(1))
        return None

    def parse_escaped(self):
        m = reEscaped.match(self.subject, self.pos)
        if m:
            self.pos = m.end()
            return self.writer.escaped_char(m.group(1))
        return None

    def parse_symbol(self):
        c = self.peek()
        if c is not None and c in SPECIAL_CHARS:
            self.pos += 1
            return self.writer.string(c)
        return None
