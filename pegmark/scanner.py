"""
Cursor over a subject string plus the scanning routines needed both by the
reference prescanner and by the grammars: link labels, destinations, titles,
code spans and reference definitions.

Every ``parse_*``/``scan_*`` method either succeeds, advancing ``self.pos``,
or fails, returning None and leaving ``self.pos`` where it was.

"""

import re
import logging

from .text import (ESCAPABLE, SPACING, reBlankLine, reBlankLines, reSpnl,
                   reOptionalSpace, unescape)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


reTicks = re.compile('`+')
reAlphanumeric = re.compile('[A-Za-z0-9]+')
reLeader = re.compile(' {0,3}')
reAngleUrl = re.compile(
    r'<((?:[^>\\]|\\[' + re.escape(ESCAPABLE) + r']|\\(?![' +
    re.escape(ESCAPABLE) + ']))*)>')


def is_alphanumeric(c):
    return c.isascii() and c.isalnum()


class Scanner(object):

    def __init__(self, subject=''):
        super(Scanner, self).__init__()
        self.subject = subject
        self.pos = 0
        self._balanced_subject = None
        self._balanced = {}

    def match(self, regex):
        """
        If regex matches at current position in the subject, advance
        position in subject and return the match otherwise return None.

        """
        m = regex.match(self.subject, self.pos)
        if m:
            self.pos = m.end()
            return m.group(0)
        else:
            return None

    def peek(self, offset=0):
        """
        Returns the character at the current subject position, or None if
        there are no more characters.
        """
        try:
            return self.subject[self.pos + offset]
        except IndexError:
            return None

    def lookahead(self, regex):
        """ Test regex at the current position without consuming input.
        """
        return regex.match(self.subject, self.pos) is not None

    def at_end(self):
        return self.pos >= len(self.subject)

    def spnl(self):
        """
        Parse zero or more space characters, including at most one newline.
        """
        return self.match(reSpnl)

    def _skip_escaped(self, i):
        """ Index after the (possibly escaped) character at i.
        """
        s = self.subject
        if s[i] == '\\' and i + 1 < len(s) and s[i + 1] in ESCAPABLE:
            return i + 2
        return i + 1

    def _balanced_ends(self, opener, closer):
        """
        Map the index of every opener in the subject to the index after its
        matching closer.  Escaped characters are ignored and no pair spans a
        blank line.  Computed once per subject.

        """
        if self._balanced_subject is not self.subject:
            self._balanced_subject = self.subject
            self._balanced = {}
        ends = self._balanced.get(opener)
        if ends is not None:
            return ends

        ends = {}
        stack = []
        s = self.subject
        i = 0
        while i < len(s):
            c = s[i]
            if c == opener:
                stack.append(i)
            elif c == closer:
                if stack:
                    ends[stack.pop()] = i + 1
            elif c == '\n' and reBlankLine.match(s, i + 1):
                stack = []
            i = self._skip_escaped(i)
        self._balanced[opener] = ends
        return ends

    def _skip_balanced(self, i, opener, closer):
        """
        Skip a balanced run such as ``[a [b] c]`` starting at i, honouring
        backslash escapes.  Returns the index after the closer or None.

        """
        if i >= len(self.subject) or self.subject[i] != opener:
            return None
        return self._balanced_ends(opener, closer).get(i)

    def _skip_quoted(self, i, quote, inner=False):
        """
        Skip a quoted title starting at i.  A quote character followed by
        an alphanumeric opens a nested quotation instead of closing.

        """
        s = self.subject
        i += 1
        if inner and not (i < len(s) and is_alphanumeric(s[i])):
            return None
        while i < len(s):
            c = s[i]
            if c == quote:
                end = self._skip_quoted(i, quote, True)
                if end is None:
                    break
                i = end
            else:
                i = self._skip_escaped(i)
        if i < len(s) and s[i] == quote:
            return i + 1
        return None

    def scan_code_span(self):
        """
        Attempt to scan a code span.  The opening tick run is captured and
        the content extends to the next run of exactly the same length.
        Returns the code text or None.

        """
        ticks = self.match(reTicks)
        if not ticks:
            return None
        start = self.pos - len(ticks)
        end = self._match_inticks(self.pos, ticks)
        if end is None:
            self.pos = start
            return None
        content = self.subject[self.pos:end]
        self.pos = end + len(ticks)
        if len(content) >= 2 and content[0] == ' ' and content[-1] == ' ':
            content = content[1:-1]
        return content

    def _match_inticks(self, i, ticks):
        """ Index of the closing run equal to ticks, or None.
        """
        s = self.subject
        begin = i
        while i < len(s):
            c = s[i]
            if c == '`':
                run = reTicks.match(s, i).group(0)
                if run == ticks:
                    return i if i > begin else None
                i += len(run)
            elif c == '\n':
                # A code span never crosses a blank line.
                if reBlankLine.match(s, i + 1):
                    return None
                i += 1
            elif c == '\r':
                return None
            else:
                i += 1
        return None

    def parse_link_label(self):
        """
        Attempt to parse a bracketed link label, returning the raw text
        between the brackets or None.

        """
        if self.peek() != '[':
            return None
        s = self.subject
        startpos = self.pos
        self.pos += 1
        while self.pos < len(s):
            c = s[self.pos]
            if c == ']':
                label = s[startpos + 1:self.pos]
                self.pos += 1
                return label
            if self.match(reAlphanumeric):
                continue
            if c == '[':
                end = self._skip_balanced(self.pos, '[', ']')
                if end is None:
                    # Nothing after an unclosed bracket can close this one.
                    break
                self.pos = end
                continue
            elif c == '`':
                if self.scan_code_span() is not None:
                    continue
            elif c == '\n' and reBlankLine.match(s, self.pos + 1):
                break
            self.pos = self._skip_escaped(self.pos)
        self.pos = startpos
        return None

    def parse_link_destination(self):
        """
        Attempt to parse link destination, returning the unescaped string
        or None if no match.

        """
        m = reAngleUrl.match(self.subject, self.pos)
        if m:
            self.pos = m.end()
            return unescape(m.group(1))

        s = self.subject
        i = self.pos
        while i < len(s):
            c = s[i]
            if c == '(':
                end = self._skip_balanced(i, '(', ')')
                if end is not None:
                    i = end
                    continue
            elif c == ')' or c in SPACING:
                break
            i = self._skip_escaped(i)
        if i == self.pos:
            return None
        dest = self.subject[self.pos:i]
        self.pos = i
        return unescape(dest)

    def parse_link_title(self):
        """
        Attempt to parse link title (sans quotes), returning the string
        or None if no match.

        """
        c = self.peek()
        if c in ('"', "'"):
            end = self._skip_quoted(self.pos, c)
        elif c == '(':
            end = self._parse_paren_title(self.pos)
        else:
            end = None
        if end is None:
            return None
        title = self.subject[self.pos + 1:end - 1]
        self.pos = end
        return unescape(title)

    def _parse_paren_title(self, i):
        s = self.subject
        i += 1
        while i < len(s):
            c = s[i]
            if c == ')':
                return i + 1
            if c == '(':
                end = self._skip_balanced(i, '(', ')')
                if end is not None:
                    i = end
                    continue
            i = self._skip_escaped(i)
        return None

    def parse_optional_title(self):
        """
        Parse an optional title preceded by spaces and at most one newline.
        Returns the empty string when there is no title.

        """
        startpos = self.pos
        self.spnl()
        title = self.parse_link_title()
        if title is None:
            self.pos = startpos
            return ''
        self.match(reOptionalSpace)
        return title

    def parse_reference_definition(self):
        """
        Attempt to parse a reference definition line,
        ``[label]: destination "title"``, followed by any blank lines.
        Returns a (label, url, title) tuple or None.

        """
        startpos = self.pos
        self.match(reLeader)
        label = self.parse_link_label()
        if label is None or self.peek() != ':':
            self.pos = startpos
            return None
        self.pos += 1
        self.match(reOptionalSpace)
        url = self.parse_link_destination()
        if url is None:
            self.pos = startpos
            return None
        title = self.parse_optional_title()
        self.match(reBlankLines)
        return label, url, title
