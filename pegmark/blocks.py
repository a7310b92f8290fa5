"""
The block grammar.  Alternatives are tried in priority order at each
position; the first one that matches renders its construct through the
writer.  Block quotes and list items capture raw text that is parsed again,
recursively, by a fresh BlockParser.

"""

import re
import logging
from collections import namedtuple

from .exceptions import ParseError
from .inlines import InlineParser
from .text import (BLOCK_TAGS, reBlankLine, reBlankLines,
                   reCloseElt, reEmptyElt, reHtmlComment, reHtmlInstruction,
                   reIndent, reLine, reNonIndentSpace, reOpenElt)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


CONTINUATION = 'continuation'
NESTED_BLOCK = 'nested_block'

# A piece of raw list item content.  Segments are parsed one at a time, so
# no construct ever spans the boundary between two of them.
Segment = namedtuple('Segment', 'kind text')

HEADING = 'heading'
BLOCK = 'block'

reBlockQuoteLine = re.compile(' {0,3}> ?([^\n]*\n)')
# Continuation lines without a marker: not blank, no trailing whitespace.
reLazyLine = re.compile(r'(?! {0,3}>)(?:(?![ \t]*\n)[^\n])+\n')
reIndentedLine = re.compile('(?: {4}| {0,3}\t)([^\n]+(?:\n|\\Z))')
reOptionallyIndentedLine = re.compile('(?: {4}| {0,3}\t)?([^\n]+(?:\n|\\Z))')
reHrule = re.compile(
    r' {0,3}(?:(?:\*[ \t]*){3,}|(?:-[ \t]*){3,}|(?:_[ \t]*){3,})\n'
    r'(?:[ \t]*\n)+')
reBullet = re.compile(' {0,3}[*+-](?=[ \t\n\r])')
reEnumerator = re.compile(' {0,3}([0-9]+)\\.(?=[ \t\n\r])')
reAtxStart = re.compile('#{1,6}')
reHeadingStop = re.compile('[ \t]*#*[ \t]*\n')
reSetextHeading = re.compile('([^\n]*\n)(=+|-+)[ \t]*\n')
reSpaces = re.compile('[ \t]*')
reTextRun = re.compile('[^<]+')


class BlockParser(InlineParser):

    def blocks(self, s):
        """ Render s with a fresh block parser sharing writer and refmap.
        """
        return BlockParser(self.writer, self.refmap).parse(s)

    def parse(self, s):
        self.reset(s)
        return self.parse_blocks()

    def parse_blocks(self, stop_level=None):
        """
        Parse blocks until the end of the subject or, when stop_level is
        given, until a heading of that level or higher.  A heading takes
        the blocks that follow it as the contents of its section.

        """
        fragments = []
        while not self.at_end():
            startpos = self.pos
            kind, value = self.parse_block()
            if kind == HEADING:
                title, level = value
                if stop_level is not None and level <= stop_level:
                    self.pos = startpos
                    break
                value = self.writer.heading(title, level,
                                            self.parse_blocks(level))
            if value:
                fragments.append(value)
        return self.writer.interblocksep.join(fragments)

    def parse_block(self):
        """
        Parse the next block, returning a (kind, value) pair.  Headings
        return their (title, level) so the caller can gather the section.

        """
        if self.match(reBlankLines):
            return BLOCK, ''
        for rule in (self.parse_blockquote, self.parse_verbatim,
                     self.parse_hrule, self.parse_bullet_list,
                     self.parse_ordered_list):
            r = self.parse_rule(rule)
            if r is not None:
                return BLOCK, r
        r = self.parse_rule(self.parse_atx_heading)
        if r is not None:
            return HEADING, r
        r = self.parse_rule(self.parse_display_html)
        if r is not None:
            return BLOCK, r
        r = self.parse_rule(self.parse_setext_heading)
        if r is not None:
            return HEADING, r
        for rule in (self.parse_reference, self.parse_paragraph,
                     self.parse_plain):
            r = self.parse_rule(rule)
            if r is not None:
                return BLOCK, r
        raise ParseError('Block grammar stopped at {0!r}'.format(
            self.subject[self.pos:self.pos + 20]))

    def parse_rule(self, rule):
        """ Run rule, rewinding the subject position if it fails.
        """
        startpos = self.pos
        r = rule()
        if r is None:
            self.pos = startpos
        return r

    def parse_blockquote(self):
        parts = []
        while True:
            found = False
            while True:
                m = reBlockQuoteLine.match(self.subject, self.pos)
                if not m:
                    break
                self.pos = m.end()
                parts.append(m.group(1))
                found = True
            if not found:
                break
            while True:
                line = self.match(reLazyLine)
                if not line:
                    break
                parts.append(line)
            while self.match(reBlankLine) is not None:
                parts.append('\n')
        if not parts:
            return None
        return self.writer.blockquote(self.blocks(''.join(parts)))

    def _indented_lines(self):
        lines = []
        while not self.lookahead(reBlankLine):
            m = reIndentedLine.match(self.subject, self.pos)
            if not m:
                break
            self.pos = m.end()
            lines.append(m.group(1))
        return lines

    def parse_verbatim(self):
        """
        Parse a run of indented lines.  Blank lines between them are kept,
        blank lines after the last one are not.

        """
        parts = []
        while True:
            savepos = self.pos
            blanks = []
            while self.match(reBlankLine) is not None:
                blanks.append('\n')
            lines = self._indented_lines()
            if not lines:
                self.pos = savepos
                break
            parts.extend(blanks)
            parts.extend(lines)
        if not parts:
            return None
        return self.writer.verbatim(''.join(parts))

    def parse_hrule(self):
        if self.match(reHrule):
            return self.writer.hrule()
        return None

    # LISTS

    def parse_marker(self, ordered):
        """
        Attempt to parse a list marker, gobbling spaces after it so that
        marker and padding are four columns wide where possible.  Returns
        the marker text (with leading spaces) or None.

        """
        startpos = self.pos
        m = self.match(reEnumerator if ordered else reBullet)
        if not m:
            return None
        width = len(m.lstrip(' '))
        if width >= 3:
            gobble = 1
        elif width == 2:
            gobble = 2
        else:
            gobble = 3
        # Indentation before the marker counts towards the hanging indent.
        gobble = max(0, gobble - (len(m) - width))
        while gobble and self.peek() == ' ':
            self.pos += 1
            gobble -= 1
        if not ordered and self.peek() in ('*', '+', '-'):
            self.pos = startpos
            return None
        return m

    def at_marker(self):
        startpos = self.pos
        found = (self.parse_marker(False) is not None or
                 self.parse_marker(True) is not None)
        self.pos = startpos
        return found

    def _list_block_line(self):
        if self.lookahead(reBlankLine):
            return None
        startpos = self.pos
        self.match(reIndent)
        marker = self.at_marker()
        self.pos = startpos
        if marker:
            return None
        m = reOptionallyIndentedLine.match(self.subject, self.pos)
        if not m:
            return None
        self.pos = m.end()
        return m.group(1)

    def parse_list_block(self):
        """
        The rest of the marker line plus every following line that is
        neither blank nor another marker line, with one indent stripped.
        """
        first = self.match(reLine)
        if first is None:
            return None
        parts = [first]
        while True:
            line = self._list_block_line()
            if line is None:
                break
            parts.append(line)
        return ''.join(parts)

    def parse_list_continuation_block(self):
        startpos = self.pos
        blanks = []
        while self.match(reBlankLine) is not None:
            blanks.append('\n')
        if not self.match(reIndent):
            self.pos = startpos
            return None
        block = self.parse_list_block()
        if block is None:
            self.pos = startpos
            return None
        return ''.join(blanks) + block

    def parse_nested_block(self):
        """
        Lines that do not begin a new item at this level: the content of a
        nested list or other nested construct.
        """
        parts = []
        while not self.at_marker() and not self.lookahead(reBlankLine):
            m = reOptionallyIndentedLine.match(self.subject, self.pos)
            if not m:
                break
            self.pos = m.end()
            parts.append(m.group(1))
        if not parts:
            return None
        return ''.join(parts)

    def parse_tight_item(self, ordered):
        startpos = self.pos
        marker = self.parse_marker(ordered)
        if marker is None:
            return None
        block = self.parse_list_block()
        if block is None:
            self.pos = startpos
            return None
        segments = [Segment(CONTINUATION, block)]
        nested = self.parse_nested_block()
        if nested is not None:
            segments.append(Segment(NESTED_BLOCK, nested))

        afteritem = self.pos
        self.match(reBlankLines)
        continued = self.lookahead(reIndent)
        self.pos = afteritem
        if continued:
            self.pos = startpos
            return None
        return marker, segments

    def parse_loose_item(self, ordered):
        startpos = self.pos
        marker = self.parse_marker(ordered)
        if marker is None:
            return None
        block = self.parse_list_block()
        if block is None:
            self.pos = startpos
            return None
        # The extra newline turns the first block into a paragraph.
        segments = [Segment(CONTINUATION, block + '\n')]
        nested = self.parse_nested_block()
        if nested is not None:
            segments.append(Segment(NESTED_BLOCK, nested))
        else:
            while True:
                cont = self.parse_list_continuation_block()
                if cont is None:
                    break
                segments[-1] = Segment(CONTINUATION, segments[-1].text + cont)
        self.match(reBlankLines)
        last = segments[-1]
        segments[-1] = Segment(last.kind, last.text + '\n\n')
        return marker, segments

    def parse_items(self, ordered, tight):
        parse_item = self.parse_tight_item if tight else self.parse_loose_item
        items = []
        while True:
            item = self.parse_rule(lambda: parse_item(ordered))
            if item is None:
                break
            items.append(item)
        return items

    def parse_list(self, ordered):
        """
        Parse a list, tight if its items are not separated by blank lines
        and no item of the same kind follows after the list, loose
        otherwise.  Returns (items, tight) with items as (marker, segments)
        pairs, or None.

        """
        startpos = self.pos
        items = self.parse_items(ordered, True)
        if items:
            self.match(reBlankLines)
            if self.parse_rule(lambda: self.parse_marker(ordered)) is None:
                return items, True
            self.pos = startpos
        items = self.parse_items(ordered, False)
        if items:
            self.match(reBlankLines)
            return items, False
        return None

    def render_segments(self, segments):
        fragments = []
        for segment in segments:
            logger.debug('List item %s segment: %r', segment.kind,
                         segment.text[:40])
            fragment = self.blocks(segment.text)
            if fragment:
                fragments.append(fragment)
        return self.writer.interblocksep.join(fragments)

    def _render_items(self, items):
        return [self.writer.listitem(self.render_segments(segments))
                for _, segments in items]

    def parse_bullet_list(self):
        r = self.parse_list(False)
        if r is None:
            return None
        items, tight = r
        return self.writer.bulletlist(self._render_items(items), tight)

    def parse_ordered_list(self):
        r = self.parse_list(True)
        if r is None:
            return None
        items, tight = r
        startnum = int(items[0][0].strip().rstrip('.'))
        return self.writer.orderedlist(self._render_items(items), tight,
                                       startnum)

    # HEADINGS

    def parse_atx_heading(self):
        hashes = self.match(reAtxStart)
        if not hashes:
            return None
        self.match(reSpaces)
        parts = []
        while not self.lookahead(reHeadingStop):
            r = self.parse_inline()
            if r is None:
                return None
            parts.append(r)
        if not parts:
            return None
        self.match(reHeadingStop)
        return ''.join(parts), len(hashes)

    def parse_setext_heading(self):
        m = reSetextHeading.match(self.subject, self.pos)
        if not m:
            return None
        self.pos = m.end()
        level = 1 if m.group(2)[0] == '=' else 2
        return self.inlines(m.group(1)), level

    # HTML

    def match_element(self, regex, name=None):
        """
        Match regex at the current position, requiring its tag name to
        equal name (case insensitively) or, without name, to be a known
        block tag.  Returns the tag name or None.
        """
        m = regex.match(self.subject, self.pos)
        if not m:
            return None
        tag = m.group(1).lower()
        if name is None and tag not in BLOCK_TAGS:
            return None
        if name is not None and tag != name:
            return None
        self.pos = m.end()
        return tag

    def opens(self, name):
        m = reOpenElt.match(self.subject, self.pos)
        return m is not None and m.group(1).lower() == name

    def match_balanced(self, name):
        """
        Match an element named name together with its contents: nested
        elements of the same name (recursively), text, and any ``<`` that
        does not start the closing tag for name.  An unclosed nested
        element means this one cannot close either.

        """
        startpos = self.pos
        if self.match_element(reOpenElt, name) is None:
            return None
        while not self.at_end():
            if self.peek() != '<':
                self.match(reTextRun)
            elif self.match_element(reCloseElt, name) is not None:
                return self.subject[startpos:self.pos]
            elif self.opens(name):
                if self.match_balanced(name) is None:
                    break
            else:
                self.pos += 1
        self.pos = startpos
        return None

    def parse_display_html(self):
        startpos = self.pos
        if (self.match(reHtmlComment) or self.match(reHtmlInstruction) or
                self.match_element(reEmptyElt) or
                self.match_element(reOpenElt, 'hr')):
            return self.writer.display_html(self.subject[startpos:self.pos])

        m = reOpenElt.match(self.subject, self.pos)
        if m and m.group(1).lower() in BLOCK_TAGS:
            html = self.match_balanced(m.group(1).lower())
            if html is not None:
                return self.writer.display_html(html)
        return None

    # PARAGRAPHS

    def parse_reference(self):
        if self.parse_reference_definition() is not None:
            return ''
        return None

    def _inlines(self):
        parts = []
        while True:
            r = self.parse_inline()
            if r is None:
                break
            parts.append(r)
        return parts

    def parse_paragraph(self):
        if self.match(reNonIndentSpace) is None:
            return None
        parts = self._inlines()
        if not parts or self.peek() != '\n':
            return None
        self.pos += 1
        if not self.match(reBlankLines):
            return None
        return self.writer.paragraph(''.join(parts))

    def parse_plain(self):
        parts = self._inlines()
        if not parts:
            return None
        return ''.join(parts)
